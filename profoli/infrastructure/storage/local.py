"""
Local disk storage for uploaded files (apostilas, capas)
"""
import logging
import os
import random
import time
from pathlib import Path

from profoli.config import get_settings

logger = logging.getLogger(__name__)


class StorageError(ValueError):
    """Arquivo recusado pelo storage"""
    pass


class LocalFileStorage:
    """
    Grava o conteúdo em UPLOAD_DIR com nome único e devolve a URL pública
    (servida pelo mount estático em UPLOAD_URL_PREFIX).
    """

    def __init__(self, base_dir: str | os.PathLike, url_prefix: str, max_bytes: int | None = None):
        self.base_dir = Path(base_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes

    def save(self, content: bytes, filename: str, content_type: str | None = None) -> str:
        """
        Salvar arquivo

        Args:
            content: bytes do upload
            filename: nome original (só a extensão é aproveitada)
            content_type: MIME informado pelo cliente (apenas para log)

        Returns:
            URL pública do arquivo

        Raises:
            StorageError: arquivo vazio ou acima do limite
        """
        if not content:
            raise StorageError("Arquivo vazio")
        if self.max_bytes is not None and len(content) > self.max_bytes:
            limit_mb = self.max_bytes // (1024 * 1024)
            raise StorageError(f"Arquivo maior que o limite de {limit_mb} MB")

        self.base_dir.mkdir(parents=True, exist_ok=True)
        stored_name = self._unique_name(filename)
        path = self.base_dir / stored_name
        path.write_bytes(content)

        logger.info(f"Stored upload {filename!r} ({content_type}, {len(content)} bytes) as {stored_name}")
        return f"{self.url_prefix}/{stored_name}"

    def delete(self, url: str | None) -> bool:
        """
        Apagar o arquivo de uma URL gerada por save()

        URLs de fora (link externo, outro prefixo) são ignoradas.

        Returns:
            True se um arquivo foi removido
        """
        prefix = f"{self.url_prefix}/"
        if not url or not url.startswith(prefix):
            return False
        stored_name = url[len(prefix):]
        if not stored_name or "/" in stored_name or "\\" in stored_name or stored_name.startswith("."):
            return False

        path = self.base_dir / stored_name
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError:
            logger.exception(f"Could not delete stored upload {stored_name}")
            return False

        logger.info(f"Deleted stored upload {stored_name}")
        return True

    @staticmethod
    def _unique_name(filename: str) -> str:
        ext = Path(filename or "").suffix.lstrip(".").lower() or "bin"
        return f"{int(time.time() * 1000)}-{random.randint(0, 10**9)}.{ext}"


def get_storage() -> LocalFileStorage:
    """Dependency para FastAPI - storage configurado pelas settings"""
    settings = get_settings()
    return LocalFileStorage(
        base_dir=settings.UPLOAD_DIR,
        url_prefix=settings.UPLOAD_URL_PREFIX,
        max_bytes=settings.MAX_UPLOAD_MB * 1024 * 1024,
    )
