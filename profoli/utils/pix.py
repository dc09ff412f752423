"""
Static Pix BR Code (EMV) payload builder
"""
import re
import unicodedata
from decimal import Decimal, ROUND_HALF_UP

PIX_GUI = "br.gov.bcb.pix"


def _tlv(tag: str, value: str) -> str:
    return f"{tag}{len(value):02d}{value}"


def _clean_ascii(value: str, maxlen: int, upper: bool = True) -> str:
    # sem acentos e só caracteres aceitos pelos leitores de QR dos bancos
    value = unicodedata.normalize("NFKD", value or "").encode("ascii", "ignore").decode("ascii")
    value = re.sub(r"[^A-Za-z0-9 \-\.]", "", value).strip()
    if upper:
        value = value.upper()
    return value[:maxlen]


def crc16_ccitt(data: bytes, poly: int = 0x1021, init: int = 0xFFFF) -> int:
    """CRC16-CCITT (polinômio 0x1021, init 0xFFFF), exigido no campo 63"""
    crc = init
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) & 0xFFFF) ^ poly
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


def build_pix_payload(
    key: str,
    amount: Decimal | None,
    merchant_name: str,
    merchant_city: str,
    txid: str = "***",
) -> str:
    """
    Montar o "copia e cola" Pix estático

    Campos: 00 formato, 01 iniciação (12 = estático), 26 conta (GUI + chave),
    52 MCC, 53 moeda (986), 54 valor (opcional), 58 país, 59 nome (25),
    60 cidade (15), 62 txid, 63 CRC.

    Raises:
        ValueError: chave Pix vazia
    """
    key = (key or "").strip()
    if not key:
        raise ValueError("Chave Pix vazia")

    account = _tlv("26", _tlv("00", PIX_GUI) + _tlv("01", key))

    amount_field = ""
    if amount is not None:
        value = Decimal(str(amount)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
        if value > 0:
            amount_field = _tlv("54", f"{value:.2f}")

    if txid != "***":
        txid = _clean_ascii(txid, maxlen=25) or "***"

    partial = "".join([
        _tlv("00", "01"),
        _tlv("01", "12"),
        account,
        _tlv("52", "0000"),
        _tlv("53", "986"),
        amount_field,
        _tlv("58", "BR"),
        _tlv("59", _clean_ascii(merchant_name, maxlen=25)),
        _tlv("60", _clean_ascii(merchant_city, maxlen=15)),
        _tlv("62", _tlv("05", txid)),
    ])
    crc = crc16_ccitt((partial + "6304").encode("ascii"))
    return f"{partial}6304{crc:04X}"
