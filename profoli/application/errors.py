"""
Shared use-case exceptions
"""


class NotFoundError(LookupError):
    """Registro inexistente (vira 404 na API)"""
    pass
