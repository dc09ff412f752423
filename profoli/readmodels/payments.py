"""
Payment methods shown on the public page and in the payment report
"""
from profoli.config import Settings
from profoli.utils.money import format_brl
from profoli.utils.pix import build_pix_payload

CASH_INSTRUCTIONS = "Pagamento presencial na secretaria"
CARD_INSTRUCTIONS = "Acesse o link de pagamento disponibilizado no sistema"


def get_payment_methods(settings: Settings) -> dict:
    fee = settings.REGISTRATION_FEE
    return {
        "fee": float(fee),
        "fee_display": format_brl(fee),
        "pix_key": settings.PIX_KEY,
        "pix_payload": build_pix_payload(
            key=settings.PIX_KEY,
            amount=fee,
            merchant_name=settings.PIX_MERCHANT_NAME,
            merchant_city=settings.PIX_MERCHANT_CITY,
        ),
        "card_link": settings.CARD_PAYMENT_LINK,
        "instructions": [
            {"method": "PIX", "details": f"Chave: {settings.PIX_KEY}"},
            {"method": "Cartão de Crédito", "details": CARD_INSTRUCTIONS},
            {"method": "Dinheiro", "details": CASH_INSTRUCTIONS},
        ],
    }
