"""
Public endpoints (sem login): status da inscrição e formas de pagamento
"""
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from profoli.api.deps import get_db
from profoli.application.attendees import get_public_status, AttendeeNotFoundError
from profoli.config import get_settings
from profoli.readmodels.payments import get_payment_methods


router = APIRouter(prefix="/api/public", tags=["public"])


@router.get("/status/{cpf}")
def public_status(cpf: str, db: Session = Depends(get_db)):
    try:
        return get_public_status(db, cpf)
    except AttendeeNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.get("/payment-methods")
def payment_methods():
    return get_payment_methods(get_settings())
