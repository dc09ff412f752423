"""
Financial API endpoints (caixa)
"""
from datetime import date as date_type

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user
from profoli.application.financial import (
    RecordTransactionUseCase, DeleteTransactionUseCase,
    TransactionValidationError, TransactionNotFoundError,
    list_transactions,
)
from profoli.domain.transaction import INCOME_CATEGORIES, EXPENSE_CATEGORIES


router = APIRouter(prefix="/api/financial", tags=["financial"])


# === Request models ===

class CreateTransactionRequest(BaseModel):
    type: str
    category: str
    amount: str | float | int = "0"  # validado no use case (vírgula ou ponto, 2 casas)
    date: date_type
    description: str | None = None
    attendee_id: int | None = None
    is_exempt: bool = False


# === Endpoints ===

@router.get("")
def get_transactions(db: Session = Depends(get_db), auth=Depends(require_user)):
    return list_transactions(db)


@router.get("/categories")
def get_categories(auth=Depends(require_user)):
    return {
        "income": list(INCOME_CATEGORIES),
        "expense": list(EXPENSE_CATEGORIES),
    }


@router.post("")
def create_transaction(
    req: CreateTransactionRequest,
    db: Session = Depends(get_db),
    auth=Depends(require_user),
):
    try:
        result = RecordTransactionUseCase(db).execute(
            type=req.type,
            category=req.category,
            amount=req.amount,
            date=req.date,
            description=req.description,
            attendee_id=req.attendee_id,
            is_exempt=req.is_exempt,
        )
    except TransactionValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))

    return {
        "id": result.id,
        "amount": float(result.amount),
        "payment_status": result.payment_status,
        "payment_status_updated": result.payment_status_updated,
    }


@router.delete("/{transaction_id}")
def delete_transaction(transaction_id: int, db: Session = Depends(get_db), auth=Depends(require_user)):
    try:
        DeleteTransactionUseCase(db).execute(transaction_id)
    except TransactionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {"success": True}
