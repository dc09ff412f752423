"""
Dashboard statistics endpoint
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from profoli.api.deps import get_db, require_user
from profoli.readmodels.stats import get_dashboard_stats


router = APIRouter(prefix="/api/stats", tags=["stats"])


@router.get("")
def stats(db: Session = Depends(get_db), auth=Depends(require_user)):
    return get_dashboard_stats(db)
