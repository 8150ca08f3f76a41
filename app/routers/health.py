"""
System health check endpoint.
Returns status of backend + DB + garage occupancy.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from app.database import get_db
from app.config import settings
from app.services.vehicle_service import used_capacity
from datetime import datetime

router = APIRouter()


@router.get("/health", summary="System health check")
def health_check(db: Session = Depends(get_db)):
    """
    Returns:
    - Backend status
    - Database connectivity
    - Used / total garage capacity (only when the database answers)
    """
    result = {
        "status": "ok",
        "timestamp": datetime.utcnow().isoformat(),
        "backend": "ok",
        "database": "unknown",
        "capacity": {"total": settings.GARAGE_CAPACITY},
    }

    try:
        db.execute(text("SELECT 1"))
        result["database"] = "ok"
        result["capacity"]["used"] = used_capacity(db)
    except SQLAlchemyError as e:
        result["database"] = f"error: {str(e)}"
        result["status"] = "degraded"

    return result
