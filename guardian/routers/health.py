"""Health check endpoints."""
import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from guardian.core.config import settings
from guardian.core.database import get_db
from guardian.services.sms_service import has_live_credentials

logger = logging.getLogger(__name__)

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(db: Session = Depends(get_db)):
    sms_mode = "live" if settings.SMS_BACKEND == "twilio" and has_live_credentials() else "simulated"
    try:
        db.execute(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.error(f"Health check database error: {e}")
        return JSONResponse(
            status_code=503,
            content={"status": "error", "database": "unavailable", "sms": sms_mode},
        )
    return {"status": "ok", "database": "ok", "sms": sms_mode}
