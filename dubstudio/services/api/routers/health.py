# dubstudio/services/api/routers/health.py
from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from dubstudio.common.logging import get_logger
from dubstudio.common.settings import get_settings
from dubstudio.services.api.deps import get_db

logger = get_logger(__name__)
router = APIRouter()


@router.get("/healthz")
def healthz(db: Session = Depends(get_db)):
    s = get_settings()
    try:
        db.execute(text("SELECT 1"))
        db_ok = True
    except SQLAlchemyError as e:
        logger.warning("Health check could not reach the database: %s", e)
        db_ok = False
    return {
        "ok": db_ok,
        "app": s.app_name,
        "env": s.app_env,
        "database": "up" if db_ok else "down",
    }
