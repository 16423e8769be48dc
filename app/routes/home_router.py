from datetime import datetime, timezone
from typing import Any, Dict
import logging

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy import text
from sqlalchemy.orm import Session

from app.database.database import get_session

logger = logging.getLogger(__name__)

router = APIRouter()

@router.get(
    "/ping",
    response_model=Dict[str, str],
    summary="Ping",
    description="Простейшая проверка, что процесс отвечает."
)
async def ping() -> Dict[str, str]:
    return {"message": "pong"}

@router.get(
    "/health",
    response_model=Dict[str, Any],
    summary="Проверка работоспособности",
    description="Проверяет доступность базы данных.",
    responses={
        200: {"description": "OK"},
        503: {"description": "База данных недоступна"}
    }
)
def health_check(
    response: Response,
    session: Session = Depends(get_session)
) -> Dict[str, Any]:
    result: Dict[str, Any] = {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected",
    }

    try:
        session.execute(text("SELECT 1"))
    except Exception as e:
        logger.error(f"Health check failed: database error: {e}")
        result["status"] = "error"
        result["database"] = "disconnected"
        result["details"] = {"database_error": str(e)}
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return result
