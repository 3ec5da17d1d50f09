"""
Shared FastAPI dependencies: caller identity, rate limiter and the designer service.
"""
from typing import Optional

from fastapi import Header, HTTPException, Request
from slowapi import Limiter
from slowapi.util import get_remote_address

from config import settings
from logging_config import logger
from services.ai_designer_service import AIDesignerService

limiter = Limiter(key_func=get_remote_address, enabled=settings.RATE_LIMIT_ENABLED)


async def get_current_user_id(x_user_id: Optional[str] = Header(default=None)) -> str:
    """
    Caller identity forwarded by the auth gateway in the X-User-Id header.
    """
    if not x_user_id or not x_user_id.strip():
        raise HTTPException(status_code=401, detail="Unauthorized")
    return x_user_id.strip()


async def get_designer_service(request: Request) -> AIDesignerService:
    """Designer service bound to the completion client built at startup"""
    client = getattr(request.app.state, "completion_client", None)
    if client is None:
        logger.error("AI designer request without a configured completion client")
        raise HTTPException(status_code=503, detail="AI service is not configured")
    return AIDesignerService(client)
