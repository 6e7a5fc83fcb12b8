from datetime import datetime, timezone
from typing import Annotated
from starlette import status
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from core.context import AppContext, get_context
from usecases.debug import DebugUseCase


router = APIRouter(
    prefix="/debug",
    tags=["debug"]
)

context_dependency = Annotated[AppContext, Depends(get_context)]


@router.get("/google-play", status_code=status.HTTP_200_OK)
def debug_google_play(context: context_dependency):
    try:
        debug_usecase = DebugUseCase(context.google_play)
        return debug_usecase.google_play_report(context.package_name)
    except Exception as e:
        logger.error(f"Google Play debug check failed for {context.package_name}: {e}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": str(e),
                "code": getattr(e, "code", None) or getattr(e, "status_code", None),
                "timestamp": datetime.now(timezone.utc).isoformat()
            }
        )
