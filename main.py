from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger
from starlette import status

from core import config
from core.context import AppContext
from core.logger import setup_logging
from routers import debug, entitlements, products, purchases
from utils.errors import MissingFieldError, VerificationError


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        setup_logging(level=config.LOG_LEVEL)
        logger.info("Starting purchase verification service...")

        app.state.context = context or AppContext.from_settings()

        yield

        app.state.context.close()
        logger.info("Purchase verification service stopped")

    app = FastAPI(
        title="Play Entitlements API",
        description="Google Play purchase verification and catalog normalization",
        version="1.0.0",
        lifespan=lifespan
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"]
    )

    @app.exception_handler(MissingFieldError)
    async def missing_field_handler(request: Request, exc: MissingFieldError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": str(exc), "missing": exc.missing_fields}
        )

    @app.exception_handler(VerificationError)
    async def verification_error_handler(request: Request, exc: VerificationError):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": str(exc), "details": exc.details}
        )

    app.include_router(purchases.router)
    app.include_router(products.router)
    app.include_router(entitlements.router)
    app.include_router(debug.router)

    @app.get("/health")
    async def health_check():
        return {"status": "healthy"}

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=config.PORT)
