from typing import Annotated
from starlette import status
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from core.context import AppContext, get_context
from schemas.catalog_schemas import NormalizationError
from usecases.catalog import CatalogUseCase
from usecases.products import ProductsUseCase


router = APIRouter(
    tags=["products"]
)

context_dependency = Annotated[AppContext, Depends(get_context)]


@router.get("/products", status_code=status.HTTP_200_OK)
def get_products(context: context_dependency):
    try:
        products_usecase = ProductsUseCase(context.google_play)
        plans = products_usecase.list_products(context.package_name)
    except Exception:
        logger.exception(f"Failed to fetch product IDs for {context.package_name}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch product IDs"}
        )

    return {"plans": plans}


@router.get("/api/plans", status_code=status.HTTP_200_OK)
def get_plans(context: context_dependency):
    try:
        catalog_usecase = CatalogUseCase(context.google_play, max_workers=context.catalog_max_workers)
        result = catalog_usecase.list_unified_catalog(context.package_name)
    except Exception:
        logger.exception(f"Failed to fetch plans for {context.package_name}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to fetch plans"}
        )

    if isinstance(result, NormalizationError):
        return result.model_dump(mode="json")

    return [product.model_dump(by_alias=True) for product in result]
