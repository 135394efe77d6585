"""Catalog router - FastAPI endpoints for categories and products"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_admin
from ...database import get_db
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)
from .service import CatalogService, category_to_response, product_to_response

router = APIRouter(tags=["Catalog"], dependencies=[Depends(get_current_admin)])


def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    """Dependency injection for CatalogService"""
    return CatalogService(db)


# ============================================================================
# CATEGORIES
# ============================================================================


@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(service: CatalogService = Depends(get_catalog_service)):
    """All categories with the number of products in each"""
    return service.list_categories()


@router.post("/categories", response_model=CategoryResponse, status_code=201)
async def create_category(data: CategoryCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_category(data)


@router.get("/categories/{category_id}", response_model=CategoryResponse)
async def get_category(category_id: str, service: CatalogService = Depends(get_catalog_service)):
    category = service.get_category(category_id)
    return category_to_response(category, len(category.products))


@router.put("/categories/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: str,
    data: CategoryUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_category(category_id, data)


@router.delete("/categories/{category_id}")
async def delete_category(category_id: str, service: CatalogService = Depends(get_catalog_service)):
    return service.delete_category(category_id)


# ============================================================================
# PRODUCTS
# ============================================================================


@router.get("/products", response_model=list[ProductResponse])
async def list_products(
    category_id: Optional[str] = Query(None, alias="categoryId"),
    search: Optional[str] = Query(None),
    sort: str = Query("name", pattern="^(name|price_asc|price_desc|newest|oldest)$"),
    service: CatalogService = Depends(get_catalog_service),
):
    return service.list_products(category_id=category_id, search=search, sort=sort)


@router.post("/products", response_model=ProductResponse, status_code=201)
async def create_product(data: ProductCreate, service: CatalogService = Depends(get_catalog_service)):
    return service.create_product(data)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str, service: CatalogService = Depends(get_catalog_service)):
    return product_to_response(service.get_product(product_id))


@router.put("/products/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    data: ProductUpdate,
    service: CatalogService = Depends(get_catalog_service),
):
    return service.update_product(product_id, data)


@router.delete("/products/{product_id}")
async def delete_product(product_id: str, service: CatalogService = Depends(get_catalog_service)):
    return service.delete_product(product_id)
