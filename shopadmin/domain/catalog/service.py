"""Catalog service - Business logic for categories and products"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Category, Product
from .repository import CategoryRepository, ProductRepository
from .schemas import (
    CategoryCreate,
    CategoryResponse,
    CategoryUpdate,
    ProductCreate,
    ProductResponse,
    ProductUpdate,
)

logger = logging.getLogger(__name__)

# request field -> column
PRODUCT_FIELDS = {
    "name": "name",
    "price": "price",
    "categoryId": "category_id",
    "description": "description",
    "imageUrl": "image_url",
    "isAvailable": "is_available",
    "stockQuantity": "stock_quantity",
    "variants": "variants",
}


def category_to_response(category: Category, product_count: int = 0) -> CategoryResponse:
    return CategoryResponse(
        id=category.id,
        name=category.name,
        description=category.description,
        imageUrl=category.image_url,
        isActive=category.is_active,
        productCount=product_count,
        created_at=category.created_at,
    )


def product_to_response(product: Product) -> ProductResponse:
    return ProductResponse(
        id=product.id,
        name=product.name,
        price=product.price,
        categoryId=product.category_id,
        categoryName=product.category.name if product.category else None,
        description=product.description,
        imageUrl=product.image_url,
        isAvailable=product.is_available,
        stockQuantity=product.stock_quantity,
        variants=product.variants or [],
        created_at=product.created_at,
    )


class CatalogService:
    """Service layer for the menu catalog"""

    def __init__(self, db: Session):
        self.db = db
        self.categories = CategoryRepository()
        self.products = ProductRepository()

    # ------------------------------------------------------------------
    # Categories
    # ------------------------------------------------------------------

    def list_categories(self, active_only: bool = False) -> list[CategoryResponse]:
        counts = self.categories.get_product_counts(self.db)
        return [
            category_to_response(c, counts.get(c.id, 0))
            for c in self.categories.get_categories(self.db, active_only=active_only)
        ]

    def get_category(self, category_id: str) -> Category:
        category = self.categories.get_category_by_id(self.db, category_id)
        if not category:
            raise HTTPException(status_code=404, detail="Category not found")
        return category

    def _ensure_unique_name(self, name: str, exclude_id: Optional[str] = None) -> None:
        existing = self.categories.get_category_by_name(self.db, name)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=409, detail=f"A category named '{name}' already exists")

    def create_category(self, data: CategoryCreate) -> CategoryResponse:
        self._ensure_unique_name(data.name)
        category = self.categories.create_category(
            self.db,
            name=data.name,
            description=data.description,
            image_url=data.imageUrl,
            is_active=data.isActive,
        )
        logger.info(f"✅ Created category {category.name}")
        return category_to_response(category)

    def update_category(self, category_id: str, data: CategoryUpdate) -> CategoryResponse:
        category = self.get_category(category_id)
        if data.name is not None:
            self._ensure_unique_name(data.name, exclude_id=category.id)
        category = self.categories.update_category(
            self.db,
            category,
            name=data.name,
            description=data.description,
            image_url=data.imageUrl,
            is_active=data.isActive,
        )
        return category_to_response(category, len(category.products))

    def delete_category(self, category_id: str) -> dict:
        category = self.get_category(category_id)
        self.categories.delete_category(self.db, category)
        logger.info(f"🗑️ Deleted category {category_id}")
        return {"message": "Category deleted"}

    def menu(self) -> list[dict]:
        """Active categories with their available products, for the storefront"""
        products = self.products.get_products(self.db, available_only=True)
        by_category: dict[str, list[ProductResponse]] = {}
        for product in products:
            if product.category_id:
                by_category.setdefault(product.category_id, []).append(product_to_response(product))

        return [
            {
                "id": category.id,
                "name": category.name,
                "description": category.description,
                "imageUrl": category.image_url,
                "products": [p.model_dump() for p in by_category.get(category.id, [])],
            }
            for category in self.categories.get_categories(self.db, active_only=True)
            if by_category.get(category.id)
        ]

    # ------------------------------------------------------------------
    # Products
    # ------------------------------------------------------------------

    def list_products(
        self,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        sort: str = "name",
    ) -> list[ProductResponse]:
        products = self.products.get_products(self.db, category_id=category_id, search=search, sort=sort)
        return [product_to_response(p) for p in products]

    def get_product(self, product_id: str) -> Product:
        product = self.products.get_product_by_id(self.db, product_id)
        if not product:
            raise HTTPException(status_code=404, detail="Product not found")
        return product

    def _ensure_category(self, category_id: Optional[str]) -> None:
        if category_id and not self.categories.get_category_by_id(self.db, category_id):
            raise HTTPException(status_code=400, detail="Category does not exist")

    def create_product(self, data: ProductCreate) -> ProductResponse:
        self._ensure_category(data.categoryId)
        fields = {column: getattr(data, field) for field, column in PRODUCT_FIELDS.items()}
        product = self.products.create_product(self.db, **fields)
        logger.info(f"✅ Created product {product.name} ({product.price})")
        return product_to_response(product)

    def update_product(self, product_id: str, data: ProductUpdate) -> ProductResponse:
        product = self.get_product(product_id)
        provided = data.model_dump(exclude_unset=True)
        if "categoryId" in provided:
            self._ensure_category(provided["categoryId"])
        for required in ("name", "price", "isAvailable"):
            if required in provided and provided[required] is None:
                raise HTTPException(status_code=400, detail=f"{required} cannot be empty")

        updates = {PRODUCT_FIELDS[field]: value for field, value in provided.items()}
        product = self.products.update_product(self.db, product, **updates)
        return product_to_response(product)

    def delete_product(self, product_id: str) -> dict:
        product = self.get_product(product_id)
        self.products.delete_product(self.db, product)
        logger.info(f"🗑️ Deleted product {product_id}")
        return {"message": "Product deleted"}
