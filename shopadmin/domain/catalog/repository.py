"""Catalog repository - Database operations for categories and products"""

from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from ...models import Category, Product

PRODUCT_SORTS = {
    "name": Product.name.asc(),
    "price_asc": Product.price.asc(),
    "price_desc": Product.price.desc(),
    "newest": Product.created_at.desc(),
    "oldest": Product.created_at.asc(),
}


class CategoryRepository:
    """Repository for category database operations"""

    @staticmethod
    def get_categories(db: Session, active_only: bool = False) -> list[Category]:
        query = db.query(Category)
        if active_only:
            query = query.filter(Category.is_active.is_(True))
        return query.order_by(Category.name.asc()).all()

    @staticmethod
    def get_product_counts(db: Session) -> dict[str, int]:
        """category_id -> number of products"""
        rows = (
            db.query(Product.category_id, func.count(Product.id))
            .filter(Product.category_id.isnot(None))
            .group_by(Product.category_id)
            .all()
        )
        return {category_id: count for category_id, count in rows}

    @staticmethod
    def get_category_by_id(db: Session, category_id: str) -> Optional[Category]:
        return db.query(Category).filter(Category.id == category_id).first()

    @staticmethod
    def get_category_by_name(db: Session, name: str) -> Optional[Category]:
        return db.query(Category).filter(func.lower(Category.name) == name.lower()).first()

    @staticmethod
    def create_category(db: Session, **data) -> Category:
        category = Category(**data)
        db.add(category)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def update_category(db: Session, category: Category, **updates) -> Category:
        for key, value in updates.items():
            if value is not None and hasattr(category, key):
                setattr(category, key, value)
        db.commit()
        db.refresh(category)
        return category

    @staticmethod
    def delete_category(db: Session, category: Category) -> None:
        """Delete a category; its products are kept without a category"""
        for product in category.products:
            product.category_id = None
        db.delete(category)
        db.commit()


class ProductRepository:
    """Repository for product database operations"""

    @staticmethod
    def get_products(
        db: Session,
        category_id: Optional[str] = None,
        search: Optional[str] = None,
        available_only: bool = False,
        sort: str = "name",
    ) -> list[Product]:
        query = db.query(Product).options(joinedload(Product.category))
        if category_id:
            query = query.filter(Product.category_id == category_id)
        if search:
            query = query.filter(Product.name.ilike(f"%{search}%"))
        if available_only:
            query = query.filter(Product.is_available.is_(True))
        return query.order_by(PRODUCT_SORTS.get(sort, PRODUCT_SORTS["name"])).all()

    @staticmethod
    def get_product_by_id(db: Session, product_id: str) -> Optional[Product]:
        return (
            db.query(Product)
            .options(joinedload(Product.category))
            .filter(Product.id == product_id)
            .first()
        )

    @staticmethod
    def get_products_by_names(db: Session, names: list[str]) -> dict[str, Product]:
        """name -> product, for pricing deals whose items reference products by name"""
        if not names:
            return {}
        products = db.query(Product).filter(Product.name.in_(names)).all()
        return {p.name: p for p in products}

    @staticmethod
    def create_product(db: Session, **data) -> Product:
        product = Product(**data)
        db.add(product)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def update_product(db: Session, product: Product, **updates) -> Product:
        for key, value in updates.items():
            if hasattr(product, key):
                setattr(product, key, value)
        db.commit()
        db.refresh(product)
        return product

    @staticmethod
    def delete_product(db: Session, product: Product) -> None:
        db.delete(product)
        db.commit()
