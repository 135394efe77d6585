"""Order repository - Database operations for orders"""

from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import Order


class OrderRepository:
    """Repository for order database operations"""

    @staticmethod
    def get_orders(db: Session, status: Optional[str] = None, rider_id: Optional[str] = None) -> list[Order]:
        query = db.query(Order).options(joinedload(Order.rider))
        if status:
            query = query.filter(Order.status == status)
        if rider_id:
            query = query.filter(Order.rider_id == rider_id)
        return query.order_by(Order.created_at.desc()).all()

    @staticmethod
    def get_order_by_id(db: Session, order_id: str) -> Optional[Order]:
        return db.query(Order).options(joinedload(Order.rider)).filter(Order.id == order_id).first()

    @staticmethod
    def create_order(db: Session, **data) -> Order:
        """Stage a new order; the caller commits"""
        order = Order(**data)
        db.add(order)
        db.flush()
        return order

    @staticmethod
    def has_orders_for_phone(db: Session, phone: str) -> bool:
        return db.query(Order.id).filter(Order.phone == phone).first() is not None

    @staticmethod
    def update_order(db: Session, order: Order, **updates) -> Order:
        for key, value in updates.items():
            if hasattr(order, key):
                setattr(order, key, value)
        db.commit()
        db.refresh(order)
        return order

    @staticmethod
    def delete_order(db: Session, order: Order) -> None:
        db.delete(order)
        db.commit()
