"""Coupon repository - Database operations for coupons"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Coupon


class CouponRepository:
    """Repository for coupon database operations"""

    @staticmethod
    def get_coupons(db: Session, status: Optional[str] = None) -> list[Coupon]:
        query = db.query(Coupon)
        if status:
            query = query.filter(Coupon.status == status)
        return query.order_by(Coupon.created_at.desc()).all()

    @staticmethod
    def get_coupon_by_id(db: Session, coupon_id: str) -> Optional[Coupon]:
        return db.query(Coupon).filter(Coupon.id == coupon_id).first()

    @staticmethod
    def get_coupon_by_code(db: Session, code: str) -> Optional[Coupon]:
        return db.query(Coupon).filter(Coupon.code == code.upper()).first()

    @staticmethod
    def create_coupon(db: Session, **data) -> Coupon:
        coupon = Coupon(**data)
        db.add(coupon)
        db.commit()
        db.refresh(coupon)
        return coupon

    @staticmethod
    def update_coupon(db: Session, coupon: Coupon, **updates) -> Coupon:
        for key, value in updates.items():
            if hasattr(coupon, key):
                setattr(coupon, key, value)
        db.commit()
        db.refresh(coupon)
        return coupon

    @staticmethod
    def increment_usage(db: Session, coupon: Coupon) -> Coupon:
        """Stage one more use; the caller commits"""
        coupon.used_count = (coupon.used_count or 0) + 1
        db.flush()
        return coupon

    @staticmethod
    def delete_coupon(db: Session, coupon: Coupon) -> None:
        db.delete(coupon)
        db.commit()
