"""Rider repository - Database operations for riders"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Rider


class RiderRepository:
    """Repository for rider database operations"""

    @staticmethod
    def get_riders(db: Session, status: Optional[str] = None) -> list[Rider]:
        query = db.query(Rider)
        if status:
            query = query.filter(Rider.status == status)
        return query.order_by(Rider.name.asc()).all()

    @staticmethod
    def get_rider_by_id(db: Session, rider_id: str) -> Optional[Rider]:
        return db.query(Rider).filter(Rider.id == rider_id).first()

    @staticmethod
    def get_rider_by_phone(db: Session, phone: str) -> Optional[Rider]:
        return db.query(Rider).filter(Rider.phone == phone).first()

    @staticmethod
    def create_rider(db: Session, **data) -> Rider:
        rider = Rider(**data)
        db.add(rider)
        db.commit()
        db.refresh(rider)
        return rider

    @staticmethod
    def update_rider(db: Session, rider: Rider, **updates) -> Rider:
        for key, value in updates.items():
            if value is not None and hasattr(rider, key):
                setattr(rider, key, value)
        db.commit()
        db.refresh(rider)
        return rider

    @staticmethod
    def delete_rider(db: Session, rider: Rider) -> None:
        db.delete(rider)
        db.commit()
