"""Rider service - Business logic for riders"""

import logging
from typing import Optional

from fastapi import HTTPException
from passlib.context import CryptContext
from sqlalchemy.orm import Session

from ...models import Rider
from .repository import RiderRepository
from .schemas import RiderCreate, RiderResponse, RiderUpdate

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError as e:
        logger.error(f"Password verification error: {e}")
        return False


def rider_to_response(rider: Rider) -> RiderResponse:
    return RiderResponse(
        id=rider.id,
        name=rider.name,
        phone=rider.phone,
        status=rider.status,
        ordersCompleted=rider.orders_completed or 0,
        created_at=rider.created_at,
    )


class RiderService:
    """Service layer for rider business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = RiderRepository()

    def list_riders(self, status: Optional[str] = None) -> list[Rider]:
        return self.repo.get_riders(self.db, status=status)

    def get_rider(self, rider_id: str) -> Rider:
        rider = self.repo.get_rider_by_id(self.db, rider_id)
        if not rider:
            raise HTTPException(status_code=404, detail="Rider not found")
        return rider

    def _ensure_unique_phone(self, phone: str, exclude_id: Optional[str] = None) -> None:
        existing = self.repo.get_rider_by_phone(self.db, phone)
        if existing and existing.id != exclude_id:
            raise HTTPException(status_code=409, detail="A rider with this phone number already exists")

    def create_rider(self, data: RiderCreate) -> Rider:
        self._ensure_unique_phone(data.phone)
        rider = self.repo.create_rider(
            self.db,
            name=data.name,
            phone=data.phone,
            password_hash=hash_password(data.password),
            status=data.status,
            orders_completed=0,
        )
        logger.info(f"🛵 Created rider {rider.name}")
        return rider

    def update_rider(self, rider_id: str, data: RiderUpdate) -> Rider:
        rider = self.get_rider(rider_id)
        if data.phone is not None:
            self._ensure_unique_phone(data.phone, exclude_id=rider.id)

        updates = {"name": data.name, "phone": data.phone, "status": data.status}
        if data.password is not None:
            updates["password_hash"] = hash_password(data.password)
            logger.info(f"🔑 Password changed for rider {rider_id}")
        return self.repo.update_rider(self.db, rider, **updates)

    def set_status(self, rider_id: str, status: str) -> Rider:
        return self.repo.update_rider(self.db, self.get_rider(rider_id), status=status)

    def delete_rider(self, rider_id: str) -> dict:
        rider = self.get_rider(rider_id)
        for order in rider.orders:
            order.rider_id = None
        self.repo.delete_rider(self.db, rider)
        logger.info(f"🗑️ Deleted rider {rider_id}")
        return {"message": "Rider deleted"}

    def check_credentials(self, phone: str, password: str) -> Optional[Rider]:
        """Rider for these credentials, or None"""
        rider = self.repo.get_rider_by_phone(self.db, phone)
        if rider and verify_password(password, rider.password_hash):
            return rider
        return None
