"""Deal repository - Database operations for deals"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Deal


class DealRepository:
    """Repository for deal database operations"""

    @staticmethod
    def get_deals(db: Session, status: Optional[str] = None) -> list[Deal]:
        query = db.query(Deal)
        if status:
            query = query.filter(Deal.status == status)
        return query.order_by(Deal.created_at.desc()).all()

    @staticmethod
    def get_deal_by_id(db: Session, deal_id: str) -> Optional[Deal]:
        return db.query(Deal).filter(Deal.id == deal_id).first()

    @staticmethod
    def create_deal(db: Session, **data) -> Deal:
        deal = Deal(**data)
        db.add(deal)
        db.commit()
        db.refresh(deal)
        return deal

    @staticmethod
    def update_deal(db: Session, deal: Deal, **updates) -> Deal:
        for key, value in updates.items():
            if hasattr(deal, key):
                setattr(deal, key, value)
        db.commit()
        db.refresh(deal)
        return deal

    @staticmethod
    def delete_deal(db: Session, deal: Deal) -> None:
        db.delete(deal)
        db.commit()

    @staticmethod
    def bulk_delete_deals(db: Session, deal_ids: list[str]) -> int:
        deleted = db.query(Deal).filter(Deal.id.in_(deal_ids)).delete(synchronize_session=False)
        db.commit()
        return deleted
