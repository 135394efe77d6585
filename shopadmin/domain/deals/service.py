"""Deal service - Business logic for deals and deal pricing"""

import logging
from typing import Optional

from fastapi import HTTPException
from sqlalchemy.orm import Session

from ...models import Deal
from ..catalog.repository import ProductRepository
from .pricing import CALCULATED, deal_price, items_subtotal, savings
from .repository import DealRepository
from .schemas import DealCreate, DealResponse, DealUpdate, PricePreviewRequest

logger = logging.getLogger(__name__)

# request field -> column
DEAL_FIELDS = {
    "name": "name",
    "category": "category",
    "status": "status",
    "items": "items",
    "pricingMode": "pricing_mode",
    "price": "price",
    "offerPrice": "offer_price",
    "discountPercent": "discount_percent",
    "countStock": "count_stock",
    "enableAddons": "enable_addons",
    "addons": "addons",
    "imageUrl": "image_url",
    "startDate": "start_date",
    "endDate": "end_date",
    "startTime": "start_time",
    "endTime": "end_time",
}


class DealService:
    """Service layer for deal business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = DealRepository()
        self.products = ProductRepository()

    def _subtotal(self, items: list[dict]) -> float:
        prices = {
            name: product.price
            for name, product in self.products.get_products_by_names(
                self.db, [item["product"] for item in items]
            ).items()
        }
        return items_subtotal(items, prices)

    def to_response(self, deal: Deal) -> DealResponse:
        subtotal = self._subtotal(deal.items or [])
        final = deal_price(
            deal.pricing_mode,
            subtotal,
            price=deal.price,
            offer_price=deal.offer_price,
            discount_percent=deal.discount_percent,
        )
        return DealResponse(
            id=deal.id,
            name=deal.name,
            category=deal.category,
            status=deal.status,
            items=deal.items or [],
            pricingMode=deal.pricing_mode,
            price=deal.price,
            offerPrice=deal.offer_price,
            discountPercent=deal.discount_percent,
            subtotal=subtotal,
            finalPrice=final,
            countStock=deal.count_stock,
            enableAddons=deal.enable_addons,
            addons=deal.addons or [],
            imageUrl=deal.image_url,
            startDate=deal.start_date,
            endDate=deal.end_date,
            startTime=deal.start_time,
            endTime=deal.end_time,
            created_at=deal.created_at,
        )

    def list_deals(self, status: Optional[str] = None) -> list[DealResponse]:
        return [self.to_response(d) for d in self.repo.get_deals(self.db, status=status)]

    def get_deal(self, deal_id: str) -> Deal:
        deal = self.repo.get_deal_by_id(self.db, deal_id)
        if not deal:
            raise HTTPException(status_code=404, detail="Deal not found")
        return deal

    def preview_price(self, data: PricePreviewRequest) -> dict:
        items = [item.model_dump() for item in data.items]
        subtotal = self._subtotal(items)
        final = deal_price(
            data.pricingMode,
            subtotal,
            price=data.price,
            offer_price=data.offerPrice,
            discount_percent=data.discountPercent,
        )
        return {"subtotal": subtotal, "finalPrice": final, "savings": savings(subtotal, final)}

    def _apply_calculated_price(self, fields: dict) -> dict:
        """Calculated deals store the discounted item total as their price"""
        if fields.get("pricing_mode") == CALCULATED:
            subtotal = self._subtotal(fields["items"])
            fields["price"] = deal_price(
                CALCULATED, subtotal, discount_percent=fields.get("discount_percent")
            )
            fields["offer_price"] = None
        return fields

    def create_deal(self, data: DealCreate) -> DealResponse:
        payload = data.model_dump()
        fields = {column: payload[field] for field, column in DEAL_FIELDS.items()}
        fields = self._apply_calculated_price(fields)
        deal = self.repo.create_deal(self.db, **fields)
        logger.info(f"✅ Created deal {deal.name} ({deal.pricing_mode}, {deal.price})")
        return self.to_response(deal)

    def update_deal(self, deal_id: str, data: DealUpdate) -> DealResponse:
        deal = self.get_deal(deal_id)
        provided = data.model_dump(exclude_unset=True)

        fields = {
            column: getattr(deal, column) for column in DEAL_FIELDS.values()
        }
        fields.update({DEAL_FIELDS[field]: value for field, value in provided.items()})

        if fields["offer_price"] is not None and fields["price"] is not None and fields["offer_price"] > fields["price"]:
            raise HTTPException(status_code=400, detail="Offer price cannot be higher than the regular price")
        if fields["pricing_mode"] != CALCULATED and not fields["price"]:
            raise HTTPException(status_code=400, detail="A fixed-price deal needs a regular price")

        fields = self._apply_calculated_price(fields)
        deal = self.repo.update_deal(self.db, deal, **fields)
        return self.to_response(deal)

    def set_status(self, deal_id: str, status: str) -> DealResponse:
        deal = self.repo.update_deal(self.db, self.get_deal(deal_id), status=status)
        logger.info(f"🔄 Deal {deal_id} is now {status}")
        return self.to_response(deal)

    def delete_deal(self, deal_id: str) -> dict:
        deal = self.get_deal(deal_id)
        self.repo.delete_deal(self.db, deal)
        logger.info(f"🗑️ Deleted deal {deal_id}")
        return {"message": "Deal deleted"}

    def bulk_delete(self, deal_ids: list[str]) -> dict:
        if not deal_ids:
            raise HTTPException(status_code=400, detail="No deal IDs provided")
        deleted = self.repo.bulk_delete_deals(self.db, deal_ids)
        logger.info(f"🗑️ Bulk deleted {deleted} deal(s)")
        return {"message": f"{deleted} deal(s) deleted", "deleted": deleted}
