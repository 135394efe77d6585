"""Shop repository - Database operations for the shop profile and delivery settings"""

import logging
from typing import Optional

from sqlalchemy.orm import Session, joinedload

from ...models import ContactNumber, Location, ShopProfile, ShopSetting, SocialLink

logger = logging.getLogger(__name__)

DELIVERY_SETTINGS_KEY = "delivery_settings"


class ShopRepository:
    """Repository for shop profile database operations"""

    @staticmethod
    def get_profile(db: Session) -> Optional[ShopProfile]:
        """The single shop profile, with contacts, socials and location loaded"""
        return (
            db.query(ShopProfile)
            .options(
                joinedload(ShopProfile.contacts),
                joinedload(ShopProfile.socials),
                joinedload(ShopProfile.location),
            )
            .order_by(ShopProfile.created_at.asc())
            .first()
        )

    @staticmethod
    def save_profile(
        db: Session,
        profile_data: dict,
        contacts: list[dict],
        socials: list[dict],
        location: Optional[dict],
    ) -> ShopProfile:
        profile = ShopRepository.get_profile(db)
        if profile is None:
            profile = ShopProfile(**profile_data)
            db.add(profile)
        else:
            for key, value in profile_data.items():
                setattr(profile, key, value)

        profile.contacts = [ContactNumber(**c) for c in contacts]
        profile.socials = [SocialLink(**s) for s in socials]
        profile.location = Location(**location) if location else None

        db.commit()
        db.refresh(profile)
        return profile

    @staticmethod
    def get_setting(db: Session, key: str) -> Optional[dict]:
        setting = db.query(ShopSetting).filter(ShopSetting.setting_key == key).first()
        return setting.setting_value if setting else None

    @staticmethod
    def save_setting(db: Session, key: str, value: dict) -> dict:
        setting = db.query(ShopSetting).filter(ShopSetting.setting_key == key).first()
        if setting is None:
            db.add(ShopSetting(setting_key=key, setting_value=value))
        else:
            setting.setting_value = value
        db.commit()
        return value
