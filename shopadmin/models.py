import uuid

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID string primary key"""
    return str(uuid.uuid4())


class Category(Base):
    __tablename__ = "categories"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    image_url = Column(String(500), nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    products = relationship("Product", back_populates="category")


class Product(Base):
    __tablename__ = "products"

    id = Column(String(36), primary_key=True, default=generate_id)
    category_id = Column(String(36), ForeignKey("categories.id", ondelete="SET NULL"), nullable=True)
    name = Column(String(255), index=True, nullable=False)
    description = Column(Text, nullable=True)
    price = Column(Float, nullable=False)
    image_url = Column(String(500), nullable=True)
    is_available = Column(Boolean, default=True, nullable=False)
    stock_quantity = Column(Integer, nullable=True)  # None = not tracked
    variants = Column(JSON, default=list, nullable=True)  # e.g. ["Regular", "Spicy"]
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    category = relationship("Category", back_populates="products")


class Deal(Base):
    __tablename__ = "deals"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    category = Column(String(255), nullable=False)
    status = Column(String(20), default="active", nullable=False)  # active, draft, ended
    items = Column(JSON, default=list, nullable=False)  # [{product, quantity, variant}]
    price = Column(Float, nullable=False)
    offer_price = Column(Float, nullable=True)
    pricing_mode = Column(String(20), default="fixed", nullable=False)  # fixed, calculated
    discount_percent = Column(Float, nullable=True)
    count_stock = Column(Boolean, default=True, nullable=False)
    enable_addons = Column(Boolean, default=False, nullable=False)
    addons = Column(JSON, default=list, nullable=True)  # [{name, price}]
    image_url = Column(String(500), nullable=True)
    start_date = Column(String(10), nullable=True)  # YYYY-MM-DD
    end_date = Column(String(10), nullable=True)
    start_time = Column(String(5), nullable=True)  # HH:MM
    end_time = Column(String(5), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Coupon(Base):
    __tablename__ = "coupons"

    id = Column(String(36), primary_key=True, default=generate_id)
    code = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    discount_type = Column(String(20), nullable=False)  # percentage, fixed_amount, free_delivery
    discount_value = Column(Float, nullable=False)
    min_order_amount = Column(Float, nullable=True)
    max_discount_amount = Column(Float, nullable=True)
    usage_limit = Column(Integer, nullable=True)
    used_count = Column(Integer, default=0, nullable=False)
    status = Column(String(20), default="active", nullable=False)  # active, inactive, expired
    start_date = Column(String(10), nullable=True)  # YYYY-MM-DD
    end_date = Column(String(10), nullable=True)
    is_first_order_only = Column(Boolean, default=False, nullable=False)
    applicable_categories = Column(JSON, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Rider(Base):
    __tablename__ = "riders"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    phone = Column(String(50), unique=True, index=True, nullable=False)
    password_hash = Column(String(255), nullable=False)
    status = Column(String(20), default="offline", nullable=False)  # active, offline, busy
    orders_completed = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    orders = relationship("Order", back_populates="rider")


class Order(Base):
    __tablename__ = "orders"

    id = Column(String(36), primary_key=True, default=generate_id)
    customer_name = Column(String(255), nullable=False)
    phone = Column(String(50), nullable=False)
    address = Column(String(500), nullable=False)
    items = Column(JSON, default=list, nullable=False)  # ["Chicken Burger x2", ...]
    total = Column(Float, nullable=False)
    status = Column(String(30), default="processing", nullable=False)
    rider_id = Column(String(36), ForeignKey("riders.id", ondelete="SET NULL"), nullable=True)
    coupon_code = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    rider = relationship("Rider", back_populates="orders")


class Schedule(Base):
    __tablename__ = "schedules"

    id = Column(String(36), primary_key=True, default=generate_id)
    day_of_week = Column(Integer, unique=True, nullable=False)  # 0=Monday, 6=Sunday
    is_closed = Column(Boolean, default=False, nullable=False)
    is_24h = Column(Boolean, default=False, nullable=False)
    time_blocks = Column(JSON, default=list, nullable=False)  # [{id, startTime, endTime}]
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ShopSetting(Base):
    """Key/value settings: global_shop_status, delivery_settings"""

    __tablename__ = "shop_settings"

    id = Column(String(36), primary_key=True, default=generate_id)
    setting_key = Column(String(100), unique=True, index=True, nullable=False)
    setting_value = Column(JSON, nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class ShopProfile(Base):
    __tablename__ = "shop_profile"

    id = Column(String(36), primary_key=True, default=generate_id)
    shop_name = Column(String(255), nullable=False)
    tagline = Column(String(255), nullable=True)
    short_desc = Column(Text, nullable=True)
    about_desc = Column(Text, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    contacts = relationship("ContactNumber", back_populates="profile", cascade="all, delete-orphan")
    socials = relationship("SocialLink", back_populates="profile", cascade="all, delete-orphan")
    location = relationship(
        "Location", back_populates="profile", uselist=False, cascade="all, delete-orphan"
    )


class ContactNumber(Base):
    __tablename__ = "contact_numbers"

    id = Column(String(36), primary_key=True, default=generate_id)
    profile_id = Column(String(36), ForeignKey("shop_profile.id", ondelete="CASCADE"))
    type = Column(String(20), default="phone")  # phone, whatsapp
    label = Column(String(100), nullable=True)
    number = Column(String(50), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    profile = relationship("ShopProfile", back_populates="contacts")


class SocialLink(Base):
    __tablename__ = "social_links"

    id = Column(String(36), primary_key=True, default=generate_id)
    profile_id = Column(String(36), ForeignKey("shop_profile.id", ondelete="CASCADE"))
    platform = Column(String(50), nullable=False)
    url = Column(String(500), nullable=False)
    created_at = Column(DateTime, server_default=func.now())

    profile = relationship("ShopProfile", back_populates="socials")


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=generate_id)
    profile_id = Column(String(36), ForeignKey("shop_profile.id", ondelete="CASCADE"))
    address = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    google_maps_url = Column(String(500), nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    profile = relationship("ShopProfile", back_populates="location")
