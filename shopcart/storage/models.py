# shopcart/storage/models.py
# ======================================================
# Modelos ORM de ShopCart
# ======================================================

import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Float, DateTime, Text
from sqlalchemy.sql import func

from .db import Base


def _new_id() -> str:
    return uuid.uuid4().hex


def _now() -> datetime:
    return datetime.now(timezone.utc)


# ======================================================
# CATÁLOGO
# ======================================================
class Product(Base):
    """Producto del catálogo. El cliente sólo lo lee."""
    __tablename__ = "products"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False, index=True)
    image = Column(String, nullable=False)
    price = Column(Float, nullable=False)
    rating = Column(Float, nullable=False, default=0)
    num_reviews = Column(Integer, nullable=False, default=0)
    brand = Column(String, nullable=True)
    category = Column(String, nullable=True)
    count_in_stock = Column(Integer, nullable=False, default=100)
    description = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), default=_now, server_default=func.now(), nullable=False)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "image": self.image,
            "price": self.price,
            "rating": self.rating,
            "reviewCount": self.num_reviews,
            "brand": self.brand,
            "category": self.category,
            "countInStock": self.count_in_stock,
            "description": self.description,
        }

    def __repr__(self):
        return f"<Product name={self.name} price={self.price}>"


# ======================================================
# USUARIOS
# ======================================================
class User(Base):
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=_new_id)
    name = Column(String, nullable=False)
    email = Column(String, unique=True, nullable=False, index=True)
    password_hash = Column(String, nullable=False)
    created_at = Column(DateTime(timezone=True), default=_now, server_default=func.now(), nullable=False)

    def to_summary(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}

    def __repr__(self):
        return f"<User email={self.email}>"
