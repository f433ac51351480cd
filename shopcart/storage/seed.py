# shopcart/storage/seed.py
import logging

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from . import models

log = logging.getLogger(__name__)

DEMO_PRODUCTS = [
    {
        "name": "Amazon Echo Dot 3rd Generation",
        "image": "https://images.unsplash.com/photo-1518441902113-c1d3e1b2a3a4?q=80&w=900&auto=format&fit=crop",
        "price": 29.99, "rating": 5, "num_reviews": 1, "brand": "Amazon", "category": "Electronics",
    },
    {
        "name": "iPhone 11 Pro 256GB Memory",
        "image": "https://images.unsplash.com/photo-1567581935884-3349723552ca?q=80&w=900&auto=format&fit=crop",
        "price": 599.99, "rating": 4, "num_reviews": 2, "brand": "Apple", "category": "Mobile",
    },
    {
        "name": "Sony Playstation 4 Pro White Version",
        "image": "https://images.unsplash.com/photo-1606813907291-76c67c1a6f3b?q=80&w=900&auto=format&fit=crop",
        "price": 399.99, "rating": 5, "num_reviews": 12, "brand": "Sony", "category": "Gaming",
    },
    {
        "name": "Logitech G-Series Gaming Mouse",
        "image": "https://images.unsplash.com/photo-1588349427182-2f6f1e3b1c39?q=80&w=900&auto=format&fit=crop",
        "price": 49.99, "rating": 5, "num_reviews": 1, "brand": "Logitech", "category": "Accessories",
    },
    {
        "name": "Airpods Wireless Bluetooth Headphones",
        "image": "https://images.unsplash.com/photo-1585386959984-a41552231658?q=80&w=900&auto=format&fit=crop",
        "price": 89.99, "rating": 4, "num_reviews": 1, "brand": "Apple", "category": "Audio",
    },
    {
        "name": "Canon EOS 80D DSLR Camera",
        "image": "https://images.unsplash.com/photo-1519183071298-a2962be96f83?q=80&w=900&auto=format&fit=crop",
        "price": 929.99, "rating": 5, "num_reviews": 12, "brand": "Canon", "category": "Camera",
    },
]


def seed_products(db: Session) -> tuple[bool, int]:
    """
    Inserta los productos demo si el catálogo está vacío.
    Retorna (sembrado, cantidad): cantidad es lo insertado o lo que ya había.
    """
    count = db.scalar(select(func.count()).select_from(models.Product))
    if count:
        return False, count

    db.add_all(models.Product(**data) for data in DEMO_PRODUCTS)
    db.commit()
    log.info(f"Catálogo sembrado con {len(DEMO_PRODUCTS)} productos.")
    return True, len(DEMO_PRODUCTS)
