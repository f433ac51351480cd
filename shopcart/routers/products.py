# shopcart/routers/products.py
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from shopcart.storage.db import get_db
from shopcart.storage.models import Product
from shopcart.storage.seed import seed_products

router = APIRouter(prefix="/api", tags=["Products"])


@router.post("/seed")
def seed(db: Session = Depends(get_db)):
    """
    Siembra los productos demo (sólo si el catálogo está vacío).
    """
    seeded, count = seed_products(db)
    return {"message": "Seeded" if seeded else "Already seeded", "count": count}


@router.get("/products")
def list_products(q: str | None = None, db: Session = Depends(get_db)):
    """
    Lista el catálogo, más nuevos primero.
    - Con q: sólo productos cuyo nombre contiene q (sin distinguir mayúsculas).
    """
    query = select(Product)
    term = (q or "").strip()
    if term:
        query = query.where(Product.name.icontains(term, autoescape=True))
    products = db.scalars(query.order_by(Product.created_at.desc(), Product.id)).all()
    return {"products": [p.to_dict() for p in products]}


@router.get("/products/{product_id}")
def get_product(product_id: str, db: Session = Depends(get_db)):
    product = db.get(Product, product_id)
    if not product:
        raise HTTPException(status_code=404, detail="Product not found")
    return product.to_dict()
