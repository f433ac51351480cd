# shopcart/routers/auth.py
import logging

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from shopcart.core.security import create_access_token, get_password_hash, verify_password
from shopcart.storage.db import get_db
from shopcart.storage.models import User

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["Auth"])


class RegisterRequest(BaseModel):
    name: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


def _clean(value: str | None) -> str:
    return (value or "").strip()


@router.post("/register")
def register(payload: RegisterRequest, db: Session = Depends(get_db)):
    """
    Crea un usuario. No inicia sesión: el cliente hace login después.
    """
    name = _clean(payload.name)
    email = _clean(payload.email)
    password = payload.password
    if not name or not email or not password:
        raise HTTPException(status_code=400, detail="Missing fields")

    if db.scalar(select(User).where(User.email == email)):
        raise HTTPException(status_code=409, detail="Email already registered")

    user = User(name=name, email=email, password_hash=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # Otro registro con el mismo email ganó la carrera
        db.rollback()
        raise HTTPException(status_code=409, detail="Email already registered")
    db.refresh(user)
    log.info(f"Usuario registrado: {user.email}")
    return {"user": user.to_summary()}


@router.post("/login")
def login(payload: LoginRequest, db: Session = Depends(get_db)):
    email = _clean(payload.email)
    password = payload.password or ""
    user = db.scalar(select(User).where(User.email == email)) if email else None
    if not user or not verify_password(password, user.password_hash):
        raise HTTPException(status_code=401, detail="Invalid credentials")

    return {"token": create_access_token(user), "user": user.to_summary()}
