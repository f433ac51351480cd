# shopcart/storage/db.py
from __future__ import annotations
import os
from typing import Generator
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

# === CONFIGURACIÓN: conexión a la base ===
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./shopcart.db")


def make_engine(url: str = DATABASE_URL, **kwargs):
    if url.startswith("sqlite"):
        # SQLite + FastAPI: las rutas sync corren en un threadpool
        kwargs.setdefault("connect_args", {"check_same_thread": False})
    return create_engine(
        url,
        echo=False,          # Cambia a True para ver el SQL en consola
        future=True,
        pool_pre_ping=True,  # Verifica conexiones antes de usarlas
        **kwargs,
    )


# === ENGINE ===
engine = make_engine()

# === BASE ORM ===
class Base(DeclarativeBase):
    """Clase base para los modelos ORM."""
    pass

# === SESIÓN ===
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
    future=True,
)

# === DEPENDENCIA PARA FASTAPI ===
def get_db() -> Generator:
    """Genera una sesión por request (para inyección en FastAPI)."""
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

