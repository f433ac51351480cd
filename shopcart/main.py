import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from shopcart.routers import auth, products, profile
from shopcart.storage import models  # noqa: F401  # Mantener import para registrar modelos
from shopcart.storage.db import Base, engine

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

ALLOWED_ORIGINS = [
    origin for origin in (
        os.getenv("CORS_ORIGIN"),
        "http://localhost:5500",
        "http://127.0.0.1:5500",
        "http://localhost:5173",
        "http://localhost:3000",
    ) if origin
]


# --- Lifespan ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    # Se ejecuta al iniciar la app
    Base.metadata.create_all(bind=engine)
    log.info("[startup] Base de datos inicializada y tablas creadas (si no existen).")
    yield
    # Al apagar la app
    log.info("[shutdown] App finalizada correctamente.")


# --- Inicializacion de la app ---
app = FastAPI(
    title="ShopCart API",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Routers ---
app.include_router(products.router)
app.include_router(auth.router)
app.include_router(profile.router)


# --- Errores: siempre {"message": ...} ---
@app.exception_handler(StarletteHTTPException)
async def http_error(request: Request, exc: StarletteHTTPException):
    message = exc.detail
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={"message": "Invalid request body"})


@app.exception_handler(Exception)
async def unexpected_error(request: Request, exc: Exception):
    log.exception(f"Error no controlado en {request.method} {request.url.path}")
    return JSONResponse(status_code=400, content={"message": str(exc) or "Server error"})


@app.get("/")
async def root():
    return {"ok": True, "service": "ShopCart API"}
