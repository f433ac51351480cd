from typing import List, Optional
import logging

from shopcart.client.errors import RequestFailed, ValidationFailed
from shopcart.client.gateway import SyncGateway
from shopcart.core.session.models import SessionIdentity, UserProfile

log = logging.getLogger(__name__)


class ShopApi:
    """Operaciones de catálogo y autenticación contra la API de ShopCart."""

    def __init__(self, gateway: SyncGateway):
        self.gateway = gateway
        self.session_store = gateway.session_store

    # --- Catálogo ---
    async def search_products(self, query: str = "") -> List[dict]:
        query = (query or "").strip()
        params = {"q": query} if query else None
        data = await self.gateway.request("/api/products", params=params)
        return data.get("products", [])

    async def get_product(self, product_id: str) -> dict:
        return await self.gateway.request(f"/api/products/{product_id}")

    async def seed(self) -> dict:
        return await self.gateway.request("/api/seed", method="POST")

    # --- Autenticación ---
    async def register(self, name: str, email: str, password: str) -> UserProfile:
        name = (name or "").strip()
        email = (email or "").strip()
        if not name or not email or not password:
            raise ValidationFailed("Missing fields")
        data = await self.gateway.request(
            "/api/auth/register",
            method="POST",
            body={"name": name, "email": email, "password": password},
        )
        return _profile_from(data)

    async def login(self, email: str, password: str) -> SessionIdentity:
        """Inicia sesión; el token y el perfil se guardan sólo si la API respondió bien."""
        email = (email or "").strip()
        data = await self.gateway.request(
            "/api/auth/login",
            method="POST",
            body={"email": email, "password": password},
        )
        token = data.get("token") if isinstance(data, dict) else None
        if not token:
            raise RequestFailed("Login failed")
        return self.session_store.set_session(token, _profile_from(data))

    async def profile(self) -> UserProfile:
        data = await self.gateway.request("/api/profile", require_auth=True)
        return _profile_from(data)

    def logout(self) -> None:
        self.session_store.clear()


def _profile_from(data) -> UserProfile:
    user: Optional[dict] = data.get("user") if isinstance(data, dict) else None
    try:
        return UserProfile.from_dict(user)
    except (KeyError, TypeError) as err:
        log.error(f"Respuesta sin usuario válido: {data!r}")
        raise RequestFailed("Invalid user in response") from err
