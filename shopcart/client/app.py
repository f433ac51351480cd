"""
Raíz de la aplicación cliente.

ShopApp es dueño de los stores (carrito y sesión), del gateway y de la API.
Cada acción de carrito corre completa en una sola llamada: cargar, mutar,
guardar y notificar. Las vistas se suscriben a "cart" y "session".
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Mapping, Optional
import logging

from shopcart.client.api import ShopApi
from shopcart.client.errors import RequestFailed
from shopcart.client.gateway import SyncGateway
from shopcart.core.carts import engine
from shopcart.core.carts.models import Cart
from shopcart.core.carts.store import CartStore
from shopcart.core.durable.factory import open_storage
from shopcart.core.pricing import build_cart_summary
from shopcart.core.session.models import SessionIdentity
from shopcart.core.session.store import SessionStore

log = logging.getLogger(__name__)

TOPICS = ("cart", "session")
NO_PRODUCTS = "No Products Found"


@dataclass
class FormFeedback:
    ok: bool
    message: str


@dataclass
class SearchResult:
    products: List[dict] = field(default_factory=list)
    notice: Optional[str] = None


class ShopApp:

    def __init__(self, storage, base_url: Optional[str] = None, timeout: Optional[float] = None, transport=None):
        self.cart_store = CartStore(storage)
        self.session_store = SessionStore(storage)
        self.gateway = SyncGateway(self.session_store, base_url=base_url, timeout=timeout, transport=transport)
        self.api = ShopApi(self.gateway)
        self._listeners: Dict[str, List[Callable]] = defaultdict(list)

    @classmethod
    def from_env(cls, **kwargs) -> "ShopApp":
        return cls(open_storage(), **kwargs)

    # --- Suscripciones ---
    def subscribe(self, topic: str, callback: Callable) -> Callable[[], None]:
        """Registra un callback; devuelve una función para desuscribirse."""
        if topic not in TOPICS:
            raise ValueError(f"Tópico desconocido: {topic}")
        self._listeners[topic].append(callback)

        def unsubscribe() -> None:
            # Llamarla más de una vez no hace nada
            if callback in self._listeners[topic]:
                self._listeners[topic].remove(callback)

        return unsubscribe

    def _notify(self, topic: str, *args) -> None:
        for callback in list(self._listeners[topic]):
            callback(*args)

    # --- Carrito ---
    def _apply(self, mutation: Callable[[Cart], Cart]) -> Cart:
        cart = self.cart_store.save(mutation(self.cart_store.load()))
        self._notify("cart", engine.compute_item_count(cart), cart)
        return cart

    def add_to_cart(self, product: Mapping) -> Cart:
        return self._apply(lambda cart: engine.add_item(cart, product))

    def change_quantity(self, product_id: str, delta: int) -> Cart:
        return self._apply(lambda cart: engine.change_quantity(cart, product_id, delta))

    def remove_from_cart(self, product_id: str) -> Cart:
        return self._apply(lambda cart: engine.remove_item(cart, product_id))

    def clear_cart(self) -> Cart:
        return self._apply(engine.clear)

    def badge_count(self) -> int:
        return engine.compute_item_count(self.cart_store.load())

    def cart_summary(self) -> dict:
        return build_cart_summary(self.cart_store.load())

    # --- Catálogo ---
    async def search(self, query: str) -> SearchResult:
        query = (query or "").strip()
        if not query:
            return SearchResult(notice=NO_PRODUCTS)
        try:
            products = await self.api.search_products(query)
        except RequestFailed as err:
            return SearchResult(notice=err.message or "Search failed")
        return SearchResult(products=products, notice=None if products else NO_PRODUCTS)

    # --- Sesión ---
    async def sign_in(self, email: str, password: str) -> FormFeedback:
        try:
            session = await self.api.login(email, password)
        except RequestFailed as err:
            log.info(f"Login rechazado: {err.message}")
            return FormFeedback(ok=False, message=err.message or "Login failed")
        self._notify("session", session)
        return FormFeedback(ok=True, message=f"Welcome, {session.profile.first_name}")

    async def register(self, name: str, email: str, password: str) -> FormFeedback:
        try:
            await self.api.register(name, email, password)
        except RequestFailed as err:
            return FormFeedback(ok=False, message=err.message or "Registration failed")
        return FormFeedback(ok=True, message="Account created. You can sign in now.")

    def sign_out(self) -> None:
        self.api.logout()
        self._notify("session", SessionIdentity())

    def auth_label(self) -> str:
        profile = self.session_store.get_profile()
        if profile and profile.first_name:
            return profile.first_name
        return "Sign In"
