import json
from typing import Optional
import logging

from shopcart.core.carts.models import Cart

log = logging.getLogger(__name__)

CART_KEY = "shopcart.cart"


def load_or_default(raw: Optional[str]) -> Cart:
    """Lectura tolerante: datos ausentes o corruptos se leen como carrito vacío.

    Nunca lanza; el problema queda en el log.
    """
    if not raw:
        return Cart()
    try:
        return Cart.from_dict(json.loads(raw))
    except (ValueError, TypeError, KeyError, AttributeError) as err:
        log.warning(f"Carrito persistido ilegible ({err}). Se usa carrito vacío.")
        return Cart()


class CartStore:
    """Carrito persistido en el almacenamiento durable del cliente (última escritura gana)."""

    def __init__(self, storage, key: str = CART_KEY):
        self.storage = storage
        self.key = key

    def load(self) -> Cart:
        return load_or_default(self.storage.get(self.key))

    def save(self, cart: Cart) -> Cart:
        cart.version += 1
        self.storage.set(self.key, json.dumps(cart.to_dict()))
        log.info(f"Carrito guardado. Versión {cart.version}, {len(cart)} ítems")
        return cart

    def clear(self) -> None:
        self.storage.delete(self.key)
        log.info("Carrito eliminado.")
