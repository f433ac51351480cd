"""
Motor de mutación del carrito.

Funciones puras: reciben un Cart y devuelven uno nuevo, sin tocar el original
ni el almacenamiento. Quien llama persiste el resultado inmediatamente
(ver CartStore.save).

Invariantes que garantiza cada función al retornar:
  - a lo sumo un ítem por product_id (se fusiona al agregar)
  - ningún ítem con cantidad <= 0 (se elimina)
"""

from decimal import Decimal
from typing import Mapping

from shopcart.core.carts.models import Cart, CartLineItem, to_price


def add_item(cart: Cart, product: Mapping) -> Cart:
    """Agrega una unidad del producto; si ya existe, incrementa su cantidad.

    Nombre, precio e imagen se copian del registro del catálogo en el momento
    de agregar y no se vuelven a consultar.
    """
    product_id = str(product["id"])
    new_cart = cart.copy()
    existing = new_cart.items.get(product_id)
    if existing:
        existing.quantity += 1
    else:
        new_cart.items[product_id] = CartLineItem(
            product_id=product_id,
            name=product.get("name", ""),
            unit_price=to_price(product.get("price", 0)),
            image=product.get("image", ""),
            quantity=1,
        )
    return new_cart


def change_quantity(cart: Cart, product_id: str, delta: int) -> Cart:
    """Suma delta a la cantidad; en 0 o menos el ítem se elimina."""
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise ValueError(f"delta debe ser un entero: {delta!r}")
    product_id = str(product_id)
    if product_id not in cart.items:
        return cart.copy()
    new_cart = cart.copy()
    item = new_cart.items[product_id]
    qty = item.quantity + delta
    if qty <= 0:
        del new_cart.items[product_id]
    else:
        item.quantity = qty
    return new_cart


def remove_item(cart: Cart, product_id: str) -> Cart:
    new_cart = cart.copy()
    new_cart.items.pop(str(product_id), None)
    return new_cart


def clear(cart: Cart) -> Cart:
    return Cart(items={}, version=cart.version)


def compute_subtotal(cart: Cart) -> Decimal:
    return sum((item.line_total() for item in cart.items.values()), Decimal("0"))


def compute_item_count(cart: Cart) -> int:
    """Total de unidades; es el número que muestra el badge del carrito."""
    return sum(item.quantity for item in cart.items.values())
