from decimal import Decimal, ROUND_HALF_UP

from shopcart.core.carts.engine import compute_item_count, compute_subtotal
from shopcart.core.carts.models import Cart, to_price

CENT = Decimal("0.01")


def format_price(value) -> str:
    """'$29.99': dos decimales, redondeo comercial."""
    amount = value if isinstance(value, Decimal) else to_price(value)
    return f"${amount.quantize(CENT, rounding=ROUND_HALF_UP)}"


def build_cart_summary(cart: Cart) -> dict:
    """
    Datos que necesita la vista del carrito.
    {
      "items": [ {productId, name, price, image, qty, line_total, price_display}, ... ],
      "item_count": int,
      "subtotal": Decimal,
      "subtotal_display": "$0.00",
      "checkout_enabled": bool
    }
    """
    items = []
    for item in cart:
        row = item.to_dict()
        row["line_total"] = item.line_total()
        row["price_display"] = format_price(item.unit_price)
        items.append(row)

    subtotal = compute_subtotal(cart)
    return {
        "items": items,
        "item_count": compute_item_count(cart),
        "subtotal": subtotal,
        "subtotal_display": format_price(subtotal),
        "checkout_enabled": bool(items),
    }
