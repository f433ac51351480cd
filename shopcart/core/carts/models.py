from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from typing import Dict, Optional
import logging

log = logging.getLogger(__name__)


def to_price(value) -> Decimal:
    """Convierte un precio de JSON (float, int o str) a Decimal sin ruido binario."""
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as err:
        raise ValueError(f"Precio inválido: {value!r}") from err
    # NaN o Infinity no se pueden comparar ni sumar
    if not amount.is_finite():
        raise ValueError(f"Precio inválido: {value!r}")
    return amount


@dataclass
class CartLineItem:
    product_id: str
    name: str
    unit_price: Decimal
    image: str = ""
    quantity: int = 1

    def __post_init__(self):
        if not self.product_id or not isinstance(self.product_id, str):
            raise ValueError("product_id inválido")
        if not isinstance(self.unit_price, Decimal):
            self.unit_price = to_price(self.unit_price)
        if self.unit_price < 0:
            raise ValueError("Precio no puede ser negativo")
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int):
            raise ValueError("Cantidad debe ser un entero")
        if self.quantity < 1:
            raise ValueError("Cantidad debe ser >= 1")

    def line_total(self) -> Decimal:
        return self.unit_price * self.quantity

    def to_dict(self) -> dict:
        # Mismo formato que guardaba el front-end: precio como número JSON.
        return {
            "productId": self.product_id,
            "name": self.name,
            "price": float(self.unit_price),
            "image": self.image,
            "qty": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLineItem":
        return cls(
            product_id=data["productId"],
            name=data.get("name", ""),
            unit_price=to_price(data.get("price", 0)),
            image=data.get("image", ""),
            quantity=data["qty"],
        )


@dataclass
class Cart:
    items: Dict[str, CartLineItem] = field(default_factory=dict)
    version: int = 0

    def copy(self) -> "Cart":
        return Cart(
            items={pid: replace(item) for pid, item in self.items.items()},
            version=self.version,
        )

    def get(self, product_id: str) -> Optional[CartLineItem]:
        return self.items.get(product_id)

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items.values())

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "items": [i.to_dict() for i in self.items.values()],
        }

    @classmethod
    def from_dict(cls, data) -> "Cart":
        # Acepta también el formato antiguo: una lista JSON de ítems.
        if isinstance(data, list):
            raw_items, version = data, 0
        else:
            raw_items, version = data["items"], int(data.get("version", 0))
        items: Dict[str, CartLineItem] = {}
        for raw in raw_items:
            item = CartLineItem.from_dict(raw)
            existing = items.get(item.product_id)
            if existing:
                existing.quantity += item.quantity
            else:
                items[item.product_id] = item
        return cls(items=items, version=version)
