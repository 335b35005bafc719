from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from shopfront.app.client import Context
from shopfront.app.common.errors import abort_client
from shopfront.app.models import Product

ADDRESS_FIELDS = ("first_name", "last_name", "street", "city", "postal_code", "country")


@dataclass
class BasketItem:
    product: Product
    quantity: int

    @property
    def line_total_cents(self) -> int:
        return self.product.price_cents * self.quantity


@dataclass
class Basket:
    items: List[BasketItem] = field(default_factory=list)
    address: Optional[Dict[str, str]] = None
    delivery: Optional[str] = None
    payment: Optional[str] = None
    delivery_cents: int = 0
    tax_rate: float = 0.0

    @property
    def subtotal_cents(self) -> int:
        return sum(i.line_total_cents for i in self.items)

    @property
    def tax_cents(self) -> int:
        return int(self.subtotal_cents * self.tax_rate)

    @property
    def total_cents(self) -> int:
        return self.subtotal_cents + self.tax_cents + self.delivery_cents

    def product_ids(self) -> List[int]:
        return [i.product.id for i in self.items]


class BasketController:
    """Basket kept in the session until the order is placed."""

    SESSION_KEY = "basket"

    def __init__(self, context: Context) -> None:
        self._context = context

    # stored as {"products": {"<product_id>": qty}, "address": {...}, "delivery": code, "payment": code}
    def _load(self) -> Dict[str, Any]:
        return dict(self._context.session.get(self.SESSION_KEY) or {"products": {}})

    def _save(self, data: Dict[str, Any]) -> None:
        self._context.session[self.SESSION_KEY] = data

    def get(self) -> Basket:
        data = self._load()
        config = self._context.config
        quantities = data.get("products", {})

        items = []
        if quantities:
            products = Product.query.filter(Product.id.in_([int(pid) for pid in quantities])).all()
            by_id = {p.id: p for p in products}
            for pid, qty in quantities.items():
                product = by_id.get(int(pid))
                if product is not None and product.is_active:
                    items.append(BasketItem(product=product, quantity=qty))

        delivery = data.get("delivery")
        return Basket(
            items=items,
            address=data.get("address"),
            delivery=delivery,
            payment=data.get("payment"),
            delivery_cents=config.get("CHECKOUT_DELIVERY_OPTIONS", {}).get(delivery, 0),
            tax_rate=config.get("TAX_RATE", 0.0),
        )

    def add_product(self, product_id: int, quantity: int = 1) -> Basket:
        if quantity < 1:
            abort_client(400, "validation_error", "Quantity must be > 0")

        product = Product.query.get(product_id)
        if not product or not product.is_active:
            abort_client(404, "not_found", "Product not found")

        data = self._load()
        products = dict(data.get("products", {}))
        key = str(product_id)
        new_qty = products.get(key, 0) + quantity
        if product.stock_qty < new_qty:
            abort_client(409, "conflict", "Out of stock", {"product_id": product_id, "available": product.stock_qty})

        products[key] = new_qty
        data["products"] = products
        self._save(data)
        return self.get()

    def edit_product(self, product_id: int, quantity: int) -> Basket:
        if quantity <= 0:
            # treat as remove
            return self.delete_product(product_id)

        data = self._load()
        products = dict(data.get("products", {}))
        key = str(product_id)
        if key not in products:
            abort_client(404, "not_found", "Basket item not found")

        product = Product.query.get(product_id)
        if not product or not product.is_active:
            abort_client(404, "not_found", "Product not found")
        if product.stock_qty < quantity:
            abort_client(409, "conflict", "Out of stock", {"product_id": product_id, "available": product.stock_qty})

        products[key] = quantity
        data["products"] = products
        self._save(data)
        return self.get()

    def delete_product(self, product_id: int) -> Basket:
        data = self._load()
        products = dict(data.get("products", {}))
        products.pop(str(product_id), None)
        data["products"] = products
        self._save(data)
        return self.get()

    def set_address(self, values: Dict[str, Any]) -> Basket:
        address = {f: str(values.get(f) or "").strip() for f in ADDRESS_FIELDS}
        missing = [f for f, v in address.items() if not v]
        if missing:
            abort_client(400, "validation_error", "Missing address fields", {"missing": missing})

        data = self._load()
        data["address"] = address
        self._save(data)
        return self.get()

    def set_delivery(self, code: str) -> Basket:
        if code not in self._context.config.get("CHECKOUT_DELIVERY_OPTIONS", {}):
            abort_client(400, "validation_error", f'Unknown delivery option "{code}"')

        data = self._load()
        data["delivery"] = code
        self._save(data)
        return self.get()

    def set_payment(self, code: str) -> Basket:
        if code not in self._context.config.get("CHECKOUT_PAYMENT_OPTIONS", []):
            abort_client(400, "validation_error", f'Unknown payment option "{code}"')

        data = self._load()
        data["payment"] = code
        self._save(data)
        return self.get()

    def clear(self) -> None:
        self._context.session.pop(self.SESSION_KEY, None)
