# core/orders.py

from decimal import Decimal, InvalidOperation

from core import config
from core.schemas.order import (
    OrderAddress,
    OrderCustomer,
    OrderDiscountCode,
    OrderLineItem,
    OrderTaxLine,
    OrderView,
)

LOCALES = {
    "en": {
        "envelope": {
            "ok": "ok",
            "shop": "shop",
            "count": "count",
            "orders": "orders",
            "order": "order",
        },
        "financial_status": {
            "pending": "Pending",
            "authorized": "Authorized",
            "partially_paid": "Partially paid",
            "paid": "Paid",
            "partially_refunded": "Partially refunded",
            "refunded": "Refunded",
            "voided": "Voided",
            "expired": "Expired",
        },
        "fulfillment_status": {
            None: "Unfulfilled",
            "unfulfilled": "Unfulfilled",
            "partial": "Partially fulfilled",
            "fulfilled": "Fulfilled",
            "restocked": "Restocked",
        },
    },
    "es": {
        "envelope": {
            "ok": "exito",
            "shop": "tienda",
            "count": "total",
            "orders": "pedidos",
            "order": "pedido",
        },
        "financial_status": {
            "pending": "Pendiente",
            "authorized": "Autorizado",
            "partially_paid": "Pagado parcialmente",
            "paid": "Pagado",
            "partially_refunded": "Reembolsado parcialmente",
            "refunded": "Reembolsado",
            "voided": "Anulado",
            "expired": "Vencido",
        },
        "fulfillment_status": {
            None: "No enviado",
            "unfulfilled": "No enviado",
            "partial": "Enviado parcialmente",
            "fulfilled": "Enviado",
            "restocked": "Reabastecido",
        },
    },
}


def _text(value):
    return None if value is None else str(value)


def line_total(price, quantity) -> str | None:
    try:
        total = Decimal(str(price)) * int(quantity or 0)
    except (InvalidOperation, TypeError, ValueError):
        return None
    return str(total.quantize(Decimal("0.01")))


def _address(address: dict | None) -> OrderAddress | None:
    if not address:
        return None
    return OrderAddress(
        name=address.get("name"),
        company=address.get("company"),
        address1=address.get("address1"),
        address2=address.get("address2"),
        city=address.get("city"),
        province=address.get("province"),
        province_code=address.get("province_code"),
        zip=_text(address.get("zip")),
        country=address.get("country"),
        country_code=address.get("country_code"),
        phone=address.get("phone"),
    )


def _customer(customer: dict | None) -> OrderCustomer | None:
    if not customer:
        return None
    return OrderCustomer(
        id=customer.get("id"),
        first_name=customer.get("first_name"),
        last_name=customer.get("last_name"),
        email=customer.get("email"),
        phone=customer.get("phone"),
    )


def _line_item(item: dict) -> OrderLineItem:
    quantity = item.get("quantity") or 0
    return OrderLineItem(
        id=item.get("id"),
        sku=item.get("sku"),
        title=item.get("title"),
        variant_title=item.get("variant_title"),
        quantity=quantity,
        price=_text(item.get("price")),
        total=line_total(item.get("price"), quantity) if item.get("price") is not None else None,
        variant_id=item.get("variant_id"),
        product_id=item.get("product_id"),
    )


def format_order(order: dict, locale: str = "en") -> OrderView:
    """
    Project a Shopify REST order onto OrderView, labelling status fields in `locale`.
    """
    labels = LOCALES.get(locale, LOCALES["en"])
    financial_status = order.get("financial_status")
    fulfillment_status = order.get("fulfillment_status")

    return OrderView(
        id=order.get("id"),
        name=order.get("name"),
        order_number=order.get("order_number"),
        created_at=order.get("created_at"),
        updated_at=order.get("updated_at"),
        cancelled_at=order.get("cancelled_at"),
        financial_status=financial_status,
        financial_status_label=labels["financial_status"].get(financial_status, financial_status),
        fulfillment_status=fulfillment_status,
        fulfillment_status_label=labels["fulfillment_status"].get(fulfillment_status, fulfillment_status),
        currency=order.get("currency"),
        total_price=_text(order.get("total_price")),
        subtotal_price=_text(order.get("subtotal_price")),
        total_tax=_text(order.get("total_tax")),
        total_discounts=_text(order.get("total_discounts")),
        customer=_customer(order.get("customer")),
        line_items=[_line_item(item) for item in order.get("line_items") or []],
        shipping_address=_address(order.get("shipping_address")),
        billing_address=_address(order.get("billing_address")),
        tax_lines=[
            OrderTaxLine(title=tax.get("title"), rate=tax.get("rate"), price=_text(tax.get("price")))
            for tax in order.get("tax_lines") or []
        ],
        discount_codes=[
            OrderDiscountCode(code=code.get("code"), amount=_text(code.get("amount")), type=code.get("type"))
            for code in order.get("discount_codes") or []
        ],
    )


class OrderPresenter:
    """
    Builds response envelopes over OrderView. The locale picks key names and
    status labels; the order data itself is the same for every locale.
    """

    def __init__(self, locale: str = None):
        self.locale = locale if locale in LOCALES else "en"
        self.keys = LOCALES[self.locale]["envelope"]

    @classmethod
    def from_config(cls):
        return cls(config.ORDERS_LOCALE)

    def order(self, order: dict) -> dict:
        return format_order(order, self.locale).model_dump(by_alias=True)

    def order_list(self, shop: str, orders: list[dict]) -> dict:
        views = [self.order(order) for order in orders]
        return {
            self.keys["ok"]: True,
            self.keys["shop"]: shop,
            self.keys["count"]: len(views),
            self.keys["orders"]: views,
        }

    def single_order(self, shop: str, order: dict) -> dict:
        return {
            self.keys["ok"]: True,
            self.keys["shop"]: shop,
            self.keys["order"]: self.order(order),
        }


def clamp_limit(limit, default: int = None) -> int:
    """
    Parse the `limit` query param, falling back to the default when it is missing
    or not a number, and clamp it to [1, ORDERS_MAX_LIMIT].
    """
    fallback = default if default is not None else config.ORDERS_DEFAULT_LIMIT
    try:
        value = int(limit) or fallback
    except (TypeError, ValueError):
        value = fallback
    return min(max(value, 1), config.ORDERS_MAX_LIMIT)
