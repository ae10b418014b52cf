from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel
from typing import List, Optional


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OrderCustomer(CamelModel):
    id: Optional[int] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None


class OrderAddress(CamelModel):
    name: Optional[str] = None
    company: Optional[str] = None
    address1: Optional[str] = None
    address2: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    province_code: Optional[str] = None
    zip: Optional[str] = None
    country: Optional[str] = None
    country_code: Optional[str] = None
    phone: Optional[str] = None


class OrderLineItem(CamelModel):
    id: Optional[int] = None
    sku: Optional[str] = None
    title: Optional[str] = None
    variant_title: Optional[str] = None
    quantity: int = 0
    price: Optional[str] = None
    total: Optional[str] = Field(
        None, description="Unit price multiplied by quantity, two decimal places"
    )
    variant_id: Optional[int] = None
    product_id: Optional[int] = None


class OrderTaxLine(CamelModel):
    title: Optional[str] = None
    rate: Optional[float] = None
    price: Optional[str] = None


class OrderDiscountCode(CamelModel):
    code: Optional[str] = None
    amount: Optional[str] = None
    type: Optional[str] = None


class OrderView(CamelModel):
    """
    Caller-facing projection of a Shopify REST order. Only the fields declared here
    are ever returned; anything else Shopify sends is dropped.
    """
    id: Optional[int] = None
    name: Optional[str] = None
    order_number: Optional[int] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
    cancelled_at: Optional[str] = None
    financial_status: Optional[str] = None
    financial_status_label: Optional[str] = None
    fulfillment_status: Optional[str] = None
    fulfillment_status_label: Optional[str] = None
    currency: Optional[str] = None
    total_price: Optional[str] = None
    subtotal_price: Optional[str] = None
    total_tax: Optional[str] = None
    total_discounts: Optional[str] = None
    customer: Optional[OrderCustomer] = None
    line_items: List[OrderLineItem] = Field(default_factory=list)
    shipping_address: Optional[OrderAddress] = None
    billing_address: Optional[OrderAddress] = None
    tax_lines: List[OrderTaxLine] = Field(default_factory=list)
    discount_codes: List[OrderDiscountCode] = Field(default_factory=list)
