# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, StrictInt, field_serializer
from pydantic.alias_generators import to_camel
from typing import List, Optional
from decimal import Decimal
from datetime import datetime


class ApiModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ReadModel(ApiModel):
    """Decimal fields go out as JSON numbers, Python callers keep Decimal."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        frozen=True,
    )


# ---------- carts ----------

class ItemIn(ApiModel):
    """Schema for adding a product to a cart."""

    product_id: StrictInt = Field(..., gt=0, description="Product id (> 0)")
    quantity: StrictInt = Field(..., gt=0, description="Units to add (> 0)")


class QuantityIn(ApiModel):
    """Schema for replacing a cart item quantity."""

    quantity: StrictInt = Field(..., gt=0, description="New absolute quantity (> 0)")


class CartRead(ReadModel):
    id: int
    user_id: int
    created_at: datetime
    updated_at: datetime


class CartItemRead(ReadModel):
    id: int
    cart_id: int
    product_id: int
    quantity: int
    created_at: datetime
    updated_at: datetime


class PricedCartItem(CartItemRead):
    item_subtotal: Decimal
    item_tax: Decimal

    @field_serializer("item_subtotal", "item_tax", when_used="json")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)


class CartSummary(ReadModel):
    subtotal: Decimal
    total_tax: Decimal
    total: Decimal

    @field_serializer("subtotal", "total_tax", "total", when_used="json")
    def serialize_money(self, value: Decimal) -> float:
        return float(value)


class CartItemsView(ReadModel):
    items: List[PricedCartItem]
    summary: CartSummary


# ---------- catalog ----------

class CategoryCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=100)


class CategoryRead(ReadModel):
    id: int
    name: str
    created_at: datetime
    updated_at: datetime


class ProductCreate(ApiModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: Optional[str] = None
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    tax_rate: Decimal = Field(Decimal("0"), ge=0, le=1, max_digits=5, decimal_places=4)
    inventory: StrictInt = Field(0, ge=0)
    category_id: StrictInt = Field(..., gt=0)


class ProductUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = None
    price: Optional[Decimal] = Field(None, ge=0, max_digits=10, decimal_places=2)
    tax_rate: Optional[Decimal] = Field(None, ge=0, le=1, max_digits=5, decimal_places=4)
    inventory: Optional[StrictInt] = Field(None, ge=0)
    category_id: Optional[StrictInt] = Field(None, gt=0)


class ProductRead(ReadModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    tax_rate: Decimal
    inventory: int
    category_id: int
    created_at: datetime
    updated_at: datetime

    @field_serializer("price", "tax_rate", when_used="json")
    def serialize_number(self, value: Decimal) -> float:
        return float(value)
