# catalog_app/models.py
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .core import ALL_CATEGORIES, DEFAULT_CURRENCY, safe_text, to_number


class SortMode(str, Enum):
    NAME_ASC = "name-asc"
    NAME_DESC = "name-desc"
    PRICE_ASC = "price-asc"
    PRICE_DESC = "price-desc"
    SKU_ASC = "sku-asc"
    SKU_DESC = "sku-desc"

    @classmethod
    def parse(cls, value: Any) -> "SortMode":
        # unknown modes fall back to name ascending
        try:
            return cls(value)
        except ValueError:
            return cls.NAME_ASC


class Product(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    sku: str = ""
    name: str = ""
    brand: str = ""
    category: str = ""
    description: str = ""
    price_ex_vat: float = Field(0, alias="priceExVat")
    currency: str = ""
    image_url: str = Field("", alias="imageUrl")
    qty: float = 0

    @field_validator("sku", "name", "brand", "category", "description", "currency", "image_url", mode="before")
    @classmethod
    def _text(cls, v):
        return safe_text(v)

    @field_validator("price_ex_vat", "qty", mode="before")
    @classmethod
    def _number(cls, v):
        return to_number(v)

    @property
    def display_currency(self) -> str:
        return self.currency or DEFAULT_CURRENCY


class ViewState(BaseModel):
    query: str = ""
    category: str = ALL_CATEGORIES
    sort: str = SortMode.NAME_ASC.value


class CartSummary(BaseModel):
    count: int = 0
    subtotal: float = 0.0
    currency: str = DEFAULT_CURRENCY
