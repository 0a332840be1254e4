"""
Pydantic schemas for feed records.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator


class ProductTransaction(BaseModel):
    """
    One product-sale record as published by the transaction feed.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: int
    title: str = ""
    price: float = 0.0
    description: str = ""
    category: str | None = None
    image: str | None = None
    sold: bool = False
    date_of_sale: datetime | None = Field(default=None, alias="dateOfSale")

    @field_validator("title", "price", "description", "sold", mode="before")
    @classmethod
    def _null_as_default(cls, value: Any, info: ValidationInfo) -> Any:
        # The feed sends explicit nulls; treat them like a missing key.
        if value is None:
            return cls.model_fields[info.field_name].default
        return value

    @property
    def sale_month(self) -> int | None:
        # Month as written in the feed, in the record's own UTC offset.
        if self.date_of_sale is None:
            return None
        return self.date_of_sale.month

    def as_row(self) -> tuple:
        return (
            self.id,
            self.title,
            self.price,
            self.description,
            self.category,
            self.image,
            self.sold,
            self.date_of_sale,
            self.sale_month,
        )
