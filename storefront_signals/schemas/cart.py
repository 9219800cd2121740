"""Pydantic schemas for the storefront cart resource (``/cart.js``)."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class CartLine(BaseModel):
    """A single line of the shopper's cart."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    product_title: str
    final_line_price: int = Field(..., description="Line total in cents")
    url: str
    image: Optional[str] = None


class Cart(BaseModel):
    """The shopper's cart.

    The platform lists lines most-recently-added first, so ``items[0]`` is
    the latest addition. This ordering is a platform convention, not
    something the payload states.
    """

    model_config = ConfigDict(extra="ignore")

    items: List[CartLine] = Field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.items
