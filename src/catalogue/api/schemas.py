"""Pydantic response schemas for the catalogue endpoints.

Read-only views of the catalogue aggregates, built straight from their
attributes. Keys travel in camelCase like the rest of the wire format.
"""

from pydantic import BaseModel
from pydantic.alias_generators import to_camel

_VIEW_CONFIG = {"alias_generator": to_camel, "populate_by_name": True, "from_attributes": True}


class ProductSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    category: str
    unit: str
    price: float
    images: list[str] = []
    is_organic: bool = False
    is_seasonal: bool = False
    certification: str | None = None
    benefits: list[str] = []
    delivery_days: list[str] = []
    stock: int = 0
    farmer_id: str | None = None

    model_config = _VIEW_CONFIG


class FarmerSchema(BaseModel):
    id: str
    name: str
    farm_name: str | None = None
    location: str | None = None
    specialties: list[str] = []
    years_experience: int | None = None
    certification: str | None = None
    contact: str | None = None
    image: str | None = None
    description: str | None = None

    model_config = _VIEW_CONFIG


class ComboItemSchema(BaseModel):
    product_id: str
    name: str
    price: float
    image: str | None = None

    model_config = _VIEW_CONFIG


class ComboPackSchema(BaseModel):
    id: str
    name: str
    description: str | None = None
    discount: float
    image: str | None = None
    items: list[ComboItemSchema] = []
    original_price: float
    price: float

    model_config = _VIEW_CONFIG
