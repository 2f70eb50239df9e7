"""Pydantic request/response schemas for the order service.

These are external contracts shared by the mock API and the HTTP order
service adapter, kept separate from the WeeklyCart and WeeklyRequest domain
objects. Keys travel in camelCase.
"""

from datetime import datetime

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class RequestItemSchema(BaseModel):
    product_id: str
    quantity: int = Field(ge=1)
    delivery_day: str

    model_config = _WIRE_CONFIG


# ---------------------------------------------------------------------------
# Request creation
# ---------------------------------------------------------------------------
class CreateRequestPayload(BaseModel):
    items: list[RequestItemSchema] = Field(min_length=1)
    total_amount: float = Field(ge=0)
    delivery_day: str
    idempotency_key: str | None = None

    model_config = {
        **_WIRE_CONFIG,
        "json_schema_extra": {
            "examples": [
                {
                    "items": [
                        {"productId": "veg_tomato", "quantity": 2, "deliveryDay": "Friday"},
                        {"productId": "grain_rice", "quantity": 1, "deliveryDay": "Friday"},
                    ],
                    "totalAmount": 180.0,
                    "deliveryDay": "Friday",
                    "idempotencyKey": "6f1c2b0e9a5d4f7e8c3b2a1d0e9f8c7b",
                }
            ]
        },
    }


class CreateRequestResponse(BaseModel):
    success: bool
    request_id: str | None = None
    message: str | None = None
    error: str | None = None

    model_config = _WIRE_CONFIG


# ---------------------------------------------------------------------------
# Request history
# ---------------------------------------------------------------------------
class RequestRecordSchema(BaseModel):
    request_id: str
    status: str = "Pending"
    items: list[RequestItemSchema] = []
    total_amount: float
    delivery_day: str
    created_at: datetime | None = None

    model_config = _WIRE_CONFIG


class RequestListResponse(BaseModel):
    requests: list[RequestRecordSchema] = []

    model_config = _WIRE_CONFIG
