"""Pydantic request/response schemas for the OTP endpoints.

These are the wire contracts shared by the mock API and the HTTP identity
adapter. Keys travel in camelCase.
"""

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_WIRE_CONFIG = {"alias_generator": to_camel, "populate_by_name": True}


class SendOtpRequest(BaseModel):
    phone: str = Field(min_length=10, max_length=20)

    model_config = {
        **_WIRE_CONFIG,
        "json_schema_extra": {"examples": [{"phone": "9876543210"}]},
    }


class SendOtpResponse(BaseModel):
    success: bool = True
    handle: str
    message: str = "OTP sent successfully"

    model_config = _WIRE_CONFIG


class VerifyOtpRequest(BaseModel):
    handle: str
    code: str = Field(min_length=4, max_length=8)

    model_config = _WIRE_CONFIG


class VerifyOtpResponse(BaseModel):
    user_id: str
    token: str
    phone: str

    model_config = _WIRE_CONFIG
