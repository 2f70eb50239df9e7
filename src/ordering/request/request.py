"""A submitted cart as acknowledged by the order service.

Requests are immutable on the client: the server owns their status.
"""

import json
from enum import Enum

from protean.fields import DateTime, Float, String, Text

from ordering.domain import ordering


class RequestStatus(Enum):
    PENDING = "Pending"
    APPROVED = "Approved"
    DELIVERED = "Delivered"
    CANCELLED = "Cancelled"


@ordering.value_object
class WeeklyRequest:
    request_id = String(required=True, max_length=50)
    status = String(choices=RequestStatus, default=RequestStatus.PENDING.value)
    delivery_day = String(required=True, max_length=20)
    total_amount = Float(required=True, min_value=0.0)
    items = Text()  # JSON: list of {productId, quantity, deliveryDay}
    submitted_at = DateTime()

    @property
    def lines(self):
        return json.loads(self.items) if self.items else []

    @property
    def item_count(self):
        return sum(line["quantity"] for line in self.lines)

    @property
    def is_active(self):
        return self.status in (RequestStatus.PENDING.value, RequestStatus.APPROVED.value)

    @classmethod
    def from_record(cls, record):
        """Build from a RequestRecordSchema fetched from the order service."""
        return cls(
            request_id=record.request_id,
            status=record.status.capitalize(),
            delivery_day=record.delivery_day,
            total_amount=record.total_amount,
            items=json.dumps([item.model_dump(by_alias=True) for item in record.items]),
            submitted_at=record.created_at,
        )
