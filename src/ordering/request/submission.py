"""Request submission — one-shot conversion of the weekly cart into a request.

Preconditions are checked locally, in order, before anything goes over the
wire: the cart must hold items, a shopper must be logged in and that shopper
must have a delivery address. The cart is cleared only after the order
service acknowledges the request; on any failure it is left exactly as it
was so the shopper can retry.

Each submission intent carries an idempotency key. Retrying the same cart
contents for the same day reuses the key, so a retry after a lost response
cannot create a second request. The key is dropped once the service accepts
the request or as soon as the cart contents change.
"""

import hashlib
import json
from datetime import UTC, datetime
from uuid import uuid4

import structlog
from protean.exceptions import ValidationError

from identity.errors import NotAuthenticatedError
from ordering.api.schemas import CreateRequestPayload, RequestItemSchema, RequestRecordSchema
from ordering.cart.cart import DeliveryDay
from ordering.domain import ordering
from ordering.request.errors import (
    EmptyCartError,
    MissingAddressError,
    NetworkError,
    RequestRejectedError,
    SubmissionInProgressError,
    UnauthorizedError,
)
from ordering.request.request import RequestStatus, WeeklyRequest

logger = structlog.get_logger(__name__)


def _delivery_day(value):
    try:
        return DeliveryDay(value.value if isinstance(value, DeliveryDay) else value)
    except ValueError as exc:
        raise ValidationError({"delivery_day": [f"No delivery on {value!r}"]}) from exc


class RequestSubmission:
    def __init__(self, cart_manager, auth, order_service):
        self.cart_manager = cart_manager
        self.auth = auth
        self.order_service = order_service
        self.in_flight = False
        self._intent_fingerprint = None
        self._intent_key = None

    @property
    def cart(self):
        return self.cart_manager.cart

    def _build_payload(self, delivery_day):
        items = [
            RequestItemSchema(
                product_id=str(line.product_id),
                quantity=line.quantity,
                delivery_day=line.delivery_day or delivery_day.value,
            )
            for line in self.cart.lines
        ]
        return CreateRequestPayload(
            items=items,
            total_amount=self.cart.get_cart_total(),
            delivery_day=delivery_day.value,
        )

    def _idempotency_key(self, payload):
        body = payload.model_dump(by_alias=True, exclude={"idempotency_key"})
        fingerprint = hashlib.sha256(json.dumps(body, sort_keys=True).encode()).hexdigest()
        if fingerprint != self._intent_fingerprint:
            self._intent_fingerprint = fingerprint
            self._intent_key = uuid4().hex
        return self._intent_key

    def _forget_intent(self):
        self._intent_fingerprint = None
        self._intent_key = None

    def submit_request(self, delivery_day):
        """Send the cart to the order service and clear it on success.

        Raises:
            SubmissionInProgressError: another submission has not finished.
            EmptyCartError: the cart has no items.
            NotAuthenticatedError: nobody is logged in.
            MissingAddressError: the shopper has no delivery address.
            UnauthorizedError: the token was rejected; the shopper is logged out.
            RequestRejectedError: the service declined the request.
            NetworkError: the service could not be reached or failed.
        """
        if self.in_flight:
            raise SubmissionInProgressError("A request is already being submitted")
        if self.cart.is_empty:
            raise EmptyCartError("Your weekly cart is empty")
        if not self.auth.is_authenticated:
            raise NotAuthenticatedError("Please log in with your phone number first")
        if not self.auth.has_delivery_address:
            raise MissingAddressError("Add a delivery address before submitting")

        day = _delivery_day(delivery_day)
        payload = self._build_payload(day)
        payload.idempotency_key = self._idempotency_key(payload)

        self.in_flight = True
        try:
            response = self.order_service.create_request(payload.model_dump(by_alias=True), self.auth.token)
        except UnauthorizedError:
            logger.warning("Order service rejected the session token, logging out")
            self.auth.logout()
            raise
        except NetworkError:
            logger.warning("Request submission failed, cart kept", items=self.cart.get_item_count())
            raise
        finally:
            self.in_flight = False

        if not response.success:
            logger.warning("Request declined by order service", reason=response.error)
            raise RequestRejectedError(response.error or "The request was declined")

        with ordering.domain_context():
            request = WeeklyRequest(
                request_id=response.request_id,
                status=RequestStatus.PENDING.value,
                delivery_day=day.value,
                total_amount=payload.total_amount,
                items=json.dumps([item.model_dump(by_alias=True) for item in payload.items]),
                submitted_at=datetime.now(UTC),
            )

        self._forget_intent()
        self.cart_manager.clear()
        logger.info(
            "Weekly request submitted",
            request_id=request.request_id,
            delivery_day=request.delivery_day,
            total_amount=request.total_amount,
        )
        return request

    def list_requests(self):
        """The shopper's submitted requests, newest first as the service returns them."""
        self.auth.require_authenticated()
        try:
            records = self.order_service.list_requests(self.auth.token)
        except UnauthorizedError:
            logger.warning("Order service rejected the session token, logging out")
            self.auth.logout()
            raise

        with ordering.domain_context():
            return [WeeklyRequest.from_record(RequestRecordSchema.model_validate(record)) for record in records]
