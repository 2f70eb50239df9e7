"""Order service port (abstract interface).

The order service receives submitted weekly requests. Adapters exchange the
camelCase wire dicts described by ordering.api.schemas so the submission
flow never depends on a transport.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class OrderServiceResponse:
    """Result of a request submission attempt."""

    success: bool
    request_id: str | None = None
    message: str | None = None
    error: str | None = None


class OrderService(ABC):
    """Abstract order service interface."""

    @abstractmethod
    def create_request(self, payload: dict, token: str) -> OrderServiceResponse:
        """Submit a weekly request on behalf of the token's shopper.

        Raises:
            NetworkError: the service could not be reached or failed.
            UnauthorizedError: the token was rejected.
        """
        ...

    @abstractmethod
    def list_requests(self, token: str) -> list[dict]:
        """Return the shopper's submitted requests as wire records."""
        ...
