"""Order service factory.

Provides create_order_service() to build an implementation by name:
- "fake": FakeOrderService for development and testing
- "http": HttpOrderService against a remote API
"""

from ordering.service.fake_adapter import FakeOrderService
from ordering.service.http_adapter import HttpOrderService
from ordering.service.port import OrderService, OrderServiceResponse

__all__ = ["FakeOrderService", "HttpOrderService", "OrderService", "OrderServiceResponse", "create_order_service"]


def create_order_service(kind: str = "fake", base_url: str | None = None, timeout: float = 10.0) -> OrderService:
    """Return a new order service of the given kind."""
    if kind == "fake":
        return FakeOrderService()
    if kind == "http":
        return HttpOrderService(base_url=base_url, timeout=timeout)
    raise ValueError(f"Unknown order service: {kind}")
