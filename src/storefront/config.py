"""Storefront configuration, read from environment variables.

    DESIBASKET_STORAGE_PATH       JSON file for local storage (unset: in memory)
    DESIBASKET_ORDER_SERVICE      "fake" or "http"
    DESIBASKET_IDENTITY_PROVIDER  "fake" or "http"
    DESIBASKET_API_BASE_URL       base URL for the HTTP adapters
    DESIBASKET_REQUEST_TIMEOUT    seconds per HTTP call
    DESIBASKET_CATALOGUE_PATH     directory holding products.json / farmers.json
    PROTEAN_ENV                   environment name (also drives logging)
"""

import os
from dataclasses import dataclass

DEFAULT_API_BASE_URL = "https://api.farmfresh.com/v1"
DEFAULT_REQUEST_TIMEOUT = 10.0
ADAPTER_KINDS = ("fake", "http")


@dataclass(frozen=True)
class StorefrontConfig:
    storage_path: str | None = None
    order_service: str = "fake"
    identity_provider: str = "fake"
    api_base_url: str = DEFAULT_API_BASE_URL
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    catalogue_path: str | None = None
    environment: str = "development"

    def __post_init__(self) -> None:
        if self.order_service not in ADAPTER_KINDS:
            raise ValueError(f"Unknown order service: {self.order_service}")
        if self.identity_provider not in ADAPTER_KINDS:
            raise ValueError(f"Unknown identity provider: {self.identity_provider}")
        if self.request_timeout <= 0:
            raise ValueError("Request timeout must be positive")

    @classmethod
    def from_env(cls, environ: dict | None = None) -> "StorefrontConfig":
        env = os.environ if environ is None else environ
        timeout = env.get("DESIBASKET_REQUEST_TIMEOUT")
        try:
            request_timeout = float(timeout) if timeout else DEFAULT_REQUEST_TIMEOUT
        except ValueError as exc:
            raise ValueError(f"DESIBASKET_REQUEST_TIMEOUT must be a number, got {timeout!r}") from exc

        return cls(
            storage_path=env.get("DESIBASKET_STORAGE_PATH") or None,
            order_service=env.get("DESIBASKET_ORDER_SERVICE", "fake").lower(),
            identity_provider=env.get("DESIBASKET_IDENTITY_PROVIDER", "fake").lower(),
            api_base_url=env.get("DESIBASKET_API_BASE_URL") or DEFAULT_API_BASE_URL,
            request_timeout=request_timeout,
            catalogue_path=env.get("DESIBASKET_CATALOGUE_PATH") or None,
            environment=env.get("PROTEAN_ENV", "development"),
        )
