"""Exceptions raised while turning the weekly cart into a request."""


class SubmissionError(Exception):
    """Base class for request submission failures. The cart is left untouched."""


class EmptyCartError(SubmissionError):
    """There is nothing in the cart to request."""


class MissingAddressError(SubmissionError):
    """The shopper has no saved delivery address."""


class SubmissionInProgressError(SubmissionError):
    """A submission is already in flight."""


class NetworkError(SubmissionError):
    """The order service could not be reached or answered with an error."""


class UnauthorizedError(NetworkError):
    """The order service rejected the bearer token."""


class RequestRejectedError(NetworkError):
    """The order service answered but declined the request."""
