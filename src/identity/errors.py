"""Exceptions raised by the identity context."""


class NotAuthenticatedError(Exception):
    """An action needs a logged-in shopper but nobody is logged in."""


class OtpVerificationError(Exception):
    """The one-time password was wrong, expired, or never requested."""


class IdentityProviderError(Exception):
    """The identity provider could not be reached or answered unexpectedly."""
