"""PhoneNumber value object for validated Indian mobile numbers."""

import re

from protean import invariant
from protean.exceptions import ValidationError
from protean.fields import String

from identity.domain import identity

_SEPARATORS = re.compile(r"[\s\-()]")
_PREFIX = re.compile(r"^(\+91|91|0)(?=\d{10}$)")


def normalize_phone(number):
    """Strip separators and the country/trunk prefix, leaving the 10 digit number."""
    digits = _SEPARATORS.sub("", number or "")
    return _PREFIX.sub("", digits)


@identity.value_object
class PhoneNumber:
    """Value object for mobile numbers used as the OTP login factor.

    Accepts spaces, hyphens and parentheses as separators and an optional
    +91, 91 or 0 prefix. What remains must be exactly 10 digits.
    """

    number: String(required=True, max_length=20)

    @invariant.post
    def validate_phone_format(self):
        """Ensure the number reduces to a 10 digit mobile number."""
        if not re.fullmatch(r"\d{10}", normalize_phone(self.number)):
            raise ValidationError({"number": [f"Invalid phone number: {self.number!r}"]})

    @property
    def normalized(self):
        return normalize_phone(self.number)
