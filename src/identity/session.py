"""The logged-in shopper and their bearer token.

The session is an ordinary object handed to whoever needs it (cart manager,
request submission); nothing about the logged-in user lives in module state.
The token and the shopper profile are mirrored into local storage under the
``token`` and ``user`` keys so a restart keeps the shopper logged in. Logging
out drops only the token; the profile stays for the next login on the device.
"""

import json

import structlog
from protean.exceptions import ValidationError

from identity.domain import identity
from identity.errors import NotAuthenticatedError, OtpVerificationError
from identity.shared.phone import PhoneNumber
from identity.shopper.shopper import Shopper
from shared.storage import StorageWriteError

logger = structlog.get_logger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class AuthSession:
    """Phone-OTP login state for one shopper on one device."""

    def __init__(self, provider, storage):
        self.provider = provider
        self.storage = storage
        self.token = None
        self.shopper = None
        self._pending_handle = None
        self._pending_phone = None

    # -------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------
    @property
    def is_authenticated(self):
        return self.token is not None and self.shopper is not None

    @property
    def has_delivery_address(self):
        return self.shopper is not None and self.shopper.has_delivery_address

    @property
    def authorization_header(self):
        if self.token is None:
            return {}
        return {"Authorization": f"Bearer {self.token}"}

    def require_authenticated(self):
        if not self.is_authenticated:
            raise NotAuthenticatedError("Please log in with your phone number first")
        return self.shopper

    # -------------------------------------------------------------------
    # OTP login
    # -------------------------------------------------------------------
    def send_otp(self, phone):
        """Validate the phone number and ask the provider to text a code."""
        with identity.domain_context():
            phone_vo = PhoneNumber(number=phone)

        handle = self.provider.send_challenge(phone_vo.normalized)
        self._pending_handle = handle
        self._pending_phone = phone_vo.normalized
        logger.info("OTP challenge sent", phone_suffix=phone_vo.normalized[-4:])
        return handle

    def verify_otp(self, code):
        """Complete the login started by send_otp()."""
        if self._pending_handle is None:
            raise OtpVerificationError("No OTP has been requested")

        verified = self.provider.verify(self._pending_handle, code)
        self._pending_handle = None

        with identity.domain_context():
            stored = self._load_shopper()
            if stored is not None and str(stored.user_id) == str(verified.user_id):
                shopper = stored
            else:
                shopper = Shopper.verify(user_id=verified.user_id, phone=verified.phone or self._pending_phone)

        self.token = verified.token
        self.shopper = shopper
        self._pending_phone = None
        self._persist()
        logger.info("Shopper logged in", user_id=str(verified.user_id))
        return shopper

    def restore(self):
        """Rehydrate the session from local storage. Returns True when logged in."""
        token = self.storage.get(TOKEN_KEY)
        if not token:
            return False

        with identity.domain_context():
            shopper = self._load_shopper()

        if shopper is None:
            logger.warning("Stored token has no usable profile, logging out")
            self.logout()
            return False

        self.token = token
        self.shopper = shopper
        return True

    def logout(self):
        """Forget the token. The stored profile stays so the next login on this device keeps its addresses."""
        self.token = None
        self.shopper = None
        self._pending_handle = None
        self._pending_phone = None
        try:
            self.storage.remove(TOKEN_KEY)
        except StorageWriteError as exc:
            logger.warning("Could not remove stored token", error=str(exc))
        logger.info("Shopper logged out")

    # -------------------------------------------------------------------
    # Profile maintenance
    # -------------------------------------------------------------------
    def complete_profile(self, name, email=None):
        shopper = self.require_authenticated()
        with identity.domain_context():
            shopper.complete_profile(name=name, email=email)
        self._persist()
        return shopper

    def add_address(self, address_line1, city, pincode, **kwargs):
        shopper = self.require_authenticated()
        with identity.domain_context():
            address = shopper.add_address(address_line1=address_line1, city=city, pincode=pincode, **kwargs)
        self._persist()
        return address

    def remove_address(self, address_id):
        shopper = self.require_authenticated()
        with identity.domain_context():
            shopper.remove_address(address_id)
        self._persist()

    def set_default_address(self, address_id):
        shopper = self.require_authenticated()
        with identity.domain_context():
            shopper.set_default_address(address_id)
        self._persist()

    # -------------------------------------------------------------------
    # Storage
    # -------------------------------------------------------------------
    def _load_shopper(self):
        raw = self.storage.get(USER_KEY)
        if not raw:
            return None
        try:
            return Shopper.restore(json.loads(raw))
        except (ValueError, KeyError, TypeError, AttributeError, ValidationError) as exc:
            logger.warning("Discarding unreadable stored profile", error=str(exc))
            return None

    def _persist(self):
        try:
            self.storage.set(TOKEN_KEY, self.token)
            self.storage.set(USER_KEY, json.dumps(self.shopper.snapshot()))
        except StorageWriteError as exc:
            logger.warning("Could not persist auth session, keeping it in memory only", error=str(exc))
