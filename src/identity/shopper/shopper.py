"""Shopper aggregate root with the DeliveryAddress entity."""

from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Identifier, String, ValueObject

from identity.domain import identity
from identity.shared.phone import PhoneNumber
from identity.shopper.events import (
    DefaultAddressChanged,
    DeliveryAddressAdded,
    DeliveryAddressRemoved,
    ProfileCompleted,
    ShopperVerified,
)

MAX_ADDRESSES = 10


@identity.entity(part_of="Shopper")
class DeliveryAddress:
    """A place the weekly basket can be delivered to.

    A shopper may save several; exactly one is the default at any time.
    """

    label: String(max_length=50, default="Home")
    recipient_name: String(max_length=100)
    phone: String(max_length=20)
    address_line1: String(required=True, max_length=255)
    address_line2: String(max_length=255)
    city: String(required=True, max_length=100)
    state: String(max_length=100)
    pincode: String(required=True, max_length=6)
    is_default: Boolean(default=False)

    @invariant.post
    def pincode_must_have_six_digits(self):
        if self.pincode is not None and not (len(self.pincode) == 6 and self.pincode.isdigit()):
            raise ValidationError({"pincode": ["Pincode must be 6 digits"]})

    def snapshot(self):
        return {
            "id": str(self.id),
            "label": self.label,
            "recipient_name": self.recipient_name,
            "phone": self.phone,
            "address_line1": self.address_line1,
            "address_line2": self.address_line2,
            "city": self.city,
            "state": self.state,
            "pincode": self.pincode,
            "is_default": self.is_default,
        }


@identity.aggregate
class Shopper:
    """A person shopping on the storefront, identified by a verified phone number.

    The profile and saved delivery addresses change together, so the
    "exactly one default address" rule is enforced inside this aggregate.
    """

    user_id: Identifier(required=True)
    phone: ValueObject(PhoneNumber, required=True)
    name: String(max_length=100)
    email: String(max_length=254)
    profile_completed: Boolean(default=False)
    addresses: HasMany(DeliveryAddress)
    verified_at: DateTime()

    @invariant.post
    def addresses_cannot_exceed_maximum(self):
        if len(self.addresses) > MAX_ADDRESSES:
            raise ValidationError({"addresses": [f"Cannot have more than {MAX_ADDRESSES} addresses"]})

    @invariant.post
    def exactly_one_default_address_when_addresses_exist(self):
        if not self.addresses:
            return
        defaults = [a for a in self.addresses if a.is_default]
        if len(defaults) != 1:
            raise ValidationError({"addresses": ["Exactly one address must be marked as default"]})

    @classmethod
    def verify(cls, user_id, phone):
        """Create the shopper for a freshly verified phone number."""
        now = datetime.now(UTC)
        shopper = cls(
            user_id=user_id,
            phone=PhoneNumber(number=phone),
            verified_at=now,
        )
        shopper.raise_(
            ShopperVerified(
                shopper_id=str(shopper.id),
                user_id=str(user_id),
                phone=shopper.phone.normalized,
                verified_at=now,
            )
        )
        return shopper

    # -------------------------------------------------------------------
    # Profile
    # -------------------------------------------------------------------
    def complete_profile(self, name, email=None):
        if not name or not name.strip():
            raise ValidationError({"name": ["Name is required to complete the profile"]})
        if email and "@" not in email:
            raise ValidationError({"email": [f"Invalid email address: {email!r}"]})

        self.name = name.strip()
        self.email = email
        self.profile_completed = True

        self.raise_(
            ProfileCompleted(
                shopper_id=str(self.id),
                name=self.name,
                email=email,
            )
        )

    # -------------------------------------------------------------------
    # Addresses
    # -------------------------------------------------------------------
    @property
    def default_address(self):
        return next((a for a in self.addresses if a.is_default), None)

    @property
    def has_delivery_address(self):
        return len(self.addresses) > 0

    def _find_address(self, address_id):
        address = next((a for a in self.addresses if str(a.id) == str(address_id)), None)
        if address is None:
            raise ValidationError({"addresses": [f"Address {address_id} not found"]})
        return address

    def add_address(
        self,
        address_line1,
        city,
        pincode,
        label="Home",
        recipient_name=None,
        phone=None,
        address_line2=None,
        state=None,
        is_default=False,
    ):
        # First address is always default
        if not self.addresses:
            is_default = True

        with atomic_change(self):
            if is_default:
                for addr in self.addresses:
                    if addr.is_default:
                        addr.is_default = False

            address = DeliveryAddress(
                label=label,
                recipient_name=recipient_name or self.name,
                phone=phone or self.phone.normalized,
                address_line1=address_line1,
                address_line2=address_line2,
                city=city,
                state=state,
                pincode=pincode,
                is_default=is_default,
            )
            self.add_addresses(address)

        self.raise_(
            DeliveryAddressAdded(
                shopper_id=str(self.id),
                address_id=str(address.id),
                label=label,
                city=city,
                pincode=pincode,
                is_default=is_default,
            )
        )
        return address

    def remove_address(self, address_id):
        address = self._find_address(address_id)
        was_default = address.is_default

        with atomic_change(self):
            self.remove_addresses(address)

            # If removed address was default, assign default to first remaining
            if was_default and self.addresses:
                self.addresses[0].is_default = True

        self.raise_(
            DeliveryAddressRemoved(
                shopper_id=str(self.id),
                address_id=str(address_id),
            )
        )

    def set_default_address(self, address_id):
        address = self._find_address(address_id)

        previous_default = self.default_address
        previous_default_id = str(previous_default.id) if previous_default else None

        with atomic_change(self):
            for addr in self.addresses:
                if addr.is_default:
                    addr.is_default = False
            address.is_default = True

        self.raise_(
            DefaultAddressChanged(
                shopper_id=str(self.id),
                address_id=str(address_id),
                previous_default_address_id=previous_default_id,
            )
        )

    # -------------------------------------------------------------------
    # Serialization for local storage
    # -------------------------------------------------------------------
    def snapshot(self):
        return {
            "id": str(self.id),
            "user_id": str(self.user_id),
            "phone": self.phone.number,
            "name": self.name,
            "email": self.email,
            "profile_completed": self.profile_completed,
            "verified_at": self.verified_at.isoformat() if self.verified_at else None,
            "addresses": [a.snapshot() for a in self.addresses],
        }

    @classmethod
    def restore(cls, data):
        """Rebuild a shopper from a snapshot without raising events."""
        verified_at = data.get("verified_at")
        shopper = cls(
            id=data["id"],
            user_id=data["user_id"],
            phone=PhoneNumber(number=data["phone"]),
            name=data.get("name"),
            email=data.get("email"),
            profile_completed=bool(data.get("profile_completed", False)),
            verified_at=datetime.fromisoformat(verified_at) if verified_at else None,
        )
        with atomic_change(shopper):
            for address in data.get("addresses", []):
                shopper.add_addresses(DeliveryAddress(**address))
        return shopper
