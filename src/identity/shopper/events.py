"""Domain events for the Shopper aggregate."""

from protean.fields import Boolean, DateTime, Identifier, String

from identity.domain import identity


@identity.event(part_of="Shopper")
class ShopperVerified:
    """A shopper proved ownership of their phone number with an OTP."""

    __version__ = "v1"

    shopper_id: Identifier(required=True)
    user_id: Identifier(required=True)
    phone: String(required=True)
    verified_at: DateTime(required=True)


@identity.event(part_of="Shopper")
class ProfileCompleted:
    """A shopper filled in their name (and optionally email)."""

    __version__ = "v1"

    shopper_id: Identifier(required=True)
    name: String(required=True)
    email: String()


@identity.event(part_of="Shopper")
class DeliveryAddressAdded:
    """A delivery address was saved to the shopper's profile."""

    __version__ = "v1"

    shopper_id: Identifier(required=True)
    address_id: Identifier(required=True)
    label: String()
    city: String(required=True)
    pincode: String(required=True)
    is_default: Boolean(default=False)


@identity.event(part_of="Shopper")
class DeliveryAddressRemoved:
    """A delivery address was removed from the shopper's profile."""

    __version__ = "v1"

    shopper_id: Identifier(required=True)
    address_id: Identifier(required=True)


@identity.event(part_of="Shopper")
class DefaultAddressChanged:
    """A different address became the default delivery address."""

    __version__ = "v1"

    shopper_id: Identifier(required=True)
    address_id: Identifier(required=True)
    previous_default_address_id: Identifier()
