"""Address book entry. Orders copy the fields they need, so removing an address never touches order history."""

from datetime import UTC, datetime

from protean.fields import DateTime, Identifier, String, Text

from storefront.addresses.events import AddressAdded
from storefront.domain import storefront


@storefront.aggregate
class Address:
    user_id = Identifier(required=True)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)
    phone = String(required=True, max_length=30)
    notes = Text()
    created_at = DateTime()

    @classmethod
    def register(cls, user_id, address, city, pincode, phone, notes=None):
        entry = cls(
            user_id=user_id,
            address=address,
            city=city,
            pincode=pincode,
            phone=phone,
            notes=notes,
            created_at=datetime.now(UTC),
        )
        entry.raise_(
            AddressAdded(
                address_id=str(entry.id),
                user_id=str(user_id),
                city=city,
                pincode=pincode,
            )
        )
        return entry
