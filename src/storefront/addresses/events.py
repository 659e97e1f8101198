from protean.fields import Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="Address")
class AddressAdded:
    __version__ = 1

    address_id = Identifier(required=True)
    user_id = Identifier(required=True)
    city = String(max_length=100)
    pincode = String(max_length=20)
