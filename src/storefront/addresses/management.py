"""Address book commands: add (capped per user) and remove."""

import structlog
from protean import handle
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import Identifier, String, Text
from protean.utils.globals import current_domain

from storefront.addresses.address import Address
from storefront.config import get_settings
from storefront.domain import storefront

logger = structlog.get_logger(__name__)


def addresses_for(user_id) -> list[Address]:
    repo = current_domain.repository_for(Address)
    return repo._dao.query.filter(user_id=str(user_id)).all().items


@storefront.command(part_of="Address")
class AddAddress:
    user_id = Identifier(required=True)
    address = String(required=True, max_length=500)
    city = String(required=True, max_length=100)
    pincode = String(required=True, max_length=20)
    phone = String(required=True, max_length=30)
    notes = Text()


@storefront.command(part_of="Address")
class RemoveAddress:
    user_id = Identifier(required=True)
    address_id = Identifier(required=True)


@storefront.command_handler(part_of=Address)
class ManageAddressesHandler:
    @handle(AddAddress)
    def add_address(self, command):
        limit = get_settings().max_addresses_per_user
        if len(addresses_for(command.user_id)) >= limit:
            raise ValidationError({"address": [f"You can save at most {limit} addresses"]})

        entry = Address.register(
            user_id=command.user_id,
            address=command.address,
            city=command.city,
            pincode=command.pincode,
            phone=command.phone,
            notes=command.notes,
        )
        current_domain.repository_for(Address).add(entry)
        return str(entry.id)

    @handle(RemoveAddress)
    def remove_address(self, command):
        repo = current_domain.repository_for(Address)
        entry = repo.get(command.address_id)
        if str(entry.user_id) != str(command.user_id):
            raise ObjectNotFoundError({"address": [f"Address {command.address_id} not found"]})

        repo._dao.delete(entry)
        logger.info("Address removed", user_id=str(command.user_id), address_id=str(command.address_id))


def list_addresses(user_id) -> list[dict]:
    return [
        {
            "address_id": str(a.id),
            "user_id": str(a.user_id),
            "address": a.address,
            "city": a.city,
            "pincode": a.pincode,
            "phone": a.phone,
            "notes": a.notes,
        }
        for a in sorted(addresses_for(user_id), key=lambda a: a.created_at.timestamp() if a.created_at else 0.0)
    ]
