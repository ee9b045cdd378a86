# agrigrow/services/address_service.py
from typing import Dict, Any, List

from sqlalchemy.orm import Session

from agrigrow.data.models.address import AddressModel
from agrigrow.domain.errors import MissingFields, NotFound
from agrigrow.repos.address_repo import AddressRepo
from agrigrow.utils.ids import parse_id
from agrigrow.utils.logging import get_logger

logger = get_logger(__name__)

REQUIRED_FIELDS = ("name", "phone", "address", "city", "pincode")
EDITABLE_FIELDS = ("label", "name", "phone", "email", "address", "city", "pincode", "is_default")


def address_to_dict(a: AddressModel) -> Dict[str, Any]:
    return {
        "id": a.id,
        "user_id": a.user_id,
        "label": a.label,
        "name": a.name,
        "phone": a.phone,
        "email": a.email,
        "address": a.address,
        "city": a.city,
        "pincode": a.pincode,
        "is_default": a.is_default,
        "created_at": a.created_at,
        "updated_at": a.updated_at,
    }


class AddressService:
    """Saved delivery addresses; at most one per user carries the default flag."""

    def __init__(self, db: Session):
        self.repo = AddressRepo(db)

    def list_addresses(self, user_id: str) -> List[Dict[str, Any]]:
        return [address_to_dict(a) for a in self.repo.list_for_user(parse_id(user_id, "userId"))]

    def add_address(self, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        user_id = parse_id(user_id, "userId")
        if any(not fields.get(f) for f in REQUIRED_FIELDS):
            raise MissingFields("Missing required address fields.")

        is_default = bool(fields.get("is_default"))
        address = AddressModel(
            user_id=user_id,
            name=fields["name"],
            phone=fields["phone"],
            email=fields.get("email"),
            address=fields["address"],
            city=fields["city"],
            pincode=fields["pincode"],
            label=fields.get("label") or f"{fields['city']}, {fields['pincode']}",
            is_default=is_default,
        )

        if is_default:
            self.repo.unset_defaults(user_id)

        created = self.repo.add(address)
        logger.info(f"Address {created.id} added for user {user_id} (default={created.is_default})")
        return address_to_dict(created)

    def update_address(self, address_id: str, user_id: str, fields: Dict[str, Any]) -> Dict[str, Any]:
        address_id = parse_id(address_id, "address ID")
        user_id = parse_id(user_id, "userId")

        address = self.repo.get_owned(address_id, user_id)
        if not address:
            raise NotFound("Address not found or unauthorized.")

        updates = {k: v for k, v in fields.items() if k in EDITABLE_FIELDS and v is not None}
        for f in REQUIRED_FIELDS:
            if f in updates and not updates[f]:
                raise MissingFields(f"Address field '{f}' cannot be empty.")

        if updates.get("is_default") is True:
            self.repo.unset_defaults(user_id, except_id=address_id)

        if not updates.get("label") and ("city" in updates or "pincode" in updates):
            city = updates.get("city") or address.city
            pincode = updates.get("pincode") or address.pincode
            updates["label"] = f"{city}, {pincode}"
        elif "label" in updates and not updates["label"]:
            updates.pop("label")

        for field, value in updates.items():
            setattr(address, field, value)

        # owner never changes through an update
        address.user_id = user_id

        saved = self.repo.save(address)
        logger.info(f"Address {address_id} of user {user_id} updated: {sorted(updates)}")
        return address_to_dict(saved)

    def save_from_delivery(self, user_id: str, details: Dict[str, Any]) -> Dict[str, Any] | None:
        """Keep the delivery address of an order unless the user already has it."""
        if not details.get("address") or not details.get("pincode"):
            return None

        existing = self.repo.find_same(user_id, details["address"], details["pincode"])
        if existing:
            return None

        created = self.repo.add(
            AddressModel(
                user_id=user_id,
                name=details.get("name"),
                phone=details.get("phone"),
                email=details.get("email"),
                address=details["address"],
                city=details.get("city"),
                pincode=details["pincode"],
                label=f"{details.get('city')} ({details['pincode']})",
            )
        )
        logger.info(f"Delivery address {created.id} saved for user {user_id}")
        return address_to_dict(created)
