import logging
from typing import List

from sqlalchemy.orm import Session

from guardian.core.config import settings
from guardian.core.database import commit_or_raise
from guardian.models.emergency import EmergencyContact, clamp_priority, MIN_PRIORITY
from guardian.models.user import User
from guardian.services.user_service import UserService
from guardian.utils.errors import ValidationError, NotFoundError, ConflictError
from guardian.utils.phone import normalize_phone

logger = logging.getLogger(__name__)


def _required(payload: dict, field: str, message: str = "Name, phone, and relationship are required") -> str:
    value = payload.get(field)
    value = value.strip() if isinstance(value, str) else value
    if not value:
        raise ValidationError(message)
    return value


class ContactService:
    """Emergency contacts, managed through the owning user."""

    @staticmethod
    def _find_contact(user: User, contact_id: int) -> EmergencyContact:
        for contact in user.emergency_contacts:
            if contact.id == contact_id:
                return contact
        raise NotFoundError("Contact not found")

    @staticmethod
    def _ensure_unique_phone(user: User, phone: str, exclude_id: int | None = None) -> None:
        for contact in user.emergency_contacts:
            if contact.id != exclude_id and contact.phone == phone:
                logger.info(f"Duplicate emergency contact phone for user {user.id}: {phone}")
                raise ConflictError("This phone number is already added as an emergency contact")

    @staticmethod
    def list_contacts(db: Session, user_id: int) -> List[EmergencyContact]:
        return list(UserService.ensure_user(db, user_id).emergency_contacts)

    @staticmethod
    def add_contact(db: Session, user_id: int, payload: dict) -> EmergencyContact:
        name = _required(payload, "name")
        raw_phone = _required(payload, "phone")
        relation = _required(payload, "relationship")
        phone = normalize_phone(raw_phone)

        user = UserService.ensure_user(db, user_id)
        if len(user.emergency_contacts) >= settings.MAX_EMERGENCY_CONTACTS:
            raise ConflictError(f"Maximum {settings.MAX_EMERGENCY_CONTACTS} emergency contacts allowed")
        ContactService._ensure_unique_phone(user, phone)

        priority = payload.get("priority")
        contact = EmergencyContact(
            name=name,
            phone=phone,
            relation=relation,
            priority=clamp_priority(MIN_PRIORITY if priority is None else priority),
        )
        user.emergency_contacts.append(contact)
        commit_or_raise(db, "add emergency contact")
        db.refresh(contact)
        logger.info(f"Emergency contact {contact.id} added for user {user.id} ({len(user.emergency_contacts)} total)")
        return contact

    @staticmethod
    def update_contact(db: Session, user_id: int, contact_id: int, payload: dict) -> EmergencyContact:
        user = UserService.ensure_user(db, user_id)
        contact = ContactService._find_contact(user, contact_id)

        changes = {}
        for field in ("name", "phone", "relationship"):
            if payload.get(field) is not None:
                changes[field] = _required(payload, field, f"{field.capitalize()} cannot be blank")
        if "phone" in changes:
            changes["phone"] = normalize_phone(changes["phone"])
            ContactService._ensure_unique_phone(user, changes["phone"], exclude_id=contact.id)

        if "name" in changes:
            contact.name = changes["name"]
        if "phone" in changes:
            contact.phone = changes["phone"]
        if "relationship" in changes:
            contact.relation = changes["relationship"]
        if payload.get("priority") is not None:
            contact.priority = clamp_priority(payload["priority"])

        commit_or_raise(db, "update emergency contact")
        db.refresh(contact)
        return contact

    @staticmethod
    def delete_contact(db: Session, user_id: int, contact_id: int) -> None:
        user = UserService.ensure_user(db, user_id)
        contact = ContactService._find_contact(user, contact_id)
        user.emergency_contacts.remove(contact)
        commit_or_raise(db, "delete emergency contact")
        logger.info(f"Emergency contact {contact_id} removed for user {user.id}")
