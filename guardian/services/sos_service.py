"""SOS alert orchestration.

validate -> load user -> check verification -> build message -> notify
contacts -> notify authority -> persist. Delivery failures end up inside the
alert record; only validation, lookup, verification and persistence failures
reach the caller.
"""
import json
import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from guardian.core.config import settings
from guardian.core.database import commit_or_raise
from guardian.models.sos_alert import SOSAlert, DEFAULT_ADDRESS
from guardian.models.user import User
from guardian.services.notification_dispatcher import (
    NotificationDispatcher,
    NotificationResult,
    Recipient,
    STATUS_FAILED,
)
from guardian.services.sms_service import SmsTransport
from guardian.services.user_service import UserService
from guardian.utils.errors import ValidationError, ForbiddenError, PersistenceError
from guardian.utils.phone import normalize_phone

logger = logging.getLogger(__name__)

MAPS_URL = "https://maps.google.com/maps?q={latitude},{longitude}"
AUTHORITY_NAME = "Police"


def build_alert_message(user: User, latitude: float, longitude: float) -> str:
    maps_link = MAPS_URL.format(latitude=latitude, longitude=longitude)
    phone = normalize_phone(user.phone) or "Not provided"
    return f"SOS! I need help.\nName: {user.name}\nPhone: {phone}\nLocation: {maps_link}"


class SOSService:
    @staticmethod
    async def send_alert(
        db: Session,
        user_id: int,
        payload: dict,
        transport: SmsTransport,
        attempt_delay: Optional[float] = None,
    ) -> SOSAlert:
        latitude = payload.get("latitude")
        longitude = payload.get("longitude")
        if latitude is None or longitude is None:
            raise ValidationError("Location coordinates are required")

        user = UserService.ensure_user(db, user_id)
        if not user.is_fully_verified():
            logger.info(f"SOS rejected for unverified user {user.id}")
            raise ForbiddenError("Only verified users can send SOS alerts")

        message = build_alert_message(user, latitude, longitude)
        delay = settings.SOS_ATTEMPT_DELAY_SECONDS if attempt_delay is None else attempt_delay

        contacts = [Recipient(name=c.name, phone=c.phone) for c in user.emergency_contacts]
        logger.info(f"SOS from user {user.id}: notifying {len(contacts)} emergency contacts")
        contact_results = await NotificationDispatcher(
            transport,
            settings.TWILIO_FROM_NUMBER_SOS,
            attempts=settings.SOS_CONTACT_ATTEMPTS,
            attempt_delay=delay,
        ).dispatch(message, contacts)

        authority = Recipient(name=AUTHORITY_NAME, phone=settings.SOS_AUTHORITY_NUMBER)
        authority_results = await NotificationDispatcher(
            transport,
            settings.TWILIO_FROM_NUMBER_SOS,
            attempts=settings.SOS_AUTHORITY_ATTEMPTS,
            attempt_delay=delay,
        ).dispatch(message, [authority])
        police_result = authority_results[0]
        if not police_result.sent:
            logger.error(f"Failed to notify authority for SOS from user {user.id}")

        alert = SOSAlert(
            user_id=user.id,
            latitude=latitude,
            longitude=longitude,
            address=payload.get("address") or DEFAULT_ADDRESS,
            alert_type=payload.get("alert_type") or "emergency",
            message=message,
            contacts_notified=[r.to_record() for r in contact_results],
            police_notified=police_result.sent,
            police_notification_status=police_result.notification_status,
            simulated=transport.simulated,
        )
        db.add(alert)
        try:
            commit_or_raise(db, "save SOS alert")
        except PersistenceError:
            # The messages are already out; keep the outcome in the logs.
            logger.error(
                f"Unsaved SOS alert for user {user.id}: "
                f"{json.dumps(_summary(contact_results, police_result))}"
            )
            raise
        db.refresh(alert)
        logger.info(f"SOS alert {alert.id} saved for user {user.id}")
        return alert

    @staticmethod
    def list_history(db: Session, user_id: int, limit: Optional[int] = None) -> List[SOSAlert]:
        return (
            db.query(SOSAlert)
            .filter(SOSAlert.user_id == int(user_id))
            .order_by(SOSAlert.created_at.desc(), SOSAlert.id.desc())
            .limit(limit or settings.SOS_HISTORY_LIMIT)
            .all()
        )


def _summary(contact_results: List[NotificationResult], police_result: NotificationResult) -> dict:
    return {
        "contacts": [r.to_record() for r in contact_results],
        "police": police_result.to_record(),
    }


def summarize_alert(alert: SOSAlert) -> dict:
    contacts = alert.contacts_notified or []
    return {
        "id": alert.id,
        "alert_type": alert.alert_type,
        "location": alert.location,
        "contacts_notified": len(contacts),
        "contacts_failed": sum(1 for c in contacts if c.get("notification_status") == STATUS_FAILED),
        "police_notified": alert.police_notified,
        "created_at": alert.created_at,
    }
