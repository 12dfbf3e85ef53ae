"""Sequential SMS fan-out with per-recipient outcome bookkeeping.

Recipients are processed one at a time, in the order given. The transport
client is not driven concurrently, and callers rely on results lining up
with their input.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Iterable, List, Optional

from starlette.concurrency import run_in_threadpool

from guardian.models.base import utcnow
from guardian.services.sms_service import SmsTransport
from guardian.utils.errors import TransportError
from guardian.utils.phone import normalize_phone

logger = logging.getLogger(__name__)

STATUS_SENT = "sent"
STATUS_FAILED = "failed"


@dataclass
class Recipient:
    name: str
    phone: str


@dataclass
class NotificationResult:
    name: str
    phone: Optional[str]
    notification_status: str
    sent_at: datetime = field(default_factory=utcnow)

    @property
    def sent(self) -> bool:
        return self.notification_status == STATUS_SENT

    def to_record(self) -> dict:
        return {
            "name": self.name,
            "phone": self.phone,
            "notification_status": self.notification_status,
            "sent_at": self.sent_at.isoformat(),
        }


class NotificationDispatcher:
    def __init__(
        self,
        transport: SmsTransport,
        from_number: Optional[str],
        attempts: int = 3,
        attempt_delay: float = 2.0,
    ):
        if attempts < 1:
            raise ValueError("attempts must be at least 1")
        self.transport = transport
        self.from_number = from_number
        self.attempts = attempts
        self.attempt_delay = attempt_delay

    @property
    def simulated(self) -> bool:
        return self.transport.simulated

    async def dispatch(self, message: str, recipients: Iterable[Recipient]) -> List[NotificationResult]:
        results = []
        for recipient in recipients:
            phone = normalize_phone(recipient.phone)
            if self.simulated:
                logger.info(f"[SMS] SIMULATED alert to {recipient.name} ({phone}): {message!r}")
                status = STATUS_SENT
            else:
                status = await self._send_with_attempts(message, recipient.name, phone)
            results.append(NotificationResult(name=recipient.name, phone=phone, notification_status=status))
        return results

    async def _send_with_attempts(self, message: str, name: str, phone: Optional[str]) -> str:
        """Send ``attempts`` copies; any failed attempt fails the recipient."""
        logger.info(f"[SOS] Sending {self.attempts} SMS messages to {name} at {phone}")
        all_sent = True
        for attempt in range(1, self.attempts + 1):
            try:
                if not phone:
                    raise TransportError(f"No phone number for {name}")
                sid = await run_in_threadpool(self.transport.send, message, self.from_number, phone)
                logger.info(f"[SOS] SMS {attempt}/{self.attempts} sent to {name}: SID {sid}")
            except TransportError as e:
                logger.error(f"[SOS] Failed to send SMS {attempt}/{self.attempts} to {name} at {phone!r}: {e}")
                all_sent = False
            except Exception:
                # A misbehaving transport fails this recipient only.
                logger.exception(f"[SOS] Unexpected error sending SMS {attempt}/{self.attempts} to {name} at {phone!r}")
                all_sent = False

            if attempt < self.attempts and self.attempt_delay > 0:
                await asyncio.sleep(self.attempt_delay)

        return STATUS_SENT if all_sent else STATUS_FAILED
