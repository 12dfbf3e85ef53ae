# guardian/services/sms_service.py
"""SMS transport capability.

``get_sms_transport`` is a FastAPI dependency: it returns a Twilio-backed
transport when SOS credentials are configured and a simulation transport
otherwise. Callers never touch the Twilio client directly.
"""
import logging
from typing import Optional

from twilio.rest import Client
from twilio.base.exceptions import TwilioRestException

from guardian.core.config import settings
from guardian.utils.errors import TransportError

logger = logging.getLogger(__name__)

PLACEHOLDER_SID_PREFIX = "ACxxxxxxxx"


class SmsTransport:
    """Sends a single SMS and returns the provider message id."""

    simulated = False

    def send(self, body: str, from_: Optional[str], to: str) -> str:
        raise NotImplementedError


class TwilioSmsTransport(SmsTransport):
    def __init__(self, account_sid: str, auth_token: str, client: Optional[Client] = None):
        self.client = client or Client(account_sid, auth_token)

    def send(self, body: str, from_: Optional[str], to: str) -> str:
        if not to or not from_:
            raise TransportError(f"Missing phone numbers. To: {to}, From: {from_}")
        try:
            message = self.client.messages.create(to=to, from_=from_, body=body)
        except TwilioRestException as e:
            logger.error(f"Twilio error sending SMS to {to}: code={e.code} status={e.status} {e.msg}")
            raise TransportError(f"Twilio error: {e.msg}", code=e.code) from e
        except Exception as e:
            logger.error(f"Unexpected error sending SMS to {to}: {e}")
            raise TransportError(str(e)) from e
        logger.info(f"SMS sent to {to}. SID: {message.sid}")
        return message.sid


class SimulatedSmsTransport(SmsTransport):
    """Null transport used when no live credentials are configured."""

    simulated = True

    def send(self, body: str, from_: Optional[str], to: str) -> str:
        logger.info(f"[SMS] SIMULATED to={to} body={body!r}")
        return "SIMULATED"


def has_live_credentials() -> bool:
    account_sid = settings.TWILIO_ACCOUNT_SID_SOS
    auth_token = settings.TWILIO_AUTH_TOKEN_SOS
    if not account_sid or not auth_token:
        return False
    return not account_sid.startswith(PLACEHOLDER_SID_PREFIX)


def build_sms_transport() -> SmsTransport:
    if settings.SMS_BACKEND == "twilio":
        if has_live_credentials():
            return TwilioSmsTransport(settings.TWILIO_ACCOUNT_SID_SOS, settings.TWILIO_AUTH_TOKEN_SOS)
        logger.warning("Twilio SOS credentials not configured. Using simulated SMS transport.")
    return SimulatedSmsTransport()


def get_sms_transport() -> SmsTransport:
    return build_sms_transport()
