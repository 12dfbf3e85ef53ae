"""Phone number canonicalization.

Numbers are rewritten into an E.164-like form. Domestic numbers default to
the Indian country code. The function is pure: callers re-derive the
canonical form instead of caching it, so it must stay deterministic.
"""
import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

DEFAULT_COUNTRY_CODE = "91"

_NON_DIGITS = re.compile(r"\D")


def normalize_phone(raw: Optional[str]) -> Optional[str]:
    if not raw:
        return None

    digits = _NON_DIGITS.sub("", raw)

    # Already international, trust the caller.
    if raw.startswith("+"):
        return raw

    if len(digits) == 10:
        return f"+{DEFAULT_COUNTRY_CODE}{digits}"
    if len(digits) == 12 and digits.startswith(DEFAULT_COUNTRY_CODE):
        return f"+{digits}"
    if len(digits) == 11 and digits.startswith("1"):
        # North American number
        return f"+{digits}"

    if len(digits) > 10:
        logger.warning(f"Phone number with {len(digits)} digits may be malformed: {raw!r}")
        return f"+{digits}"

    logger.warning(f"Unable to normalize phone number: {raw!r}")
    return raw
