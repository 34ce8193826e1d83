import re
from dataclasses import dataclass
from typing import Optional

from authgate.core.interfaces import Credentials

PHONE_DIGITS = 10

# Validation failure kinds (also NotificationBridge event kinds)
CONSENT_MISSING = "consent_missing"
FIELDS_MISSING = "fields_missing"
PHONE_INVALID = "phone_invalid"

_NON_DIGIT_RE = re.compile(r"[^0-9]")


@dataclass(frozen=True)
class ValidationResult:
    ok: bool
    error: Optional[str] = None
    credentials: Optional[Credentials] = None

    @classmethod
    def success(cls, credentials: Credentials) -> "ValidationResult":
        return cls(ok=True, credentials=credentials)

    @classmethod
    def failure(cls, error: str) -> "ValidationResult":
        return cls(ok=False, error=error)


def normalize_phone(raw: Optional[str]) -> str:
    """Drop every character that is not an ASCII digit, keeping order."""
    return _NON_DIGIT_RE.sub("", raw or "")


def clamp_phone_input(raw: Optional[str], max_length: int = PHONE_DIGITS) -> str:
    """Live value for the phone field: digits only, cut at the field's max length."""
    digits = normalize_phone(raw)
    if max_length and max_length > 0:
        return digits[:max_length]
    return digits


def validate_phone(raw: Optional[str]) -> Optional[str]:
    digits = normalize_phone(raw)
    return digits if len(digits) == PHONE_DIGITS else None


def validate_submission(phone: Optional[str], password: Optional[str], consent: bool) -> ValidationResult:
    """
    Checks run in a fixed priority order:
      1) consent (always first, whatever the other fields hold)
      2) both fields present
      3) phone has exactly 10 digits
    """
    if not consent:
        return ValidationResult.failure(CONSENT_MISSING)
    if not phone or not password:
        return ValidationResult.failure(FIELDS_MISSING)

    digits = validate_phone(phone)
    if digits is None:
        return ValidationResult.failure(PHONE_INVALID)

    return ValidationResult.success(Credentials(phone_digits=digits, password=password))
