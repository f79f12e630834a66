"""Validation of the guest's delivery channel and contact."""

import re
from dataclasses import dataclass

import pydantic
from pydantic import EmailStr, TypeAdapter

from aibooth.domain.delivery import DeliveryChannel, ValidatedContact
from aibooth.domain.errors import ValidationError

MISSING_CHANNEL_MESSAGE = (
    "Please enter either a phone number or an email or select QR code option."
)

_PHONE_FORMATTING = re.compile(r"[\s\-.()]")
_EMAIL_ADAPTER = TypeAdapter(EmailStr)


@dataclass(frozen=True)
class DistributionSelector:
    """Normalizes and validates delivery contacts for each channel."""

    country_code: str = "+1"
    min_digits: int = 10

    def validate(
        self, channel: DeliveryChannel | None, raw_contact: str | None
    ) -> ValidatedContact:
        """Return a validated contact or raise ValidationError."""
        if channel is None:
            raise ValidationError(MISSING_CHANNEL_MESSAGE)
        if channel is DeliveryChannel.QR:
            return ValidatedContact(channel=channel)
        if channel is DeliveryChannel.EMAIL:
            return ValidatedContact(channel, _validate_email(raw_contact))
        return ValidatedContact(channel, self._validate_phone(raw_contact))

    def normalize_phone(self, raw: str) -> str:
        """Strip formatting and ensure the configured country prefix."""
        cleaned = _PHONE_FORMATTING.sub("", raw.strip())
        if cleaned.startswith(self.country_code):
            return cleaned
        if cleaned.startswith("+"):
            # Another country's prefix; validation rejects it below.
            return cleaned
        return f"{self.country_code}{cleaned}"

    def _validate_phone(self, raw: str | None) -> str:
        if not raw or not raw.strip():
            raise ValidationError("Please enter a phone number.")
        normalized = self.normalize_phone(raw)
        if not normalized.startswith(self.country_code):
            raise ValidationError(
                f"Phone numbers must use the {self.country_code} country code."
            )
        national = normalized[len(self.country_code) :]
        if not national.isdigit() or len(national) < self.min_digits:
            raise ValidationError("Please enter a valid phone number.")
        return normalized


def _validate_email(raw: str | None) -> str:
    email = (raw or "").strip()
    if not email:
        raise ValidationError("Please enter an email address.")
    try:
        return _EMAIL_ADAPTER.validate_python(email)
    except pydantic.ValidationError as exc:
        raise ValidationError("Please enter a valid email address.") from exc
