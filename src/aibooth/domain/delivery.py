"""Domain models for guest delivery channels."""

from dataclasses import dataclass
from enum import StrEnum

from aibooth.domain.errors import ValidationError

EMAIL_DOMAIN_SUGGESTIONS = (
    "gmail.com",
    "outlook.com",
    "yahoo.com",
    "icloud.com",
    "hotmail.com",
)


class DeliveryChannel(StrEnum):
    """How the guest receives the share link."""

    EMAIL = "Email"
    TEXT = "Text"
    QR = "QR"


@dataclass(frozen=True)
class ValidatedContact:
    """A channel paired with a contact that passed validation."""

    channel: DeliveryChannel
    contact: str | None = None

    @property
    def email(self) -> str | None:
        return self.contact if self.channel is DeliveryChannel.EMAIL else None

    @property
    def phone_number(self) -> str | None:
        return self.contact if self.channel is DeliveryChannel.TEXT else None

    @property
    def qr(self) -> str | None:
        return "selected" if self.channel is DeliveryChannel.QR else None


@dataclass(frozen=True)
class ChannelSelection:
    """The channel the guest is choosing and the contact typed so far."""

    channel: DeliveryChannel | None = None
    draft_contact: str = ""

    def switch(self, channel: DeliveryChannel) -> "ChannelSelection":
        """Select a channel, dropping the draft if the channel changed."""
        if channel is self.channel:
            return self
        return ChannelSelection(channel=channel)

    def with_contact(self, raw_contact: str) -> "ChannelSelection":
        """Return a copy holding the new draft contact."""
        return ChannelSelection(channel=self.channel, draft_contact=raw_contact)

    def with_email_domain(self, domain: str) -> "ChannelSelection":
        """Replace everything after the @ in the draft with domain."""
        domain = domain.strip().lstrip("@")
        if not domain:
            raise ValidationError("Please choose an email domain.")
        username = self.draft_contact.split("@", 1)[0].strip()
        return self.with_contact(f"{username}@{domain}")
