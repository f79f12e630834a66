"""Models for event branding read from the event backend."""

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class LogoPlacement(StrEnum):
    """Where the event logo sits on the viewfinder."""

    TOP_LEFT = "TL"
    TOP_RIGHT = "TR"
    TOP_FULL = "TF"
    BOTTOM_LEFT = "BL"
    BOTTOM_RIGHT = "BR"
    BOTTOM_FULL = "BF"
    NONE = ""


class EventRecord(BaseModel):
    """Subset of an event document consumed by the kiosk."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(alias="_id")
    branding_logo: str | None = None
    logo_placement: LogoPlacement = LogoPlacement.NONE

    @field_validator("logo_placement", mode="before")
    @classmethod
    def _coerce_placement(cls, value: object) -> object:
        if value is None:
            return LogoPlacement.NONE
        try:
            return LogoPlacement(value)
        except ValueError:
            return LogoPlacement.NONE


class EventBranding(BaseModel):
    """Branding overlay for the capture viewfinder."""

    logo_url: str | None = None
    logo_placement: LogoPlacement = LogoPlacement.NONE

    @classmethod
    def empty(cls) -> "EventBranding":
        """Branding used when none is configured or the lookup failed."""
        return cls()

    @classmethod
    def from_event(cls, event: EventRecord) -> "EventBranding":
        return cls(
            logo_url=event.branding_logo or None,
            logo_placement=event.logo_placement,
        )
