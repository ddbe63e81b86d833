"""
API Request Validation.

Uses Pydantic for query parameter validation.
"""

from datetime import datetime, timezone
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


MISSING_AMOUNT_MESSAGE = "At least one of days or hours must be provided"
INVALID_AMOUNT_MESSAGE = "days and hours must be non-negative integers"
NOT_UTC_MESSAGE = "date must be an ISO 8601 string in UTC ending with Z"
INVALID_DATE_MESSAGE = "date must be a valid ISO 8601 UTC string with Z"


class BusinessDateQuery(BaseModel):
    """Query string for the /business-days endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    days: Optional[int] = Field(
        default=None,
        description="Business days to add",
    )
    hours: Optional[int] = Field(
        default=None,
        description="Business hours to add",
    )
    start: Optional[datetime] = Field(
        default=None,
        alias="date",
        description="UTC start instant, ISO 8601 ending with Z",
    )

    @field_validator("days", "hours", mode="before")
    @classmethod
    def validate_amount(cls, v: Any) -> Optional[int]:
        """Accept only non-negative base-10 integers."""
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError(INVALID_AMOUNT_MESSAGE)
        if isinstance(v, int):
            value = v
        else:
            text = str(v).strip()
            if not (text.isascii() and text.isdigit()):
                raise ValueError(INVALID_AMOUNT_MESSAGE)
            value = int(text)
        if value < 0:
            raise ValueError(INVALID_AMOUNT_MESSAGE)
        return value

    @field_validator("start", mode="before")
    @classmethod
    def validate_start(cls, v: Any) -> Optional[datetime]:
        """Parse an ISO 8601 UTC timestamp with an explicit Z marker."""
        if v is None or v == "":
            return None
        if isinstance(v, datetime):
            return v
        text = str(v).strip()
        if not text.endswith("Z"):
            raise ValueError(NOT_UTC_MESSAGE)
        try:
            parsed = datetime.fromisoformat(text[:-1])
        except ValueError as e:
            raise ValueError(INVALID_DATE_MESSAGE) from e
        if parsed.tzinfo is not None:
            raise ValueError(INVALID_DATE_MESSAGE)
        return parsed.replace(tzinfo=timezone.utc)

    @model_validator(mode="after")
    def require_amount(self) -> "BusinessDateQuery":
        if self.days is None and self.hours is None:
            raise ValueError(MISSING_AMOUNT_MESSAGE)
        return self
