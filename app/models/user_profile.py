from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

INVALID_DATE = "Invalid Date"


class UserProfile(BaseModel):
    """The ``user`` object returned by the provider's /api/user endpoint.

    Only ``username`` and ``id`` are required.  The display fields are
    taken as the provider sends them: a non-integral karma is shown as is
    and a non-string ``about`` is shown as its text form.
    """

    model_config = ConfigDict(extra="ignore")

    username: str
    id: str | int
    karma: int | float | None = None
    created: float | None = None
    about: str | None = None

    @field_validator("about", mode="before")
    @classmethod
    def _about_as_text(cls, value: Any) -> str | None:
        if not value:
            return None
        return value if isinstance(value, str) else str(value)

    @property
    def karma_display(self) -> int | float:
        return self.karma or 0

    def created_date(self) -> str | None:
        """Account creation as an en-US short date (M/D/YYYY), or None.

        Timestamps outside the platform's datetime range give INVALID_DATE.
        """
        if not self.created:
            return None
        try:
            d = datetime.fromtimestamp(self.created, tz=UTC)
        except (ValueError, OverflowError, OSError):
            return INVALID_DATE
        return f"{d.month}/{d.day}/{d.year}"
