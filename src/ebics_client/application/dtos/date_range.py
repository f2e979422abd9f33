"""Date range for download requests."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ebics_client.domain.shared.exceptions import ConfigurationError, ErrorCode
from ebics_client.domain.shared.time import DateLike, as_utc_datetime, utc_now


@dataclass(frozen=True)
class DateRange:
    """Inclusive download range. Both bounds are None for "no range"."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @classmethod
    def resolve(
        cls,
        start: Optional[DateLike] = None,
        end: Optional[DateLike] = None,
        now: Optional[datetime] = None,
    ) -> DateRange:
        """
        Apply the caller-facing range rules.

        - no start and no end: no range
        - start only: end defaults to now (at call time)
        - end only: rejected

        A start in the future is passed on as is when the end is defaulted;
        only an explicit end earlier than start is rejected.

        Raises
        ------
        ConfigurationError
            If end is given without start, or start is after an explicit end
        """
        if start is None:
            if end is not None:
                msg = "Start date required if end date is given"
                raise ConfigurationError(msg, code=ErrorCode.INVALID_DATE_RANGE)
            return cls()

        start_dt = as_utc_datetime(start)
        if end is None:
            return cls(start=start_dt, end=now or utc_now())

        end_dt = as_utc_datetime(end)
        if start_dt > end_dt:
            msg = f"Start date {start_dt.date()} is after end date {end_dt.date()}"
            raise ConfigurationError(msg, code=ErrorCode.INVALID_DATE_RANGE)
        return cls(start=start_dt, end=end_dt)

    @property
    def is_open(self) -> bool:
        return self.start is None

    def __str__(self) -> str:
        if self.is_open:
            return "(no range)"
        return f"{self.start:%Y-%m-%d}..{self.end:%Y-%m-%d}"
