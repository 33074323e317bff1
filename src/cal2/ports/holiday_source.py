"""Remote holiday source interface."""

from typing import Protocol

from cal2.core.holidays import HolidayMap, Provider


class HolidaySource(Protocol):
    """Interface for fetching official holidays from any provider."""

    def fetch(self, year: int, provider: Provider) -> HolidayMap:
        """Fetch all official holidays of a year."""
        ...
