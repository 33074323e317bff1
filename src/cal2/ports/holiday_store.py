"""Holiday cache interface."""

from pathlib import Path
from typing import Protocol

from cal2.core.holidays import HolidayMap, Provider


class HolidayStore(Protocol):
    """Interface for persisting one year's holidays per provider."""

    def filename(self, year: int, provider: Provider) -> Path:
        """Location of the cache for (year, provider)."""
        ...

    def load(self, path: Path) -> HolidayMap | None:
        """Read a cached map. Returns None on a cache miss."""
        ...

    def save(self, path: Path, holidays: HolidayMap) -> None:
        """Write/overwrite the cached map."""
        ...
