"""Holiday API adapter - HTTP client for official holidays."""

import logging

import requests

from cal2.core.holidays import (
    ArgentinaDatos,
    HolidayMap,
    OpenHolidays,
    Provider,
    build_holidays,
    choose_name,
)
from cal2.errors import HttpError, JsonError

logger = logging.getLogger(__name__)

ARGENTINA_DATOS_URL = "https://api.argentinadatos.com/v1/feriados/{year}"
OPENHOLIDAYS_URL = (
    "https://openholidaysapi.org/PublicHolidays"
    "?countryIsoCode={country_code}&languageIsoCode=EN"
    "&validFrom={year}-01-01&validTo={year}-12-31"
)


class HolidayApiAdapter:
    """
    Holiday API adapter.

    Implements HolidaySource protocol. One GET per fetch, no retries.
    Translates each provider's JSON into a HolidayMap of official entries.
    """

    def __init__(self, session: requests.Session | None = None, timeout: float | None = None):
        self._session = session or requests.Session()
        self.timeout = timeout

    def fetch(self, year: int, provider: Provider) -> HolidayMap:
        """Fetch all official holidays of a year from the provider."""
        match provider:
            case ArgentinaDatos():
                return self._fetch_argentina(year)
            case OpenHolidays(country_code=code):
                return self._fetch_openholidays(year, code)
        raise TypeError(f"Unknown provider: {provider!r}")

    def _get_json(self, url: str) -> list:
        """GET url and return the decoded JSON array."""
        logger.info(f"Fetching holidays from {url}")
        try:
            resp = self._session.get(url, timeout=self.timeout)
            resp.raise_for_status()
        except requests.RequestException as e:
            raise HttpError(str(e)) from e

        try:
            data = resp.json()
        except ValueError as e:
            raise JsonError(f"invalid JSON from {url}: {e}") from e

        if not isinstance(data, list):
            raise JsonError(f"expected a JSON array from {url}")
        return data

    def _fetch_argentina(self, year: int) -> HolidayMap:
        data = self._get_json(ARGENTINA_DATOS_URL.format(year=year))
        try:
            entries = [(_string(item, "fecha"), _string(item, "nombre")) for item in data]
        except (KeyError, TypeError) as e:
            raise JsonError(f"unexpected holiday entry: {e}") from e
        return build_holidays(entries)

    def _fetch_openholidays(self, year: int, country_code: str) -> HolidayMap:
        url = OPENHOLIDAYS_URL.format(country_code=country_code, year=year)
        data = self._get_json(url)
        entries = []
        try:
            for item in data:
                name = choose_name(item["name"])
                if not isinstance(name, str):
                    raise JsonError(f"expected a string holiday name, got {name!r}")
                entries.append((_string(item, "startDate"), name))
        except (KeyError, TypeError, AttributeError) as e:
            raise JsonError(f"unexpected holiday entry: {e}") from e
        return build_holidays(entries)


def _string(item: dict, key: str) -> str:
    value = item[key]
    if not isinstance(value, str):
        raise JsonError(f"expected a string for {key!r}, got {value!r}")
    return value
