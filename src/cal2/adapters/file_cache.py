"""File-based holiday cache adapter."""

import io
import logging
import os
import pickle
import tempfile
from pathlib import Path

from cal2.core.holidays import (
    HolidayEntry,
    HolidayKind,
    HolidayMap,
    Provider,
    is_default_provider,
    provider_slug,
)
from cal2.errors import CacheError, StorageError

logger = logging.getLogger(__name__)

MAX_CACHE_BYTES = 10 * 1024 * 1024
PICKLE_PROTOCOL = 4


class _SchemaMismatch(Exception):
    """Payload decoded but does not have the expected shape."""


class _PlainUnpickler(pickle.Unpickler):
    """Unpickler limited to builtin containers and scalars."""

    def find_class(self, module, name):
        raise pickle.UnpicklingError(f"global '{module}.{name}' is not allowed")


def _unpickle(data: bytes) -> object:
    try:
        return _PlainUnpickler(io.BytesIO(data)).load()
    except Exception as e:
        # Arbitrary bytes can fail in many ways inside pickle
        raise _SchemaMismatch(str(e)) from e


def _is_key(key: object) -> bool:
    return (
        isinstance(key, tuple)
        and len(key) == 2
        and all(isinstance(part, int) for part in key)
    )


def _decode_current(data: bytes) -> HolidayMap:
    """Decode {(day, month): (name, kind)}."""
    payload = _unpickle(data)
    if not isinstance(payload, dict):
        raise _SchemaMismatch("not a mapping")

    kinds = {k.value: k for k in HolidayKind}
    holidays: HolidayMap = {}
    for key, value in payload.items():
        if not _is_key(key):
            raise _SchemaMismatch(f"bad key {key!r}")
        if not (isinstance(value, tuple) and len(value) == 2):
            raise _SchemaMismatch(f"bad entry for {key!r}")
        name, kind = value
        if not isinstance(name, str) or kind not in kinds:
            raise _SchemaMismatch(f"bad entry for {key!r}")
        holidays[key] = HolidayEntry(name=name, kind=kinds[kind])
    return holidays


def _decode_legacy(data: bytes) -> HolidayMap:
    """
    Decode the old {(day, month): is_holiday} format.

    Only days flagged True survive, as custom entries. Kept separate so it
    can be dropped once no legacy files remain.
    """
    payload = _unpickle(data)
    if not isinstance(payload, dict):
        raise _SchemaMismatch("not a mapping")

    holidays: HolidayMap = {}
    for key, is_holiday in payload.items():
        if not _is_key(key) or not isinstance(is_holiday, bool):
            raise _SchemaMismatch(f"bad legacy entry {key!r}")
        if is_holiday:
            day, month = key
            holidays[key] = HolidayEntry.custom(f"Legacy holiday ({day:02d}/{month:02d})")
    return holidays


def encode(holidays: HolidayMap) -> bytes:
    payload = {key: (entry.name, entry.kind.value) for key, entry in holidays.items()}
    return pickle.dumps(payload, protocol=PICKLE_PROTOCOL)


class FileHolidayStore:
    """
    File-based holiday cache.

    Implements HolidayStore protocol. One binary file per (year, provider)
    under the cache directory.
    """

    def __init__(self, cache_dir: Path | str):
        self.cache_dir = Path(cache_dir).expanduser()

    def filename(self, year: int, provider: Provider) -> Path:
        """hm-<year> for the default provider, hm-<slug>-<year> otherwise."""
        if is_default_provider(provider):
            return self.cache_dir / f"hm-{year}"
        return self.cache_dir / f"hm-{provider_slug(provider)}-{year}"

    def load(self, path: Path) -> HolidayMap | None:
        """Read a cache file. Returns None if it does not exist."""
        path = Path(path)
        try:
            size = path.stat().st_size
        except FileNotFoundError:
            logger.info(f"Cache miss: {path}")
            return None
        except OSError as e:
            raise StorageError(f"cannot stat cache {path}: {e}") from e

        if size > MAX_CACHE_BYTES:
            raise CacheError(f"cache {path} exceeds {MAX_CACHE_BYTES} bytes")

        try:
            data = path.read_bytes()
        except OSError as e:
            raise StorageError(f"cannot read cache {path}: {e}") from e

        try:
            return _decode_current(data)
        except _SchemaMismatch:
            pass

        try:
            migrated = _decode_legacy(data)
        except _SchemaMismatch:
            raise CacheError(f"failed to deserialize cache {path}") from None

        logger.info(f"Migrating legacy cache {path} ({len(migrated)} entries)")
        self.save(path, migrated)
        return migrated

    def save(self, path: Path, holidays: HolidayMap) -> None:
        """Write holidays to path, replacing any existing file."""
        path = Path(path)
        tmp_name = None
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                "wb", dir=path.parent, prefix=f".{path.name}-", delete=False
            ) as fp:
                tmp_name = fp.name
                fp.write(encode(holidays))
                fp.flush()
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"cannot write cache {path}: {e}") from e
        logger.debug(f"Saved {len(holidays)} holidays to {path}")
