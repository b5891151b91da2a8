"""
Cross-run state store.

Scenarios that create an entity hand its identifier to scenarios launched
later, in a different process, through small text files: one file per key,
holding one value. Every save replaces the file atomically, so a reader sees
either the previous value or the new one, never a partial write.

One writer per key at a time is assumed. Two processes saving the same key
concurrently is unsupported: the last rename wins and nothing detects the race.
"""

import logging
import os
import re
import tempfile
from enum import Enum
from pathlib import Path

from harness.config import settings
from harness.errors import MissingStateError

logger = logging.getLogger(__name__)

KEY_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")
FILE_SUFFIX = ".txt"


class HandoffKey(str, Enum):
    LATEST_BOOKING_ID = "latest-booking-id"


# Scenario that produces each key, named in MissingStateError messages.
PRODUCERS: dict[str, str] = {
    HandoffKey.LATEST_BOOKING_ID.value: "booking/create_booking",
}


def _key_name(key: str | HandoffKey) -> str:
    name = key.value if isinstance(key, HandoffKey) else key
    if not KEY_PATTERN.match(name):
        raise ValueError(f"Invalid handoff key {name!r}: use letters, digits, '.', '_' or '-'")
    return name


class HandoffStore:
    """
    File-backed key/value store shared by independent harness runs.

    Usage:
        store = HandoffStore()
        store.save(HandoffKey.LATEST_BOOKING_ID, booking_id)
        # ...in another process...
        booking_id = HandoffStore().require(HandoffKey.LATEST_BOOKING_ID)
    """

    def __init__(self, directory: str | Path | None = None) -> None:
        self.directory = Path(directory if directory is not None else settings.handoff_dir)

    def path_for(self, key: str | HandoffKey) -> Path:
        return self.directory / f"{_key_name(key)}{FILE_SUFFIX}"

    def save(self, key: str | HandoffKey, value: str) -> None:
        """
        Replace the value stored under key.

        The value is stored exactly as given, so load() returns it unchanged.

        Raises:
            ValueError: The value is empty or has leading or trailing whitespace.
        """
        name = _key_name(key)
        if not value or not value.strip():
            raise ValueError(f"Refusing to save an empty value for {name!r}")
        if value != value.strip():
            raise ValueError(f"Refusing to save {name!r}: value {value!r} has surrounding whitespace")

        self.directory.mkdir(parents=True, exist_ok=True)
        target = self.path_for(name)
        fd, tmp_path = tempfile.mkstemp(prefix=f".{name}.", suffix=".tmp", dir=self.directory)
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as tmp:
                tmp.write(value)
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_path, target)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise
        logger.info(f"Saved {name}: {value}")

    def load(self, key: str | HandoffKey) -> str | None:
        """
        Return the stored value, or None if no run has saved this key.

        Surrounding whitespace in the file (a hand-written trailing newline) is ignored.
        """
        name = _key_name(key)
        path = self.path_for(name)
        if not path.exists():
            logger.warning(f"No handoff data found for key: {name}")
            return None
        value = path.read_text(encoding="utf-8").strip()
        if not value:
            logger.warning(f"Handoff file for {name} is empty")
            return None
        logger.info(f"Loaded {name}: {value}")
        return value

    def require(self, key: str | HandoffKey) -> str:
        """
        Return the stored value.

        Raises:
            MissingStateError: The key was never saved; names the producing scenario.
        """
        name = _key_name(key)
        value = self.load(name)
        if value is None:
            raise MissingStateError(name, PRODUCERS.get(name), str(self.path_for(name)))
        return value

    def exists(self, key: str | HandoffKey) -> bool:
        return self.load(key) is not None

    def keys(self) -> list[str]:
        if not self.directory.is_dir():
            return []
        return sorted(
            p.name[: -len(FILE_SUFFIX)]
            for p in self.directory.iterdir()
            if p.is_file() and p.name.endswith(FILE_SUFFIX) and KEY_PATTERN.match(p.name[: -len(FILE_SUFFIX)])
        )

    def clear(self, key: str | HandoffKey) -> bool:
        """Delete one key. Only called explicitly; the harness never clears state on its own."""
        path = self.path_for(key)
        if not path.exists():
            return False
        path.unlink()
        logger.info(f"Cleared {_key_name(key)}")
        return True

    def clear_all(self) -> int:
        cleared = sum(1 for key in self.keys() if self.clear(key))
        logger.info(f"Cleared all persisted handoff data ({cleared} keys)")
        return cleared

    def save_many(self, values: dict[str, str]) -> None:
        for key, value in values.items():
            self.save(key, value)

    def load_many(self, keys: list[str]) -> dict[str, str | None]:
        return {key: self.load(key) for key in keys}


def get_handoff_store(directory: str | Path | None = None) -> HandoffStore:
    return HandoffStore(directory)
