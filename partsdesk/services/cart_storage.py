"""
Cart Storage Adapters

A cart storage slot holds one serialized value under a fixed key. The
enquiry cart reads the slot once on start-up and rewrites it after every
mutation.

- InMemoryCartStorage: process-local dict, used by tests
- FileCartStorage: one JSON file per key under a directory, used by the CLI

There is no locking. Two processes writing the same slot race and the last
writer wins; the cart is assumed to be driven from a single session.
"""
import logging
import os
import re
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, Optional, Union

logger = logging.getLogger(__name__)


class CartStorage(ABC):
    """Key/value slot store for serialized carts."""

    @abstractmethod
    def read(self, key: str) -> Optional[str]:
        """Return the raw stored value, or None if the slot is empty."""

    @abstractmethod
    def write(self, key: str, value: str) -> None:
        """Replace the slot contents."""


class InMemoryCartStorage(CartStorage):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._slots: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> Optional[str]:
        return self._slots.get(key)

    def write(self, key: str, value: str) -> None:
        self._slots[key] = value


class FileCartStorage(CartStorage):
    """
    Stores each slot as <directory>/<key>.json.

    Read and write failures are logged and swallowed so that a broken disk
    degrades to an empty cart instead of crashing the storefront.
    """

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(os.path.expanduser(str(directory)))

    def _path(self, key: str) -> Path:
        safe_key = re.sub(r"[^A-Za-z0-9_.-]", "_", key)
        return self.directory / f"{safe_key}.json"

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Could not read cart slot {path}: {e}")
            return None

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            tmp_path = path.with_suffix(".json.tmp")
            tmp_path.write_text(value, encoding="utf-8")
            os.replace(tmp_path, path)
        except OSError as e:
            logger.warning(f"Could not write cart slot {path}: {e}")
