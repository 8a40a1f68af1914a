from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional
from urllib.parse import quote, unquote

from .repository import KeyValueStore

logger = logging.getLogger(__name__)


class JsonFileKeyValueStore(KeyValueStore):
    """One ``<key>.json`` file per key under ``data_dir``.

    Keys are percent-encoded into file names, so distinct keys never share a
    file and ``keys()`` returns them unchanged.

    Writes go to a temp file first and are moved into place, so readers never
    see a half-written document.
    """

    def __init__(self, data_dir: str | Path):
        self._dir = Path(data_dir)

    def _path(self, key: str) -> Path:
        return self._dir / f"{quote(key, safe='')}.json"

    def load(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            logger.warning("Could not read %s: %s", path, e)
            return None

    def save(self, key: str, value: str) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        tmp = path.with_name(path.name + ".tmp")
        tmp.write_text(value, encoding="utf-8")
        os.replace(tmp, path)

    def keys(self, prefix: str = "") -> list[str]:
        if not self._dir.exists():
            return []
        keys = (unquote(p.stem) for p in self._dir.glob("*.json"))
        return sorted(k for k in keys if k.startswith(prefix))
