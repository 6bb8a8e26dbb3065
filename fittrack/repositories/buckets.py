# fittrack/repositories/buckets.py
"""
Named key/value buckets holding the demo identity's raw session list.

A bucket stores one JSON-serialisable value under its name. The in-memory
bucket lives as long as the process; the file bucket survives restarts and
is what a single-device deployment would use.
"""
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Any, Optional, Protocol

log = logging.getLogger(__name__)

class Bucket(Protocol):
    name: str

    def get(self) -> Optional[Any]: ...
    def set(self, value: Any) -> None: ...
    def clear(self) -> None: ...

class InMemoryBucket:
    def __init__(self, name: str):
        self.name = name
        self._raw: Optional[str] = None

    def get(self) -> Optional[Any]:
        if self._raw is None:
            return None
        return json.loads(self._raw)

    def set(self, value: Any) -> None:
        # Serialise on write so callers can't mutate what is stored
        self._raw = json.dumps(value)

    def clear(self) -> None:
        self._raw = None

class JsonFileBucket:
    def __init__(self, name: str, directory: str | Path):
        self.name = name
        self.path = Path(directory) / f"{name}.json"

    def get(self) -> Optional[Any]:
        if not self.path.exists():
            return None
        return json.loads(self.path.read_text(encoding="utf-8"))

    def set(self, value: Any) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp = self.path.with_suffix(".json.tmp")
        tmp.write_text(json.dumps(value), encoding="utf-8")
        tmp.replace(self.path)

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)

def bucket_from_settings(name: str, directory: Optional[str]) -> Bucket:
    if directory:
        log.info("demo sessions persisted to %s", Path(directory) / f"{name}.json")
        return JsonFileBucket(name, directory)
    return InMemoryBucket(name)
