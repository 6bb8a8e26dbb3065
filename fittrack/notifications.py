"""User-facing notices (toast-style) emitted by the tracking facade."""
from __future__ import annotations
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Protocol

log = logging.getLogger(__name__)

class NoticeKind(str, Enum):
    success = "success"
    validation = "validation"
    authentication_required = "authentication_required"
    backend = "backend"
    migration = "migration"

@dataclass(frozen=True, slots=True)
class Notice:
    kind: NoticeKind
    title: str
    message: str

    @property
    def is_error(self) -> bool:
        return self.kind != NoticeKind.success

class Notifier(Protocol):
    def notify(self, notice: Notice) -> None: ...

class LoggingNotifier:
    def notify(self, notice: Notice) -> None:
        level = logging.WARNING if notice.is_error else logging.INFO
        log.log(level, "notice kind=%s title=%s: %s", notice.kind.value, notice.title, notice.message)

class NoticeCollector:
    """Keeps notices in order; handy for request-scoped delivery and for tests."""

    def __init__(self):
        self.notices: list[Notice] = []

    def notify(self, notice: Notice) -> None:
        self.notices.append(notice)

    @property
    def last(self) -> Notice | None:
        return self.notices[-1] if self.notices else None
