"""Diagnostic side-channel for resolution code.

Resolution functions accept a ``Reporter`` instead of writing to a console.
Each event is recorded (so tests and callers can inspect what happened) and
forwarded to ``logging`` with structured context.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from common.logging_utils import extra_context


@dataclass(frozen=True)
class DiagnosticEvent:
    name: str
    level: int
    fields: Dict[str, Any] = field(default_factory=dict)


class Reporter:
    """Records leveled diagnostic events and mirrors them to a logger."""

    def __init__(self, logger: Optional[logging.Logger] = None, component: str = "resolution"):
        self.logger = logger or logging.getLogger("resolution")
        self.component = component
        self.events: List[DiagnosticEvent] = []

    def emit(self, level: int, name: str, message: str = "", **fields: Any) -> None:
        self.events.append(DiagnosticEvent(name=name, level=level, fields=dict(fields)))
        if self.logger.isEnabledFor(level):
            self.logger.log(
                level,
                message or name,
                extra=extra_context(event=name, component=self.component, **fields),
            )

    def debug(self, name: str, message: str = "", **fields: Any) -> None:
        self.emit(logging.DEBUG, name, message, **fields)

    def info(self, name: str, message: str = "", **fields: Any) -> None:
        self.emit(logging.INFO, name, message, **fields)

    def warning(self, name: str, message: str = "", **fields: Any) -> None:
        self.emit(logging.WARNING, name, message, **fields)

    def names(self) -> List[str]:
        """Event names in emission order."""
        return [event.name for event in self.events]
