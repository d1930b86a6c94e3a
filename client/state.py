from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class PingStep(str, Enum):
    """Steps of a single ping exchange. Transitions only move forward.

    A failed read ends in FAILED like a failed connect or write; DONE means data arrived.
    """
    CONNECTING = "connecting"
    WRITING = "writing"
    READING = "reading"
    DONE = "done"
    FAILED = "failed"


@dataclass
class PingResult:
    data: bytes

    @property
    def text(self) -> str:
        return self.data.decode("utf-8", errors="replace")
