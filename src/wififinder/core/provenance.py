"""
Per-request data provenance capture.

Venue and Wi-Fi sources report whether they served live or synthetic data through
a contextvar-backed recorder. The public response never exposes this (live and
fallback payloads have the same shape); the recorder exists for logs and tests.
"""

from __future__ import annotations

import contextvars
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Iterator, Literal

SourceMode = Literal["live", "fallback"]


@dataclass
class Provenance:
    sources: dict[str, dict[str, Any]] = field(default_factory=dict)

    def record(self, name: str, mode: SourceMode, **details: Any) -> None:
        if not name:
            return
        self.sources[name] = {"mode": mode, **details}

    def mode_of(self, name: str) -> SourceMode | None:
        entry = self.sources.get(name)
        return entry.get("mode") if entry else None


_provenance_var: contextvars.ContextVar[Provenance | None] = contextvars.ContextVar(
    "wififinder_provenance", default=None
)


def record_source(name: str, mode: SourceMode, **details: Any) -> None:
    meta = _provenance_var.get()
    if not meta:
        return
    meta.record(name, mode, **details)


@contextmanager
def capture_provenance() -> Iterator[Provenance]:
    meta = Provenance()
    token = _provenance_var.set(meta)
    try:
        yield meta
    finally:
        _provenance_var.reset(token)
