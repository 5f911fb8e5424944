"""Action tracing — Span, @traced, trace_span.

Tracing is off unless ``--verbose`` turns it on; the disabled path costs
one ContextVar lookup.  When on, each traced call becomes the root of a
span tree (acquire / normalize / place for an action run), and a traced
call returning an :class:`OperationOutcome` gets the tree attached under
``meta["telemetry"]``.
"""

from __future__ import annotations

import functools
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Any, ParamSpec, TypeVar

import structlog

from slidectl.services.result import OperationOutcome

_verbose_enabled: ContextVar[bool] = ContextVar("_verbose_enabled", default=False)
_current_span: ContextVar[Span | None] = ContextVar("_current_span", default=None)

_P = ParamSpec("_P")
_R = TypeVar("_R")


@dataclass
class Span:
    """One timed step of an action run."""

    name: str
    children: list[Span] = field(default_factory=list)
    annotations: dict[str, Any] = field(default_factory=dict)
    _started: float = field(default_factory=time.perf_counter, repr=False)
    _elapsed: float | None = field(default=None, repr=False)

    @property
    def finished(self) -> bool:
        return self._elapsed is not None

    @property
    def duration_ms(self) -> float:
        return 0.0 if self._elapsed is None else self._elapsed * 1000

    def end(self) -> None:
        if self._elapsed is None:
            self._elapsed = time.perf_counter() - self._started

    def annotate(self, key: str, value: Any) -> None:
        self.annotations[key] = value

    def child(self, name: str) -> Span:
        span = Span(name=name)
        self.children.append(span)
        return span

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name, "duration_ms": round(self.duration_ms, 2)}
        if self.annotations:
            data["annotations"] = dict(self.annotations)
        if self.children:
            data["children"] = [c.to_dict() for c in self.children]
        return data


@contextmanager
def _activated(span: Span) -> Iterator[Span]:
    """Make *span* current for the block and close it on exit."""
    token = _current_span.set(span)
    try:
        yield span
    finally:
        span.end()
        _current_span.reset(token)


@contextmanager
def trace_span(name: str) -> Iterator[Span | None]:
    """Time a step under the active span.

    Yields None when tracing is off or no traced call is running.
    """
    parent = _current_span.get() if _verbose_enabled.get() else None
    if parent is None:
        yield None
        return
    with _activated(parent.child(name)) as span:
        yield span


def _log_span(span: Span, *, ok: bool) -> None:
    structlog.get_logger("slidectl.telemetry").debug(
        "span.complete",
        span_name=span.name,
        duration_ms=round(span.duration_ms, 2),
        ok=ok,
        steps=[c.name for c in span.children],
    )


def traced(func: Callable[_P, _R]) -> Callable[_P, _R]:  # noqa: UP047
    """Trace *func* as a root span; attach the tree to a returned outcome."""

    @functools.wraps(func)
    def wrapper(*args: _P.args, **kwargs: _P.kwargs) -> _R:
        if not _verbose_enabled.get():
            return func(*args, **kwargs)

        root = Span(name=func.__qualname__)
        try:
            with _activated(root):
                result = func(*args, **kwargs)
        except Exception:
            _log_span(root, ok=False)
            raise

        if not isinstance(result, OperationOutcome):
            _log_span(root, ok=True)
            return result
        _log_span(root, ok=result.ok)
        meta = {**(result.meta or {}), "telemetry": root.to_dict()}
        return result.model_copy(update={"meta": meta})  # type: ignore[return-value]

    return wrapper


def enable_telemetry() -> None:
    """Turn tracing on for the current context (``--verbose``)."""
    _verbose_enabled.set(True)


def disable_telemetry() -> None:
    _verbose_enabled.set(False)


def telemetry_enabled() -> bool:
    return _verbose_enabled.get()
