"""Host document interface — deferred batch-and-sync execution model.

A :class:`HostContext` queues reads and mutations; nothing touches the
document until :meth:`HostContext.sync` runs the queue in order and
resolves every :class:`PendingValue`.  Reading a pending value before
its sync raises ``HostError(code="NOT_SYNCED")``, so callers must place
an explicit synchronization point between a read and any code that
depends on its result.

A :class:`DocumentSession` hands out contexts and persists what a
context synchronized.  Only the document gateway talks to sessions.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

from slidectl.domain.errors import HostError
from slidectl.domain.geometry import Geometry, ShapeInfo, ShapeRef, SlideInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

_UNSET: Any = object()


class PendingValue(Generic[T]):
    """Result of a queued host operation, available after ``sync()``."""

    def __init__(self, label: str) -> None:
        self.label = label
        self._value: Any = _UNSET

    @property
    def loaded(self) -> bool:
        return self._value is not _UNSET

    @property
    def value(self) -> T:
        if self._value is _UNSET:
            raise HostError(
                f"{self.label} was read before the host context was synchronized",
                code="NOT_SYNCED",
            )
        return self._value  # type: ignore[no-any-return]

    def _resolve(self, value: T) -> None:
        self._value = value


@dataclass
class _QueuedOp:
    label: str
    run: Callable[[], Any]
    pending: PendingValue[Any] = field(repr=False)


class HostContext(ABC):
    """One batch against the host document.

    The public methods only queue work.  Subclasses implement the
    underscore-prefixed primitives, which execute at sync time.
    """

    def __init__(self) -> None:
        self._queue: list[_QueuedOp] = []
        self.sync_count = 0

    # ------------------------------------------------------------------
    # Queued API
    # ------------------------------------------------------------------

    def load_slides(self) -> PendingValue[list[SlideInfo]]:
        return self._enqueue("slides", self._list_slides)

    def load_shapes(self, slide_index: int) -> PendingValue[list[ShapeInfo]]:
        return self._enqueue("shapes", lambda: self._list_shapes(slide_index))

    def add_slide(self) -> PendingValue[SlideInfo]:
        return self._enqueue("add_slide", self._add_slide)

    def add_image(
        self, slide_index: int, uri: str, geometry: Geometry
    ) -> PendingValue[ShapeInfo]:
        return self._enqueue("add_image", lambda: self._add_image(slide_index, uri, geometry))

    def get_selected_shapes(self) -> PendingValue[list[ShapeInfo]]:
        return self._enqueue("selected_shapes", self._selected_shapes)

    def get_shape(self, ref: ShapeRef) -> PendingValue[ShapeInfo | None]:
        return self._enqueue("shape", lambda: self._find_shape(ref))

    def get_image_base64(self, ref: ShapeRef) -> PendingValue[str]:
        return self._enqueue("image_base64", lambda: self._image_base64(ref))

    def delete_shape(self, ref: ShapeRef) -> PendingValue[None]:
        return self._enqueue("delete_shape", lambda: self._delete_shape(ref))

    def set_selected_shapes(self, refs: list[ShapeRef]) -> PendingValue[None]:
        return self._enqueue("select_shapes", lambda: self._select_shapes(list(refs)))

    # ------------------------------------------------------------------
    # Batch control
    # ------------------------------------------------------------------

    @property
    def has_pending(self) -> bool:
        return bool(self._queue)

    def sync(self) -> None:
        """Execute every queued operation in order and resolve its value.

        A failing operation stops the sync; the rest of the queue is
        dropped and the error propagates.
        """
        queue, self._queue = self._queue, []
        for op in queue:
            try:
                result = op.run()
            except HostError:
                raise
            except Exception as exc:
                raise HostError(f"Host operation {op.label} failed: {exc}") from exc
            op.pending._resolve(result)
        self.sync_count += 1
        logger.debug("Host context synced %d operation(s)", len(queue))

    def discard(self) -> int:
        """Drop queued operations without running them. Returns the count."""
        dropped = len(self._queue)
        self._queue = []
        return dropped

    def _enqueue(self, label: str, run: Callable[[], T]) -> PendingValue[T]:
        pending: PendingValue[T] = PendingValue(label)
        self._queue.append(_QueuedOp(label=label, run=run, pending=pending))
        return pending

    # ------------------------------------------------------------------
    # Primitives (executed at sync time)
    # ------------------------------------------------------------------

    @abstractmethod
    def _list_slides(self) -> list[SlideInfo]: ...

    @abstractmethod
    def _list_shapes(self, slide_index: int) -> list[ShapeInfo]: ...

    @abstractmethod
    def _add_slide(self) -> SlideInfo: ...

    @abstractmethod
    def _add_image(self, slide_index: int, uri: str, geometry: Geometry) -> ShapeInfo: ...

    @abstractmethod
    def _selected_shapes(self) -> list[ShapeInfo]: ...

    @abstractmethod
    def _find_shape(self, ref: ShapeRef) -> ShapeInfo | None: ...

    @abstractmethod
    def _image_base64(self, ref: ShapeRef) -> str: ...

    @abstractmethod
    def _delete_shape(self, ref: ShapeRef) -> None: ...

    @abstractmethod
    def _select_shapes(self, refs: list[ShapeRef]) -> None: ...


class DocumentSession(ABC):
    """Handle to one host document, injected into the gateway."""

    @abstractmethod
    def open_context(self) -> HostContext:
        """Start a new batch against the current document state."""

    @abstractmethod
    def commit(self, ctx: HostContext) -> None:
        """Persist everything *ctx* synchronized."""

    def release(self, ctx: HostContext) -> None:  # noqa: B027
        """Free resources held by *ctx*. Called on every exit path."""
