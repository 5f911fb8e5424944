"""DocumentGateway — the only component that reads or mutates the host document.

Every read/mutate sequence runs inside :meth:`DocumentGateway.batch`:

- A fresh host context is opened from the injected session.
- The caller queues work and calls ``ctx.sync()`` before reading any
  pending value it depends on.
- On normal exit, still-queued operations are synchronized and the
  session commits exactly once.
- On any exception, queued operations are discarded, nothing is
  committed, and the exception propagates unchanged.  No retry.
- The context is released on every exit path.

No handle into the document outlives the batch that produced it.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    from slidectl.infrastructure.host import DocumentSession, HostContext

logger = logging.getLogger(__name__)

T = TypeVar("T")


class DocumentGateway:
    """Scoped access to a :class:`DocumentSession`.

    Usage::

        with gateway.batch() as ctx:
            slides = ctx.load_slides()
            ctx.sync()
            if not slides.value:
                ctx.add_slide()
    """

    def __init__(self, session: DocumentSession) -> None:
        self._session = session

    @contextmanager
    def batch(self) -> Iterator[HostContext]:
        """Open a host context, commit on success, discard on failure."""
        ctx = self._session.open_context()
        try:
            yield ctx
            if ctx.has_pending:
                ctx.sync()
            self._session.commit(ctx)
        except BaseException:
            dropped = ctx.discard()
            if dropped:
                logger.debug("Discarded %d unsynchronized host operation(s)", dropped)
            raise
        finally:
            self._session.release(ctx)

    def run(self, fn: Callable[[HostContext], T]) -> T:
        """Run *fn* inside one batch and return its result."""
        with self.batch() as ctx:
            return fn(ctx)
