"""Log routing for slidectl.

Everything funnels through one stderr handler on the root logger, so
stdlib loggers (``logging.getLogger(__name__)``) and structlog loggers
render identically.  ``--log-json`` switches the renderer to JSON lines;
``--verbose`` opens the ``slidectl`` namespace down to DEBUG and
``--quiet`` narrows it to errors.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import Processor

# Third-party namespaces held at WARNING whatever the verbosity.
_HELD_AT_WARNING = ("httpx", "httpcore", "PIL")


def _pre_chain() -> list[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_json: bool) -> Processor:
    if log_json:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())


def _package_level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *, verbose: bool = False, log_json: bool = False, quiet: bool = False
) -> None:
    """Install the stderr handler and set namespace levels.

    Safe to call more than once; the root handler is replaced, not stacked.
    """
    pre_chain = _pre_chain()
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(log_json),
            ],
        )
    )

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(logging.WARNING)

    logging.getLogger("slidectl").setLevel(_package_level(verbose=verbose, quiet=quiet))
    for name in _HELD_AT_WARNING:
        logging.getLogger(name).setLevel(logging.WARNING)
