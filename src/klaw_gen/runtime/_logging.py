"""Structured logging for klaw-gen diagnostics.

klaw-gen is imported into other people's test sessions, so it only ever
configures its own `klaw_gen` logger namespace and leaves the root logger
and the host's handlers alone. Events are rendered by structlog's
`ProcessorFormatter`; the console renderer is the default since the usual
reader is a developer watching a test run.

Loggers are not cached, so `structlog.testing.capture_logs()` sees every
event, including those from module-level loggers bound at import time.
"""

from __future__ import annotations

import logging
import sys
from typing import IO, Any

import structlog

__all__ = [
    'LOGGER_NAMESPACE',
    'configure_logging',
    'get_logger',
]

LOGGER_NAMESPACE = 'klaw_gen'

_timestamper = structlog.processors.TimeStamper(fmt='iso')


def _pre_chain() -> list[Any]:
    """Processors applied to structlog events and to plain stdlib records alike."""
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        _timestamper,
    ]


def _renderer(json_output: bool, stream: IO[str]) -> Any:
    if json_output:
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=stream.isatty())


def configure_logging(
    level: str = 'INFO',
    *,
    json_output: bool = False,
    stream: IO[str] | None = None,
) -> None:
    """Route klaw-gen diagnostics to `stream` at `level`.

    Calling this again replaces the previous handler, so it is safe to call
    from `init()` on every session start.

    Args:
        level: Logging level name ("DEBUG", "INFO", "WARNING", ...).
            Unknown names fall back to INFO.
        json_output: Render one JSON object per line instead of console text.
        stream: Where to write. Defaults to stderr.

    Example:
        ```python
        configure_logging('DEBUG')
        backtrack(guard(is_sorted, succeed(lists))).run(source)
        # 2026-... [warning  ] backtrack.slow  attempts=10000
        ```
    """
    target = stream if stream is not None else sys.stderr

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_pre_chain(),
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(target)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=_pre_chain(),
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(json_output, target),
            ],
        )
    )

    logger = logging.getLogger(LOGGER_NAMESPACE)
    for old in list(logger.handlers):
        logger.removeHandler(old)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False


def get_logger(name: str | None = None) -> Any:
    """Get a structlog logger, conventionally named after the module.

    Names outside the `klaw_gen` namespace are not touched by
    `configure_logging`.
    """
    return structlog.get_logger(name)
