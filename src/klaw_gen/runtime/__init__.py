"""
klaw_gen.runtime: configuration, seeding and logging.

Generators themselves are pure descriptions; this module holds the bits of
process-wide state around them: the default seed and session source, the
default retry cap for backtracking, and structlog configuration.
"""

from klaw_gen.runtime._config import GenConfig, get_config, init, new_source, reset, sample
from klaw_gen.runtime._logging import LOGGER_NAMESPACE, configure_logging, get_logger

__all__ = [
    # Logging
    'LOGGER_NAMESPACE',
    # Config
    'GenConfig',
    'configure_logging',
    'get_config',
    'get_logger',
    'init',
    'new_source',
    'reset',
    'sample',
]
