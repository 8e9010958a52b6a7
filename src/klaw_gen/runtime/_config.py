"""Runtime configuration: GenConfig, init and seeded sampling."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from klaw_gen.runtime._logging import configure_logging, get_logger
from klaw_gen.source import PRNGSource

if TYPE_CHECKING:
    from klaw_gen.gen import Gen

__all__ = [
    'GenConfig',
    'get_config',
    'init',
    'new_source',
    'reset',
    'sample',
]

SEED_ENV_VAR = 'KLAW_GEN_SEED'

log = get_logger(__name__)


@dataclass(frozen=True)
class GenConfig:
    """Configuration for running generators.

    Attributes:
        seed: Seed for sources created by `new_source()`/`sample()`. None = OS entropy.
        max_attempts: Default cap for `backtrack`. None = retry forever.
        retry_warning_interval: Failed attempts between "slow backtracking" warnings.
        log_level: Logging level (e.g., "DEBUG", "INFO"). None = leave logging alone.
    """

    seed: int | None = None
    max_attempts: int | None = None
    retry_warning_interval: int = 10_000
    log_level: str | None = None


# Global configuration (set by init())
_config: GenConfig | None = None

# Source shared by unseeded `sample()` calls, created on first use
_session: PRNGSource | None = None


def _detect_seed() -> int | None:
    """Read the seed from KLAW_GEN_SEED, if set to an integer."""
    raw = os.environ.get(SEED_ENV_VAR, '').strip()
    if not raw:
        return None
    try:
        return int(raw, 0)
    except ValueError:
        logging.warning("Invalid %s value '%s', ignoring", SEED_ENV_VAR, raw)
        return None


def init(
    seed: int | None = None,
    max_attempts: int | None = None,
    retry_warning_interval: int | None = None,
    log_level: str | None = None,
) -> GenConfig:
    """Initialize klaw-gen with the given configuration.

    Also starts a new session source, so a seeded session replays from the
    beginning after every `init()`.

    Args:
        seed: Seed for default sources. Read from KLAW_GEN_SEED if None.
        max_attempts: Default retry cap for `backtrack`. None = unbounded.
        retry_warning_interval: Failed attempts between warnings. None = 10,000.
        log_level: Logging level ("DEBUG", "INFO", etc.). None = silent.

    Returns:
        The GenConfig that was set.

    Raises:
        ValueError: If `max_attempts` or `retry_warning_interval` is below 1.

    Example:
        ```python
        from klaw_gen.runtime import init

        init(seed=1234, log_level='INFO')
        ```
    """
    global _config, _session  # noqa: PLW0603

    if max_attempts is not None and max_attempts < 1:
        msg = f'max_attempts must be at least 1, got {max_attempts}'
        raise ValueError(msg)
    if retry_warning_interval is not None and retry_warning_interval < 1:
        msg = f'retry_warning_interval must be at least 1, got {retry_warning_interval}'
        raise ValueError(msg)

    _config = GenConfig(
        seed=seed if seed is not None else _detect_seed(),
        max_attempts=max_attempts,
        retry_warning_interval=(
            retry_warning_interval
            if retry_warning_interval is not None
            else GenConfig.retry_warning_interval
        ),
        log_level=log_level,
    )
    _session = None

    if log_level is not None:
        configure_logging(log_level)
        log.debug('klaw_gen.init', seed=_config.seed, max_attempts=_config.max_attempts)

    return _config


def get_config() -> GenConfig:
    """Get the current configuration, initializing defaults on first use."""
    if _config is None:
        return init()
    return _config


def reset() -> None:
    """Forget the configuration and the session source.

    The next `get_config()` re-reads the environment.
    """
    global _config, _session  # noqa: PLW0603
    _config = None
    _session = None


def new_source(seed: int | None = None) -> PRNGSource:
    """Create a fresh PRNG source from `seed`, or from the configured seed.

    With a configured seed, every call returns a source replaying the same
    stream. Use `sample()` to draw successive values from one session.
    """
    return PRNGSource(seed if seed is not None else get_config().seed)


def _session_source() -> PRNGSource:
    global _session  # noqa: PLW0603
    if _session is None:
        _session = new_source()
    return _session


def sample[T](gen: Gen[T], seed: int | None = None) -> T:
    """Run a generator once.

    Without `seed`, draws continue from the session source, seeded once from
    the configured seed, so repeated calls give different values and a
    seeded session is reproducible as a whole. With `seed`, the generator
    runs against a fresh source seeded with it.

    Args:
        gen: Generator to run.
        seed: Seed for this run only.

    Example:
        ```python
        init(seed=7)
        rolls = [sample(int_range(1, 6)) for _ in range(10)]
        init(seed=7)
        assert [sample(int_range(1, 6)) for _ in range(10)] == rolls
        ```
    """
    source = PRNGSource(seed) if seed is not None else _session_source()
    return gen.run(source)
