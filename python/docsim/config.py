"""Runtime settings read from ``DOCSIM_*`` environment variables.

Settings are read every time :func:`load_settings` is called, so tests and
long-running hosts can change the environment without reloading the module.
Keyword arguments passed to :func:`docsim.batch.compare` always take
precedence over these values.

Variables:
    DOCSIM_MAX_WORKERS: worker count for the comparison pool (int >= 1)
    DOCSIM_EXECUTOR: "process", "thread" or "sequential"
    DOCSIM_PARALLEL_THRESHOLD: minimum corpus size before a pool is used
    DOCSIM_DISABLE_PARALLEL: "1", "true" or "yes" forces sequential runs
    DOCSIM_LOG_LEVEL: level used by :func:`docsim.configure_logging`
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from docsim.enums import ExecutorKind
from docsim.errors import ValidationError

ENV_PREFIX = "DOCSIM_"

_TRUTHY = ("1", "true", "yes")


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    max_workers: Optional[int] = None
    executor: ExecutorKind = ExecutorKind.PROCESS
    parallel_threshold: int = 64
    disable_parallel: bool = False
    log_level: str = "WARNING"


def _read_int(env: Mapping[str, str], name: str, minimum: int) -> Optional[int]:
    raw = env.get(ENV_PREFIX + name, "").strip()
    if not raw:
        return None
    try:
        value = int(raw)
    except ValueError:
        raise ValidationError(f"{ENV_PREFIX}{name} must be an integer, got {raw!r}") from None
    if value < minimum:
        raise ValidationError(f"{ENV_PREFIX}{name} must be >= {minimum}, got {value}")
    return value


def parse_executor(value: "str | ExecutorKind") -> ExecutorKind:
    """Resolve an executor name, raising ValidationError for unknown names."""
    if isinstance(value, ExecutorKind):
        return value
    try:
        return ExecutorKind(str(value).strip().lower())
    except ValueError:
        valid = sorted(e.value for e in ExecutorKind)
        raise ValidationError(f"Unknown executor: {value!r}. Valid options: {valid}") from None


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """Build Settings from the environment (or from the given mapping).

    Raises:
        ValidationError: If a variable is set to a malformed value.

    Example:
        >>> load_settings({"DOCSIM_EXECUTOR": "thread"}).executor
        <ExecutorKind.THREAD: 'thread'>
    """
    env = os.environ if env is None else env
    defaults = Settings()

    executor_raw = env.get(ENV_PREFIX + "EXECUTOR", "").strip()
    threshold = _read_int(env, "PARALLEL_THRESHOLD", minimum=0)

    return Settings(
        max_workers=_read_int(env, "MAX_WORKERS", minimum=1),
        executor=parse_executor(executor_raw) if executor_raw else defaults.executor,
        parallel_threshold=defaults.parallel_threshold if threshold is None else threshold,
        disable_parallel=env.get(ENV_PREFIX + "DISABLE_PARALLEL", "").lower() in _TRUTHY,
        log_level=env.get(ENV_PREFIX + "LOG_LEVEL", "").strip().upper() or defaults.log_level,
    )


__all__ = ["Settings", "load_settings", "parse_executor", "ENV_PREFIX"]
