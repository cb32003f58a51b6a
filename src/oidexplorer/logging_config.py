"""Singleton logging configuration.

setup_logging() configures the root logger once per process; later calls
are no-ops. set_level() adjusts the root level afterwards, which is how the
CLI applies ``--log-level`` after the module-level setup already ran.
"""

import logging

LOG_FORMAT = "%(asctime)s - %(levelname)s - [%(name)s] - %(message)s"
LOG_DATEFMT = "%Y-%m-%dT%H:%M:%S"

# Third-party loggers to suppress to WARNING
_SUPPRESSED_LOGGERS = (
    "sqlalchemy.engine",
    "aiosqlite",
    "httpx",
)

_setup_done = False


def parse_level(level: str) -> int:
    """Resolve a level name like ``"debug"`` to its numeric value."""
    value = logging.getLevelName(level.strip().upper())
    if not isinstance(value, int):
        raise ValueError(f"invalid log level {level!r}")
    return value


def setup_logging(level: str = "ERROR") -> None:
    """Configure the root logger and quiet third-party loggers.

    Idempotent: the second call is a no-op.
    """
    global _setup_done  # noqa: PLW0603
    if _setup_done:
        return
    numeric = parse_level(level)
    _setup_done = True

    logging.basicConfig(
        level=numeric,
        format=LOG_FORMAT,
        datefmt=LOG_DATEFMT,
    )

    for name in _SUPPRESSED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def set_level(level: str) -> None:
    logging.getLogger().setLevel(parse_level(level))
