"""
Channel-Aware Structured Logging for llm_contracts.

Every logger belongs to one channel:
- LOADER: contract decoding and validation
- ENGINE: rule evaluation
- SYSTEM: CLI, input reading, errors

Levels, from quiet to loud: silent, info, verbose, debug.
Errors and warnings are shown at every level except silent.

Environment (CLI flags take precedence):
- LLMC_LOG_LEVEL: silent/info/verbose/debug
- LLMC_LOG_FORMAT: console/json
- LLMC_LOG_CHANNELS: comma-separated channel filter (all if not set)

Logs are written to stderr. Stdout belongs to the verdict.
"""

import logging
import os
import sys
import time
from enum import Enum, IntEnum
from typing import Any, Iterable, Optional, Union

import structlog


class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse a level name; unknown names fall back to INFO."""
        try:
            return cls[s.strip().upper()]
        except KeyError:
            return cls.INFO


class LogChannel(str, Enum):
    """Semantic log channels."""
    LOADER = "LOADER"
    ENGINE = "ENGINE"
    SYSTEM = "SYSTEM"

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        try:
            return cls(s.strip().upper())
        except ValueError:
            return None


_STDLIB_LEVELS = {
    LogLevel.SILENT: logging.CRITICAL + 10,
    LogLevel.INFO: logging.INFO,
    LogLevel.VERBOSE: logging.DEBUG,
    LogLevel.DEBUG: logging.DEBUG,
}

_config: dict[str, Any] = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": frozenset(LogChannel),
    "configured": False,
}


def _parse_channels(channels: Iterable[Union[LogChannel, str]]) -> frozenset[LogChannel]:
    parsed = set()
    for ch in channels:
        found = ch if isinstance(ch, LogChannel) else LogChannel.from_string(ch)
        if found is not None:
            parsed.add(found)
    return frozenset(parsed)


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: Optional[str] = None,
    channels: Optional[Iterable[Union[LogChannel, str]]] = None,
    force: bool = False,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        level: Log level (LogLevel or name); LLMC_LOG_LEVEL when None
        format: "console" or "json"; LLMC_LOG_FORMAT when None
        channels: Channels to show; LLMC_LOG_CHANNELS (or all) when None
        force: Reconfigure even if already configured
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = os.environ.get("LLMC_LOG_LEVEL", "info")
    if isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("LLMC_LOG_FORMAT", "console")

    if channels is None:
        env_channels = os.environ.get("LLMC_LOG_CHANNELS", "")
        selected = _parse_channels(env_channels.split(",")) if env_channels else frozenset()
        selected = selected or frozenset(LogChannel)
    else:
        selected = _parse_channels(channels)

    _config.update(level=level, format=format, channels=selected, configured=True)

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=_STDLIB_LEVELS[level],
        force=True,
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]
    if format == "json":
        processors += [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(sort_keys=True),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_current_config() -> dict:
    """The active level, format and channels, in printable form."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": sorted(ch.value for ch in _config["channels"]),
    }


class ChannelLogger:
    """
    A logger bound to one channel.

    info/verbose/debug are gated by the configured level and channel
    filter; error/warning only by SILENT.
    """

    def __init__(self, channel: LogChannel):
        self.channel = channel
        self._logger = structlog.get_logger(f"llm_contracts.{channel.value.lower()}")

    def _enabled(self, level: LogLevel) -> bool:
        return self.channel in _config["channels"] and _config["level"] >= level

    def info(self, event: str, **kwargs: Any) -> None:
        if self._enabled(LogLevel.INFO):
            self._logger.info(event, channel=self.channel.value, **kwargs)

    def verbose(self, event: str, **kwargs: Any) -> None:
        if self._enabled(LogLevel.VERBOSE):
            self._logger.debug(event, channel=self.channel.value, verbosity="verbose", **kwargs)

    def debug(self, event: str, **kwargs: Any) -> None:
        if self._enabled(LogLevel.DEBUG):
            self._logger.debug(event, channel=self.channel.value, verbosity="debug", **kwargs)

    def error(self, event: str, **kwargs: Any) -> None:
        if _config["level"] > LogLevel.SILENT:
            self._logger.error(event, channel=self.channel.value, **kwargs)

    def warning(self, event: str, **kwargs: Any) -> None:
        if _config["level"] > LogLevel.SILENT:
            self._logger.warning(event, channel=self.channel.value, **kwargs)


def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """Get a channel logger, configuring from the environment on first use."""
    configure_logging()
    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM
    return ChannelLogger(channel)


def bind_run_context(**kwargs: Any) -> None:
    """Attach key/values to every following log line."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_run_context() -> None:
    structlog.contextvars.clear_contextvars()


class RunLogger:
    """
    Stage timing for one verification run.

    Binds the run's inputs to every log line until the run completes.
    """

    def __init__(self, **context: Any):
        self._log = get_logger(LogChannel.SYSTEM)
        self._started = time.perf_counter()
        self._stage_started: dict[str, float] = {}
        bind_run_context(**context)

    def _elapsed_ms(self, since: float) -> float:
        return round((time.perf_counter() - since) * 1000, 2)

    def stage_start(self, stage: str) -> None:
        self._stage_started[stage] = time.perf_counter()
        self._log.verbose("stage_started", stage=stage)

    def stage_end(self, stage: str, **metrics: Any) -> None:
        since = self._stage_started.get(stage, self._started)
        self._log.verbose(
            "stage_completed",
            stage=stage,
            duration_ms=self._elapsed_ms(since),
            **metrics,
        )

    def stage_error(self, stage: str, error: Exception) -> None:
        self._log.error(
            "stage_failed",
            stage=stage,
            error=str(error),
            error_type=type(error).__name__,
        )

    def run_complete(self, status: str, **metrics: Any) -> None:
        """Log the run summary, then drop the run context."""
        self._log.info(
            "run_complete",
            status=status,
            total_duration_ms=self._elapsed_ms(self._started),
            **metrics,
        )
        clear_run_context()
