import contextvars
from typing import Literal

from meta_version.logging.models import LogLevel, LogLevelName
from .stream_type import StreamType


LogOutput = Literal['stdout', 'stderr']

_LEVEL_ORDER = {level: order for order, level in enumerate(LogLevel)}

_global_log_level = contextvars.ContextVar("_global_log_level", default=LogLevel.INFO)
_global_log_output_type = contextvars.ContextVar("_global_log_output_type", default=StreamType.STDERR)
_global_logging_directory = contextvars.ContextVar("_global_logging_directory", default=None)


class LoggingConfig:
    def __init__(self) -> None:
        self._log_level: contextvars.ContextVar[LogLevel] = _global_log_level
        self._log_output_type: contextvars.ContextVar[StreamType] = _global_log_output_type
        self._log_directory: contextvars.ContextVar[str | None] = _global_logging_directory

    def update(
        self,
        log_directory: str | None = None,
        log_level: LogLevelName | None = None,
        log_output: LogOutput | None = None,
    ):
        if log_directory:
            self._log_directory.set(log_directory)

        if log_level:
            self._log_level.set(
                LogLevel.to_level(log_level)
            )

        if log_output:
            self._log_output_type.set(
                StreamType.STDOUT if log_output == 'stdout' else StreamType.STDERR
            )

    def enabled(self, log_level: LogLevel) -> bool:
        current_log_level = self._log_level.get()
        return _LEVEL_ORDER[log_level] >= _LEVEL_ORDER[current_log_level]

    @property
    def level(self):
        return self._log_level.get()

    @property
    def output(self):
        return self._log_output_type.get()

    @property
    def directory(self):
        return self._log_directory.get()
