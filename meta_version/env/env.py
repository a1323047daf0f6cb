from __future__ import annotations

from typing import Callable, Dict, Literal, Union

from pydantic import BaseModel, StrictStr, field_validator

from .time_parser import TimeParser

PrimaryType = Union[str, int, float, bytes, bool]


class Env(BaseModel):
    META_VERSION_HANDSHAKE_TIMEOUT: StrictStr = "5s"
    META_VERSION_LOG_LEVEL: Literal[
        "trace",
        "debug",
        "info",
        "warn",
        "error",
        "critical",
        "fatal",
    ] = "info"
    META_VERSION_LOG_OUTPUT: Literal["stdout", "stderr"] = "stderr"
    META_VERSION_LOGS_DIRECTORY: StrictStr | None = None

    @field_validator("META_VERSION_HANDSHAKE_TIMEOUT")
    @classmethod
    def validate_handshake_timeout(cls, value: str) -> str:
        if TimeParser().parse(value) <= 0:
            raise ValueError("Handshake timeout must be positive")

        return value

    @classmethod
    def types_map(cls) -> Dict[str, Callable[[str], PrimaryType]]:
        return {
            "META_VERSION_HANDSHAKE_TIMEOUT": str,
            "META_VERSION_LOG_LEVEL": str,
            "META_VERSION_LOG_OUTPUT": str,
            "META_VERSION_LOGS_DIRECTORY": str,
        }

    @property
    def handshake_timeout(self) -> float:
        """The handshake timeout in seconds."""
        return TimeParser().parse(self.META_VERSION_HANDSHAKE_TIMEOUT)

    def get_logging_config(self) -> dict[str, str | None]:
        return {
            "log_level": self.META_VERSION_LOG_LEVEL,
            "log_output": self.META_VERSION_LOG_OUTPUT,
            "log_directory": self.META_VERSION_LOGS_DIRECTORY,
        }
