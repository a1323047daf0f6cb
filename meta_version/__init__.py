"""
Protocol version compatibility for the meta-service.

Import the published thresholds and the handshake from here:

    from meta_version import MIN_CLIENT_VERSION, MIN_SERVER_VERSION
    from meta_version.handshake import accept, connect
"""

from meta_version.env import Env as Env
from meta_version.env import load_env as load_env
from meta_version.logging import LoggingConfig
from meta_version.protocol import (
    BUILD_VERSION as BUILD_VERSION,
    VERSION_STR as VERSION_STR,
    MIN_CLIENT_VERSION as MIN_CLIENT_VERSION,
    MIN_SERVER_VERSION as MIN_SERVER_VERSION,
    Feature as Feature,
    FeatureSpan as FeatureSpan,
    Spec as Spec,
    SpecBuilder as SpecBuilder,
    Version as Version,
)

__version__ = VERSION_STR

_spec: Spec | None = None


def configure_logging(env: Env | None = None) -> None:
    """Apply the log level, output stream and directory from `env`."""
    if env is None:
        env = load_env()

    LoggingConfig().update(**env.get_logging_config())


def version_str() -> str:
    return VERSION_STR


def version() -> Version:
    return BUILD_VERSION


def spec() -> Spec:
    """The shipped feature registry, built on first use."""
    global _spec

    if _spec is None:
        _spec = Spec.load()

    return _spec
