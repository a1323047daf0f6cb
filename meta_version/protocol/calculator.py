"""
Minimum compatible peer versions.

Both calculations reduce the whole feature history to a single version by
taking a maximum, and report the feature that produced it (the witness).
They start from Version.min() with no witness, so an empty reduction yields
0.0.0. Comparisons are strict: when several features tie for the maximum,
the first one in Feature declaration order stays the witness.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, NamedTuple

from .feature import Feature
from .version import Version

if TYPE_CHECKING:
    from .spec import Spec


class CompatibilityBound(NamedTuple):
    """A computed threshold and the feature responsible for it."""

    version: Version
    witness: Feature | None = None

    def __str__(self) -> str:
        if self.witness is None:
            return str(self.version)

        return f"{self.version} (feature {self.witness.value})"


def min_compatible_server_version(
    spec: Spec,
    client_version: Version,
) -> CompatibilityBound:
    """
    Lowest server version able to serve a client at `client_version`.

    The server must already provide every feature the client requires, so
    the answer is the latest `server.since` among features whose client
    span contains `client_version`. Features no released client requires
    (`client.since == Version.max()`) and features the client has stopped
    requiring fall out of the span test.
    """
    result = Version.min()
    witness: Feature | None = None

    for feature, server_span, client_span in spec.features():
        if not client_span.is_active_at(client_version):
            continue

        if server_span.since > result:
            result = server_span.since
            witness = feature

    return CompatibilityBound(result, witness)


def min_compatible_client_version(
    spec: Spec,
    server_version: Version,
) -> CompatibilityBound:
    """
    Lowest client version able to connect to a server at `server_version`.

    Once the server has removed a feature, only clients that had already
    stopped requiring it can connect, so the answer is the latest
    `client.until` among features with `server.until <= server_version`.
    Features the server still provides end at Version.max() and never
    qualify.
    """
    result = Version.min()
    witness: Feature | None = None

    for feature, server_span, client_span in spec.features():
        if server_version < server_span.until:
            continue

        if client_span.until > result:
            result = client_span.until
            witness = feature

    return CompatibilityBound(result, witness)
