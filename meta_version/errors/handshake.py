"""
Exceptions raised while validating a connection handshake.

Every handshake error is fatal for the connection it was raised on: the
connection is closed and is never retried on the same channel. Upgrading
the lagging side and reconnecting is the only recovery.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING

from .spec import MetaVersionError

if TYPE_CHECKING:
    from meta_version.protocol.feature import Feature
    from meta_version.protocol.version import Version


class IncompatibleSide(str, Enum):
    """Which peer is too old to complete the handshake."""

    CLIENT_TOO_OLD = "client_too_old"
    SERVER_TOO_OLD = "server_too_old"


class HandshakeError(MetaVersionError):
    """Base class for errors raised during the handshake."""

    pass


class VersionIncompatibleError(HandshakeError):
    """
    Raised when a peer declares a version below the local threshold.

    Attributes:
        side: Which peer is too old.
        peer_version: The version the peer declared.
        required_version: The local threshold the peer failed.
        witness: The feature responsible for the threshold, if known.
    """

    def __init__(
        self,
        side: IncompatibleSide,
        peer_version: "Version",
        required_version: "Version",
        witness: "Feature | str | None" = None,
    ) -> None:
        self.side = side
        self.peer_version = peer_version
        self.required_version = required_version
        self.witness = witness
        super().__init__(self.render())

    def render(self) -> str:
        if self.side == IncompatibleSide.SERVER_TOO_OLD:
            message = (
                f"Invalid: server protocol_version({self.peer_version}) "
                f"< client required({self.required_version})"
            )

        else:
            message = (
                f"Invalid: client protocol_version({self.peer_version}) "
                f"< server required({self.required_version})"
            )

        if self.witness is not None:
            witness = getattr(self.witness, "value", self.witness)
            message = f"{message} for feature {witness}"

        return message


class HandshakeStateError(HandshakeError):
    """Raised when a handshake step is skipped, repeated or reordered."""

    pass


class HandshakeTimeoutError(HandshakeError):
    """Raised when the peer does not answer within the handshake timeout."""

    def __init__(self, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(f"Handshake timed out after {timeout}s")


class HandshakeMessageError(HandshakeError):
    """Raised when a handshake frame cannot be decoded."""

    pass
