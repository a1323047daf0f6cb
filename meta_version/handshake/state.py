from enum import Enum


class HandshakeState(str, Enum):
    """
    Progress of one connection's handshake.

    START -> AWAITING_PEER_VERSION -> VALIDATED | REJECTED

    VALIDATED and REJECTED are terminal.
    """

    START = "start"
    AWAITING_PEER_VERSION = "awaiting_peer_version"
    VALIDATED = "validated"
    REJECTED = "rejected"

    @property
    def is_terminal(self) -> bool:
        return self in (HandshakeState.VALIDATED, HandshakeState.REJECTED)


class HandshakeRole(str, Enum):
    """Which end of the connection a handshake runs on."""

    CLIENT = "client"
    SERVER = "server"
