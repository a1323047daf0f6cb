"""
Wire messages exchanged during the connection handshake.

The handshake is exactly one round trip: the connecting side sends a
HandshakeRequest, the accepting side answers with a HandshakeResponse.
Both are JSON encoded.
"""

from meta_version.protocol.version import Version

from .message import Message


class HandshakeRequest(Message, kw_only=True):
    """
    Sent by the connecting side (client) to open the handshake.

    Attributes:
        protocol_version: The client's own release version.
    """

    protocol_version: Version


class HandshakeResponse(Message, kw_only=True):
    """
    Sent by the accepting side (server) in answer to a HandshakeRequest.

    An accepted response carries the server's release version. A rejected
    one carries no version, only the diagnostic for the client.

    Attributes:
        accepted: Whether the client passed the server's threshold.
        protocol_version: The server's release version, when accepted.
        error: Rendered rejection diagnostic, when rejected.
        required_version: The server threshold the client failed.
        witness: Feature responsible for that threshold, if known.
    """

    accepted: bool
    protocol_version: Version | None = None
    error: str | None = None
    required_version: Version | None = None
    witness: str | None = None
