"""
Connection handshake for meta-client and meta-server.

The connecting side declares its version, the accepting side checks it
against MIN_CLIENT_VERSION and answers with its own, which the connecting
side checks against MIN_SERVER_VERSION. Only then may other requests flow.
"""

from .state import (
    HandshakeState as HandshakeState,
    HandshakeRole as HandshakeRole,
)
from .base import Handshake as Handshake
from .client import ClientHandshake as ClientHandshake
from .server import ServerHandshake as ServerHandshake
from .transport import (
    HandshakeTransport as HandshakeTransport,
    StreamTransport as StreamTransport,
    MAX_FRAME_SIZE as MAX_FRAME_SIZE,
)
from .session import (
    connect as connect,
    accept as accept,
)
