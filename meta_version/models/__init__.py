from .message import Message as Message
from .handshake import (
    HandshakeRequest as HandshakeRequest,
    HandshakeResponse as HandshakeResponse,
)
