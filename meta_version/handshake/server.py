from meta_version.errors.handshake import (
    HandshakeError,
    IncompatibleSide,
    VersionIncompatibleError,
)
from meta_version.models.handshake import HandshakeRequest, HandshakeResponse
from meta_version.protocol.constants import (
    BUILD_VERSION,
    MIN_CLIENT_VERSION,
    MIN_CLIENT_VERSION_WITNESS,
)
from meta_version.protocol.feature import Feature
from meta_version.protocol.version import Version

from .base import Handshake
from .state import HandshakeRole, HandshakeState


class ServerHandshake(Handshake):
    """
    The accepting end of the handshake.

    1. start() begins waiting for the client's declared version.
    2. receive_request() checks it against MIN_CLIENT_VERSION and returns
       the encoded response carrying the server's own version.

    A rejected client gets no version back. The only thing left to send
    on the connection is the rejection notice in `rejection`, after which
    the connection must be closed.
    """

    role = HandshakeRole.SERVER

    def __init__(
        self,
        local_version: Version = BUILD_VERSION,
        min_client_version: Version = MIN_CLIENT_VERSION,
        witness: Feature | None = MIN_CLIENT_VERSION_WITNESS,
    ) -> None:
        super().__init__(
            local_version,
            min_client_version,
            witness=witness,
        )
        self._rejection: bytes | None = None

    @property
    def rejection(self) -> bytes | None:
        """Encoded rejection notice, set once a client is rejected."""
        return self._rejection

    def start(self) -> None:
        self._expect(HandshakeState.START, "await handshake request")
        self._transition(HandshakeState.AWAITING_PEER_VERSION)

    def receive_request(self, data: bytes) -> bytes:
        """
        Validate the client's HandshakeRequest.

        Returns:
            The encoded HandshakeResponse to send back.

        Raises:
            VersionIncompatibleError: The client is below
                MIN_CLIENT_VERSION (client too old).
            HandshakeMessageError: The request could not be decoded.
        """
        self._expect(HandshakeState.AWAITING_PEER_VERSION, "receive handshake request")

        try:
            request = HandshakeRequest.load(data)

        except HandshakeError:
            self._transition(HandshakeState.REJECTED)
            raise

        client_version = request.protocol_version
        self._peer_version = client_version

        if client_version < self._required_version:
            self._transition(HandshakeState.REJECTED)

            error = VersionIncompatibleError(
                IncompatibleSide.CLIENT_TOO_OLD,
                client_version,
                self._required_version,
                witness=self._witness,
            )

            self._rejection = HandshakeResponse(
                accepted=False,
                error=str(error),
                required_version=self._required_version,
                witness=self._witness.value if self._witness else None,
            ).dump()

            raise error

        self._transition(HandshakeState.VALIDATED)

        return HandshakeResponse(
            accepted=True,
            protocol_version=self._local_version,
        ).dump()
