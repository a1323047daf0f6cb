"""
Tests for the handshake state machines, without a transport.

Tests cover:
- Client too old rejected by the accepting side
- Server too old rejected by the connecting side
- Diagnostics naming the threshold and witness feature
- Steps skipped, repeated or reordered
"""

import pytest

from meta_version.errors import (
    HandshakeMessageError,
    HandshakeStateError,
    IncompatibleSide,
    VersionIncompatibleError,
)
from meta_version.handshake import ClientHandshake, HandshakeState, ServerHandshake
from meta_version.models import HandshakeRequest, HandshakeResponse
from meta_version.protocol import (
    BUILD_VERSION,
    MIN_CLIENT_VERSION,
    MIN_SERVER_VERSION,
    Feature,
    Version,
)


def v(major: int, minor: int, patch: int) -> Version:
    return Version(major, minor, patch)


def run_exchange(client: ClientHandshake, server: ServerHandshake) -> Version:
    server.start()
    response = server.receive_request(client.start())
    return client.receive_response(response)


class TestAcceptingSide:
    """The server requires clients at 1.2.676 or later."""

    def test_old_client_rejected(self):
        server = ServerHandshake(
            local_version=v(1, 2, 800),
            min_client_version=v(1, 2, 676),
            witness=Feature.TRANSACTION_REPLY_ERROR,
        )
        client = ClientHandshake(local_version=v(1, 2, 500))

        server.start()

        with pytest.raises(VersionIncompatibleError) as err:
            server.receive_request(client.start())

        assert err.value.side == IncompatibleSide.CLIENT_TOO_OLD
        assert err.value.peer_version == v(1, 2, 500)
        assert err.value.required_version == v(1, 2, 676)
        assert str(err.value) == (
            "Invalid: client protocol_version(1.2.500) < server required(1.2.676) "
            "for feature transaction/reply_error"
        )
        assert server.state == HandshakeState.REJECTED
        assert server.peer_version == v(1, 2, 500)

    def test_rejection_notice_carries_no_version(self):
        server = ServerHandshake(local_version=v(1, 2, 800), min_client_version=v(1, 2, 676))
        server.start()

        with pytest.raises(VersionIncompatibleError):
            server.receive_request(HandshakeRequest(protocol_version=v(1, 2, 500)).dump())

        notice = HandshakeResponse.load(server.rejection)

        assert notice.accepted is False
        assert notice.protocol_version is None
        assert notice.required_version == v(1, 2, 676)
        assert notice.witness == "transaction/reply_error"
        assert notice.error.startswith("Invalid: client protocol_version(1.2.500)")

    def test_new_enough_client_accepted(self):
        server = ServerHandshake(local_version=v(1, 2, 800), min_client_version=v(1, 2, 676))
        server.start()

        response = server.receive_request(
            HandshakeRequest(protocol_version=v(1, 2, 700)).dump()
        )

        decoded = HandshakeResponse.load(response)

        assert decoded.accepted is True
        assert decoded.protocol_version == v(1, 2, 800)
        assert server.state == HandshakeState.VALIDATED
        assert server.rejection is None

    def test_threshold_is_inclusive(self):
        server = ServerHandshake(local_version=v(1, 2, 800), min_client_version=v(1, 2, 676))
        server.start()

        server.receive_request(HandshakeRequest(protocol_version=v(1, 2, 676)).dump())

        assert server.validated

    def test_malformed_request_rejects(self):
        server = ServerHandshake()
        server.start()

        with pytest.raises(HandshakeMessageError):
            server.receive_request(b'{"protocol_version": "1.2.3"}')

        assert server.state == HandshakeState.REJECTED


class TestConnectingSide:
    """The client requires servers at 1.2.770 or later."""

    def test_old_server_rejected(self):
        client = ClientHandshake(
            local_version=v(1, 2, 873),
            min_server_version=v(1, 2, 770),
            witness=Feature.EXPIRE_IN_MILLIS,
        )
        server = ServerHandshake(local_version=v(1, 2, 750), min_client_version=v(1, 2, 676))

        with pytest.raises(VersionIncompatibleError) as err:
            run_exchange(client, server)

        assert err.value.side == IncompatibleSide.SERVER_TOO_OLD
        assert err.value.peer_version == v(1, 2, 750)
        assert err.value.required_version == v(1, 2, 770)
        assert str(err.value) == (
            "Invalid: server protocol_version(1.2.750) < client required(1.2.770) "
            "for feature expire_in_millis"
        )
        assert client.state == HandshakeState.REJECTED

    def test_diagnostic_without_witness(self):
        client = ClientHandshake(
            local_version=v(1, 2, 873),
            min_server_version=v(1, 2, 770),
            witness=None,
        )
        server = ServerHandshake(local_version=v(1, 2, 750), min_client_version=v(1, 2, 676))

        with pytest.raises(VersionIncompatibleError) as err:
            run_exchange(client, server)

        assert str(err.value) == (
            "Invalid: server protocol_version(1.2.750) < client required(1.2.770)"
        )

    def test_server_rejection_surfaces_as_client_too_old(self):
        client = ClientHandshake(local_version=v(1, 2, 500))
        client.start()

        notice = HandshakeResponse(
            accepted=False,
            error="Invalid: client protocol_version(1.2.500) < server required(1.2.676)",
            required_version=v(1, 2, 676),
            witness="transaction/reply_error",
        ).dump()

        with pytest.raises(VersionIncompatibleError) as err:
            client.receive_response(notice)

        assert err.value.side == IncompatibleSide.CLIENT_TOO_OLD
        assert err.value.required_version == v(1, 2, 676)
        assert client.state == HandshakeState.REJECTED
        assert client.peer_version is None

    def test_rejection_below_own_version_is_malformed(self):
        client = ClientHandshake(local_version=v(1, 2, 700))
        client.start()

        notice = HandshakeResponse(
            accepted=False,
            error="Invalid: client protocol_version(1.2.700) < server required(1.2.676)",
            required_version=v(1, 2, 676),
        ).dump()

        with pytest.raises(HandshakeMessageError, match="already meets"):
            client.receive_response(notice)

        assert client.state == HandshakeState.REJECTED

    def test_accepted_response_without_version_rejects(self):
        client = ClientHandshake()
        client.start()

        with pytest.raises(HandshakeMessageError):
            client.receive_response(HandshakeResponse(accepted=True).dump())

        assert client.state == HandshakeState.REJECTED

    def test_defaults_use_published_thresholds(self):
        client = ClientHandshake()
        server = ServerHandshake()

        assert client.local_version == BUILD_VERSION
        assert client.required_version == MIN_SERVER_VERSION
        assert server.required_version == MIN_CLIENT_VERSION

        assert run_exchange(client, server) == BUILD_VERSION
        assert client.validated
        assert server.validated


class TestStepOrdering:

    def test_client_cannot_receive_before_sending(self):
        client = ClientHandshake()

        with pytest.raises(HandshakeStateError):
            client.receive_response(
                HandshakeResponse(accepted=True, protocol_version=BUILD_VERSION).dump()
            )

        assert client.state == HandshakeState.START

    def test_client_cannot_send_twice(self):
        client = ClientHandshake()
        client.start()

        with pytest.raises(HandshakeStateError):
            client.start()

    def test_server_cannot_receive_before_start(self):
        server = ServerHandshake()

        with pytest.raises(HandshakeStateError):
            server.receive_request(HandshakeRequest(protocol_version=BUILD_VERSION).dump())

    def test_rejected_handshake_is_not_retried(self):
        server = ServerHandshake(min_client_version=v(1, 2, 676))
        server.start()

        with pytest.raises(VersionIncompatibleError):
            server.receive_request(HandshakeRequest(protocol_version=v(1, 2, 500)).dump())

        with pytest.raises(HandshakeStateError):
            server.receive_request(HandshakeRequest(protocol_version=v(1, 2, 700)).dump())

        assert server.state == HandshakeState.REJECTED

    def test_abandon_rejects(self):
        client = ClientHandshake()
        client.start()
        client.abandon()

        assert client.state == HandshakeState.REJECTED
        assert client.state.is_terminal
