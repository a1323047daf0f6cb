"""
Run the handshake over a transport.

connect() drives the connecting end, accept() the accepting end. Each
performs exactly one round trip before any other traffic and either
returns a VALIDATED handshake or closes the transport and raises.

Only the two published thresholds are consulted. A peer built with stale
thresholds can pass this check and still fail later when it calls a
feature the other side no longer has; features are not negotiated here.
"""

import asyncio

from meta_version.env import Env, load_env
from meta_version.errors.handshake import (
    HandshakeError,
    HandshakeTimeoutError,
    VersionIncompatibleError,
)
from meta_version.logging import Logger
from meta_version.logging.meta_version_logging_models import (
    HandshakeDebug,
    HandshakeFailure,
    HandshakeInfo,
    HandshakeWarning,
)

from .base import Handshake
from .client import ClientHandshake
from .server import ServerHandshake
from .transport import HandshakeTransport


async def connect(
    transport: HandshakeTransport,
    env: Env | None = None,
    logger: Logger | None = None,
    handshake: ClientHandshake | None = None,
) -> ClientHandshake:
    """
    Validate a new connection from the connecting (client) end.

    Args:
        transport: The freshly opened connection.
        env: Configuration, for the handshake timeout. Loaded from the
            environment when omitted.
        logger: Receives the handshake outcome.
        handshake: State machine to drive. Defaults to one using this
            build's version and MIN_SERVER_VERSION.

    Returns:
        The VALIDATED handshake, with the server's version.

    Raises:
        VersionIncompatibleError: Either side is too old for the other.
        HandshakeTimeoutError: The server did not answer in time.
        HandshakeError: The exchange failed otherwise.
    """
    if handshake is None:
        handshake = ClientHandshake()

    timeout: float | None = None

    try:
        if env is None:
            env = load_env()

        timeout = env.handshake_timeout

        await _log(
            logger,
            HandshakeDebug(
                message="Sending handshake request",
                role=handshake.role.value,
                peer=transport.peer,
                local_version=str(handshake.local_version),
            ),
        )

        await transport.send(handshake.start())

        response = await asyncio.wait_for(
            transport.receive(),
            timeout,
        )

        handshake.receive_response(response)

        await _accepted(handshake, transport, logger)

    except asyncio.TimeoutError:
        error = HandshakeTimeoutError(timeout)
        await _fail(handshake, transport, logger, error)
        raise error from None

    except VersionIncompatibleError as err:
        await _reject(handshake, transport, logger, err)
        raise

    except (HandshakeError, OSError) as err:
        await _fail(handshake, transport, logger, err)
        raise

    except BaseException:
        # Cancellation, configuration and logging failures.
        handshake.abandon()
        await transport.close()
        raise

    return handshake


async def accept(
    transport: HandshakeTransport,
    env: Env | None = None,
    logger: Logger | None = None,
    handshake: ServerHandshake | None = None,
) -> ServerHandshake:
    """
    Validate a new connection from the accepting (server) end.

    Args:
        transport: The freshly accepted connection.
        env: Configuration, for the handshake timeout. Loaded from the
            environment when omitted.
        logger: Receives the handshake outcome.
        handshake: State machine to drive. Defaults to one using this
            build's version and MIN_CLIENT_VERSION.

    Returns:
        The VALIDATED handshake, with the client's version.

    Raises:
        VersionIncompatibleError: The client is too old. The rejection
            notice has been sent and the transport closed.
        HandshakeTimeoutError: The client did not send its version in time.
        HandshakeError: The exchange failed otherwise.
    """
    if handshake is None:
        handshake = ServerHandshake()

    timeout: float | None = None

    try:
        if env is None:
            env = load_env()

        timeout = env.handshake_timeout

        handshake.start()

        request = await asyncio.wait_for(
            transport.receive(),
            timeout,
        )

        response = handshake.receive_request(request)
        await transport.send(response)

        await _accepted(handshake, transport, logger)

    except asyncio.TimeoutError:
        error = HandshakeTimeoutError(timeout)
        await _fail(handshake, transport, logger, error)
        raise error from None

    except VersionIncompatibleError as err:
        if handshake.rejection is not None:
            try:
                await transport.send(handshake.rejection)

            except (HandshakeError, OSError) as send_error:
                err.add_note(f"Rejection notice not delivered: {send_error}")

        await _reject(handshake, transport, logger, err)
        raise

    except (HandshakeError, OSError) as err:
        await _fail(handshake, transport, logger, err)
        raise

    except BaseException:
        # Cancellation, configuration and logging failures.
        handshake.abandon()
        await transport.close()
        raise

    return handshake


async def _accepted(
    handshake: Handshake,
    transport: HandshakeTransport,
    logger: Logger | None,
):
    await _log(
        logger,
        HandshakeInfo(
            message=f"Handshake validated with {handshake.role.value} peer",
            role=handshake.role.value,
            peer=transport.peer,
            local_version=str(handshake.local_version),
            peer_version=str(handshake.peer_version),
        ),
    )


async def _reject(
    handshake: Handshake,
    transport: HandshakeTransport,
    logger: Logger | None,
    error: VersionIncompatibleError,
):
    handshake.abandon()

    # A client rejected by the server never learns the server's version.
    peer_version = handshake.peer_version

    try:
        await _log(
            logger,
            HandshakeWarning(
                message=str(error),
                role=handshake.role.value,
                peer=transport.peer,
                local_version=str(handshake.local_version),
                peer_version=str(peer_version) if peer_version else None,
                required_version=str(error.required_version),
                witness=getattr(error.witness, "value", error.witness),
            ),
            error=error,
        )

    finally:
        await transport.close()


async def _fail(
    handshake: Handshake,
    transport: HandshakeTransport,
    logger: Logger | None,
    error: Exception,
):
    handshake.abandon()

    try:
        await _log(
            logger,
            HandshakeFailure(
                message="Handshake failed",
                role=handshake.role.value,
                peer=transport.peer,
                local_version=str(handshake.local_version),
                error=str(error),
            ),
            error=error,
        )

    finally:
        await transport.close()


async def _log(
    logger: Logger | None,
    entry,
    error: Exception | None = None,
):
    """
    Write `entry` to the handshake log.

    When logging an `error` that is about to be raised, a failure to write
    the entry is attached to that error as a note instead of replacing it.
    """
    if logger is None:
        return

    try:
        await logger.log(entry, name="handshake")

    except (ValueError, OSError) as log_error:
        if error is None:
            raise

        error.add_note(f"Handshake log entry not written: {log_error}")
