##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Transaction coordinator wrapping a unit-of-work in a Mongo transaction.

Every call to `run_transaction` owns one driver session. The unit-of-work
receives a `TransactionSession` and performs its operations through it:

    async def transfer(session):
        accounts = store.model("account").collection
        await accounts.update_one({"_id": src}, {"$inc": {"balance": -10}}, session=session.driver_session)
        await accounts.update_one({"_id": dst}, {"$inc": {"balance": 10}}, session=session.driver_session)
        return "done"

    result = await store.transaction(transfer, write_concern="majority")

Returning from the unit-of-work commits, raising rolls back. The unit-of-work
may also settle the session itself through `session.commit(result)` or
`session.rollback(error)`. Only the first settlement takes effect.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Union

from pymongo.asynchronous.client_session import AsyncClientSession
from pymongo.asynchronous.mongo_client import AsyncMongoClient
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from mongostore.common.enums import TransactionState
from mongostore.exceptions import TransactionRolledBackError, TransactionTimeoutError
from mongostore.exceptions.error_parser import parse_error


LOG = logging.getLogger(__name__)

UnitOfWork = Callable[["TransactionSession"], Union[Awaitable[Any], Any]]


def to_read_concern(value: Union[str, Dict, ReadConcern, None]) -> Optional[ReadConcern]:
    """
    Convert a read concern setting to a driver `ReadConcern`.

    Args:
        value: A level such as `"majority"`, keyword arguments for `ReadConcern`,
            a `ReadConcern`, or None.

    Returns:
        The read concern, or None to inherit the client's.
    """
    if value is None or isinstance(value, ReadConcern):
        return value
    if isinstance(value, dict):
        return ReadConcern(**value)
    return ReadConcern(level=value)


def to_write_concern(value: Union[str, int, Dict, WriteConcern, None]) -> Optional[WriteConcern]:
    """
    Convert a write concern setting to a driver `WriteConcern`.

    Args:
        value: A `w` value such as `"majority"` or `1`, keyword arguments for
            `WriteConcern`, a `WriteConcern`, or None.

    Returns:
        The write concern, or None to inherit the client's.
    """
    if value is None or isinstance(value, WriteConcern):
        return value
    if isinstance(value, dict):
        return WriteConcern(**value)
    return WriteConcern(w=value)


class TransactionSession:
    """
    A driver session settled exactly once, by a commit or a rollback.

    Attributes:
        driver_session (AsyncClientSession): The driver session to pass to
            collection operations as `session=`.
        settled (bool): Whether the session was committed or rolled back.
        state (TransactionState): Where the session is in its lifecycle.

    Methods:
        commit: Commit the transaction and resolve with a result.
        rollback: Abort the transaction and fail with an error.
        outcome: Return the settled result or raise the settled error.
    """

    def __init__(self, driver_session: AsyncClientSession):
        """
        Args:
            driver_session: The driver session the transaction runs on.
        """
        self.driver_session = driver_session
        self.settled = False
        self.state = TransactionState.STARTING
        self._result: Any = None
        self._error: Optional[BaseException] = None

    async def commit(self, result: Any = None):
        """
        Commit the transaction. Does nothing if the session is already settled.

        If the commit fails, the transaction fails with the commit error and
        `result` is discarded.

        Args:
            result: The value the transaction resolves with.
        """
        if self.settled:
            return
        self.settled = True
        self.state = TransactionState.COMMITTING

        try:
            await self.driver_session.commit_transaction()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            parse_error(exc)
            self._error = exc
        else:
            self._result = result
        self.state = TransactionState.SETTLED

    async def rollback(self, error: BaseException = None):
        """
        Abort the transaction. Does nothing if the session is already settled.

        Errors raised while aborting are logged and dropped; the transaction
        always fails with `error`.

        Args:
            error: The error that caused the rollback. A `TransactionRolledBackError`
                is used if none is given.
        """
        if self.settled:
            return
        self.settled = True
        self.state = TransactionState.ROLLING_BACK

        if error is None:
            error = TransactionRolledBackError("Transaction rolled back")

        try:
            await self.driver_session.abort_transaction()
        except Exception as exc:  # pylint: disable=broad-exception-caught
            LOG.debug(f"Ignoring error raised while aborting a transaction: {exc!r}")

        parse_error(error)
        self._error = error
        self.state = TransactionState.SETTLED

    def outcome(self) -> Any:
        """
        Return the result the session was committed with.

        Returns:
            The committed result.

        Raises:
            RuntimeError: If the session isn't settled yet.
            Exception: The rollback cause or the commit error, if the transaction failed.
        """
        if not self.settled:
            raise RuntimeError("The transaction session has not been settled")
        if self._error is not None:
            raise self._error
        return self._result


async def _run_unit_of_work(unit_of_work: UnitOfWork, session: TransactionSession, timeout: Optional[float]) -> Any:
    """
    Invoke the unit-of-work, bounded by `timeout` seconds if one is given.

    Errors raised by the unit-of-work propagate unchanged, a `TimeoutError`
    from one of its own operations included.

    Raises:
        TransactionTimeoutError: If the unit-of-work runs longer than `timeout`.
    """
    outcome = unit_of_work(session)
    if not inspect.isawaitable(outcome):
        return outcome
    if timeout is None:
        return await outcome

    task = asyncio.ensure_future(outcome)
    try:
        done, _ = await asyncio.wait({task}, timeout=timeout)
    except asyncio.CancelledError:
        await _cancel(task)
        raise
    if task in done:
        return task.result()

    await _cancel(task)
    raise TransactionTimeoutError(f"Transaction did not finish within {timeout} seconds")


async def _cancel(task: asyncio.Future):
    """Cancel the task and wait until it has stopped."""
    task.cancel()
    await asyncio.wait({task})


async def run_transaction(
    client: AsyncMongoClient,
    unit_of_work: UnitOfWork,
    read_concern: Union[str, Dict, ReadConcern, None] = None,
    write_concern: Union[str, int, Dict, WriteConcern, None] = None,
    timeout: Optional[float] = None,
) -> Any:
    """
    Run `unit_of_work` inside a transaction and settle it exactly once.

    Args:
        client: The connected driver client.
        unit_of_work: A function, usually a coroutine function, called with the
            `TransactionSession`.
        read_concern: The read concern of the transaction.
        write_concern: The write concern of the transaction.
        timeout: Seconds the unit-of-work may run before the transaction is
            rolled back. None means no limit.

    Returns:
        The value the unit-of-work returned, once committed.

    Raises:
        Exception: The error that failed the session start, the error that
            triggered the rollback, or the commit error.
    """
    try:
        driver_session = client.start_session()
    except Exception as exc:
        parse_error(exc)
        raise

    session = TransactionSession(driver_session)
    try:
        try:
            await driver_session.start_transaction(
                read_concern=to_read_concern(read_concern), write_concern=to_write_concern(write_concern)
            )
        except Exception as exc:
            parse_error(exc)
            raise
        session.state = TransactionState.ACTIVE

        try:
            result = await _run_unit_of_work(unit_of_work, session, timeout)
        except asyncio.CancelledError:
            await session.rollback(TransactionRolledBackError("Transaction cancelled"))
            raise
        except Exception as exc:  # pylint: disable=broad-exception-caught
            await session.rollback(exc)
        else:
            await session.commit(result)

        return session.outcome()
    finally:
        await _end_session(driver_session)


async def _end_session(driver_session: AsyncClientSession):
    """
    End the driver session. The transaction is already settled at this point,
    so a failure here only gets logged.
    """
    try:
        await driver_session.end_session()
    except Exception as exc:  # pylint: disable=broad-exception-caught
        LOG.warning(f"Could not end the transaction session: {exc!r}")
