##############################################################################
# Copyright (c) Lawrence Livermore National Security, LLC and other Mongostore
# Project developers. See top-level LICENSE and COPYRIGHT files for dates and
# other details. No copyright assignment is required to contribute to Mongostore.
##############################################################################

"""
Tests for the `transaction.py` module.
"""

import asyncio

import pytest
from pymongo.errors import ConnectionFailure, OperationFailure
from pymongo.read_concern import ReadConcern
from pymongo.write_concern import WriteConcern

from mongostore.common.enums import TransactionState
from mongostore.exceptions import STORE_NAMESPACE, TransactionRolledBackError, TransactionTimeoutError
from mongostore.transaction import TransactionSession, run_transaction, to_read_concern, to_write_concern
from tests.fixtures.driver import FakeClient, FakeDriverSession


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("majority", ReadConcern(level="majority")),
        ({"level": "snapshot"}, ReadConcern(level="snapshot")),
    ],
)
def test_to_read_concern(value, expected):
    """
    Test the conversion of read concern settings.

    Args:
        value: The read concern setting.
        expected: The `ReadConcern` we expect.
    """
    assert to_read_concern(value) == expected


@pytest.mark.parametrize(
    "value, expected",
    [
        (None, None),
        ("majority", WriteConcern(w="majority")),
        (1, WriteConcern(w=1)),
        ({"w": "majority", "wtimeout": 500}, WriteConcern(w="majority", wtimeout=500)),
    ],
)
def test_to_write_concern(value, expected):
    """
    Test the conversion of write concern settings.

    Args:
        value: The write concern setting.
        expected: The `WriteConcern` we expect.
    """
    assert to_write_concern(value) == expected


def test_concern_objects_pass_through():
    """
    Test that driver concern objects are used as they are.
    """
    read_concern = ReadConcern(level="local")
    write_concern = WriteConcern(w=2)
    assert to_read_concern(read_concern) is read_concern
    assert to_write_concern(write_concern) is write_concern


class TestTransactionSession:
    """
    Tests for settling a `TransactionSession` directly.
    """

    @pytest.mark.asyncio
    async def test_commit_then_rollback_is_ignored(self, driver_session: FakeDriverSession):
        """
        Test that a rollback after a commit has no effect.

        Args:
            driver_session: A fake driver session.
        """
        session = TransactionSession(driver_session)
        await session.commit("first")
        await session.rollback(ValueError("late"))

        assert driver_session.calls == ["commit_transaction"]
        assert session.state == TransactionState.SETTLED
        assert session.outcome() == "first"

    @pytest.mark.asyncio
    async def test_rollback_then_commit_is_ignored(self, driver_session: FakeDriverSession):
        """
        Test that a commit after a rollback has no effect.

        Args:
            driver_session: A fake driver session.
        """
        session = TransactionSession(driver_session)
        error = ValueError("first")
        await session.rollback(error)
        await session.commit("late")

        assert driver_session.calls == ["abort_transaction"]
        with pytest.raises(ValueError, match="first"):
            session.outcome()

    @pytest.mark.asyncio
    async def test_rollback_without_error(self, driver_session: FakeDriverSession):
        """
        Test that a rollback without a cause fails with a `TransactionRolledBackError`.

        Args:
            driver_session: A fake driver session.
        """
        session = TransactionSession(driver_session)
        await session.rollback()

        with pytest.raises(TransactionRolledBackError) as excinfo:
            session.outcome()
        assert excinfo.value.code == "STORE.TRANSACTION_ROLLBACK"

    def test_outcome_before_settling(self, driver_session: FakeDriverSession):
        """
        Test that asking for the outcome of an unsettled session raises.

        Args:
            driver_session: A fake driver session.
        """
        session = TransactionSession(driver_session)
        assert session.state == TransactionState.STARTING
        with pytest.raises(RuntimeError):
            session.outcome()


class TestRunTransaction:
    """
    Tests for the `run_transaction` coordinator.
    """

    @pytest.mark.asyncio
    async def test_success_commits_once(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a unit-of-work that returns commits exactly once and resolves with its value.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """

        async def unit_of_work(session):
            assert session.driver_session is driver_session
            return {"inserted": 2}

        result = await run_transaction(driver_client, unit_of_work)

        assert result == {"inserted": 2}
        assert driver_session.calls == ["start_transaction", "commit_transaction", "end_session"]

    @pytest.mark.asyncio
    async def test_sync_unit_of_work(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a plain function works as a unit-of-work.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """
        assert await run_transaction(driver_client, lambda session: 42) == 42
        assert "commit_transaction" in driver_session.calls

    @pytest.mark.asyncio
    async def test_error_rolls_back(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a failing unit-of-work is rolled back, never committed, and its error propagates.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """

        async def unit_of_work(session):
            raise ValueError("invalid transfer")

        with pytest.raises(ValueError, match="invalid transfer"):
            await run_transaction(driver_client, unit_of_work)

        assert "abort_transaction" in driver_session.calls
        assert "commit_transaction" not in driver_session.calls
        assert driver_session.ended

    @pytest.mark.asyncio
    async def test_abort_failure_is_ignored(self):
        """
        Test that an error raised while aborting doesn't replace the original error.
        """
        driver_session = FakeDriverSession(errors={"abort_transaction": ConnectionFailure("gone")})

        async def unit_of_work(session):
            raise ValueError("original")

        with pytest.raises(ValueError, match="original"):
            await run_transaction(FakeClient(session=driver_session), unit_of_work)
        assert driver_session.ended

    @pytest.mark.asyncio
    async def test_commit_failure_raises(self):
        """
        Test that a failing commit fails the transaction with the commit error, tagged.
        """
        commit_error = OperationFailure("write conflict", code=112)
        driver_session = FakeDriverSession(errors={"commit_transaction": commit_error})

        async def unit_of_work(session):
            return "discarded"

        with pytest.raises(OperationFailure) as excinfo:
            await run_transaction(FakeClient(session=driver_session), unit_of_work)

        assert excinfo.value is commit_error
        assert excinfo.value.ns == STORE_NAMESPACE
        assert excinfo.value.store_code == "STORE.DATA_VERSION"
        assert "abort_transaction" not in driver_session.calls

    @pytest.mark.asyncio
    async def test_explicit_rollback_wins(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a rollback requested by the unit-of-work wins over its return.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """

        async def unit_of_work(session):
            await session.rollback(KeyError("missing account"))
            return "ignored"

        with pytest.raises(KeyError, match="missing account"):
            await run_transaction(driver_client, unit_of_work)

        assert driver_session.calls == ["start_transaction", "abort_transaction", "end_session"]

    @pytest.mark.asyncio
    async def test_explicit_commit_wins(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a commit requested by the unit-of-work keeps its result even if it raises afterwards.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """

        async def unit_of_work(session):
            await session.commit("committed early")
            raise RuntimeError("after commit")

        assert await run_transaction(driver_client, unit_of_work) == "committed early"
        assert driver_session.calls.count("commit_transaction") == 1
        assert "abort_transaction" not in driver_session.calls

    @pytest.mark.asyncio
    async def test_timeout_rolls_back(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that a unit-of-work running past the timeout is rolled back.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """

        async def unit_of_work(session):
            await asyncio.sleep(5)

        with pytest.raises(TransactionTimeoutError) as excinfo:
            await run_transaction(driver_client, unit_of_work, timeout=0.01)

        assert excinfo.value.code == "STORE.TRANSACTION_TIMEOUT"
        assert "abort_transaction" in driver_session.calls
        assert "commit_transaction" not in driver_session.calls

    @pytest.mark.asyncio
    async def test_own_timeout_error_is_not_replaced(
        self, driver_client: FakeClient, driver_session: FakeDriverSession
    ):
        """
        Test that a `TimeoutError` raised by the unit-of-work itself propagates as is
        when the transaction deadline hasn't expired.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """
        error = TimeoutError("driver operation timed out")

        async def unit_of_work(session):
            raise error

        with pytest.raises(TimeoutError) as excinfo:
            await run_transaction(driver_client, unit_of_work, timeout=5)

        assert excinfo.value is error
        assert not isinstance(excinfo.value, TransactionTimeoutError)
        assert "abort_transaction" in driver_session.calls

    @pytest.mark.asyncio
    async def test_timeout_stops_unit_of_work(self, driver_client: FakeClient):
        """
        Test that a unit-of-work past the timeout is cancelled before the rollback is reported.

        Args:
            driver_client: A fake driver client.
        """
        stopped = []

        async def unit_of_work(session):
            try:
                await asyncio.sleep(5)
            finally:
                stopped.append(True)

        with pytest.raises(TransactionTimeoutError):
            await run_transaction(driver_client, unit_of_work, timeout=0.01)
        assert stopped == [True]

    @pytest.mark.asyncio
    async def test_cancellation_rolls_back(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that cancelling the task running a transaction rolls it back.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """
        started = asyncio.Event()

        async def unit_of_work(session):
            started.set()
            await asyncio.sleep(5)

        task = asyncio.ensure_future(run_transaction(driver_client, unit_of_work))
        await started.wait()
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task
        assert "abort_transaction" in driver_session.calls
        assert driver_session.ended

    @pytest.mark.asyncio
    async def test_concerns_are_passed_to_driver(self, driver_client: FakeClient, driver_session: FakeDriverSession):
        """
        Test that the read and write concerns reach `start_transaction`.

        Args:
            driver_client: A fake driver client.
            driver_session: The session `driver_client` hands out.
        """
        await run_transaction(driver_client, lambda session: None, read_concern="snapshot", write_concern="majority")

        assert driver_session.transaction_options == {
            "read_concern": ReadConcern(level="snapshot"),
            "write_concern": WriteConcern(w="majority"),
        }

    @pytest.mark.asyncio
    async def test_session_start_failure(self):
        """
        Test that a session that can't be started fails without calling the unit-of-work.
        """
        start_error = ConnectionFailure("no server")
        called = []

        with pytest.raises(ConnectionFailure) as excinfo:
            await run_transaction(FakeClient(start_error=start_error), called.append)

        assert called == []
        assert excinfo.value.ns == STORE_NAMESPACE
        assert excinfo.value.store_code == "DATABASE_ERROR"

    @pytest.mark.asyncio
    async def test_transaction_start_failure_ends_session(self):
        """
        Test that the driver session is ended when the transaction can't start.
        """
        driver_session = FakeDriverSession(errors={"start_transaction": OperationFailure("not a replica set")})

        with pytest.raises(OperationFailure):
            await run_transaction(FakeClient(session=driver_session), lambda session: None)

        assert driver_session.calls == ["start_transaction", "end_session"]

    @pytest.mark.asyncio
    async def test_end_session_failure_is_logged(self, caplog):
        """
        Test that failing to end the session doesn't change the outcome.

        Args:
            caplog: PyTest caplog fixture.
        """
        driver_session = FakeDriverSession(errors={"end_session": ConnectionFailure("gone")})

        assert await run_transaction(FakeClient(session=driver_session), lambda session: "ok") == "ok"
        assert "Could not end the transaction session" in caplog.text

    @pytest.mark.asyncio
    async def test_driver_error_is_tagged(self, driver_client: FakeClient):
        """
        Test that a driver error raised by the unit-of-work comes out tagged as a store error.

        Args:
            driver_client: A fake driver client.
        """

        async def unit_of_work(session):
            raise OperationFailure("E11000 duplicate key error", code=11000)

        with pytest.raises(OperationFailure) as excinfo:
            await run_transaction(driver_client, unit_of_work)

        assert excinfo.value.ns == STORE_NAMESPACE
        assert excinfo.value.store_code == "STORE.DATA"
