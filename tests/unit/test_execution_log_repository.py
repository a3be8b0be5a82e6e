"""
Unit tests for ExecutionLogRepository.

Tests statement construction and error handling with a mocked session.
"""
import pytest
from unittest.mock import AsyncMock, MagicMock
from sqlalchemy.dialects import postgresql
from sqlalchemy.ext.asyncio import AsyncSession

from execution_hooks.models.execution_log import ExecutionLog
from execution_hooks.repositories.execution_log_repository import ExecutionLogRepository
from execution_hooks.schemas.execution_log import ExecutionLogCreate


def make_session(dialect_name="postgresql"):
    session = AsyncMock(spec=AsyncSession)
    session.bind = MagicMock()
    session.bind.dialect.name = dialect_name
    return session


@pytest.fixture
def execution_log():
    return ExecutionLogCreate(
        execution_id="exec-1",
        workflow_id="wf-42",
        workflow_name="Sync leads",
        status="success",
        finished=True,
        duration_ms=1250,
        node_count=2,
        execution_data={"nodeOutputs": {}},
        workflow_data={"id": "wf-42"},
    )


class TestExecutionLogRepository:
    """Test cases for ExecutionLogRepository."""

    def test_repository_initialization(self):
        session = make_session()
        repo = ExecutionLogRepository(session)

        assert repo.session == session
        assert repo.model == ExecutionLog

    @pytest.mark.asyncio
    async def test_insert_uses_on_conflict_do_nothing(self, execution_log):
        session = make_session()
        result = MagicMock()
        result.scalar_one_or_none.return_value = 1
        session.execute.return_value = result

        inserted = await ExecutionLogRepository(session).insert_ignore_conflict(execution_log)

        assert inserted is True
        session.commit.assert_awaited_once()
        stmt = session.execute.call_args[0][0]
        sql = str(stmt.compile(dialect=postgresql.dialect()))
        assert "INSERT INTO n8n_execution_logs" in sql
        assert "ON CONFLICT (execution_id) DO NOTHING" in sql
        assert "RETURNING n8n_execution_logs.id" in sql

    @pytest.mark.asyncio
    async def test_insert_conflict_returns_false(self, execution_log):
        session = make_session("sqlite")
        result = MagicMock()
        result.scalar_one_or_none.return_value = None
        session.execute.return_value = result

        inserted = await ExecutionLogRepository(session).insert_ignore_conflict(execution_log)

        assert inserted is False

    @pytest.mark.asyncio
    async def test_insert_failure_rolls_back_and_raises(self, execution_log):
        session = make_session()
        session.execute.side_effect = RuntimeError("connection lost")

        with pytest.raises(RuntimeError, match="connection lost"):
            await ExecutionLogRepository(session).insert_ignore_conflict(execution_log)

        session.rollback.assert_awaited_once()
        session.commit.assert_not_called()

    @pytest.mark.asyncio
    async def test_unsupported_dialect(self, execution_log):
        session = make_session("mssql")

        with pytest.raises(NotImplementedError):
            await ExecutionLogRepository(session).insert_ignore_conflict(execution_log)

    @pytest.mark.asyncio
    async def test_get_by_execution_id(self):
        session = make_session()
        log = MagicMock(spec=ExecutionLog)
        result = MagicMock()
        result.scalars.return_value.first.return_value = log
        session.execute.return_value = result

        found = await ExecutionLogRepository(session).get_by_execution_id("exec-1")

        assert found is log
        session.execute.assert_awaited_once()

