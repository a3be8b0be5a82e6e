"""
Repository for execution log data access.

This module provides database operations for the n8n_execution_logs table.
"""

from typing import List, Optional
from sqlalchemy import desc, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from execution_hooks.core.logger import LoggerManager
from execution_hooks.models.execution_log import ExecutionLog
from execution_hooks.schemas.execution_log import ExecutionLogCreate

# Get logger from the centralized logging system
logger = LoggerManager.get_instance().system

_INSERT_BY_DIALECT = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class ExecutionLogRepository:
    """Repository for execution log data access operations."""

    def __init__(self, session: AsyncSession):
        """
        Initialize repository with session.

        Args:
            session: SQLAlchemy async session
        """
        self.model = ExecutionLog
        self.session = session

    def _insert(self):
        dialect = self.session.bind.dialect.name
        try:
            return _INSERT_BY_DIALECT[dialect](ExecutionLog)
        except KeyError:
            raise NotImplementedError(f"ON CONFLICT inserts are not supported for dialect '{dialect}'")

    async def insert_ignore_conflict(self, data: ExecutionLogCreate) -> bool:
        """
        Insert an execution log unless one already exists for the execution.

        Args:
            data: Row to insert

        Returns:
            True if a row was written, False if the execution_id already existed
        """
        stmt = (
            self._insert()
            .values(**data.model_dump())
            .on_conflict_do_nothing(index_elements=["execution_id"])
            .returning(ExecutionLog.id)
        )
        try:
            result = await self.session.execute(stmt)
            inserted_id = result.scalar_one_or_none()
            await self.session.commit()
            return inserted_id is not None
        except Exception as e:
            logger.error(f"[ExecutionLogRepository.insert_ignore_conflict] Error inserting {data.execution_id}: {e}")
            try:
                await self.session.rollback()
            except Exception as rollback_error:
                logger.error(f"[ExecutionLogRepository.insert_ignore_conflict] Rollback failed: {rollback_error}")
            raise

    async def get_by_execution_id(self, execution_id: str) -> Optional[ExecutionLog]:
        """
        Retrieve the log for a specific execution.

        Args:
            execution_id: ID of the execution

        Returns:
            ExecutionLog if found, None otherwise
        """
        query = select(ExecutionLog).where(ExecutionLog.execution_id == execution_id)
        result = await self.session.execute(query)
        return result.scalars().first()

    async def count_by_execution_id(self, execution_id: str) -> int:
        """Count rows stored for an execution (0 or 1)."""
        query = select(func.count()).select_from(ExecutionLog).where(ExecutionLog.execution_id == execution_id)
        result = await self.session.execute(query)
        return result.scalar_one()

    async def list_recent(
        self,
        workflow_id: Optional[str] = None,
        limit: int = 20,
        offset: int = 0,
    ) -> List[ExecutionLog]:
        """
        List the most recently stored executions.

        Args:
            workflow_id: Only return executions of this workflow
            limit: Maximum number of rows to return
            offset: Number of rows to skip

        Returns:
            List of ExecutionLog objects, newest first
        """
        query = select(ExecutionLog)
        if workflow_id is not None:
            query = query.where(ExecutionLog.workflow_id == workflow_id)
        query = query.order_by(desc(ExecutionLog.id)).offset(offset).limit(limit)

        result = await self.session.execute(query)
        return list(result.scalars().all())
