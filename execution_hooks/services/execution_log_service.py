"""
Service for recording n8n execution summaries.

This module turns the objects n8n hands to its postExecute hook into an
ExecutionLog row and stores it. Database problems are logged and swallowed
here so they never reach the host.
"""

from typing import Any, Dict, List, Optional

from execution_hooks.core.logger import LoggerManager
from execution_hooks.db import session as db_session
from execution_hooks.repositories.execution_log_repository import ExecutionLogRepository
from execution_hooks.schemas.execution_log import (
    ExecutionLogCreate,
    ExecutionLogResponse,
    ExecutionLogSummary,
)
from execution_hooks.utils.run_data_utils import (
    compute_duration_ms,
    extract_node_outputs,
    get_field,
    get_path,
    parse_timestamp,
    resolve_status,
    sanitize_for_database,
)

# Get logger from the centralized logging system
logger = LoggerManager.get_instance().hooks


def _as_text(value: Any) -> Optional[str]:
    """Host values stored in text columns may be numbers or objects."""
    if value is None:
        return None
    return value if isinstance(value, str) else str(value)


class ExecutionLogService:
    """
    Service for building and persisting execution logs.

    This service handles:
    - Extracting node outputs and timing from host run data
    - Writing one row per execution, ignoring repeats
    - Reading stored executions back
    """

    @staticmethod
    def build_execution_log(run_data: Any, workflow_data: Any, execution_id: Any) -> ExecutionLogCreate:
        """
        Build the row to store for a finished execution.

        Args:
            run_data: Full run data passed to postExecute
            workflow_data: Workflow definition passed to postExecute
            execution_id: Host execution identifier

        Returns:
            ExecutionLogCreate ready for insertion

        Raises:
            ValueError: If the host passed no execution id.
        """
        if execution_id is None or execution_id == "":
            raise ValueError("execution id is missing")

        result_data = get_path(run_data, "data", "resultData", "runData", default={})
        if not isinstance(result_data, dict):
            result_data = {}

        started_at = get_field(run_data, "startedAt")
        stopped_at = get_field(run_data, "stoppedAt")
        workflow_id = get_field(workflow_data, "id")

        return ExecutionLogCreate(
            execution_id=str(execution_id),
            workflow_id=_as_text(workflow_id),
            workflow_name=_as_text(get_field(workflow_data, "name")),
            status=resolve_status(run_data),
            finished=bool(get_field(run_data, "finished", False)),
            started_at=parse_timestamp(started_at),
            finished_at=parse_timestamp(stopped_at),
            duration_ms=compute_duration_ms(started_at, stopped_at),
            mode=_as_text(get_field(run_data, "mode")),
            node_count=len(result_data),
            error_message=_as_text(get_path(run_data, "data", "resultData", "error", "message")),
            execution_data=sanitize_for_database({
                "nodeOutputs": extract_node_outputs(result_data),
                "lastNodeExecuted": get_path(run_data, "data", "resultData", "lastNodeExecuted"),
                "runData": result_data,
            }),
            workflow_data=sanitize_for_database({
                "id": workflow_id,
                "name": get_field(workflow_data, "name"),
                "nodes": get_field(workflow_data, "nodes"),
                "connections": get_field(workflow_data, "connections"),
                "settings": get_field(workflow_data, "settings"),
            }),
        )

    @staticmethod
    def summarize(log: ExecutionLogCreate, run_data: Any = None) -> Dict[str, Any]:
        """Console summary of an execution, keyed like the host's own objects."""
        return {
            "executionId": log.execution_id,
            "workflowName": log.workflow_name,
            "finished": get_field(run_data, "finished"),
            "status": get_field(run_data, "status"),
            "durationMs": log.duration_ms,
            "nodeCount": log.node_count,
        }

    @staticmethod
    async def log_execution(log: ExecutionLogCreate) -> bool:
        """
        Persist an execution log, never raising.

        Args:
            log: Row to store

        Returns:
            True if a new row was written
        """
        try:
            factory = db_session.get_session_factory()
            if factory is None:
                return False
            async with factory() as session:
                repository = ExecutionLogRepository(session)
                inserted = await repository.insert_ignore_conflict(log)
        except Exception as e:
            logger.error(f"[HOOK] PostgreSQL insert failed: {e}")
            return False

        if inserted:
            logger.info(f"[HOOK] Execution logged to PostgreSQL: {log.execution_id}")
        else:
            logger.info(f"[HOOK] Execution already logged, skipping: {log.execution_id}")
        return inserted

    @staticmethod
    async def verify_connection() -> bool:
        """
        Check that the database answers, never raising.

        Returns:
            True if the connection check succeeded
        """
        try:
            if not db_session.is_available():
                logger.warning("[HOOK] PostgreSQL not available - execution logging is disabled")
                return False
            now = await db_session.check_connection()
        except Exception as e:
            logger.error(f"[HOOK] PostgreSQL connection failed: {e}")
            return False

        logger.info(f"[HOOK] PostgreSQL connection verified at: {now}")
        return True

    @staticmethod
    async def get_execution(execution_id: str) -> Optional[ExecutionLogResponse]:
        """
        Fetch a stored execution.

        Raises:
            RuntimeError: If database logging is disabled.
        """
        factory = db_session.get_session_factory()
        if factory is None:
            raise RuntimeError("Database logging is disabled")

        async with factory() as session:
            log = await ExecutionLogRepository(session).get_by_execution_id(execution_id)
            return ExecutionLogResponse.model_validate(log) if log else None

    @staticmethod
    async def list_executions(workflow_id: Optional[str] = None, limit: int = 20) -> List[ExecutionLogSummary]:
        """
        List recently stored executions, newest first.

        Raises:
            RuntimeError: If database logging is disabled.
        """
        factory = db_session.get_session_factory()
        if factory is None:
            raise RuntimeError("Database logging is disabled")

        async with factory() as session:
            logs = await ExecutionLogRepository(session).list_recent(workflow_id=workflow_id, limit=limit)
            return [ExecutionLogSummary.model_validate(log) for log in logs]
