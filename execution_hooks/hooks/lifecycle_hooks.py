"""
Lifecycle hooks registered with the n8n host.

Each hook is an async callable. None of them raises: database and extraction
problems are logged and the host carries on with the workflow.
"""

import json
from typing import Any

from execution_hooks.core.logger import LoggerManager
from execution_hooks.services.execution_log_service import ExecutionLogService
from execution_hooks.utils.run_data_utils import get_field, workflow_label

logger = LoggerManager.get_instance().hooks


async def on_ready() -> None:
    logger.info("[HOOK] n8n.ready - Server is ready!")
    await ExecutionLogService.verify_connection()


async def on_workflow_activate(updated_workflow: Any) -> None:
    logger.info(f"[HOOK] workflow.activate: {workflow_label(updated_workflow)}")


async def on_workflow_create(created_workflow: Any) -> None:
    logger.info(f"[HOOK] workflow.create: {workflow_label(created_workflow)}")


async def on_workflow_update(updated_workflow: Any) -> None:
    logger.info(f"[HOOK] workflow.update: {workflow_label(updated_workflow)}")


async def on_workflow_pre_execute(workflow: Any, mode: Any = None) -> None:
    logger.info(f"[HOOK] workflow.preExecute: {get_field(workflow, 'name')} mode: {mode}")


async def on_workflow_post_execute(full_run_data: Any, workflow_data: Any, execution_id: Any) -> None:
    """
    Record a finished execution.

    Args:
        full_run_data: Run data of the whole execution
        workflow_data: Workflow definition that was executed
        execution_id: Host execution identifier
    """
    try:
        log = ExecutionLogService.build_execution_log(full_run_data, workflow_data, execution_id)
    except Exception as e:
        logger.error(f"[HOOK] workflow.postExecute: could not read run data for {execution_id}: {e}", exc_info=True)
        return

    summary = ExecutionLogService.summarize(log, full_run_data)
    logger.info(f"[HOOK] workflow.postExecute: {json.dumps(summary, indent=2, default=str)}")

    await ExecutionLogService.log_execution(log)
