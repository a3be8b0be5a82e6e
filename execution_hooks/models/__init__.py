from execution_hooks.models.execution_log import ExecutionLog
