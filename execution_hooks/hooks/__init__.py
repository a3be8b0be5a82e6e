"""
Hook table exposed to the n8n host.

``HOOKS`` has the same shape as an n8n external hook file: a section per
host component, each mapping an event to a list of callbacks.
"""

from typing import Any, Awaitable, Callable, Dict, List

from execution_hooks.core.logger import LoggerManager

# Configure logging once when the host loads the hooks
logger_manager = LoggerManager.get_instance()
if not logger_manager._initialized:
    logger_manager.initialize()

from execution_hooks.hooks.lifecycle_hooks import (  # noqa: E402
    on_ready,
    on_workflow_activate,
    on_workflow_create,
    on_workflow_post_execute,
    on_workflow_pre_execute,
    on_workflow_update,
)

Hook = Callable[..., Awaitable[None]]

HOOKS: Dict[str, Dict[str, List[Hook]]] = {
    "n8n": {
        "ready": [on_ready],
    },
    "workflow": {
        "activate": [on_workflow_activate],
        "create": [on_workflow_create],
        "update": [on_workflow_update],
        "preExecute": [on_workflow_pre_execute],
        "postExecute": [on_workflow_post_execute],
    },
}


def get_hooks(event: str) -> List[Hook]:
    """
    Look up the callbacks for a dotted event name such as ``workflow.create``.

    Raises:
        KeyError: If no such event is registered.
    """
    section, _, name = event.partition(".")
    try:
        return HOOKS[section][name]
    except KeyError:
        raise KeyError(f"Unknown hook event: {event}") from None


async def run_hook(event: str, *args: Any) -> None:
    """Invoke every callback registered for ``event`` in order."""
    for hook in get_hooks(event):
        await hook(*args)


__all__ = ["HOOKS", "get_hooks", "run_hook"]
