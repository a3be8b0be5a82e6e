"""
Helpers for reading the objects n8n passes to its hooks.

The host hands over run data and workflow definitions either as decoded JSON
(dicts) or as objects with attributes. Every lookup here tolerates missing
intermediate values and returns a default instead of raising.
"""

import json
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from pydantic import TypeAdapter, ValidationError

from execution_hooks.core.logger import LoggerManager

logger = LoggerManager.get_instance().hooks

_datetime_adapter = TypeAdapter(datetime)


def get_field(obj: Any, key: str, default: Any = None) -> Any:
    """Read ``key`` from a mapping or an attribute object."""
    if obj is None:
        return default
    if isinstance(obj, dict):
        value = obj.get(key, default)
    else:
        value = getattr(obj, key, default)
    return default if value is None else value


def get_path(obj: Any, *keys: Any, default: Any = None) -> Any:
    """
    Walk nested mappings, objects and sequences.

    Integer keys index into lists. Any missing step returns ``default``.
    """
    current = obj
    for key in keys:
        if current is None:
            return default
        if isinstance(key, int):
            if not isinstance(current, (list, tuple)) or not -len(current) <= key < len(current):
                return default
            current = current[key]
        else:
            current = get_field(current, key)
    return default if current is None else current


def workflow_label(workflow: Any) -> Optional[str]:
    """Identify a workflow by id, falling back to its name."""
    return get_field(workflow, "id") or get_field(workflow, "name")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Convert a host timestamp to an aware datetime.

    Accepts datetimes, ISO-8601 strings and epoch numbers. Naive values are
    taken as UTC. Unparseable values yield None.
    """
    if value is None or value == "":
        return None
    try:
        parsed = _datetime_adapter.validate_python(value)
    except ValidationError:
        logger.warning(f"[HOOK] Ignoring unparseable timestamp: {value!r}")
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def compute_duration_ms(started_at: Any, stopped_at: Any) -> Optional[int]:
    """
    Milliseconds between start and stop, or None if either is missing.
    """
    start = parse_timestamp(started_at)
    stop = parse_timestamp(stopped_at)
    if start is None or stop is None:
        return None
    return (stop - start) // timedelta(milliseconds=1)


def resolve_status(run_data: Any) -> str:
    """Host status if reported, otherwise derived from the finished flag."""
    status = get_field(run_data, "status")
    if status:
        return str(status)
    return "success" if get_field(run_data, "finished") else "error"


def extract_node_outputs(result_data: Dict[str, Any]) -> Dict[str, List[Any]]:
    """
    Collect the JSON items of each node's last run.

    Args:
        result_data: Mapping of node name to its list of runs

    Returns:
        Mapping of node name to the ``json`` of every item on the first main
        output, empty when that output carried no items. Nodes whose last run
        has no first main output are left out.
    """
    node_outputs: Dict[str, List[Any]] = {}
    for node_name, node_runs in result_data.items():
        if not node_runs:
            continue
        items = get_path(node_runs, -1, "data", "main", 0)
        if isinstance(items, list):
            node_outputs[node_name] = [get_field(item, "json") for item in items]
    return node_outputs


def sanitize_for_database(data: Any) -> Any:
    """
    Ensure all data is properly serializable for a JSON column.

    Args:
        data: Decoded host payload

    Returns:
        Sanitized copy safe for database storage
    """
    if isinstance(data, dict):
        return {str(key): sanitize_for_database(value) for key, value in data.items()}
    if isinstance(data, (list, tuple)):
        return [sanitize_for_database(item) for item in data]
    if isinstance(data, datetime):
        return data.isoformat()
    if isinstance(data, uuid.UUID):
        return str(data)
    if data is None or isinstance(data, (str, int, float, bool)):
        return data
    if hasattr(data, "__dict__"):
        return sanitize_for_database(
            {key: value for key, value in vars(data).items() if not key.startswith("_")}
        )
    try:
        json.dumps(data)
        return data
    except (TypeError, OverflowError):
        # Convert to string if not serializable
        return str(data)
