"""
Global test configuration for pytest.

This file is automatically loaded by pytest and contains global fixtures
and configuration settings that apply to all tests.
"""
import pytest
import pytest_asyncio
from datetime import datetime, timezone
from types import SimpleNamespace

from execution_hooks.db import session as db_session


@pytest.fixture(autouse=True)
def reset_engine_state():
    """Make every test start without a cached engine."""
    db_session._engine = None
    db_session._session_factory = None
    db_session._engine_unavailable = False
    yield
    db_session._engine = None
    db_session._session_factory = None
    db_session._engine_unavailable = False


@pytest_asyncio.fixture
async def sqlite_db(tmp_path):
    """Temporary SQLite database with the execution log table created."""
    db_path = tmp_path / "hooks.db"
    db_session.configure_database(f"sqlite+aiosqlite:///{db_path}")
    await db_session.init_db()
    yield db_session.get_engine()
    await db_session.dispose_engine()


@pytest.fixture
def fixed_datetime():
    """Return a fixed datetime for consistent testing."""
    return datetime(2024, 1, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def sample_workflow_data():
    """Workflow definition as n8n passes it to postExecute."""
    return {
        "id": "wf-42",
        "name": "Sync leads",
        "active": True,
        "nodes": [
            {"name": "Webhook", "type": "n8n-nodes-base.webhook"},
            {"name": "Set", "type": "n8n-nodes-base.set"},
        ],
        "connections": {"Webhook": {"main": [[{"node": "Set", "type": "main", "index": 0}]]}},
        "settings": {"executionOrder": "v1"},
        "staticData": {"ignored": True},
    }


@pytest.fixture
def sample_run_data():
    """Full run data of a successful two-node execution."""
    return {
        "finished": True,
        "mode": "webhook",
        "status": "success",
        "startedAt": "2024-01-01T12:00:00.000Z",
        "stoppedAt": "2024-01-01T12:00:01.250Z",
        "data": {
            "resultData": {
                "lastNodeExecuted": "Set",
                "runData": {
                    "Webhook": [
                        {
                            "startTime": 1704110400000,
                            "data": {"main": [[{"json": {"email": "a@example.com"}}]]},
                        }
                    ],
                    "Set": [
                        {
                            "startTime": 1704110400500,
                            "data": {"main": [[{"json": {"first": True}}]]},
                        },
                        {
                            "startTime": 1704110401000,
                            "data": {"main": [[{"json": {"lead": 1}}, {"json": {"lead": 2}}]]},
                        },
                    ],
                },
            }
        },
    }


@pytest.fixture
def sample_workflow_object():
    """Workflow handed to lifecycle hooks as an attribute object."""
    return SimpleNamespace(id="wf-42", name="Sync leads")
