"""
Collection of all database models for easy import.
"""

# Import base for direct access
from execution_hooks.db.base import Base

# Import all models to register them with SQLAlchemy
from execution_hooks.models.execution_log import ExecutionLog
