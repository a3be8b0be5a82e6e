"""
Models for execution logs.

This module defines the model storing one summary row per finished
n8n execution.
"""

from datetime import datetime
from sqlalchemy import Column, Integer, String, Text, DateTime, Boolean, JSON, Index
from sqlalchemy.dialects.postgresql import JSONB

from execution_hooks.db.base import Base

# JSONB on PostgreSQL, plain JSON elsewhere
JsonPayload = JSON().with_variant(JSONB(), "postgresql")


class ExecutionLog(Base):
    """
    ExecutionLog model for storing execution summaries.

    ``execution_id`` is unique; inserts use ignore-on-conflict so a repeated
    postExecute for the same execution never produces a second row.
    """

    __tablename__ = "n8n_execution_logs"

    id = Column(Integer, primary_key=True)
    execution_id = Column(String, nullable=False, unique=True)
    workflow_id = Column(String, nullable=True)
    workflow_name = Column(String, nullable=True)
    status = Column(String, nullable=False)
    finished = Column(Boolean, nullable=False, default=False)
    started_at = Column(DateTime(timezone=True), nullable=True)
    finished_at = Column(DateTime(timezone=True), nullable=True)
    duration_ms = Column(Integer, nullable=True)
    mode = Column(String, nullable=True)
    node_count = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)
    execution_data = Column(JsonPayload, nullable=True)
    workflow_data = Column(JsonPayload, nullable=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    __table_args__ = (
        Index('idx_n8n_execution_logs_workflow_id', 'workflow_id'),
    )
