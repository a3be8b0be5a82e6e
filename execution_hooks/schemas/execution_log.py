"""
Pydantic schemas for execution logs.

This module defines the record written for each finished execution and the
summary shape used when reading records back.
"""

from typing import Any, Dict, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field


class ExecutionLogCreate(BaseModel):
    """Row to insert into n8n_execution_logs."""
    execution_id: str = Field(..., description="ID of the n8n execution")
    workflow_id: Optional[str] = Field(None, description="ID of the executed workflow")
    workflow_name: Optional[str] = Field(None, description="Name of the executed workflow")
    status: str = Field(..., description="Final execution status")
    finished: bool = Field(False, description="Whether the host marked the run finished")
    started_at: Optional[datetime] = Field(None, description="When the run started")
    finished_at: Optional[datetime] = Field(None, description="When the run stopped")
    duration_ms: Optional[int] = Field(None, description="stopped minus started, in milliseconds")
    mode: Optional[str] = Field(None, description="Execution mode reported by the host")
    node_count: int = Field(0, description="Number of nodes present in the run data")
    error_message: Optional[str] = Field(None, description="Top-level execution error message")
    execution_data: Dict[str, Any] = Field(default_factory=dict, description="Node outputs and raw run data")
    workflow_data: Dict[str, Any] = Field(default_factory=dict, description="Workflow definition at run time")


class ExecutionLogSummary(BaseModel):
    """Short form used for console output and listings."""
    model_config = ConfigDict(from_attributes=True)

    execution_id: str
    workflow_id: Optional[str] = None
    workflow_name: Optional[str] = None
    status: str
    finished: bool = False
    duration_ms: Optional[int] = None
    node_count: int = 0
    error_message: Optional[str] = None
    started_at: Optional[datetime] = None
    finished_at: Optional[datetime] = None


class ExecutionLogResponse(ExecutionLogSummary):
    """Full stored record."""
    mode: Optional[str] = None
    execution_data: Optional[Dict[str, Any]] = None
    workflow_data: Optional[Dict[str, Any]] = None
    created_at: Optional[datetime] = None
