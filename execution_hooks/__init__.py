"""
Lifecycle hooks for the n8n workflow-automation host.

The hooks log workflow lifecycle events and persist a summary of every
finished execution to the ``n8n_execution_logs`` table.
"""

__version__ = "0.1.0"
