"""Workflow State Machine.

An in-memory service for registering finite-state-machine workflow
definitions and driving instances through them:
- definitions validated once at registration, then immutable
- instances advanced only through the transition engine
- a thin FastAPI adapter and CLI on top
"""

__version__ = "0.1.0"

from workflow_state_machine.core.service import WorkflowService

__all__ = ["__version__", "WorkflowService"]
