"""FastAPI server adapter for the workflow core.

Design intent:
- Keep workflow rules in `workflow_state_machine.core`
- Keep server-specific concerns (routing, status codes, CORS) here
"""

from __future__ import annotations

__all__ = ["create_app"]

from workflow_state_machine.server.app import create_app
