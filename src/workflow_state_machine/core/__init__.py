"""Workflow core: definitions, validation, stores and the transition engine.

Nothing in this package knows about HTTP. Adapters go through
:class:`~workflow_state_machine.core.service.WorkflowService`.
"""

from __future__ import annotations

from workflow_state_machine.core.errors import (
    ActionDisabled,
    ActionNotFound,
    DefinitionAlreadyExists,
    DefinitionNotFound,
    DefinitionValidationError,
    IllegalTransition,
    InstanceNotFound,
    InternalConsistencyFault,
    NotFoundError,
    TerminalState,
    TransitionError,
    UnknownTargetState,
    WorkflowError,
)
from workflow_state_machine.core.models import (
    HistoryEntry,
    State,
    WorkflowAction,
    WorkflowDefinition,
    WorkflowDefinitionDraft,
    WorkflowInstance,
    normalize_definition,
)
from workflow_state_machine.core.service import WorkflowService

__all__ = [
    "ActionDisabled",
    "ActionNotFound",
    "DefinitionAlreadyExists",
    "DefinitionNotFound",
    "DefinitionValidationError",
    "HistoryEntry",
    "IllegalTransition",
    "InstanceNotFound",
    "InternalConsistencyFault",
    "NotFoundError",
    "State",
    "TerminalState",
    "TransitionError",
    "UnknownTargetState",
    "WorkflowAction",
    "WorkflowDefinition",
    "WorkflowDefinitionDraft",
    "WorkflowError",
    "WorkflowInstance",
    "WorkflowService",
    "normalize_definition",
]
