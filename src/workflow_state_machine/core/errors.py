"""Error taxonomy for the workflow core.

Every error carries a stable ``code``, a human readable ``message`` and the
``identifier`` it concerns, so adapters can report which rule failed and on
what without parsing strings.
"""

from __future__ import annotations


class WorkflowError(Exception):
    code: str = "workflow_error"

    def __init__(self, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.identifier = identifier

    def to_json(self) -> dict[str, object]:
        return {"code": self.code, "message": self.message, "identifier": self.identifier}


class DefinitionValidationError(WorkflowError):
    """A proposed definition is structurally invalid. Nothing was stored."""

    def __init__(self, rule: str, message: str, *, identifier: str | None = None) -> None:
        super().__init__(message, identifier=identifier)
        self.code = rule

    @property
    def rule(self) -> str:
        return self.code


class DefinitionAlreadyExists(DefinitionValidationError):
    def __init__(self, definition_id: str) -> None:
        super().__init__(
            "duplicate_definition",
            f"Definition '{definition_id}' already exists.",
            identifier=definition_id,
        )


class NotFoundError(WorkflowError, LookupError):
    code = "not_found"


class DefinitionNotFound(NotFoundError):
    code = "definition_not_found"

    def __init__(self, definition_id: str) -> None:
        super().__init__(f"Definition '{definition_id}' not found.", identifier=definition_id)


class InstanceNotFound(NotFoundError):
    code = "instance_not_found"

    def __init__(self, instance_id: str) -> None:
        super().__init__(f"Instance '{instance_id}' not found.", identifier=instance_id)


class ActionNotFound(NotFoundError):
    code = "action_not_found"

    def __init__(self, action_id: str) -> None:
        super().__init__(
            f"Action '{action_id}' not found in this workflow.", identifier=action_id
        )


class TransitionError(WorkflowError):
    """An action could not be executed. The instance was left unchanged."""

    code = "transition_error"


class ActionDisabled(TransitionError):
    code = "action_disabled"

    def __init__(self, action_id: str) -> None:
        super().__init__(f"Action '{action_id}' is disabled.", identifier=action_id)


class TerminalState(TransitionError):
    code = "terminal_state"

    def __init__(self, state_id: str) -> None:
        super().__init__(
            f"Cannot execute action: instance is in final state '{state_id}'.",
            identifier=state_id,
        )


class IllegalTransition(TransitionError):
    code = "illegal_transition"

    def __init__(self, action_id: str, state_id: str) -> None:
        super().__init__(
            f"Action '{action_id}' is not allowed from state '{state_id}'.",
            identifier=action_id,
        )
        self.state_id = state_id


class UnknownTargetState(TransitionError):
    code = "unknown_target_state"

    def __init__(self, state_id: str) -> None:
        super().__init__(f"Target state '{state_id}' not found.", identifier=state_id)


class InternalConsistencyFault(WorkflowError):
    """A stored reference could not be resolved. Indicates a corrupted store."""

    code = "internal_consistency_fault"
