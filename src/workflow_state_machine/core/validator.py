"""Structural checks for workflow definitions.

Checks run in a fixed order and the first failure wins. A definition that
passes satisfies every invariant the transition engine relies on, so the
engine only has to check instance-specific legality.
"""

from __future__ import annotations

from collections.abc import Callable

from .errors import DefinitionAlreadyExists, DefinitionValidationError
from .models import WorkflowDefinition


def validate_definition(
    definition: WorkflowDefinition, *, exists: Callable[[str], bool]
) -> None:
    """Raise :class:`DefinitionValidationError` if ``definition`` is malformed.

    ``exists`` reports whether a definition id is already registered. Callers
    that insert afterwards must hold the store lock across both steps.
    """

    if not definition.id.strip():
        raise DefinitionValidationError("missing_id", "Definition Id is required.")

    if exists(definition.id):
        raise DefinitionAlreadyExists(definition.id)

    if not definition.states:
        raise DefinitionValidationError(
            "no_states", "At least one state is required.", identifier=definition.id
        )

    state_ids: set[str] = set()
    for state in definition.states:
        if state.id in state_ids:
            raise DefinitionValidationError(
                "duplicate_state",
                f"Duplicate state ID '{state.id}' is not allowed.",
                identifier=state.id,
            )
        state_ids.add(state.id)

    initial_count = sum(1 for s in definition.states if s.is_initial)
    if initial_count != 1:
        raise DefinitionValidationError(
            "initial_state_count",
            f"There must be exactly one initial state (found {initial_count}).",
            identifier=definition.id,
        )

    action_ids: set[str] = set()
    for action in definition.actions:
        if action.id in action_ids:
            raise DefinitionValidationError(
                "duplicate_action",
                f"Duplicate action ID '{action.id}' is not allowed.",
                identifier=action.id,
            )
        action_ids.add(action.id)

        if action.to_state not in state_ids:
            raise DefinitionValidationError(
                "unknown_target_state",
                f"Action '{action.id}' targets unknown state '{action.to_state}'.",
                identifier=action.id,
            )

        for source in action.from_states:
            if source not in state_ids:
                raise DefinitionValidationError(
                    "unknown_source_state",
                    f"Action '{action.id}' has unknown source state '{source}'.",
                    identifier=action.id,
                )
