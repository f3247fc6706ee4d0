"""Action execution against live workflow instances.

The engine is the only writer of an instance's ``current_state`` and
``history``. Every check runs under the instance's lock, so a concurrent
execution always observes the result of the previous one.
"""

from __future__ import annotations

import logging

from .errors import (
    ActionDisabled,
    ActionNotFound,
    DefinitionNotFound,
    IllegalTransition,
    InternalConsistencyFault,
    TerminalState,
    UnknownTargetState,
)
from .models import State, WorkflowAction, WorkflowDefinition, WorkflowInstance
from .stores import DefinitionStore, InstanceStore

logger = logging.getLogger(__name__)


class TransitionEngine:
    def __init__(self, *, definitions: DefinitionStore, instances: InstanceStore) -> None:
        self._definitions = definitions
        self._instances = instances

    def _definition_for(self, instance: WorkflowInstance) -> WorkflowDefinition:
        try:
            return self._definitions.get(instance.definition_id)
        except DefinitionNotFound as e:
            logger.error(
                "Instance references a missing definition",
                extra={"instance_id": instance.id, "definition_id": instance.definition_id},
            )
            raise InternalConsistencyFault(
                f"Definition '{instance.definition_id}' not found.",
                identifier=instance.definition_id,
            ) from e

    def _current_state(self, definition: WorkflowDefinition, instance: WorkflowInstance) -> State:
        state = definition.find_state(instance.current_state)
        if state is None:
            logger.error(
                "Instance is in a state its definition does not declare",
                extra={"instance_id": instance.id, "state": instance.current_state},
            )
            raise InternalConsistencyFault(
                f"State '{instance.current_state}' not found in definition '{definition.id}'.",
                identifier=instance.current_state,
            )
        return state

    def _transition(self, instance: WorkflowInstance, action_id: str) -> WorkflowInstance:
        definition = self._definition_for(instance)

        action = definition.find_action(action_id)
        if action is None:
            raise ActionNotFound(action_id)

        if not action.enabled:
            raise ActionDisabled(action_id)

        current = self._current_state(definition, instance)
        if current.is_final:
            raise TerminalState(current.id)

        if current.id not in action.from_states:
            raise IllegalTransition(action_id, current.id)

        target = definition.find_state(action.to_state)
        if target is None:
            raise UnknownTargetState(action.to_state)

        return instance.advanced(to_state=target.id, action_id=action.id)

    def execute(self, instance_id: str, action_id: str) -> WorkflowInstance:
        """Execute ``action_id`` on an instance and return the updated instance.

        Raises a :class:`~workflow_state_machine.core.errors.WorkflowError`
        subclass on failure, in which case the instance is unchanged.
        """

        return self._instances.update(
            instance_id, lambda current: self._transition(current, action_id)
        )

    def available_actions(self, instance_id: str) -> list[WorkflowAction]:
        """Enabled actions executable from the instance's current state."""

        instance = self._instances.get(instance_id)
        definition = self._definition_for(instance)
        if self._current_state(definition, instance).is_final:
            return []
        return [
            a
            for a in definition.actions
            if a.enabled and instance.current_state in a.from_states
        ]
