"""Service facade over the definition/instance stores and the engine.

Adapters (HTTP, CLI) call into this class only. It translates requests into
store and engine calls and holds no rules of its own.
"""

from __future__ import annotations

import logging

from .engine import TransitionEngine
from .models import (
    State,
    WorkflowAction,
    WorkflowDefinition,
    WorkflowDefinitionDraft,
    WorkflowInstance,
    normalize_definition,
)
from .stores import DefinitionStore, InstanceStore

logger = logging.getLogger(__name__)


class WorkflowService:
    def __init__(
        self,
        *,
        definitions: DefinitionStore | None = None,
        instances: InstanceStore | None = None,
    ) -> None:
        self.definitions = definitions or DefinitionStore()
        self.instances = instances or InstanceStore()
        self.engine = TransitionEngine(definitions=self.definitions, instances=self.instances)

    def register_definition(self, draft: WorkflowDefinitionDraft) -> WorkflowDefinition:
        definition = self.definitions.register(normalize_definition(draft))
        logger.info(
            "Definition registered",
            extra={
                "definition_id": definition.id,
                "states": len(definition.states),
                "actions": len(definition.actions),
            },
        )
        return definition

    def get_definition(self, definition_id: str) -> WorkflowDefinition:
        return self.definitions.get(definition_id)

    def list_definitions(self) -> list[WorkflowDefinition]:
        return self.definitions.list()

    def list_states(self, definition_id: str) -> list[State]:
        return list(self.definitions.get(definition_id).states)

    def list_actions(self, definition_id: str) -> list[WorkflowAction]:
        return list(self.definitions.get(definition_id).actions)

    def create_instance(self, definition_id: str) -> WorkflowInstance:
        definition = self.definitions.get(definition_id)
        instance = self.instances.create(definition)
        logger.info(
            "Instance created",
            extra={
                "instance_id": instance.id,
                "definition_id": definition.id,
                "state": instance.current_state,
            },
        )
        return instance

    def execute_action(self, instance_id: str, action_id: str) -> WorkflowInstance:
        instance = self.engine.execute(instance_id, action_id)
        logger.info(
            "Action executed",
            extra={
                "instance_id": instance.id,
                "action_id": action_id,
                "state": instance.current_state,
            },
        )
        return instance

    def get_instance(self, instance_id: str) -> WorkflowInstance:
        return self.instances.get(instance_id)

    def list_instances(self) -> list[WorkflowInstance]:
        return self.instances.list()

    def available_actions(self, instance_id: str) -> list[WorkflowAction]:
        return self.engine.available_actions(instance_id)
