"""In-memory stores for definitions and instances.

State lives only for the lifetime of the process. Both stores start empty and
expose only atomic operations; nothing outside hands out a mutable handle.
"""

from __future__ import annotations

import threading
import uuid
from collections.abc import Callable
from dataclasses import dataclass, field

from .errors import DefinitionAlreadyExists, DefinitionNotFound, InstanceNotFound
from .models import WorkflowDefinition, WorkflowInstance
from .validator import validate_definition


class DefinitionStore:
    """Definitions keyed by id. Insert-only: no update, no delete."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._definitions: dict[str, WorkflowDefinition] = {}

    def _exists_unlocked(self, definition_id: str) -> bool:
        return definition_id in self._definitions

    def register(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        """Validate and insert as one step.

        Holding the lock across both means two registrations with the same id
        cannot both pass the duplicate check.
        """

        with self._lock:
            validate_definition(definition, exists=self._exists_unlocked)
            self._definitions[definition.id] = definition
            return definition

    def insert(self, definition: WorkflowDefinition) -> WorkflowDefinition:
        with self._lock:
            if self._exists_unlocked(definition.id):
                raise DefinitionAlreadyExists(definition.id)
            self._definitions[definition.id] = definition
            return definition

    def exists(self, definition_id: str) -> bool:
        with self._lock:
            return self._exists_unlocked(definition_id)

    def get(self, definition_id: str) -> WorkflowDefinition:
        with self._lock:
            definition = self._definitions.get(definition_id)
        if definition is None:
            raise DefinitionNotFound(definition_id)
        return definition

    def list(self) -> list[WorkflowDefinition]:
        with self._lock:
            return list(self._definitions.values())


@dataclass
class _InstanceSlot:
    instance: WorkflowInstance
    lock: threading.Lock = field(default_factory=threading.Lock)


class InstanceStore:
    """Instances keyed by id, each guarded by its own lock.

    The store-wide lock only protects the id -> slot mapping, so updates of
    different instances never wait on each other.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._slots: dict[str, _InstanceSlot] = {}

    def _slot(self, instance_id: str) -> _InstanceSlot:
        with self._lock:
            slot = self._slots.get(instance_id)
        if slot is None:
            raise InstanceNotFound(instance_id)
        return slot

    def create(self, definition: WorkflowDefinition) -> WorkflowInstance:
        instance = WorkflowInstance(
            id=str(uuid.uuid4()),
            definition_id=definition.id,
            current_state=definition.initial_state.id,
        )
        with self._lock:
            self._slots[instance.id] = _InstanceSlot(instance=instance)
        return instance

    def get(self, instance_id: str) -> WorkflowInstance:
        return self._slot(instance_id).instance

    def list(self) -> list[WorkflowInstance]:
        with self._lock:
            return [slot.instance for slot in self._slots.values()]

    def update(
        self, instance_id: str, apply: Callable[[WorkflowInstance], WorkflowInstance]
    ) -> WorkflowInstance:
        """Replace an instance with ``apply(current)`` under its lock.

        If ``apply`` raises, the stored value is left as it was.
        """

        slot = self._slot(instance_id)
        with slot.lock:
            updated = apply(slot.instance)
            slot.instance = updated
            return updated
