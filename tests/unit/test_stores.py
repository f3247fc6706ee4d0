"""Unit tests for the in-memory definition and instance stores."""

from __future__ import annotations

import threading
import uuid

import pytest

from workflow_state_machine.core.errors import (
    DefinitionAlreadyExists,
    DefinitionNotFound,
    InstanceNotFound,
)
from workflow_state_machine.core.models import (
    WorkflowDefinitionDraft,
    WorkflowInstance,
    normalize_definition,
)
from workflow_state_machine.core.stores import DefinitionStore, InstanceStore


def test_register_then_get(doc_approval: WorkflowDefinitionDraft) -> None:
    store = DefinitionStore()
    definition = store.register(normalize_definition(doc_approval))

    assert store.get("doc-approval") == definition
    assert store.exists("doc-approval")
    assert [d.id for d in store.list()] == ["doc-approval"]


def test_second_registration_with_same_id_keeps_first(
    doc_approval: WorkflowDefinitionDraft,
) -> None:
    store = DefinitionStore()
    first = store.register(normalize_definition(doc_approval))

    other = doc_approval.model_copy(update={"actions": []})
    with pytest.raises(DefinitionAlreadyExists):
        store.register(normalize_definition(other))

    assert store.get("doc-approval") == first
    assert len(store.get("doc-approval").actions) == 3
    assert len(store.list()) == 1


def test_insert_is_insert_if_absent(doc_approval: WorkflowDefinitionDraft) -> None:
    store = DefinitionStore()
    definition = normalize_definition(doc_approval)
    store.insert(definition)
    with pytest.raises(DefinitionAlreadyExists):
        store.insert(definition)


def test_get_unknown_definition_raises() -> None:
    with pytest.raises(DefinitionNotFound) as exc_info:
        DefinitionStore().get("missing")
    assert exc_info.value.identifier == "missing"


def test_concurrent_registrations_with_same_id_admit_one(
    doc_approval: WorkflowDefinitionDraft,
) -> None:
    store = DefinitionStore()
    definition = normalize_definition(doc_approval)
    workers = 8
    barrier = threading.Barrier(workers)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def register() -> None:
        barrier.wait()
        try:
            store.register(definition)
            result = "ok"
        except DefinitionAlreadyExists:
            result = "duplicate"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=register) for _ in range(workers)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("duplicate") == workers - 1


def test_create_starts_in_initial_state(doc_approval: WorkflowDefinitionDraft) -> None:
    definition = normalize_definition(doc_approval)
    store = InstanceStore()
    instance = store.create(definition)

    assert instance.definition_id == "doc-approval"
    assert instance.current_state == "draft"
    assert instance.history == ()
    assert uuid.UUID(instance.id).version == 4
    assert store.get(instance.id) == instance


def test_create_generates_distinct_ids(doc_approval: WorkflowDefinitionDraft) -> None:
    definition = normalize_definition(doc_approval)
    store = InstanceStore()
    ids = {store.create(definition).id for _ in range(50)}
    assert len(ids) == 50
    assert len(store.list()) == 50


def test_get_unknown_instance_raises() -> None:
    with pytest.raises(InstanceNotFound):
        InstanceStore().get("nope")


def test_update_failure_leaves_instance_unchanged(doc_approval: WorkflowDefinitionDraft) -> None:
    store = InstanceStore()
    instance = store.create(normalize_definition(doc_approval))

    def boom(_current: WorkflowInstance) -> WorkflowInstance:
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        store.update(instance.id, boom)
    assert store.get(instance.id) == instance


def test_updates_of_different_instances_do_not_contend(
    doc_approval: WorkflowDefinitionDraft,
) -> None:
    definition = normalize_definition(doc_approval)
    store = InstanceStore()
    a = store.create(definition)
    b = store.create(definition)

    def move_b_while_a_is_locked(current: WorkflowInstance) -> WorkflowInstance:
        # Would deadlock if one lock guarded every instance.
        store.update(b.id, lambda inst: inst.advanced(to_state="review", action_id="submit"))
        return current

    store.update(a.id, move_b_while_a_is_locked)
    assert store.get(b.id).current_state == "review"
    assert store.get(a.id).current_state == "draft"
