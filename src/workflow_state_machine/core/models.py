"""Workflow definition and instance records.

Records serialize with camelCase aliases (``isInitial``, ``fromStates``,
``currentState``) and accept either the alias or the field name on input.
Stored definitions and instances are frozen; a transition produces a new
instance value rather than mutating the stored one.
"""

from __future__ import annotations

from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class State(_Record):
    id: str
    is_initial: bool = False
    is_final: bool = False
    # Carried for clients; transitions do not consult it.
    enabled: bool = True


class WorkflowAction(_Record):
    id: str
    enabled: bool = True
    from_states: tuple[str, ...] = ()
    to_state: str


class WorkflowDefinition(_Record):
    """A definition in canonical form: every collection is present."""

    id: str
    states: tuple[State, ...]
    actions: tuple[WorkflowAction, ...] = ()

    def find_state(self, state_id: str) -> State | None:
        for state in self.states:
            if state.id == state_id:
                return state
        return None

    def find_action(self, action_id: str) -> WorkflowAction | None:
        for action in self.actions:
            if action.id == action_id:
                return action
        return None

    @property
    def initial_state(self) -> State:
        """The unique initial state. Only meaningful on a validated definition."""

        return next(s for s in self.states if s.is_initial)


class WorkflowDefinitionDraft(BaseModel):
    """A definition as submitted by a caller, before normalization."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    id: str | None = None
    states: list[State] | None = None
    actions: list[WorkflowAction] | None = None


def normalize_definition(draft: WorkflowDefinitionDraft) -> WorkflowDefinition:
    """Bring a draft into canonical form.

    Missing collections become empty and a missing id becomes ``""``; the
    validator rejects the latter. No other rewriting happens here.
    """

    return WorkflowDefinition(
        id=draft.id or "",
        states=tuple(draft.states or ()),
        actions=tuple(draft.actions or ()),
    )


class HistoryEntry(_Record):
    action_id: str
    timestamp: datetime = Field(default_factory=_utc_now)


class WorkflowInstance(_Record):
    id: str
    definition_id: str
    current_state: str
    history: tuple[HistoryEntry, ...] = ()

    def advanced(self, *, to_state: str, action_id: str) -> WorkflowInstance:
        """Return a copy moved to ``to_state`` with one new history entry."""

        entry = HistoryEntry(action_id=action_id)
        return self.model_copy(
            update={"current_state": to_state, "history": (*self.history, entry)}
        )
