#!/usr/bin/env python3
"""Programmatic usage example.

This drives the workflow core directly, without the HTTP server:

* register the document approval workflow
* start an instance and walk it to a final state
* show what a rejected transition looks like
"""

from __future__ import annotations

import argparse
from typing import Sequence

from workflow_state_machine.core import TransitionError, WorkflowDefinitionDraft, WorkflowService
from workflow_state_machine.logging import configure_logging

DOC_APPROVAL = {
    "id": "doc-approval",
    "states": [
        {"id": "draft", "isInitial": True},
        {"id": "review"},
        {"id": "approved", "isFinal": True},
        {"id": "rejected", "isFinal": True},
    ],
    "actions": [
        {"id": "submit", "fromStates": ["draft"], "toState": "review"},
        {"id": "approve", "fromStates": ["review"], "toState": "approved"},
        {"id": "reject", "fromStates": ["review"], "toState": "rejected"},
    ],
}


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Walk a document through approval.")
    parser.add_argument(
        "--outcome",
        choices=["approve", "reject"],
        default="approve",
        help="Final action to execute after submitting",
    )
    parser.add_argument("--log-level", default="WARNING", help="Root logging level")
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> int:
    args = _parse_args(argv)
    configure_logging(args.log_level)

    service = WorkflowService()
    service.register_definition(WorkflowDefinitionDraft.model_validate(DOC_APPROVAL))
    instance = service.create_instance("doc-approval")
    print(f"Started {instance.id} in {instance.current_state!r}")

    for action_id in ("submit", args.outcome, "submit"):
        try:
            instance = service.execute_action(instance.id, action_id)
            print(f"{action_id}: now in {instance.current_state!r}")
        except TransitionError as e:
            print(f"{action_id}: rejected ({e.code}: {e.message})")

    print("History:", ", ".join(h.action_id for h in instance.history))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
