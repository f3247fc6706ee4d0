"""CLI entrypoint.

- ``serve``: run the REST API with uvicorn
- ``validate``: check a definition JSON file without starting the server
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from workflow_state_machine import __version__
from workflow_state_machine.core.errors import DefinitionValidationError
from workflow_state_machine.core.models import WorkflowDefinitionDraft, normalize_definition
from workflow_state_machine.core.validator import validate_definition
from workflow_state_machine.logging import configure_logging
from workflow_state_machine.server.config import ServerSettings

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="workflow-state-machine",
        description="In-memory workflow state machine service",
    )
    parser.add_argument(
        "--version", action="version", version=f"workflow-state-machine {__version__}"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    serve = subparsers.add_parser("serve", help="Run the REST API")
    serve.add_argument("--host", default=None, help="Bind address (default: WORKFLOW_HOST)")
    serve.add_argument(
        "--port", type=int, default=None, help="Bind port (default: WORKFLOW_PORT)"
    )

    validate = subparsers.add_parser(
        "validate", help="Validate a workflow definition JSON file"
    )
    validate.add_argument("path", type=Path, help="Path to the definition JSON file")

    return parser


def _validate_file(path: Path) -> int:
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        print(f"Cannot read {path}: {e}", file=sys.stderr)
        return 2

    try:
        definition = normalize_definition(WorkflowDefinitionDraft.model_validate(raw))
        validate_definition(definition, exists=lambda _id: False)
    except ValidationError as e:
        print(f"malformed: {e}")
        return 1
    except DefinitionValidationError as e:
        print(f"{e.rule}: {e.message}")
        return 1

    print("OK")
    return 0


def _serve(settings: ServerSettings, *, host: str | None, port: int | None) -> int:
    import uvicorn

    bind_host = settings.host if host is None else host
    bind_port = settings.port if port is None else port
    logger.info("Starting server", extra={"host": bind_host, "port": bind_port})
    uvicorn.run(
        "workflow_state_machine.server:create_app",
        factory=True,
        host=bind_host,
        port=bind_port,
        log_config=None,
    )
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == "validate":
        return _validate_file(args.path)

    try:
        settings = ServerSettings()
    except ValidationError as e:
        # Logging isn't configured yet; keep it simple and actionable.
        print("Configuration error (check your .env):", file=sys.stderr)
        print(e, file=sys.stderr)
        return 2

    configure_logging(settings.log_level)

    # Subcommands are required; anything that isn't `validate` is `serve`.
    return _serve(settings, host=args.host, port=args.port)


if __name__ == "__main__":
    raise SystemExit(main())
