"""FastAPI app factory.

Endpoints are thin wrappers over :class:`WorkflowService`. Core errors are
raised as exceptions and turned into HTTP responses by a single handler.
"""

from __future__ import annotations

import logging

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from workflow_state_machine import __version__
from workflow_state_machine.core import (
    DefinitionValidationError,
    NotFoundError,
    State,
    TransitionError,
    WorkflowAction,
    WorkflowDefinition,
    WorkflowDefinitionDraft,
    WorkflowError,
    WorkflowInstance,
    WorkflowService,
)
from workflow_state_machine.server.config import ServerSettings
from workflow_state_machine.server.models import ApiError, ApiErrorDetail, StartInstanceRequest

logger = logging.getLogger(__name__)


def _status_for(exc: WorkflowError) -> int:
    if isinstance(exc, DefinitionValidationError):
        return 400
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, TransitionError):
        return 409
    return 500


def get_service(request: Request) -> WorkflowService:
    return request.app.state.service


def create_app(
    settings: ServerSettings | None = None, service: WorkflowService | None = None
) -> FastAPI:
    settings = settings or ServerSettings()

    app = FastAPI(
        title="Workflow State Machine",
        version=__version__,
        description="Register workflow definitions and drive instances through their states.",
    )

    app.state.settings = settings
    # One service per app: stores start empty and live as long as the process.
    app.state.service = service or WorkflowService()

    origins = settings.parsed_cors_origins()
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.exception_handler(WorkflowError)
    async def workflow_error_handler(request: Request, exc: WorkflowError) -> JSONResponse:
        status = _status_for(exc)
        if status >= 500:
            logger.error(
                "Internal workflow error",
                extra={"path": request.url.path, "code": exc.code, "identifier": exc.identifier},
            )
        body = ApiError(error=ApiErrorDetail.model_validate(exc.to_json()))
        return JSONResponse(status_code=status, content=body.model_dump(mode="json"))

    @app.get("/health")
    def health() -> dict[str, str]:
        return {"status": "ok"}

    @app.post("/definitions", status_code=201, response_model=WorkflowDefinition)
    def register_definition(
        draft: WorkflowDefinitionDraft, svc: WorkflowService = Depends(get_service)
    ) -> WorkflowDefinition:
        return svc.register_definition(draft)

    @app.get("/definitions", response_model=list[WorkflowDefinition])
    def list_definitions(svc: WorkflowService = Depends(get_service)) -> list[WorkflowDefinition]:
        return svc.list_definitions()

    @app.get("/definitions/{definition_id}", response_model=WorkflowDefinition)
    def get_definition(
        definition_id: str, svc: WorkflowService = Depends(get_service)
    ) -> WorkflowDefinition:
        return svc.get_definition(definition_id)

    @app.get("/definitions/{definition_id}/states", response_model=list[State])
    def list_states(definition_id: str, svc: WorkflowService = Depends(get_service)) -> list[State]:
        return svc.list_states(definition_id)

    @app.get("/definitions/{definition_id}/actions", response_model=list[WorkflowAction])
    def list_actions(
        definition_id: str, svc: WorkflowService = Depends(get_service)
    ) -> list[WorkflowAction]:
        return svc.list_actions(definition_id)

    @app.post("/instances", status_code=201, response_model=WorkflowInstance)
    def create_instance(
        req: StartInstanceRequest, svc: WorkflowService = Depends(get_service)
    ) -> WorkflowInstance:
        return svc.create_instance(req.definition_id)

    @app.get("/instances", response_model=list[WorkflowInstance])
    def list_instances(svc: WorkflowService = Depends(get_service)) -> list[WorkflowInstance]:
        return svc.list_instances()

    @app.get("/instances/{instance_id}", response_model=WorkflowInstance)
    def get_instance(
        instance_id: str, svc: WorkflowService = Depends(get_service)
    ) -> WorkflowInstance:
        return svc.get_instance(instance_id)

    @app.get("/instances/{instance_id}/available-actions", response_model=list[WorkflowAction])
    def available_actions(
        instance_id: str, svc: WorkflowService = Depends(get_service)
    ) -> list[WorkflowAction]:
        return svc.available_actions(instance_id)

    @app.post("/instances/{instance_id}/actions/{action_id}", response_model=WorkflowInstance)
    def execute_action(
        instance_id: str, action_id: str, svc: WorkflowService = Depends(get_service)
    ) -> WorkflowInstance:
        return svc.execute_action(instance_id, action_id)

    return app
