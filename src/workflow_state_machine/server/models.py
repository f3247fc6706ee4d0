"""Pydantic models for the REST server.

Definitions and instances are returned as the core records themselves; only
request bodies and the error envelope live here.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class StartInstanceRequest(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    definition_id: str


class ApiErrorDetail(BaseModel):
    code: str
    message: str
    identifier: str | None = None


class ApiError(BaseModel):
    error: ApiErrorDetail
