"""JSON report of an introspection run."""

from __future__ import annotations

from pydantic import BaseModel, Field


class IntrospectionReport(BaseModel):
    env: str
    main_application: str | None = None
    seeds: list[str] = Field(default_factory=list)
    applications: list[str] = Field(default_factory=list)
    modules: list[str] = Field(default_factory=list)
