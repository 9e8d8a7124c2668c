"""Pydantic configuration schema for CLI YAML input."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ..core.parser import parse_search_path
from ..errors import InvalidPathSpecification


class ExtractorSettings(BaseModel):
    match_relative_paths: bool = False
    match_case_insensitive: bool = False

    model_config = ConfigDict(extra="forbid")


class SearchPathSpec(BaseModel):
    """One search path registered by the pipeline."""

    path: str
    step_out: int = Field(default=0, ge=0)

    model_config = ConfigDict(extra="forbid")

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        try:
            parse_search_path(value)
        except InvalidPathSpecification as exc:
            raise ValueError(str(exc)) from exc
        return value


class AppConfig(BaseModel):
    extractor: ExtractorSettings = Field(default_factory=ExtractorSettings)
    search_paths: list[SearchPathSpec] = Field(default_factory=list)
    document_format: str | None = None

    model_config = ConfigDict(extra="forbid")

    @field_validator("search_paths", mode="before")
    @classmethod
    def _coerce_paths(cls, value: Any) -> Any:
        if isinstance(value, list):
            return [{"path": item} if isinstance(item, str) else item for item in value]
        return value

    def to_settings(self) -> dict[str, Any]:
        settings: dict[str, Any] = {"extractor": self.extractor.model_dump()}
        if self.search_paths:
            settings["search_paths"] = [spec.model_dump() for spec in self.search_paths]
        if self.document_format:
            settings["document_format"] = self.document_format
        return settings


def load_config(raw: Any) -> AppConfig:
    if not isinstance(raw, dict):
        raise ValidationError.from_exception_data(
            "AppConfig",
            [{"type": "dict_type", "loc": ("config",), "input": raw}],
        )
    return AppConfig.model_validate(raw)
