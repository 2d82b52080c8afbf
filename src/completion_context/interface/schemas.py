"""Pydantic request / response DTOs for the API boundary."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    """Editors speak camelCase; snake_case is accepted too."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PositionModel(_CamelModel):
    line: int = Field(ge=0)
    character: int = Field(ge=0)


class DocumentModel(_CamelModel):
    """A whole document: path plus full text."""

    filepath: str
    contents: str


class EditedRangeModel(_CamelModel):
    """A recently edited range of a document."""

    filepath: str
    start: PositionModel
    end: PositionModel
    contents: str


class PromptRequest(_CamelModel):
    """Request body for ``POST /prompt``."""

    filepath: str
    prefix: str
    suffix: str = ""
    clipboard_text: str = ""
    options: dict[str, Any] = Field(default_factory=dict)
    recently_edited_ranges: list[EditedRangeModel] = Field(default_factory=list)
    recently_edited_documents: list[DocumentModel] = Field(default_factory=list)
    open_documents: list[DocumentModel] = Field(default_factory=list)

    @field_validator("filepath")
    @classmethod
    def _must_not_be_blank(cls, v: str) -> str:
        stripped = v.strip()
        if not stripped:
            msg = "filepath must not be empty."
            raise ValueError(msg)
        return stripped


class PromptResponse(_CamelModel):
    """Successful response from ``POST /prompt``."""

    prefix: str
    suffix: str
    use_fim: bool
    complete_multiline: bool


class ErrorResponse(BaseModel):
    """Standard error envelope returned on all failure paths."""

    status: str = "error"
    message: str
