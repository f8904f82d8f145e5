"""Shared pydantic form base and error formatting."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError

from ..web import json_error

_VALUE_ERROR_PREFIX = "Value error, "


class FormModel(BaseModel):
    """Base for request payload models."""

    model_config = ConfigDict(str_strip_whitespace=True, populate_by_name=True, extra="ignore")

    @classmethod
    def from_payload(cls, payload: Any):
        """Validate a JSON body or query mapping; raises ``ValidationError``."""

        return cls.model_validate(payload or {})


def validation_errors(exc: ValidationError) -> list[dict[str, str]]:
    """Flatten pydantic errors into ``[{field, message}]``."""

    structured: list[dict[str, str]] = []
    for error in exc.errors(include_url=False):
        loc = error.get("loc", ())
        field = ".".join(str(part) for part in loc) if loc else "__root__"
        message = error.get("msg", "Invalid value")
        if message.startswith(_VALUE_ERROR_PREFIX):
            message = message[len(_VALUE_ERROR_PREFIX):]
        structured.append({"field": field, "message": message})
    return structured


def validation_failed(exc: ValidationError):
    return json_error("Validation failed", 400, errors=validation_errors(exc))
