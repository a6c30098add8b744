""" Envelope schema of a Dify DSL document (everything above the graph). """
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator, model_validator

from ..errors import ParseError

SUPPORTED_VERSIONS = ("0.1.5", "0.2.0", "0.3.0")
SUPPORTED_MODES = ("workflow", "chat", "advanced-chat", "agent-chat")

REQUIRED_KEYS = ("app", "kind", "version", "workflow")
REQUIRED_APP_KEYS = ("name", "mode")


class AppSection(BaseModel):
    model_config = ConfigDict(extra="ignore")

    name: Any
    mode: str

    @model_validator(mode="before")
    @classmethod
    def _require_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("App data must be a mapping")
        for key in REQUIRED_APP_KEYS:
            if data.get(key) is None:
                raise ValueError(f"Missing required app key: {key}")
        return data

    @field_validator("mode", mode="before")
    @classmethod
    def _check_mode(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Mode must be a string")
        if value not in SUPPORTED_MODES:
            raise ValueError(f"Unsupported mode: {value}")
        return value


class DocumentEnvelope(BaseModel):
    # Field order is the order problems are reported in.
    model_config = ConfigDict(extra="ignore")

    kind: str
    version: str
    app: AppSection
    workflow: Dict[str, Any]

    @model_validator(mode="before")
    @classmethod
    def _require_keys(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            raise ValueError("Document must be a mapping")
        for key in REQUIRED_KEYS:
            if data.get(key) is None:
                raise ValueError(f"Missing required key: {key}")
        return data

    @field_validator("kind", mode="before")
    @classmethod
    def _check_kind(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Kind must be a string")
        if value != "app":
            raise ValueError(f"Invalid kind: expected 'app', got '{value}'")
        return value

    @field_validator("version", mode="before")
    @classmethod
    def _check_version(cls, value: Any) -> str:
        if not isinstance(value, str):
            raise ValueError("Version must be a string")
        if value not in SUPPORTED_VERSIONS:
            raise ValueError(f"Unsupported version: {value}")
        return value

    @field_validator("workflow", mode="before")
    @classmethod
    def _check_workflow(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            raise ValueError("Workflow data must be a mapping")
        return value


def _first_message(exc: ValidationError) -> str:
    error = exc.errors()[0]
    cause = error.get("ctx", {}).get("error")
    if isinstance(cause, Exception):
        return str(cause)
    location = ".".join(str(part) for part in error.get("loc", ()))
    return f"{location}: {error['msg']}" if location else error["msg"]


def validate_envelope(raw: Dict[str, Any]) -> DocumentEnvelope:
    """Validate the document envelope, failing on the first problem found.

    Order: required top-level keys, kind, version, app keys, mode, workflow.
    """
    try:
        return DocumentEnvelope.model_validate(raw)
    except ValidationError as e:
        raise ParseError(_first_message(e)) from e
