"""Request body schemas — Pydantic models validated at decode time.

Invariants:
    - An empty body or a JSON null body decodes to the model defaults
    - JSON null for any field leaves that field at its default
    - Unknown fields are ignored
    - Type mismatches raise RequestDecodeError naming the offending field

CreateMachineRequest folds the wire convention of prefixed keys
(``tag.<name>``, ``metadata.<name>``) into explicit ``tags`` and ``metadata``
maps before validation.
"""

from __future__ import annotations

import json
from typing import TypeVar

from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator

TAG_PREFIX = "tag."
METADATA_PREFIX = "metadata."


class RequestDecodeError(ValueError):
    """Raised when a request body cannot be decoded into its schema."""


class _Options(BaseModel):
    model_config = ConfigDict(strict=True, frozen=True)

    @model_validator(mode="before")
    @classmethod
    def drop_nulls(cls, data):
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data


class CreateKeyOpts(_Options):
    name: str = ""
    key: str = ""


class CreateFwRuleOpts(_Options):
    rule: str = ""
    enabled: bool = False


class CreateMachineRequest(_Options):
    name: str = ""
    package: str = ""
    image: str = ""
    networks: list[str] | None = None
    tags: dict[str, str] = Field(default_factory=dict)
    metadata: dict[str, str] = Field(default_factory=dict)

    @model_validator(mode="before")
    @classmethod
    def collect_prefixed_keys(cls, data):
        if not isinstance(data, dict):
            return data

        fields = {"tags": {}, "metadata": {}}
        for key, value in data.items():
            if value is None:
                continue
            if key in ("name", "package", "image", "networks"):
                fields[key] = value
            elif key.startswith(TAG_PREFIX):
                fields["tags"][key[len(TAG_PREFIX):]] = value
            elif key.startswith(METADATA_PREFIX):
                fields["metadata"][key[len(METADATA_PREFIX):]] = value
        return fields


Opts = TypeVar("Opts", bound=_Options)


def decode_body(model: type[Opts], body: bytes) -> Opts:
    """Decode a JSON request body into ``model``; empty bodies use defaults."""
    if not body:
        return model()

    try:
        data = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise RequestDecodeError(f"malformed JSON body: {exc}") from exc
    if data is None:
        return model()

    try:
        return model.model_validate(data)
    except ValidationError as exc:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc']) or 'body'}: {err['msg']}"
            for err in exc.errors()
        )
        raise RequestDecodeError(f"invalid {model.__name__} body: {problems}") from exc
