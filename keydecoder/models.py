from __future__ import annotations

from enum import StrEnum
from typing import Annotated, Any, Dict, List, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class KeyStrategy(StrEnum):
    USE_KEYS = "use_keys"
    CONVERT_FROM_SNAKE_CASE = "convert_from_snake_case"


class ExplicitKey(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["explicit"] = "explicit"
    key: str


class Normalize(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["normalize"] = "normalize"


KeySource = Annotated[Union[ExplicitKey, Normalize], Field(discriminator="kind")]


class FieldSpec(BaseModel):
    """One target field and where its raw key comes from."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: KeySource = Field(default_factory=Normalize)

    @classmethod
    def explicit(cls, name: str, key: str) -> "FieldSpec":
        return cls(name=name, source=ExplicitKey(key=key))


class ResolvedField(BaseModel):
    field: str
    key: str
    source: Literal["explicit", "normalize"]


class NormalizeKeyRequest(BaseModel):
    key: str = Field(examples=["first_name"])


class NormalizeKeyResponse(BaseModel):
    key: str
    normalized: str


class DecodeReport(BaseModel):
    encoding: Dict[str, Any] = Field(default_factory=dict)
    strategy: KeyStrategy = KeyStrategy.USE_KEYS
    resolved: List[ResolvedField] = Field(default_factory=list)


class DecodeResponse(BaseModel):
    fields: Dict[str, Any]
    report: DecodeReport


class HealthResponse(BaseModel):
    ok: bool = True
