"""
Enhancement plan documents.

A plan is produced by the prompt planner as JSON:

    {"variants": [{"name": "...", "steps": [{"op": "...", "params": {...}}]}]}

Keys are matched case-insensitively, the same way the planner output is
read from the Responses API.
"""

from typing import Any, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

ParamValue = Union[bool, int, float, str, None]


def _lower_keys(data: Any) -> Any:
    """Lower-case the keys of a raw mapping before field validation."""
    if isinstance(data, dict):
        return {str(k).lower(): v for k, v in data.items()}
    return data


class PlanStep(BaseModel):
    """A single named, parameterized image operation."""

    model_config = ConfigDict(frozen=True)

    op: str = Field(default="", description="Operation identifier (trimmed, lower-cased)")
    params: dict[str, Any] = Field(default_factory=dict, description="Operation parameters")

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_keys(cls, data: Any) -> Any:
        return _lower_keys(data)

    @field_validator("op", mode="before")
    @classmethod
    def _normalize_op(cls, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip().lower()

    @field_validator("params", mode="before")
    @classmethod
    def _default_params(cls, value: Any) -> Any:
        return {} if value is None else value


class PlanVariant(BaseModel):
    """One enhancement strategy: an ordered list of steps."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(default="variant", description="Free-form variant label")
    steps: list[PlanStep] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_keys(cls, data: Any) -> Any:
        return _lower_keys(data)

    @field_validator("name", mode="before")
    @classmethod
    def _default_name(cls, value: Any) -> str:
        if value is None:
            return "variant"
        return str(value)

    @field_validator("steps", mode="before")
    @classmethod
    def _default_steps(cls, value: Any) -> Any:
        return [] if value is None else value


class EnhancementPlan(BaseModel):
    """A set of variants describing how to derive enhanced images."""

    model_config = ConfigDict(frozen=True)

    variants: list[PlanVariant] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_keys(cls, data: Any) -> Any:
        return _lower_keys(data)

    @field_validator("variants", mode="before")
    @classmethod
    def _default_variants(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_empty(self) -> bool:
        """Whether the plan has no variants."""
        return len(self.variants) == 0
