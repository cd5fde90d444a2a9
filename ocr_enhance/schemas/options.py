from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class RunOptions(BaseModel):
    """High-level decisions for one pipeline run."""

    model_config = ConfigDict(populate_by_name=True)

    run_enhancement: bool = Field(default=True, alias="runEnhancement")
    include_original: bool = Field(default=True, alias="includeOriginal")
    save_txt: bool = Field(default=True, alias="saveTxt")
    save_json: bool = Field(default=True, alias="saveJson")
    language: str = Field(default="eng")

    @model_validator(mode="before")
    @classmethod
    def _case_insensitive_keys(cls, data: Any) -> Any:
        """Accept option documents whose keys differ only in case."""
        if not isinstance(data, dict):
            return data

        lookup = {}
        for name, field in cls.model_fields.items():
            lookup[name.lower()] = field.alias or name
            lookup[(field.alias or name).lower()] = field.alias or name

        normalized = {}
        for key, value in data.items():
            canonical = lookup.get(str(key).lower())
            if canonical is not None:
                normalized[canonical] = value
        return normalized


class OcrEngineOptions(BaseModel):
    """Options passed through to the OCR engine."""

    language: str = Field(default="eng", description="Engine language code, e.g. 'eng' or 'eng+spa'")
