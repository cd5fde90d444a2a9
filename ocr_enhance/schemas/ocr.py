from pydantic import BaseModel, ConfigDict, Field

# Prompt recorded on artifacts produced without an enhancement prompt.
OCR_ONLY_PROMPT = "OCR_ONLY"


class OcrWord(BaseModel):
    """A single word recognized by OCR, boxed in processed-image pixels."""

    text: str = ""
    confidence: float | None = None
    x: int = 0
    y: int = 0
    w: int = 0
    h: int = 0


class OcrResult(BaseModel):
    """Engine-agnostic OCR output."""

    model_config = ConfigDict(populate_by_name=True)

    text: str = ""
    mean_confidence: float | None = Field(
        default=None,
        alias="meanConfidence",
        description="Mean confidence in the engine's own scale",
    )
    words: list[OcrWord] = Field(default_factory=list)
    engine: str = ""


class ExtractionArtifact(BaseModel):
    """Record of one OCR run over one stored image."""

    model_config = ConfigDict(populate_by_name=True)

    image_reference: str = Field(alias="imageReference")
    base_reference: str = Field(alias="baseReference")
    prompt: str = OCR_ONLY_PROMPT
    ms: int = Field(default=0, ge=0, description="Elapsed OCR time in milliseconds")
    result: OcrResult = Field(default_factory=OcrResult)
    txt_path: str | None = Field(default=None, alias="txtPath")
    json_path: str | None = Field(default=None, alias="jsonPath")

    def to_json(self) -> str:
        """Serialize as the indented document written next to stored images."""
        return self.model_dump_json(by_alias=True, indent=2)


class EnhanceRequest(BaseModel):
    """Request to generate enhanced variants of a stored image."""

    model_config = ConfigDict(populate_by_name=True)

    image_reference: str = Field(alias="imageReference", min_length=1)
    prompt: str = Field(default="", description="Natural language enhancement instructions")


class EnhanceResponse(BaseModel):
    """Variant references produced by an enhancement run."""

    references: list[str]


class RunRequest(EnhanceRequest):
    """Request to run the full prompt-driven pipeline."""

    pass


class ExtractRequest(BaseModel):
    """Request to OCR a stored image without enhancement."""

    model_config = ConfigDict(populate_by_name=True)

    image_reference: str = Field(alias="imageReference", min_length=1)
    language: str | None = None
    save_txt: bool = Field(default=True, alias="saveTxt")
    save_json: bool = Field(default=True, alias="saveJson")


class OptionsRequest(BaseModel):
    """Request to resolve run options for a prompt."""

    prompt: str = ""


class SweepRequest(BaseModel):
    """Request to enhance an image over an inclusive parameter range."""

    model_config = ConfigDict(populate_by_name=True)

    image_reference: str = Field(alias="imageReference", min_length=1)
    op: str = Field(min_length=1)
    param: str = Field(min_length=1)
    start: int
    end: int
    step: int = 1
