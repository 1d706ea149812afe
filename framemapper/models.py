"""
Data models for the framework comparison pipeline.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from framemapper.frameworks import framework_key


class FrameworkKind(str, Enum):
    """How a framework presents its side of the comparison."""
    CODE = "code"
    SPREADSHEET = "spreadsheet"


class ComparisonRequest(BaseModel):
    """Validated user input for a single comparison."""
    familiar_framework: str = Field(min_length=1)
    target_framework: str = Field(min_length=1)
    component: str = Field(min_length=1)

    @field_validator("familiar_framework", "target_framework", "component", mode="before")
    @classmethod
    def _strip(cls, value):
        return value.strip() if isinstance(value, str) else value

    @model_validator(mode="after")
    def _frameworks_differ(self) -> "ComparisonRequest":
        if framework_key(self.familiar_framework) == framework_key(self.target_framework):
            raise ValueError("Target framework must be different from familiar framework.")
        return self


class FrameworkPresentation(BaseModel):
    """One side of a comparison: a code sample or spreadsheet steps."""
    kind: FrameworkKind
    content: str = Field(min_length=1)
    image_prompt: Optional[str] = None

    @model_validator(mode="after")
    def _no_image_for_code(self) -> "FrameworkPresentation":
        if self.kind == FrameworkKind.CODE and self.image_prompt is not None:
            raise ValueError("image_prompt must be absent for code presentations")
        return self

    @property
    def wants_image(self) -> bool:
        """True when this side should get a generated illustration."""
        return (
            self.kind == FrameworkKind.SPREADSHEET
            and bool(self.image_prompt and self.image_prompt.strip())
        )


class GenerationOutput(BaseModel):
    """
    Raw record the model is asked to emit.

    Only shape is enforced here; kinds are free-form strings and contents may
    be empty. Semantic checks happen in the output validator.
    """
    model_config = ConfigDict(populate_by_name=True)

    framework1_type: str = Field(
        alias="framework1Type",
        description='Either "code" or "spreadsheet" for the first framework.',
    )
    example1: str = Field(
        description="Code sample, or numbered steps, for the first framework.",
    )
    image_prompt1: Optional[str] = Field(
        default=None,
        alias="imagePrompt1",
        description="Image generation prompt; only for a spreadsheet framework.",
    )
    framework2_type: str = Field(
        alias="framework2Type",
        description='Either "code" or "spreadsheet" for the second framework.',
    )
    example2: str = Field(
        description="Code sample, or numbered steps, for the second framework.",
    )
    image_prompt2: Optional[str] = Field(
        default=None,
        alias="imagePrompt2",
        description="Image generation prompt; only for a spreadsheet framework.",
    )
    explanation: str = Field(
        description="Explanation of the similarities and differences between the two approaches.",
    )


class ComparisonDraft(BaseModel):
    """Validated model output, before any images are attached."""
    side1: FrameworkPresentation
    side2: FrameworkPresentation
    explanation: str = Field(min_length=1)


class ComparisonResult(ComparisonDraft):
    """Final comparison handed to the presentation layer."""
    name1: str
    name2: str
    image_url1: Optional[str] = None
    image_url2: Optional[str] = None


class ActionState(BaseModel):
    """Result-or-error state threaded back to the presentation layer."""
    data: Optional[ComparisonResult] = None
    error: Optional[str] = None
    message: Optional[str] = None

    @property
    def is_idle(self) -> bool:
        return self.data is None and self.error is None


class Feedback(BaseModel):
    """User rating for a generated comparison."""
    rating: int = Field(ge=1, le=5)
    familiar_framework: str = ""
    target_framework: str = ""
    component: str = ""
