"""
Form submission handlers used by the presentation layer.

Every handler returns an ActionState and never raises.
"""

import re
from typing import Any, List, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator
from pydantic_core import PydanticCustomError

from framemapper.errors import ValidationFailure
from framemapper.frameworks import framework_key
from framemapper.models import ActionState, ComparisonRequest, Feedback
from framemapper.pipeline.comparison import ComparisonPipeline
from framemapper.utils.llm_logger import get_logger


FORM_FIELDS = ("familiarFramework", "targetFramework", "componentToCompare")

FIELD_LABELS = {
    "componentToCompare": "Component/Functionality",
}

MIN_COMPONENT_LENGTH = 3

SUCCESS_MESSAGE = "Comparison generated successfully."
FAILURE_MESSAGE = "An error occurred while generating the comparison."
FEEDBACK_THANKS = "Thank you for helping us improve."
FEEDBACK_MISSING = "Please select a rating before submitting."


class ComparisonForm(BaseModel):
    """Raw comparison form, keyed by the form's field names."""
    model_config = ConfigDict(populate_by_name=True)

    familiar_framework: str = Field(alias="familiarFramework")
    target_framework: str = Field(alias="targetFramework")
    component_to_compare: str = Field(alias="componentToCompare")

    @field_validator("familiar_framework")
    @classmethod
    def _familiar_required(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("required", "Familiar framework is required.")
        return value

    @field_validator("target_framework")
    @classmethod
    def _target_required(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("required", "Target framework is required.")
        return value

    @field_validator("component_to_compare")
    @classmethod
    def _component_length(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("required", "Component/Functionality is required.")
        if len(value) < MIN_COMPONENT_LENGTH:
            raise PydanticCustomError(
                "too_short",
                "Component/functionality must be at least {min_length} characters long.",
                {"min_length": MIN_COMPONENT_LENGTH},
            )
        return value

    @model_validator(mode="after")
    def _frameworks_differ(self) -> "ComparisonForm":
        if framework_key(self.familiar_framework) == framework_key(self.target_framework):
            raise PydanticCustomError(
                "same_framework",
                "Target framework must be different from familiar framework.",
            )
        return self

    def to_request(self) -> ComparisonRequest:
        return ComparisonRequest(
            familiar_framework=self.familiar_framework,
            target_framework=self.target_framework,
            component=self.component_to_compare,
        )


def humanize_field(name: str) -> str:
    """Display label for a form field, e.g. familiarFramework -> Familiar Framework."""
    if name in FIELD_LABELS:
        return FIELD_LABELS[name]
    words = re.sub(r"(?<=[a-z0-9])(?=[A-Z])", " ", name).replace("_", " ").split()
    return " ".join(word[:1].upper() + word[1:] for word in words)


def coerce_form(form_data: Optional[Mapping[str, Any]]) -> dict:
    """Pick the comparison fields as trimmed strings; anything else becomes ""."""
    form_data = form_data or {}
    coerced = {}
    for key in FORM_FIELDS:
        value = form_data.get(key)
        coerced[key] = value.strip() if isinstance(value, str) else ""
    return coerced


def validate_form(form_data: Optional[Mapping[str, Any]]) -> ComparisonRequest:
    """
    Validate raw form fields.

    Raises:
        ValidationFailure: with every (label, message) violation.
    """
    try:
        form = ComparisonForm.model_validate(coerce_form(form_data))
    except ValidationError as e:
        errors: List[Tuple[str, str]] = []
        for error in e.errors():
            # Cross-field errors have no location; they belong to the target field
            field = str(error["loc"][0]) if error["loc"] else "targetFramework"
            errors.append((humanize_field(field), error["msg"]))
        raise ValidationFailure(errors) from e
    return form.to_request()


def _error_text(error: BaseException) -> str:
    return str(error) or repr(error)


def handle_generate_comparison(
    prev_state: Optional[ActionState],
    form_data: Optional[Mapping[str, Any]],
    pipeline: ComparisonPipeline,
) -> ActionState:
    """
    Validate a comparison form submission and run the pipeline.

    Args:
        prev_state: Previous state; unused beyond keeping the handler signature uniform.
        form_data: Raw form fields.
        pipeline: Comparison pipeline to run.

    Returns:
        ActionState with either data or error set.
    """
    try:
        request = validate_form(form_data)
    except ValidationFailure as e:
        return ActionState(data=None, error=str(e) or "Validation failed.")

    try:
        result = pipeline.run(request)
    except Exception as e:
        get_logger().log_error("actions", e)
        return ActionState(
            data=None,
            error=f"Server Error: {_error_text(e)}",
            message=FAILURE_MESSAGE,
        )

    return ActionState(data=result, error=None, message=SUCCESS_MESSAGE)


def handle_feedback(
    rating: Any,
    familiar_framework: str = "",
    target_framework: str = "",
    component: str = "",
) -> ActionState:
    """Record a 1-5 rating for a comparison."""
    try:
        feedback = Feedback(
            rating=rating,
            familiar_framework=familiar_framework or "",
            target_framework=target_framework or "",
            component=component or "",
        )
    except ValidationError:
        return ActionState(error=FEEDBACK_MISSING)

    get_logger().log_event("feedback", "Feedback submitted", feedback.model_dump())
    return ActionState(message=FEEDBACK_THANKS)
