"""
Semantic validation of generation output.

The schema check in ResponseParser only guarantees field presence and types;
empty strings pass it. This turns a GenerationOutput into a ComparisonDraft
or rejects it.
"""

from typing import List, Optional

from framemapper.errors import IncompleteOutput
from framemapper.models import (
    ComparisonDraft,
    FrameworkKind,
    FrameworkPresentation,
    GenerationOutput,
)


def _kind(raw: Optional[str]) -> Optional[FrameworkKind]:
    try:
        return FrameworkKind((raw or "").strip().lower())
    except ValueError:
        return None


def _clean(text: Optional[str]) -> Optional[str]:
    if text is None or not text.strip():
        return None
    return text


def validate_output(output: GenerationOutput) -> ComparisonDraft:
    """
    Check generation output for completeness.

    Args:
        output: Schema-valid generation output.

    Returns:
        ComparisonDraft with typed kinds. Image prompts are dropped for code sides.

    Raises:
        IncompleteOutput: naming every missing or invalid field.
    """
    problems: List[str] = []
    sides = []

    for index, raw_kind, content, image_prompt in (
        (1, output.framework1_type, output.example1, output.image_prompt1),
        (2, output.framework2_type, output.example2, output.image_prompt2),
    ):
        kind = _kind(raw_kind)
        if kind is None:
            problems.append(f"side{index}.kind")
        if _clean(content) is None:
            problems.append(f"side{index}.content")
        sides.append((kind, content, _clean(image_prompt)))

    explanation = _clean(output.explanation)
    if explanation is None:
        problems.append("explanation")

    if problems:
        raise IncompleteOutput(problems)

    presentations = [
        FrameworkPresentation(
            kind=kind,
            content=content,
            image_prompt=image_prompt if kind == FrameworkKind.SPREADSHEET else None,
        )
        for kind, content, image_prompt in sides
    ]
    return ComparisonDraft(
        side1=presentations[0],
        side2=presentations[1],
        explanation=explanation,
    )
