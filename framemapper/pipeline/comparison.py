"""
End-to-end comparison pipeline: prompt, generate, validate, illustrate, assemble.
"""

from typing import Optional

from framemapper.models import ComparisonDraft, ComparisonRequest, ComparisonResult
from framemapper.pipeline.generation import ComparisonGenerator, create_chat_model
from framemapper.pipeline.images import ImageGenerator, create_image_generator
from framemapper.pipeline.prompts import build_prompt
from framemapper.pipeline.validation import validate_output


def assemble_result(
    request: ComparisonRequest,
    draft: ComparisonDraft,
    image_url1: Optional[str] = None,
    image_url2: Optional[str] = None,
) -> ComparisonResult:
    """Merge request names, validated draft and optional images."""
    return ComparisonResult(
        name1=request.familiar_framework,
        name2=request.target_framework,
        side1=draft.side1,
        side2=draft.side2,
        explanation=draft.explanation,
        image_url1=image_url1,
        image_url2=image_url2,
    )


class ComparisonPipeline:
    """Runs one comparison request end to end."""

    def __init__(
        self,
        generator: ComparisonGenerator,
        image_generator: Optional[ImageGenerator] = None,
    ):
        """
        Args:
            generator: Structured generation call.
            image_generator: Optional illustration generator; None disables images.
        """
        self.generator = generator
        self.image_generator = image_generator

    def run(self, request: ComparisonRequest) -> ComparisonResult:
        """
        Raises:
            GenerationFailure: generation call failed.
            IncompleteOutput: model output missing content.
        """
        prompt = build_prompt(request)
        output = self.generator.generate(prompt)
        draft = validate_output(output)

        image_url1 = image_url2 = None
        if self.image_generator is not None:
            image_url1, image_url2 = self.image_generator.images_for(draft)

        return assemble_result(request, draft, image_url1, image_url2)


def create_pipeline(
    provider: Optional[str] = None,
    model_name: Optional[str] = None,
    temperature: Optional[float] = None,
    enable_images: bool = True,
    session_id: Optional[str] = None,
) -> ComparisonPipeline:
    """Wire a pipeline from explicit settings, falling back to the environment."""
    llm = create_chat_model(
        provider=provider,
        model_name=model_name,
        temperature=temperature,
        session_id=session_id,
    )
    image_generator = create_image_generator() if enable_images else None
    return ComparisonPipeline(ComparisonGenerator(llm), image_generator)
