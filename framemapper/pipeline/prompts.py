"""
Prompt templates for framework comparison generation.
"""

from framemapper.frameworks import KNOWN_SPREADSHEET_FRAMEWORKS
from framemapper.models import ComparisonRequest


SYSTEM_PROMPT = """You are an AI expert in software frameworks and spreadsheet applications,
skilled at explaining how one tool's way of doing something maps onto another's.

Your comparisons must be as close to one-to-one as possible, so that someone who knows
the first framework can immediately recognise the equivalent approach in the second.

You always answer with a single JSON object and nothing else."""


IMAGE_PROMPT_CHECKLIST = """- Name the spreadsheet software explicitly (e.g. "a Microsoft Excel window")
- Show the spreadsheet grid with labeled column letters and row numbers
- Show the formula bar and the toolbar/ribbon
- Show realistic sample data in the cells involved
- Keep all text shown in the image in clear, legible English
- Do not use placeholder text such as "Lorem ipsum" or "Text here"."""


FORMAT_INSTRUCTIONS = """Return ONLY a JSON object with exactly these fields:
{{
  "framework1Type": "code" | "spreadsheet",
  "example1": "<code sample or numbered steps for {framework1}>",
  "imagePrompt1": "<image prompt, only when framework1Type is spreadsheet, otherwise omit>",
  "framework2Type": "code" | "spreadsheet",
  "example2": "<code sample or numbered steps for {framework2}>",
  "imagePrompt2": "<image prompt, only when framework2Type is spreadsheet, otherwise omit>",
  "explanation": "<what the examples do and their conceptual similarities and differences>"
}}"""


PROMPT_TEMPLATE = """Compare how two frameworks handle a specific piece of functionality.

Framework 1 (familiar to the user): {framework1}
Framework 2 (the user wants to learn): {framework2}
Component/Functionality: {component}

Known spreadsheet frameworks: {spreadsheets}

Rules:
1. Classify each framework as "code" or "spreadsheet". Use "spreadsheet" for the known
   spreadsheet frameworks above and any other spreadsheet application; use "code" otherwise.
2. For a "code" framework, write a concise, runnable code example that implements the
   functionality. Do NOT include an image prompt for it.
3. For a "spreadsheet" framework, write clear numbered steps in plain language ("1. ...",
   "2. ...") that achieve the same result, including any formulas to type.
   You MAY also write an image prompt describing a screenshot of the finished result.
   The image prompt must:
{checklist}
4. Keep the two examples as close to one-to-one as possible.
5. In the explanation, describe what the examples do and the conceptual similarities and
   differences between the two approaches.

{format_instructions}"""


def _indent(text: str, prefix: str) -> str:
    return "\n".join(prefix + line for line in text.splitlines())


def build_prompt(request: ComparisonRequest) -> str:
    """
    Render the comparison instruction for a request.

    Args:
        request: Validated comparison request.

    Returns:
        Prompt text naming both frameworks and the functionality.
    """
    framework1 = request.familiar_framework
    framework2 = request.target_framework
    return PROMPT_TEMPLATE.format(
        framework1=framework1,
        framework2=framework2,
        component=request.component,
        spreadsheets=", ".join(KNOWN_SPREADSHEET_FRAMEWORKS),
        checklist=_indent(IMAGE_PROMPT_CHECKLIST, "   "),
        format_instructions=FORMAT_INSTRUCTIONS.format(
            framework1=framework1,
            framework2=framework2,
        ),
    )
