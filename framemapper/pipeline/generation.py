"""
LangChain-based structured generation of framework comparisons.
"""

import json
import os
from typing import Any, Optional, Tuple

from dotenv import load_dotenv
from langchain_anthropic import ChatAnthropic
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI
from pydantic import ValidationError

from framemapper.errors import GenerationFailure
from framemapper.models import GenerationOutput
from framemapper.pipeline.prompts import SYSTEM_PROMPT
from framemapper.utils.llm_logger import LoggedLLM


DEFAULT_MODELS = {
    "openai": "gpt-4o",
    "anthropic": "claude-3-5-sonnet-latest",
}

API_KEY_VARS = {
    "openai": "OPENAI_API_KEY",
    "anthropic": "ANTHROPIC_API_KEY",
}


def create_chat_model(
    provider: Optional[str] = None,
    model_name: Optional[str] = None,
    temperature: Optional[float] = None,
    max_tokens: int = 4096,
    api_key: Optional[str] = None,
    session_id: Optional[str] = None,
) -> LoggedLLM:
    """
    Build the chat model used for comparison generation.

    Args:
        provider: LLM provider. If None, reads from FRAMEMAPPER_PROVIDER env var.
        model_name: Model name. If None, reads from FRAMEMAPPER_MODEL env var.
        temperature: Generation temperature. If None, reads from FRAMEMAPPER_TEMPERATURE env var.
        max_tokens: Maximum tokens to generate.
        api_key: API key (optional, uses environment variable).
        session_id: Optional session ID for grouping log files.

    Returns:
        LoggedLLM wrapper around ChatOpenAI or ChatAnthropic instance

    Raises:
        ValueError: unsupported provider, or no API key for it.
    """
    load_dotenv()

    provider = (provider or os.getenv("FRAMEMAPPER_PROVIDER", "openai")).lower()
    if provider not in DEFAULT_MODELS:
        raise ValueError(f"Unsupported provider: {provider}")

    model = model_name or os.getenv("FRAMEMAPPER_MODEL") or DEFAULT_MODELS[provider]
    temp = temperature if temperature is not None else float(os.getenv("FRAMEMAPPER_TEMPERATURE", "0.4"))
    key = api_key or os.getenv(API_KEY_VARS[provider])
    if not key:
        raise ValueError(f"Missing API key for {provider}: set {API_KEY_VARS[provider]}")

    if provider == "openai":
        llm_instance = ChatOpenAI(
            model=model,
            temperature=temp,
            max_tokens=max_tokens,
            api_key=key,
        )
    else:
        llm_instance = ChatAnthropic(
            model=model,
            temperature=temp,
            max_tokens=max_tokens,
            api_key=key,
        )

    return LoggedLLM(
        llm_instance=llm_instance,
        component="generator",
        provider=provider,
        model=model,
        session_id=session_id,
        metadata={"temperature": temp, "max_tokens": max_tokens},
    )


class ResponseParser:
    """Parses LLM responses into the generation output schema."""

    @staticmethod
    def extract_json(response_text: str) -> str:
        """
        Extract the JSON object from an LLM response.

        Tries the outermost braces first, so fences inside string values
        survive. Falls back to the body of the outer markdown fence.
        """
        text = response_text.strip()
        braces = ResponseParser._outer_braces(text)
        try:
            json.loads(braces)
            return braces
        except json.JSONDecodeError:
            pass

        if "```json" in text:
            text = text.split("```json", 1)[1]
        elif text.startswith("```"):
            text = text[3:]
        else:
            return braces
        # Outer fence closes at the last marker
        if "```" in text:
            text = text.rsplit("```", 1)[0]
        return ResponseParser._outer_braces(text.strip())

    @staticmethod
    def _outer_braces(text: str) -> str:
        start = text.find("{")
        end = text.rfind("}")
        if start != -1 and end > start:
            text = text[start:end + 1]
        return text.strip()

    @classmethod
    def parse_output(cls, response_text: str) -> Tuple[Optional[GenerationOutput], Optional[str]]:
        """
        Deserialize and schema-check a response.

        Returns:
            Tuple of (output, error); exactly one of them is None.
        """
        try:
            payload = json.loads(cls.extract_json(response_text))
        except json.JSONDecodeError as e:
            return None, f"Response is not valid JSON: {e}"

        if not isinstance(payload, dict):
            return None, "Response JSON is not an object"

        try:
            return GenerationOutput.model_validate(payload), None
        except ValidationError as e:
            return None, f"Response does not match the output schema: {e}"


def _response_text(response: Any) -> str:
    content = getattr(response, "content", response)
    if isinstance(content, list):
        # Anthropic-style content blocks
        return "".join(
            block.get("text", "") if isinstance(block, dict) else str(block)
            for block in content
        )
    return str(content)


class ComparisonGenerator:
    """Submits comparison prompts to a chat model and parses the result."""

    def __init__(self, llm: Any):
        """
        Initialize the generator.

        Args:
            llm: Chat model exposing invoke(messages); usually from create_chat_model().
        """
        self.llm = llm
        self.parser = ResponseParser()

    def generate(self, prompt: str) -> GenerationOutput:
        """
        Run one blocking generation call.

        Raises:
            GenerationFailure: backend unreachable, or output not parseable.
        """
        messages = [
            SystemMessage(content=SYSTEM_PROMPT),
            HumanMessage(content=prompt),
        ]

        try:
            response = self.llm.invoke(messages)
        except Exception as e:
            raise GenerationFailure(f"{type(e).__name__}: {e}") from e

        output, error = self.parser.parse_output(_response_text(response))
        if output is None:
            raise GenerationFailure(error)
        return output
