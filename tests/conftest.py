"""
Shared fixtures: fake chat model, fake image client, canned model output.
"""

import json
from types import SimpleNamespace

import pytest
from langchain_core.messages import AIMessage

from framemapper.pipeline.comparison import ComparisonPipeline
from framemapper.pipeline.generation import ComparisonGenerator
from framemapper.pipeline.images import ImageGenerator
from framemapper.utils.llm_logger import LLMLogger


PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image"


class FakeChatModel:
    """Stands in for ChatOpenAI/ChatAnthropic; replays a fixed response."""

    def __init__(self, content="", error=None):
        self.content = content
        self.error = error
        self.calls = []

    def invoke(self, messages, **kwargs):
        self.calls.append(messages)
        if self.error is not None:
            raise self.error
        return AIMessage(content=self.content)


class FakeImageModels:
    """Mimics google-genai's client.models for generate_content calls."""

    def __init__(self, responses=None, error=None):
        self.responses = responses or {}
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config=None):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        response = self.responses.get(contents)
        if isinstance(response, Exception):
            raise response
        if response is None:
            return image_response(PNG_BYTES)
        return response


def image_response(data, mime_type="image/png"):
    """Build a generate_content response holding one text and one image part."""
    parts = [
        SimpleNamespace(text="Here is your screenshot", inline_data=None),
        SimpleNamespace(text=None, inline_data=SimpleNamespace(data=data, mime_type=mime_type)),
    ]
    return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=parts))])


def model_output(**overrides):
    """Canned JSON the model would return for React vs Excel."""
    payload = {
        "framework1Type": "code",
        "example1": "const [count, setCount] = useState(0);",
        "framework2Type": "spreadsheet",
        "example2": "1. Click cell A1.\n2. Type 0.\n3. In B1 enter =A1+1.",
        "imagePrompt2": "A Microsoft Excel window with the formula bar showing =A1+1",
        "explanation": "React keeps state in a hook; Excel keeps it in cells.",
    }
    payload.update(overrides)
    return json.dumps({k: v for k, v in payload.items() if v is not None})


@pytest.fixture(autouse=True)
def quiet_logger(monkeypatch, tmp_path):
    """Fresh logger per test, with file logging off."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "NONE")
    monkeypatch.setenv("LLM_LOG_TO_FILE", "false")
    monkeypatch.setenv("LLM_LOG_DIR", str(tmp_path / "logs"))
    LLMLogger.reset()
    yield
    LLMLogger.reset()


@pytest.fixture
def fake_llm():
    return FakeChatModel(content=model_output())


@pytest.fixture
def fake_image_models():
    return FakeImageModels()


@pytest.fixture
def image_generator(fake_image_models):
    return ImageGenerator(client=SimpleNamespace(models=fake_image_models), model_name="test-image-model")


@pytest.fixture
def pipeline(fake_llm, image_generator):
    return ComparisonPipeline(ComparisonGenerator(fake_llm), image_generator)
