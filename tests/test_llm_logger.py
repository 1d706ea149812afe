"""
Tests for the LLM debug logger.
"""

import json

import pytest
from langchain_core.messages import AIMessage, HumanMessage

from framemapper.errors import GenerationFailure
from framemapper.utils.llm_logger import LLMLogger, LoggedLLM, LogLevel, get_logger, truncate_image_data

from conftest import FakeChatModel


def test_truncate_image_data():
    """Test base64 image data is summarised."""
    text = "before data:image/png;base64,QUJDRA== after"
    assert truncate_image_data(text) == "before [IMAGE_DATA: png, base64 encoded, 8 bytes] after"


def test_logger_is_singleton():
    """Test the logger is a singleton."""
    assert get_logger() is get_logger()


def test_level_from_environment(monkeypatch):
    """Test the log level comes from the environment."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "debug")
    LLMLogger.reset()
    assert get_logger().level == LogLevel.DEBUG


def test_unknown_level_falls_back_to_none(monkeypatch):
    """Test unknown log levels disable logging."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "chatty")
    LLMLogger.reset()
    assert get_logger().level == LogLevel.NONE


def test_logged_llm_passes_through_when_disabled():
    """Test the wrapper passes calls through when logging is off."""
    llm = FakeChatModel(content="hello")
    wrapped = LoggedLLM(llm, component="generator", provider="openai", model="gpt-4o")

    response = wrapped.invoke([HumanMessage(content="hi")])

    assert response.content == "hello"
    assert len(llm.calls) == 1


def test_logged_llm_writes_jsonl(monkeypatch, tmp_path, capsys):
    """Test requests and responses are written as JSON Lines."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "TRACE")
    monkeypatch.setenv("LLM_LOG_TO_FILE", "true")
    monkeypatch.setenv("LLM_LOG_DIR", str(tmp_path))
    LLMLogger.reset()

    llm = FakeChatModel(content="answer data:image/png;base64,QUJDRA==")
    wrapped = LoggedLLM(llm, component="generator", provider="openai", model="gpt-4o", session_id="s1")
    wrapped.invoke([HumanMessage(content="question")])

    out = capsys.readouterr().out
    assert "LLM Call: [generator] openai/gpt-4o" in out
    assert "QUJDRA==" not in out

    log_file = tmp_path / "s1" / "logs" / "llm_calls.jsonl"
    entries = [json.loads(line) for line in log_file.read_text(encoding="utf-8").splitlines()]
    assert [entry["event"] for entry in entries] == ["request", "response"]
    assert entries[0]["request"]["messages"] == ["question"]
    assert "[IMAGE_DATA: png" in entries[1]["response"]["content"]


def test_logged_llm_logs_and_reraises_errors(monkeypatch, capsys):
    """Test model errors are logged and re-raised."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "INFO")
    LLMLogger.reset()

    wrapped = LoggedLLM(FakeChatModel(error=TimeoutError("slow")), "generator", "openai", "gpt-4o")
    with pytest.raises(TimeoutError):
        wrapped.invoke([HumanMessage(content="q")])

    assert "TimeoutError: slow" in capsys.readouterr().out


def test_log_error_includes_detail_and_cause(capsys):
    """Test error logs include the chained cause."""
    try:
        try:
            raise ConnectionError("refused")
        except ConnectionError as e:
            raise GenerationFailure("ConnectionError: refused") from e
    except GenerationFailure as failure:
        get_logger().log_error("actions", failure)

    out = capsys.readouterr().out
    assert "GenerationFailure" in out
    assert "caused by ConnectionError: refused" in out


def test_log_event_writes_payload(monkeypatch, tmp_path):
    """Test events are written with their payload."""
    monkeypatch.setenv("LLM_LOG_TO_FILE", "true")
    monkeypatch.setenv("LLM_LOG_DIR", str(tmp_path))
    LLMLogger.reset()

    get_logger().log_event("feedback", "Feedback submitted", {"rating": 5})

    entry = json.loads((tmp_path / "default" / "logs" / "llm_calls.jsonl").read_text(encoding="utf-8"))
    assert entry["payload"] == {"rating": 5}


def test_usage_metadata_is_reported(monkeypatch, capsys):
    """Test token usage is printed."""
    monkeypatch.setenv("LLM_DEBUG_LEVEL", "INFO")
    LLMLogger.reset()

    class UsageModel(FakeChatModel):
        def invoke(self, messages, **kwargs):
            return AIMessage(
                content="ok",
                usage_metadata={"input_tokens": 3, "output_tokens": 4, "total_tokens": 7},
            )

    LoggedLLM(UsageModel(), "generator", "openai", "gpt-4o").invoke([HumanMessage(content="q")])
    assert "7 tokens" in capsys.readouterr().out
