"""
LLM Debug Logger for tracking generation and image calls.

Supports configurable log levels (NONE, INFO, DEBUG, TRACE) and dual output:
- Console: Human-readable formatted output
- File: JSON Lines format for parsing and analysis

Warnings and errors are always printed, whatever the level, since they are
the operator's only trace of recovered failures.
"""

import json
import os
import re
import time
import uuid
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv


_DATA_URI_PATTERN = re.compile(r"data:image/([\w.+-]+);base64,([A-Za-z0-9+/=]+)")


class LogLevel(Enum):
    """Logging levels for LLM debug output."""

    NONE = 0
    INFO = 1
    DEBUG = 2
    TRACE = 3


def truncate_image_data(text: str) -> str:
    """Replace embedded base64 image data with a short summary."""
    def _summary(match: re.Match) -> str:
        return f"[IMAGE_DATA: {match.group(1)}, base64 encoded, {len(match.group(2)):,} bytes]"

    return _DATA_URI_PATTERN.sub(_summary, text)


class LLMLogger:
    """Centralized logger for LLM API calls with configurable levels."""

    _instance: Optional["LLMLogger"] = None

    def __new__(cls):
        """Singleton pattern implementation."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self):
        """Initialize the logger with configuration from environment."""
        if self._initialized:
            return

        load_dotenv()

        level_str = os.getenv("LLM_DEBUG_LEVEL", "NONE").upper()
        try:
            self.level = LogLevel[level_str]
        except KeyError:
            self.level = LogLevel.NONE

        self.log_to_file = os.getenv("LLM_LOG_TO_FILE", "false").lower() == "true"
        self.log_dir = Path(os.getenv("LLM_LOG_DIR", "outputs"))

        self._initialized = True

    @classmethod
    def reset(cls):
        """Drop the singleton so the next access re-reads the environment."""
        cls._instance = None

    def should_log(self, min_level: LogLevel) -> bool:
        """Check if we should log at the given level."""
        return self.level.value >= min_level.value

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    @staticmethod
    def _preview(content: str, max_len: int = 200) -> str:
        content = truncate_image_data(content)
        if len(content) <= max_len:
            return content
        return content[:max_len] + "... [truncated]"

    @staticmethod
    def _message_text(msg: Any) -> str:
        content = msg.content if hasattr(msg, "content") else msg
        if not isinstance(content, str):
            content = json.dumps(content, ensure_ascii=False, default=str)
        return truncate_image_data(content)

    def _write_to_file(self, session_id: Optional[str], log_entry: Dict[str, Any]):
        """Write log entry to JSON Lines file."""
        if not self.log_to_file:
            return

        log_file = self.log_dir / (session_id or "default") / "logs" / "llm_calls.jsonl"
        log_file.parent.mkdir(parents=True, exist_ok=True)

        with open(log_file, "a", encoding="utf-8") as f:
            f.write(json.dumps(log_entry, ensure_ascii=False, default=str) + "\n")

    def log_invocation(
        self,
        component: str,
        provider: str,
        model: str,
        session_id: Optional[str] = None,
    ) -> str:
        """
        Log the start of an LLM invocation.

        Returns:
            Invocation ID for tracking this call, or "" when logging is off
        """
        if not self.should_log(LogLevel.INFO):
            return ""

        invocation_id = str(uuid.uuid4())
        console_msg = f"[{self._timestamp()}] 🔵 LLM Call: [{component}] {provider}/{model}"
        if session_id:
            console_msg += f" | session: {session_id}"
        print(console_msg)
        return invocation_id

    def log_request(
        self,
        invocation_id: str,
        component: str,
        messages: List[Any],
        session_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Log request messages (DEBUG previews them, TRACE keeps them in full)."""
        if not self.should_log(LogLevel.DEBUG):
            return

        texts = [self._message_text(msg) for msg in messages]
        print(f"  Messages: {len(messages)}")
        for i, (msg, text) in enumerate(zip(messages, texts)):
            print(f"    {i + 1}. [{type(msg).__name__}] {self._preview(text, 150)}")

        self._write_to_file(session_id, {
            "timestamp": self._timestamp(),
            "level": self.level.name,
            "event": "request",
            "component": component,
            "invocation_id": invocation_id,
            "request": {
                "message_count": len(messages),
                "messages": texts if self.level == LogLevel.TRACE else [],
            },
            "metadata": metadata or {},
        })

    def log_response(
        self,
        invocation_id: str,
        component: str,
        provider: str,
        model: str,
        response: Any,
        start_time: float,
        end_time: float,
        session_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """Log LLM response with timing and token usage."""
        if not self.should_log(LogLevel.INFO):
            return

        latency_ms = (end_time - start_time) * 1000
        content = self._message_text(response)

        token_usage = {}
        usage = getattr(response, "usage_metadata", None)
        if usage:
            token_usage = {
                "prompt_tokens": usage.get("input_tokens"),
                "completion_tokens": usage.get("output_tokens"),
                "total_tokens": usage.get("total_tokens"),
            }

        parts = [f"[{component}]", f"{provider}/{model}", f"{latency_ms:.1f}ms"]
        if token_usage.get("total_tokens") is not None:
            parts.append(f"{token_usage['total_tokens']} tokens")
        print(f"[{self._timestamp()}] ✅ LLM Response: " + " | ".join(parts))

        if self.should_log(LogLevel.TRACE):
            print("  RESPONSE:")
            for line in content.splitlines():
                print(f"    {line}")
        elif self.should_log(LogLevel.DEBUG):
            print(f"  Response: {self._preview(content)}")

        self._write_to_file(session_id, {
            "timestamp": self._timestamp(),
            "level": self.level.name,
            "event": "response",
            "component": component,
            "invocation_id": invocation_id,
            "provider": provider,
            "model": model,
            "response": {
                "content": content if self.level == LogLevel.TRACE else None,
                "content_preview": self._preview(content) if self.should_log(LogLevel.DEBUG) else None,
                "content_length": len(content),
            },
            "timing": {
                "latency_ms": latency_ms,
                "start_time": datetime.fromtimestamp(start_time).isoformat(),
                "end_time": datetime.fromtimestamp(end_time).isoformat(),
            },
            "usage": token_usage or None,
            "metadata": metadata or {},
        })

    def log_warning(self, component: str, message: str, session_id: Optional[str] = None):
        """Log a recovered failure."""
        message = truncate_image_data(message)
        print(f"[{self._timestamp()}] ⚠️ Warning: [{component}] {message}")
        self._write_to_file(session_id, {
            "timestamp": self._timestamp(),
            "level": "WARNING",
            "event": "warning",
            "component": component,
            "message": message,
        })

    def log_error(self, component: str, error: BaseException, session_id: Optional[str] = None):
        """Log a failure together with its chained cause, if any."""
        cause = error.__cause__
        detail = f"{type(error).__name__}: {error}"
        if getattr(error, "detail", None):
            detail += f" [{error.detail}]"
        if cause is not None:
            detail += f" (caused by {type(cause).__name__}: {cause})"
        detail = truncate_image_data(detail)
        print(f"[{self._timestamp()}] ❌ Error: [{component}] {detail}")
        self._write_to_file(session_id, {
            "timestamp": self._timestamp(),
            "level": "ERROR",
            "event": "error",
            "component": component,
            "error": detail,
        })

    def log_event(
        self,
        component: str,
        event: str,
        payload: Optional[Dict[str, Any]] = None,
        session_id: Optional[str] = None,
    ):
        """Log an application event such as submitted feedback."""
        if self.should_log(LogLevel.INFO):
            print(f"[{self._timestamp()}] 📝 {event}: [{component}] {json.dumps(payload or {}, default=str)}")
        self._write_to_file(session_id, {
            "timestamp": self._timestamp(),
            "level": "INFO",
            "event": event,
            "component": component,
            "payload": payload or {},
        })


def get_logger() -> LLMLogger:
    """Get the singleton logger instance."""
    return LLMLogger()


class LoggedLLM:
    """
    Wrapper around LangChain chat models to add debug logging.

    Intercepts invoke() calls and logs requests, responses, timing, and metadata.
    """

    def __init__(
        self,
        llm_instance: Any,
        component: str,
        provider: str,
        model: str,
        session_id: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ):
        """
        Initialize LoggedLLM wrapper.

        Args:
            llm_instance: The actual chat model (ChatOpenAI or ChatAnthropic)
            component: Component name (e.g., "generator")
            provider: Provider name ("openai" or "anthropic")
            model: Model name
            session_id: Optional session ID used to group file logs
            metadata: Optional additional metadata to include in logs
        """
        self.llm = llm_instance
        self.component = component
        self.provider = provider
        self.model = model
        self.session_id = session_id
        self.metadata = metadata or {}
        self.logger = get_logger()

    def __getattr__(self, name: str):
        """Delegate all other attributes to wrapped LLM instance."""
        return getattr(self.llm, name)

    def invoke(self, messages: List[Any], **kwargs) -> Any:
        """Invoke the wrapped model with logging."""
        invocation_id = self.logger.log_invocation(
            component=self.component,
            provider=self.provider,
            model=self.model,
            session_id=self.session_id,
        )

        if not invocation_id:
            return self.llm.invoke(messages, **kwargs)

        start_time = time.time()
        self.logger.log_request(
            invocation_id=invocation_id,
            component=self.component,
            messages=messages,
            session_id=self.session_id,
            metadata=self.metadata,
        )

        try:
            response = self.llm.invoke(messages, **kwargs)
        except Exception as e:
            self.logger.log_error(self.component, e, session_id=self.session_id)
            raise

        self.logger.log_response(
            invocation_id=invocation_id,
            component=self.component,
            provider=self.provider,
            model=self.model,
            response=response,
            start_time=start_time,
            end_time=time.time(),
            session_id=self.session_id,
            metadata=self.metadata,
        )

        return response
