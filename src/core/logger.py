"""Structured logging: console plus JSONL event log."""

import contextvars
import json
import logging
import os
import sys
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from typing import Any

from src.core.config import config


def _format_duration(seconds: float) -> str:
    if seconds < 0:
        return "0s"
    if seconds >= 60:
        m = int(seconds // 60)
        s = seconds % 60
        if s < 0.05:
            return f"{m}m"
        return f"{m}m {s:.0f}s" if s >= 1 else f"{m}m {s:.1f}s"
    if seconds >= 0.05:
        return f"{seconds:.1f}s"
    if seconds > 0:
        return "<0.1s"
    return "0s"


def _short_reason(reason: str | None, max_len: int = 80) -> str:
    """One-line short reason for console (failed tool)."""
    if not reason or not reason.strip():
        return ""
    s = reason.strip().replace("\n", " ").strip()
    return s[:max_len] + "..." if len(s) > max_len else s


# Per-call state; concurrent tool calls each run in their own task context.
_log_tool_start: contextvars.ContextVar[float | None] = contextvars.ContextVar(
    "log_tool_start", default=None
)
_log_tool_name: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "log_tool_name", default=None
)


def _use_color() -> bool:
    if os.environ.get("NO_COLOR"):
        return False
    try:
        return sys.stdout.isatty()
    except Exception:
        return False


def _c(role: str) -> str:
    if not _use_color():
        return ""
    codes = {
        "tool": "\033[38;5;81m",
        "run": "\033[38;5;78m",
        "done_ok": "\033[38;5;78m",
        "done_fail": "\033[38;5;203m",
        "duration": "\033[38;5;221m",
        "stream": "\033[38;5;245m",
    }
    return codes.get(role, "")


def _reset() -> str:
    if not _use_color():
        return ""
    return "\033[0m"


@dataclass
class LogEvent:
    event_type: str
    timestamp: str
    data: dict[str, Any]

    def to_dict(self) -> dict:
        return asdict(self)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), default=str)


class SearchLogger:
    def __init__(self, to_file: bool = config.log_to_file):
        self._file_lock = threading.Lock()
        self._log_file_handle = None
        if to_file:
            config.logs_dir.mkdir(parents=True, exist_ok=True)
            self.log_file = config.logs_dir / "search.log"
            self._log_file_handle = open(self.log_file, "a", encoding="utf-8")
        self._setup_console_logger()

    def _setup_console_logger(self):
        self.console = logging.getLogger("searchstream")
        self.console.setLevel(logging.DEBUG)
        self._console_formatter = logging.Formatter(
            "%(asctime)s │ %(message)s", datefmt="%H:%M:%S"
        )
        if not self.console.handlers:
            handler = logging.StreamHandler()
            handler.setLevel(logging.INFO)
            handler.setFormatter(self._console_formatter)
            self.console.addHandler(handler)
        # httpx logs every request at INFO
        logging.getLogger("httpx").setLevel(logging.WARNING)

    def log_event(self, event: LogEvent) -> None:
        if self._log_file_handle is None:
            return
        with self._file_lock:
            self._log_file_handle.write(event.to_json() + "\n")
            self._log_file_handle.flush()

    def _timestamp(self) -> str:
        return datetime.now().isoformat()

    def _format_tool_args(self, args: dict) -> str:
        """Shorten args for console so long queries don't flood the log."""
        max_val = 72
        out = []
        for k, v in (args or {}).items():
            s = repr(v)
            if len(s) > max_val:
                s = s[: max_val - 3].rstrip() + "..."
            out.append(f"{k}={s}")
        return ", ".join(out)

    def tool_execute(self, tool_name: str, args: dict):
        _log_tool_start.set(time.monotonic())
        _log_tool_name.set(tool_name)
        event = LogEvent(
            event_type="TOOL_EXECUTE",
            timestamp=self._timestamp(),
            data={"tool": tool_name, "args": args},
        )
        self.log_event(event)
        short_args = self._format_tool_args(args)
        self.console.info(
            f"{_c('run')}▶ Run{_reset()}  {_c('tool')}{tool_name}{_reset()}({short_args})"
        )

    def stream_update(self, state: str, payload_size: int = 0):
        tool_name = _log_tool_name.get() or "tool"
        event = LogEvent(
            event_type="STREAM_UPDATE",
            timestamp=self._timestamp(),
            data={"tool": tool_name, "state": state, "payload_size": payload_size},
        )
        self.log_event(event)
        self.console.debug(
            f"  │ {_c('stream')}{tool_name} › {state}{_reset()}  {payload_size} chars"
        )

    def tool_result(
        self,
        tool_name: str,
        result_length: int,
        success: bool,
        *,
        error_reason: str | None = None,
    ) -> None:
        _log_tool_name.set(None)
        start = _log_tool_start.get()
        _log_tool_start.set(None)
        elapsed = (time.monotonic() - start) if start is not None else 0.0
        data: dict[str, Any] = {
            "tool": tool_name,
            "result_length": result_length,
            "success": success,
            "duration_seconds": round(elapsed, 3),
        }
        if not success and error_reason:
            data["error_reason"] = error_reason[:500]
        event = LogEvent(
            event_type="TOOL_RESULT", timestamp=self._timestamp(), data=data
        )
        self.log_event(event)
        dur_colored = f"{_c('duration')}{_format_duration(elapsed)}{_reset()}"
        if success:
            status_str = f"{_c('done_ok')}[ok]{_reset()}"
        else:
            reason = _short_reason(error_reason)
            status_str = f"{_c('done_fail')}[failed]{_reset()}"
            if reason:
                status_str += f" {reason}"
        self.console.info(
            f"{_c('done_ok')}✓ Done{_reset()}  {_c('tool')}{tool_name}{_reset()}  "
            f"total {dur_colored}  {result_length} chars  {status_str}"
        )

    def external_call(self, provider: str, url: str, payload: dict):
        """Record an outbound provider request; the API key is never logged."""
        safe_payload = {k: v for k, v in payload.items() if k != "api_key"}
        event = LogEvent(
            event_type="EXTERNAL_CALL",
            timestamp=self._timestamp(),
            data={"provider": provider, "url": url, "payload": safe_payload},
        )
        self.log_event(event)
        self.console.debug(f"☁️ EXTERNAL: {provider} → {url}")

    def error(self, message: str, *args, exception: Exception | None = None, **kwargs):
        event = LogEvent(
            event_type="ERROR",
            timestamp=self._timestamp(),
            data={
                "message": message,
                "exception": str(exception) if exception else None,
            },
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        if exception and "exc_info" not in log_kwargs:
            log_kwargs["exc_info"] = exception

        self.console.error(f"❌ Error: {message}", *args, **log_kwargs)

    def info(self, message: str, *args, **kwargs):
        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.info(message, *args, **log_kwargs)

    def warning(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="WARNING",
            timestamp=self._timestamp(),
            data={"message": message[:500]},
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.warning(f"⚠️ {message}", *args, **log_kwargs)

    def debug(self, message: str, *args, **kwargs):
        event = LogEvent(
            event_type="DEBUG", timestamp=self._timestamp(), data={"message": message}
        )
        self.log_event(event)

        allowed = {"exc_info", "stack_info", "stacklevel", "extra"}
        log_kwargs = {k: v for k, v in kwargs.items() if k in allowed}
        self.console.debug(message, *args, **log_kwargs)


logger = SearchLogger()
