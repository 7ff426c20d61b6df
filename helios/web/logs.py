"""进程内日志缓冲与日志文件，供 /api/logs 查看。"""

from __future__ import annotations

import logging
from collections import deque
from pathlib import Path
from threading import Lock

MAX_LOG_LINES = 1000
_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"


def _not_access_log(record: logging.LogRecord) -> bool:
    return not record.name.startswith("uvicorn.access")


def _clamp(limit: int) -> int:
    return min(max(limit, 1), MAX_LOG_LINES)


class LogBuffer:
    """最近的日志行；配置了日志文件时优先读取文件尾部。"""

    def __init__(self, max_lines: int = MAX_LOG_LINES) -> None:
        self._lines: deque[str] = deque(maxlen=max_lines)
        self._lock = Lock()
        self.log_file: Path | None = None

    def append(self, line: str) -> None:
        with self._lock:
            self._lines.append(line)

    def tail(self, limit: int = 200) -> list[str]:
        limit = _clamp(limit)
        lines = self._file_tail(limit)
        if lines:
            return lines
        with self._lock:
            return list(self._lines)[-limit:]

    def _file_tail(self, limit: int) -> list[str]:
        if self.log_file is None or not self.log_file.exists():
            return []
        lines: deque[str] = deque(maxlen=limit)
        try:
            with self.log_file.open("r", encoding="utf-8", errors="ignore") as handle:
                for line in handle:
                    lines.append(line.rstrip())
        except OSError:
            return []
        return list(lines)


log_buffer = LogBuffer()


class InMemoryLogHandler(logging.Handler):
    def __init__(self, buffer: LogBuffer) -> None:
        super().__init__(level=logging.INFO)
        self.buffer = buffer

    def emit(self, record: logging.LogRecord) -> None:
        self.buffer.append(self.format(record))


def _configure(handler: logging.Handler) -> logging.Handler:
    handler.setLevel(logging.INFO)
    handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    handler.addFilter(_not_access_log)
    return handler


def _has_file_handler(root: logging.Logger, path: Path) -> bool:
    return any(
        isinstance(handler, logging.FileHandler) and Path(handler.baseFilename) == path
        for handler in root.handlers
    )


def install_log_handlers(log_file: str | Path | None = None, buffer: LogBuffer = log_buffer) -> None:
    """在根日志器上挂载缓冲与文件处理器，重复调用不会重复挂载。"""

    root = logging.getLogger()
    if root.level > logging.INFO:
        root.setLevel(logging.INFO)
    if not any(isinstance(h, InMemoryLogHandler) and h.buffer is buffer for h in root.handlers):
        root.addHandler(_configure(InMemoryLogHandler(buffer)))
        for name in ("uvicorn", "uvicorn.error", "uvicorn.access"):
            logging.getLogger(name).propagate = True
    if log_file is None:
        return

    path = Path(log_file).resolve()
    buffer.log_file = path
    if _has_file_handler(root, path):
        return
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        logging.getLogger(__name__).warning("无法创建日志目录 %s: %s", path.parent, exc)
        buffer.log_file = None
        return
    root.addHandler(_configure(logging.FileHandler(path, encoding="utf-8")))
