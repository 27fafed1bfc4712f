import threading
from pathlib import Path
from typing import Optional, Union


class TokenStore:
    """Holds the bearer token, optionally persisted to a file across restarts."""

    def __init__(self, path: Optional[Union[str, Path]] = None):
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._token: Optional[str] = None
        if self._path and self._path.exists():
            self._token = self._path.read_text(encoding="utf-8").strip() or None

    def get(self) -> Optional[str]:
        with self._lock:
            return self._token

    def set(self, token: str) -> None:
        with self._lock:
            self._token = token
            if self._path:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                self._path.write_text(token, encoding="utf-8")

    def clear(self) -> None:
        with self._lock:
            self._token = None
            if self._path and self._path.exists():
                self._path.unlink()

    def __bool__(self) -> bool:
        return self.get() is not None
