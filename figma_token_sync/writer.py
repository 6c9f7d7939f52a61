"""
輸出寫入 — 建立目錄、以內容指紋判斷是否需要重寫

指紋快取由呼叫端持有並明確 load / save，不藏在 writer 的實例狀態裡。
"""

import hashlib
import json
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class SinkError(Exception):
    """無法寫入某個輸出目的地（權限、磁碟等）."""

    def __init__(self, destination: str, cause: Exception):
        super().__init__(f"Cannot write {destination}: {cause}")
        self.destination = destination
        self.cause = cause


def fingerprint(content: str) -> str:
    return hashlib.md5(content.encode("utf-8")).hexdigest()


class FingerprintCache:
    """destination → 上次寫入內容的 md5."""

    def __init__(self, entries: Optional[dict] = None):
        self._entries: dict[str, str] = dict(entries or {})

    def get(self, destination: str) -> Optional[str]:
        return self._entries.get(destination)

    def set(self, destination: str, digest: str) -> None:
        self._entries[destination] = digest

    def __contains__(self, destination: str) -> bool:
        return destination in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def seed_from_file(self, destination: str) -> None:
        """以既有檔案內容覆蓋指紋；檔案不存在則保留原值，無法讀取則移除."""
        path = Path(destination)
        if not path.is_file():
            return
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            self._entries.pop(destination, None)
            return
        self.set(destination, fingerprint(content))

    @classmethod
    def load(cls, cache_path: str) -> "FingerprintCache":
        """讀取 JSON 快取，不存在或格式錯誤則回傳空快取."""
        path = Path(cache_path)
        if not path.exists():
            return cls()
        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError):
            print(f"   ⚠️  指紋快取 '{cache_path}' 無法讀取，將重新建立。")
            return cls()
        if not isinstance(data, dict):
            return cls()
        return cls({k: v for k, v in data.items() if isinstance(v, str)})

    def save(self, cache_path: str) -> None:
        path = Path(cache_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(self._entries, f, indent=2, sort_keys=True)
        except OSError as e:
            raise SinkError(cache_path, e) from e


@dataclass
class WriteResult:
    destination: str
    changed: bool


class OutputWriter:
    """寫入產生的 token 檔；內容未變則不動檔案."""

    def write(self, destination: str, content: str, cache: FingerprintCache) -> WriteResult:
        new_hash = fingerprint(content)
        if cache.get(destination) == new_hash and Path(destination).is_file():
            return WriteResult(destination, changed=False)
        path = Path(destination)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise SinkError(destination, e) from e
        cache.set(destination, new_hash)
        return WriteResult(destination, changed=True)
