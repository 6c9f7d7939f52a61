#!/usr/bin/env python3
"""
figma-token-sync CLI — Figma → Code 設計 token 單向同步

  figma-sync sync [--file-key KEY] [--only css,json]   # 同步一次
  figma-sync watch [--file-key KEY] [--interval 30]   # 定期同步，設定檔變更時立即同步
  figma-sync preview [--file-key KEY]                 # 預覽 token key，不寫檔
"""

import argparse
import os
import sys
import threading
import time
from pathlib import Path
from typing import Callable, Optional

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from . import __version__
from .config import DEFAULT_CONFIG_PATH, load_config, load_env, resolve_watch_settings
from .figma_reader import TransportError
from .generator import FORMATS
from .naming_engine import preview_token_keys
from .sync import DesignTokenSync


def _report_transport_error(e: TransportError, file_key: Optional[str]) -> None:
    if e.status_code == 403:
        print("❌ Figma API 403：Token 無效或已過期，請重新產生 FIGMA_ACCESS_TOKEN。")
    elif e.status_code == 404:
        print(f"❌ Figma API 404：找不到檔案 '{file_key}'，請確認 file key 是否正確。")
    else:
        print(f"❌ Figma API 錯誤：{e}")


def _build_sync(args, config: dict) -> Optional[DesignTokenSync]:
    try:
        return DesignTokenSync(config, file_key=getattr(args, "file_key", None))
    except ValueError as e:
        print(f"❌ {e}")
        print("   取得方式：Figma → Settings → Personal access tokens；file key 在檔案網址 figma.com/file/<FILE_KEY>/...")
        return None


def _parse_only(value: Optional[str]) -> Optional[list]:
    if not value:
        return None
    formats = [v.strip() for v in value.split(",") if v.strip()]
    unknown = [f for f in formats if f not in FORMATS]
    if unknown:
        raise argparse.ArgumentTypeError(f"unknown format(s): {', '.join(unknown)}")
    return formats


def cmd_sync(args, config: dict) -> int:
    """Sync: 從 Figma 擷取 token 並寫出各格式."""
    syncer = _build_sync(args, config)
    if syncer is None:
        return 1
    print("🎨 Starting Figma design token sync...\n")
    try:
        result = syncer.sync(only=args.only)
    except TransportError as e:
        _report_transport_error(e, syncer.file_key)
        return 1
    return 0 if result.ok else 1


def cmd_preview(args, config: dict) -> int:
    """預覽 token key 樹."""
    syncer = _build_sync(args, config)
    if syncer is None:
        return 1
    try:
        extraction = syncer.fetch_tokens()
    except TransportError as e:
        _report_transport_error(e, syncer.file_key)
        return 1
    print()
    print(preview_token_keys(extraction.tokens))
    return 0


class ChangeHandler(FileSystemEventHandler):
    """設定檔變更事件處理器，帶 debounce 防抖。"""

    def __init__(self, callback: Callable[[], None], watched_path: str, debounce: float = 1.0):
        self.callback = callback
        self.watched_path = os.path.abspath(watched_path)
        self.last_trigger = 0.0
        self.debounce_seconds = debounce

    def _handle(self, event) -> None:
        if event.is_directory:
            return
        paths = [event.src_path, getattr(event, "dest_path", "") or ""]
        if not any(p and os.path.abspath(p) == self.watched_path for p in paths):
            return
        current_time = time.time()
        if current_time - self.last_trigger < self.debounce_seconds:
            return
        self.last_trigger = current_time
        print(f"\n🔄 Config changed: {self.watched_path}")
        self.callback()

    def on_modified(self, event):
        self._handle(event)

    def on_created(self, event):
        self._handle(event)

    def on_moved(self, event):
        self._handle(event)


def _reload_config(config_path: str, current: dict) -> dict:
    """重新載入設定檔；JSON 寫到一半或無法讀取時沿用目前設定."""
    try:
        return load_config(config_path)
    except (ValueError, OSError) as e:
        print(f"   ⚠️  [config] 無法重新載入 '{config_path}'，沿用先前設定：{e}")
        return current


def cmd_watch(args, config: dict) -> int:
    """Watch: 每 interval 秒重新同步；設定檔變更時立即同步."""
    interval, debounce = resolve_watch_settings(config)
    if args.interval is not None:
        interval = args.interval
    config_path = args.config
    print(f"👀 Watching Figma for changes every {interval:g}s (config: {config_path})")
    print("   Press Ctrl+C to stop.")

    trigger = threading.Event()
    handler = ChangeHandler(trigger.set, config_path, debounce=debounce)
    observer = Observer()
    watch_dir = str(Path(config_path).resolve().parent)
    observer.schedule(handler, path=watch_dir, recursive=False)
    observer.start()

    try:
        while True:
            syncer = _build_sync(args, config)
            if syncer is not None:
                try:
                    syncer.sync()
                except TransportError as e:
                    _report_transport_error(e, syncer.file_key)
            fired = trigger.wait(timeout=interval)
            trigger.clear()
            if fired:
                config = _reload_config(config_path, config)
    except KeyboardInterrupt:
        print("\n👋 Stopping watch...")
    finally:
        observer.stop()
        observer.join()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="figma-sync",
        description="figma-token-sync: Figma → Code design token sync",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument("--config", "-c", default=DEFAULT_CONFIG_PATH, help="Config path")
    parser.add_argument("--version", "-v", action="version", version=f"%(prog)s {__version__}")
    sub = parser.add_subparsers(dest="command")

    sync_p = sub.add_parser("sync", help="Sync tokens once",
        epilog="Examples:\n  figma-sync sync --file-key ABC123\n  figma-sync sync --only css,tailwind",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    sync_p.add_argument("--file-key", help="Figma file key")
    sync_p.add_argument("--only", type=_parse_only, help=f"Comma-separated formats ({', '.join(FORMATS)})")

    watch_p = sub.add_parser("watch", help="Re-sync periodically and when the config changes",
        epilog="Examples:\n  figma-sync watch --file-key ABC123\n  figma-sync watch --interval 60",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    watch_p.add_argument("--file-key", help="Figma file key")
    watch_p.add_argument("--interval", type=float, help="Poll interval in seconds (default: watch.interval or 30)")

    preview_p = sub.add_parser("preview", help="Preview token keys without writing",
        epilog="Examples:\n  figma-sync preview --file-key ABC123",
        formatter_class=argparse.RawDescriptionHelpFormatter)
    preview_p.add_argument("--file-key", help="Figma file key")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    load_env()
    config = load_config(args.config)

    if args.command == "sync":
        return cmd_sync(args, config)
    if args.command == "watch":
        return cmd_watch(args, config)
    if args.command == "preview":
        return cmd_preview(args, config)
    parser.print_help()
    return 0


if __name__ == "__main__":
    sys.exit(main())
