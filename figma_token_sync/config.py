"""設定檔載入與基本驗證."""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

DEFAULT_CONFIG_PATH = "figma-sync.config.json"

DEFAULT_OUTPUTS = {
    "css": "./tokens/variables.css",
    "tailwind": "./tokens/tailwind.tokens.js",
    "json": "./tokens/tokens.json",
    "scss": "./tokens/_variables.scss",
}

DEFAULT_SNAPSHOT_DIR = ".figma-sync"
DEFAULT_WATCH_INTERVAL = 30.0
DEFAULT_WATCH_DEBOUNCE = 1.0

# 已知有效的頂層欄位
_KNOWN_TOP_KEYS = {"figma", "output", "watch", "export"}

# 各區塊已知欄位（用於拼字提示）
_KNOWN_SECTION_KEYS = {
    "figma": {"personalAccessToken", "accessToken", "fileKey", "nodeIds", "stylePrefix", "variablesApi"},
    "output": set(DEFAULT_OUTPUTS),
    "watch": {"interval", "debounce"},
    "export": {"snapshotDir"},
}


def _warn(msg: str) -> None:
    print(f"   ⚠️  [config] {msg}")


def validate_config(cfg: dict) -> None:
    """對 config 做基本欄位驗證，印出警告但不拋例外。"""
    if not cfg:
        return

    # 頂層未知欄位
    for key in cfg:
        if key not in _KNOWN_TOP_KEYS:
            known = ", ".join(sorted(_KNOWN_TOP_KEYS))
            _warn(f"未知頂層欄位 '{key}'（已知欄位：{known}）")

    # 各區塊欄位
    for section, known_keys in _KNOWN_SECTION_KEYS.items():
        section_cfg = cfg.get(section, {})
        if not isinstance(section_cfg, dict):
            _warn(f"'{section}' 應為 JSON 物件，目前是 {type(section_cfg).__name__}")
            continue
        for key in section_cfg:
            if key not in known_keys:
                known = ", ".join(sorted(known_keys))
                _warn(f"[{section}] 未知欄位 '{key}'（已知欄位：{known}）")

    # nodeIds / stylePrefix 目前只被接受，不會縮小擷取範圍
    figma_cfg = cfg.get("figma", {}) if isinstance(cfg.get("figma"), dict) else {}
    for key in ("nodeIds", "stylePrefix"):
        if figma_cfg.get(key):
            _warn(f"figma.{key} 目前不會套用，仍會擷取整份檔案")

    # output 路徑應為字串
    output_cfg = cfg.get("output", {}) if isinstance(cfg.get("output"), dict) else {}
    for fmt, dest in output_cfg.items():
        if dest is not None and not isinstance(dest, str):
            _warn(f"output.{fmt} 應為路徑字串，目前是 {type(dest).__name__}")

    # watch 值類型
    watch_cfg = cfg.get("watch", {}) if isinstance(cfg.get("watch"), dict) else {}
    for key in ("interval", "debounce"):
        val = watch_cfg.get(key)
        if val is not None and (isinstance(val, bool) or not isinstance(val, (int, float))):
            _warn(f"watch.{key} 應為數字（秒），目前是 {type(val).__name__}")


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """載入 JSON 設定檔，不存在則回傳空 dict；存在則做基本驗證。"""
    path = Path(config_path)
    if not path.exists():
        return {}
    with open(path, "r", encoding="utf-8") as f:
        cfg: Any = json.load(f)
    if not isinstance(cfg, dict):
        print(f"   ⚠️  [config] '{config_path}' 格式錯誤，應為 JSON 物件，回傳空設定。")
        return {}
    validate_config(cfg)
    return cfg


def load_env(env_path: Optional[str] = None) -> None:
    """載入 .env（不覆蓋既有環境變數）."""
    load_dotenv(env_path or Path.cwd() / ".env", override=False)


def _section(cfg: dict, name: str) -> dict:
    section = cfg.get(name, {})
    return section if isinstance(section, dict) else {}


def resolve_token(cfg: dict) -> Optional[str]:
    figma_cfg = _section(cfg, "figma")
    return (
        figma_cfg.get("personalAccessToken")
        or figma_cfg.get("accessToken")
        or os.environ.get("FIGMA_ACCESS_TOKEN")
        or os.environ.get("FIGMA_TOKEN")
    )


def resolve_file_key(cfg: dict, override: Optional[str] = None) -> Optional[str]:
    return override or _section(cfg, "figma").get("fileKey") or os.environ.get("FIGMA_FILE_KEY")


def resolve_output_paths(cfg: dict) -> dict:
    """回傳 {format: path}；未設定 output 區塊時使用預設四種輸出."""
    if "output" not in cfg:
        return dict(DEFAULT_OUTPUTS)
    return {
        fmt: dest
        for fmt, dest in _section(cfg, "output").items()
        if fmt in DEFAULT_OUTPUTS and isinstance(dest, str) and dest
    }


def resolve_cache_path(cfg: dict) -> str:
    snapshot_dir = _section(cfg, "export").get("snapshotDir") or DEFAULT_SNAPSHOT_DIR
    return os.path.join(snapshot_dir, "fingerprints.json")


def resolve_watch_settings(cfg: dict) -> tuple[float, float]:
    watch_cfg = _section(cfg, "watch")

    def _seconds(key: str, default: float) -> float:
        val = watch_cfg.get(key)
        if isinstance(val, bool) or not isinstance(val, (int, float)) or val < 0:
            return default
        return float(val)

    return _seconds("interval", DEFAULT_WATCH_INTERVAL), _seconds("debounce", DEFAULT_WATCH_DEBOUNCE)
