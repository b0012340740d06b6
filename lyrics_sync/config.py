from __future__ import annotations

import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

LANGS = ("EN", "RU")
RENDERERS = ("ansi", "plain")
_FALSE = ("0", "false", "False", "no", "off")


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lyrics-sync"
    return Path.home() / ".config" / "lyrics-sync"


def config_file() -> Path:
    return _config_dir() / "config.json"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Locale
    lang: str

    # Feature gate: when off, lyrics are shown statically and never windowed
    sync_lyrics: bool

    # Rendering
    refresh_hz: float
    use_alt_screen: bool
    renderer: str


def _read_config_json(config_dir: Path) -> dict[str, Any]:
    cfg_path = config_dir / "config.json"
    if not cfg_path.exists():
        return {}
    try:
        data = json.loads(cfg_path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        return {}
    return data if isinstance(data, dict) else {}


def load_config() -> AppConfig:
    config_dir = _config_dir()
    stored = _read_config_json(config_dir)

    renderer = os.getenv("LYRICS_SYNC_RENDERER", "ansi").strip().lower()
    if renderer not in RENDERERS:
        logger.info("Unknown renderer '%s', using ansi", renderer)
        renderer = "ansi"

    return AppConfig(
        config_dir=config_dir,
        lang=_load_lang(stored),
        sync_lyrics=_load_sync(stored),
        refresh_hz=float(os.getenv("LYRICS_SYNC_REFRESH_HZ", "10.0")),
        use_alt_screen=os.getenv("LYRICS_SYNC_ALT_SCREEN", "1") not in _FALSE,
        renderer=renderer,
    )


def _load_lang(stored: dict[str, Any]) -> str:
    # Priority: config.json → LYRICS_SYNC_LANG → "EN"
    raw = str(stored.get("lang") or "").upper()
    if raw in LANGS:
        return raw
    env_lang = os.getenv("LYRICS_SYNC_LANG")
    if env_lang and env_lang.upper() in LANGS:
        return env_lang.upper()
    return "EN"


def _load_sync(stored: dict[str, Any]) -> bool:
    # Priority: config.json → LYRICS_SYNC_SYNC → on
    value = stored.get("sync_lyrics")
    if isinstance(value, bool):
        return value
    env_sync = os.getenv("LYRICS_SYNC_SYNC")
    if env_sync is not None:
        return env_sync not in _FALSE
    return True


def save_config_value(key: str, value: str | bool) -> None:
    if key == "lang":
        value = str(value).upper()
        if value not in LANGS:
            raise ValueError(f"lang must be one of: {', '.join(LANGS)}")
    elif key == "sync_lyrics":
        if not isinstance(value, bool):
            raise ValueError("sync_lyrics must be a boolean")
    else:
        raise KeyError(key)

    cfg_path = config_file()
    cfg_path.parent.mkdir(parents=True, exist_ok=True)
    data = _read_config_json(cfg_path.parent)
    data[key] = value
    cfg_path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
