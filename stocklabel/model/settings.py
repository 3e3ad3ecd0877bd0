"""
model/settings.py

Typed, validated view of the application configuration.

Raw configuration is a plain dict (see stocklabel.load_config); LabelSettings
checks types and ranges once so the pipeline can rely on them.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Final, Mapping, Optional

from stocklabel.model.enums import RenderTarget

DEFAULT_PATH_REPLACE_CHARS: Final[str] = '/\\?%*:|"<>.,;='

# Значения конфигурации по умолчанию
DEFAULT_CONFIG: Final[Dict[str, Any]] = {
    "app_id": "org.lichtlabs.inventorymgmt",
    "data_dir": None,  # None -> platform data directory
    "render_target": RenderTarget.PNG_CAPTION.value,
    "barcode_height": 44,
    "json_height": 10,
    "xdim": 1,
    "font_path": None,  # None -> Pillow bundled font
    "font_size": 22,
    "path_replace_chars": DEFAULT_PATH_REPLACE_CHARS,
    "path_strip_chars": "",
    "writer_workers": 2,
}


def _positive_int(config: Mapping[str, Any], key: str) -> int:
    value = config.get(key, DEFAULT_CONFIG[key])
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"{key} must be a positive integer, got {value!r}")
    return value


def _optional_str(config: Mapping[str, Any], key: str) -> Optional[str]:
    value = config.get(key, DEFAULT_CONFIG[key])
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string, got {type(value).__name__}")
    return value


def _chars(config: Mapping[str, Any], key: str) -> str:
    value = config.get(key, DEFAULT_CONFIG[key])
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"{key} must be a string of characters")
    return value


@dataclass(frozen=True)
class LabelSettings:
    app_id: str = DEFAULT_CONFIG["app_id"]
    data_dir: Optional[Path] = None
    render_target: RenderTarget = RenderTarget.PNG_CAPTION
    barcode_height: int = DEFAULT_CONFIG["barcode_height"]
    json_height: int = DEFAULT_CONFIG["json_height"]
    xdim: int = DEFAULT_CONFIG["xdim"]
    font_path: Optional[str] = None
    font_size: int = DEFAULT_CONFIG["font_size"]
    path_replace_chars: str = DEFAULT_PATH_REPLACE_CHARS
    path_strip_chars: str = ""
    writer_workers: int = DEFAULT_CONFIG["writer_workers"]

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "LabelSettings":
        """
        Build settings from a config mapping; missing keys take defaults.

        Raises:
            ValueError: on a value of the wrong type or out of range.
        """
        target = config.get("render_target", DEFAULT_CONFIG["render_target"])
        if not isinstance(target, RenderTarget):
            if not isinstance(target, str):
                raise ValueError("render_target must be a string")
            target = RenderTarget.parse(target)

        app_id = config.get("app_id", DEFAULT_CONFIG["app_id"])
        if not isinstance(app_id, str) or not app_id.strip():
            raise ValueError("app_id must be a non-empty string")

        data_dir = _optional_str(config, "data_dir")

        return cls(
            app_id=app_id,
            data_dir=Path(data_dir).expanduser() if data_dir else None,
            render_target=target,
            barcode_height=_positive_int(config, "barcode_height"),
            json_height=_positive_int(config, "json_height"),
            xdim=_positive_int(config, "xdim"),
            font_path=_optional_str(config, "font_path"),
            font_size=_positive_int(config, "font_size"),
            path_replace_chars=_chars(config, "path_replace_chars"),
            path_strip_chars=_chars(config, "path_strip_chars"),
            writer_workers=_positive_int(config, "writer_workers"),
        )
