"""
CLI 默认选项配置：本地保存/读取 list 命令的默认值（单位、深度、是否显示隐藏项等）。
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from lsview.models import parse_unit

BOOL_KEYS = ("canonicalize", "show_hidden", "table", "reversed")
CONFIG_KEYS = ("max_depth", "unit") + BOOL_KEYS

_TRUE = {"1", "true", "yes", "on"}
_FALSE = {"0", "false", "no", "off"}


def _config_dir() -> Path:
    """配置目录：~/.config/lsview（所有平台统一）。"""
    return Path.home() / ".config" / "lsview"


def _config_path() -> Path:
    return _config_dir() / "config.json"


def load_config() -> dict[str, Any] | None:
    """读取本地配置；不存在或不是 JSON 对象则返回 None。"""
    p = _config_path()
    if not p.exists():
        return None
    try:
        data = json.loads(p.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return None
    if not isinstance(data, dict):
        return None
    return data


def parse_config_value(key: str, raw: Any) -> Any:
    """
    校验并规范化单个配置项。

    - max_depth：>= 1 的整数
    - unit：parse_unit 可识别的任意别名，保存为规范后缀（如 "kib"）
    - 布尔项：true/false/yes/no/1/0/on/off
    未知键或非法值抛 ValueError。
    """
    if key not in CONFIG_KEYS:
        raise ValueError(f"unknown config key: {key} (expected one of {', '.join(CONFIG_KEYS)})")
    if key == "max_depth":
        try:
            depth = int(raw)
        except (TypeError, ValueError):
            raise ValueError(f"max_depth must be an integer: {raw}") from None
        if depth < 1:
            raise ValueError(f"max_depth must be >= 1: {raw}")
        return depth
    if key == "unit":
        return parse_unit(str(raw)).suffix
    if isinstance(raw, bool):
        return raw
    text = str(raw).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean: {raw}")


def save_config(values: dict[str, Any]) -> None:
    """校验后合并写入本地配置。"""
    data = load_config() or {}
    for key, raw in values.items():
        data[key] = parse_config_value(key, raw)
    p = _config_path()
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8")


def clear_config() -> bool:
    """清除本地配置；存在则删除并返回 True。"""
    p = _config_path()
    if p.exists():
        p.unlink()
        return True
    return False
