# =============================================================================
# NAV INDEX (search these tags)
# [NAV-00] Imports / constants
# [NAV-10] Config model
# [NAV-20] Load / save
# [NAV-90] Helpers
# [NAV-99] End
# =============================================================================

# === [NAV-00] Imports / constants ============================================
from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from .types import LogicalSerializationMode, VisualSerializationMode

CONFIG_PATH = Path("data/roaming/module_injection.json")
LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


# === [NAV-10] Config model ====================================================
@dataclass(frozen=True)
class RegionConfig:
    """Defaults applied to every region a manager creates."""

    logical_serialization_mode: LogicalSerializationMode = LogicalSerializationMode.ENABLED
    visual_serialization_mode: VisualSerializationMode = VisualSerializationMode.PER_VIEW_TYPE
    log_level: str = "INFO"

    def to_dict(self) -> Dict[str, str]:
        return {
            "logical_serialization_mode": self.logical_serialization_mode.value,
            "visual_serialization_mode": self.visual_serialization_mode.value,
            "log_level": self.log_level,
        }


# === [NAV-20] Load / save =====================================================
def load_region_config(path: Optional[Path] = None) -> RegionConfig:
    path = path or CONFIG_PATH
    defaults = RegionConfig()
    if not path.exists():
        return defaults
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError):
        return defaults
    if not isinstance(data, dict):
        return defaults
    level = str(data.get("log_level") or defaults.log_level).upper()
    return RegionConfig(
        logical_serialization_mode=_parse_mode(
            LogicalSerializationMode, data.get("logical_serialization_mode"), defaults.logical_serialization_mode
        ),
        visual_serialization_mode=_parse_mode(
            VisualSerializationMode, data.get("visual_serialization_mode"), defaults.visual_serialization_mode
        ),
        log_level=level if level in LOG_LEVELS else defaults.log_level,
    )


def save_region_config(config: RegionConfig, path: Optional[Path] = None) -> None:
    path = path or CONFIG_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")


# === [NAV-90] Helpers =========================================================
def _parse_mode(enum_type, value, default):
    try:
        return enum_type(value)
    except ValueError:
        return default


# === [NAV-99] End =============================================================
__all__ = [
    "CONFIG_PATH",
    "LOG_LEVELS",
    "RegionConfig",
    "load_region_config",
    "save_region_config",
]
