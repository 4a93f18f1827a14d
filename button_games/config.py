"""Engine configuration loaded from `config.toml` and environment overrides.

```toml
[engine]
log_level = "DEBUG"
default_gate = "strict"
discard_finished = false

[games.minesweeper]
rows = 6
columns = 6
mines = 5
```
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, StrictBool, StrictStr


logger = logging.getLogger(__name__)

CONFIG_ENV = "BUTTON_GAMES_CONFIG"
LOG_LEVEL_ENV = "BUTTON_GAMES_LOG_LEVEL"


class EngineConfig(BaseModel):
    log_level: StrictStr = "INFO"
    default_gate: StrictStr = "strict"
    discard_finished: StrictBool = False
    games: Dict[str, Dict[str, Any]] = Field(default_factory=dict)

    class Config:
        extra = "forbid"

    def options_for(self, kind: str) -> Dict[str, Any]:
        return dict(self.games.get(kind, {}))


def _read_toml(config_path: Path) -> Dict[str, Any]:
    if not config_path.exists():
        return {}
    try:
        return tomllib.loads(config_path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as exc:
        logger.warning("Ignoring unreadable config %s: %s", config_path, exc)
        return {}


def load_config(path: Optional[str] = None) -> EngineConfig:
    config_path = Path(path or os.environ.get(CONFIG_ENV) or "config.toml")
    raw = _read_toml(config_path)

    values: Dict[str, Any] = dict(raw.get("engine", {}))
    if "games" in raw:
        values["games"] = raw["games"]
    level = os.environ.get(LOG_LEVEL_ENV)
    if level:
        values["log_level"] = level.upper()

    return (
        EngineConfig.model_validate(values)
        if hasattr(EngineConfig, "model_validate")
        else EngineConfig.parse_obj(values)
    )
