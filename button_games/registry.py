"""Plugin discovery: turn each `plugins/*/plugin.json` into a game definition."""

from __future__ import annotations

import importlib
import json
import logging
import warnings
from pathlib import Path
from typing import Dict, Optional

from button_games.config import EngineConfig
from button_games.plugins.base import RuleAdapter
from button_games.runtime.gate import get_gate
from button_games.runtime.model import GameDefinition


logger = logging.getLogger(__name__)

REQUIRED_PLUGIN_METHODS = (
    "manifest",
    "initial_state",
    "decode_move",
    "is_legal",
    "apply",
    "next_turn",
    "outcome",
    "cell_labels",
    "status_text",
)


def _validate_plugin(plugin: object, manifest: dict) -> None:
    for method_name in REQUIRED_PLUGIN_METHODS:
        if not callable(getattr(plugin, method_name, None)):
            raise TypeError(f"missing required method: {method_name}")

    plugin_manifest = plugin.manifest()
    if not isinstance(plugin_manifest, dict):
        raise TypeError("manifest() must return a dictionary")
    if plugin_manifest.get("id") != manifest.get("id"):
        raise ValueError("manifest id does not match plugin.json")


def build_definition(plugin: RuleAdapter, config: Optional[EngineConfig] = None) -> GameDefinition:
    """Wrap an adapter instance, applying configured option overrides."""
    config = config or EngineConfig()
    manifest = plugin.manifest()
    kind = manifest["id"]
    gate = manifest.get("gate", config.default_gate)
    get_gate(gate)

    min_players = int(manifest.get("min_players", 1))
    max_players = int(manifest.get("max_players", min_players))
    if not 1 <= min_players <= max_players:
        raise ValueError(f"invalid player range {min_players}..{max_players}")

    options = dict(manifest.get("options", {}))
    options.update(config.options_for(kind))
    return GameDefinition(
        kind=kind,
        name=manifest.get("name", kind),
        adapter=plugin,
        gate=gate,
        min_players=min_players,
        max_players=max_players,
        options=options,
    )


def load_plugins(config: Optional[EngineConfig] = None) -> Dict[str, GameDefinition]:
    definitions: Dict[str, GameDefinition] = {}
    plugins_dir = Path(__file__).resolve().parent / "plugins"

    for manifest_path in sorted(plugins_dir.glob("*/plugin.json")):
        try:
            manifest = json.loads(manifest_path.read_text(encoding="utf-8"))
            module_name = f"button_games.plugins.{manifest_path.parent.name}.game"
            module = importlib.import_module(module_name)
            plugin = module.Plugin()
            _validate_plugin(plugin, manifest)
            definition = build_definition(plugin, config)
            definitions[definition.kind] = definition
        except Exception as exc:
            logger.warning("Skipping plugin at %s: %s", manifest_path, exc)
            warnings.warn(
                f"Skipping plugin at {manifest_path}: {exc}",
                RuntimeWarning,
                stacklevel=2,
            )

    logger.debug("Loaded games: %s", ", ".join(sorted(definitions)))
    return definitions
