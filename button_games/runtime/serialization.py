"""Deterministic serialization helpers used for view fingerprints."""

from __future__ import annotations

import hashlib
import json
from typing import Any, Dict

from pydantic import BaseModel


def stable_json_dumps(obj: Any) -> str:
    return json.dumps(obj, ensure_ascii=False, sort_keys=True, separators=(",", ":"))


def state_hash(obj: Any) -> str:
    return hashlib.sha256(stable_json_dumps(obj).encode("utf-8")).hexdigest()


def dump_model(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump() if hasattr(model, "model_dump") else model.dict()


def view_hash(view: BaseModel) -> str:
    return state_hash(dump_model(view))
