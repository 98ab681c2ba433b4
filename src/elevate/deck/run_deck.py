from __future__ import annotations

"""Run deck: one file describing a complete elevation study.

YAML or JSON. Relative paths inside the deck resolve against the deck's own
directory. Sections:

    label, house, depth_damage, slr, horizon, costs, sampler, evaluator,
    objective, bounds, optimizer, sweep, validation

``house``, ``depth_damage``, ``slr`` and ``horizon`` are required; the rest
fall back to defaults.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from ..errors import ConfigurationError
from ..fingerprint import stable_sha256

logger = logging.getLogger(__name__)

SCHEMA_VERSION = "run_deck.v1"
REQUIRED_SECTIONS = ("house", "depth_damage", "slr", "horizon")
OPTIONAL_SECTIONS = ("costs", "sampler", "evaluator", "objective", "bounds", "optimizer", "sweep", "validation")
TOP_LEVEL_KEYS = {"schema_version", "label"} | set(REQUIRED_SECTIONS) | set(OPTIONAL_SECTIONS)


def _load_yaml_or_json(path: Path) -> Dict[str, Any]:
    txt = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        import yaml

        d = yaml.safe_load(txt)
    else:
        d = json.loads(txt)
    if d is None:
        d = {}
    if not isinstance(d, dict):
        raise ConfigurationError(f"run deck {path} must contain a mapping at the top level")
    return d


def _section(d: Dict[str, Any], key: str) -> Dict[str, Any]:
    v = d.get(key)
    if v is None:
        return {}
    if not isinstance(v, dict):
        raise ConfigurationError(f"run deck section '{key}' must be a mapping")
    return dict(v)


@dataclass
class RunDeck:
    schema_version: str
    label: str
    base_dir: Path
    house: Dict[str, Any]
    depth_damage: Dict[str, Any]
    slr: Dict[str, Any]
    horizon: Dict[str, Any]
    costs: Dict[str, Any] = field(default_factory=dict)
    sampler: Dict[str, Any] = field(default_factory=dict)
    evaluator: Dict[str, Any] = field(default_factory=dict)
    objective: Dict[str, Any] = field(default_factory=dict)
    bounds: Dict[str, Any] = field(default_factory=dict)
    optimizer: Dict[str, Any] = field(default_factory=dict)
    sweep: Dict[str, Any] = field(default_factory=dict)
    validation: Dict[str, Any] = field(default_factory=dict)

    @staticmethod
    def from_dict(d: Dict[str, Any], *, base_dir: Optional[Path] = None, label: str = "run") -> "RunDeck":
        unknown = sorted(set(d) - TOP_LEVEL_KEYS)
        if unknown:
            raise ConfigurationError(f"run deck has unknown top-level keys: {unknown}")
        missing = [k for k in REQUIRED_SECTIONS if not d.get(k)]
        if missing:
            raise ConfigurationError(f"run deck missing required sections: {missing}")
        schema = str(d.get("schema_version", SCHEMA_VERSION))
        if schema != SCHEMA_VERSION:
            raise ConfigurationError(f"unsupported run deck schema_version: {schema}")
        kw = {k: _section(d, k) for k in REQUIRED_SECTIONS + OPTIONAL_SECTIONS}
        return RunDeck(
            schema_version=schema,
            label=str(d.get("label", label)),
            base_dir=Path(base_dir) if base_dir is not None else Path("."),
            **kw,
        )

    @staticmethod
    def from_path(path: str | Path) -> "RunDeck":
        p = Path(path)
        logger.debug("loading run deck %s", p)
        return RunDeck.from_dict(_load_yaml_or_json(p), base_dir=p.resolve().parent, label=p.stem)

    def resolve_path(self, value: str | Path) -> Path:
        p = Path(value)
        return p if p.is_absolute() else (self.base_dir / p)

    def to_resolved_config(self) -> Dict[str, Any]:
        """The deck as one explicit dict (paths left as written)."""
        return {
            "schema_version": self.schema_version,
            "label": self.label,
            **{k: dict(getattr(self, k)) for k in REQUIRED_SECTIONS + OPTIONAL_SECTIONS},
        }

    def fingerprint_sha256(self) -> str:
        return stable_sha256(self.to_resolved_config())
