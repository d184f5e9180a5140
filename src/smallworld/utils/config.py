import json
from pathlib import Path
from typing import Any

from smallworld.metrics import MetricsParams
from smallworld.networks import WattsStrogatzParams
from smallworld.utils.sweep import SweepParams

_SECTIONS = ("network", "metrics", "sweep")


def default_config() -> dict:
    return {
        "network": WattsStrogatzParams().model_dump(),
        "metrics": MetricsParams().model_dump(),
        "sweep": SweepParams().model_dump(),
    }


def load_config(path: Path) -> dict:
    config = json.loads(Path(path).read_text())
    if not isinstance(config, dict):
        raise ValueError(f"Config {path} must hold a JSON object")
    return config


def validate_config(config: dict) -> None:
    if "network" not in config:
        raise ValueError("Missing required top-level key: 'network'")
    extra = set(config) - set(_SECTIONS) - {"run_id"}
    if extra:
        raise ValueError(f"Unknown top-level keys: {sorted(extra)}")

    WattsStrogatzParams.model_validate(config["network"])
    MetricsParams.model_validate(config.get("metrics", {}))
    SweepParams.model_validate(config.get("sweep", {}))


def _parse_value(raw: str) -> Any:
    s = raw.strip()
    if s == "":
        return None
    low = s.lower()
    if low in {"true", "false", "null"}:
        return json.loads(low)
    if s[:1] in "[{":
        try:
            return json.loads(s)
        except json.JSONDecodeError:
            return s
    try:
        if "." not in s and "e" not in s and "E" not in s:
            return int(s)
        return float(s)
    except ValueError:
        return s


def parse_overrides(items: list[str]) -> dict[str, str]:
    out: dict[str, str] = {}
    for item in items:
        key, sep, raw = item.partition("=")
        if not sep or not key.strip():
            raise ValueError(f"Override '{item}' must look like section.key=value")
        out[key.strip()] = raw
    return out


def apply_overrides(config: dict, overrides: dict[str, str]) -> None:
    for key, raw in overrides.items():
        val = _parse_value(raw)
        parts = key.split(".")
        target = config
        for part in parts[:-1]:
            target = target.setdefault(part, {})
            if not isinstance(target, dict):
                raise ValueError(f"Override '{key}': '{part}' is not a section")
        target[parts[-1]] = val
