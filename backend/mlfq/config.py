import logging
import os
from pathlib import Path
from typing import Any, Dict

import yaml

from mlfq.engine.constants import BASE_QUANTUM, BLOCKING_QUANTUM, PRIORITY_LEVELS, QUANTUM_STEP

logger = logging.getLogger(__name__)

DEFAULTS: Dict[str, Any] = {
    "log_level": "INFO",
    "priority_levels": PRIORITY_LEVELS,
    "base_quantum": BASE_QUANTUM,
    "quantum_step": QUANTUM_STEP,
    "blocking_quantum": BLOCKING_QUANTUM,
    "tick": 5,
    "preset": 1,
}

# Environment overrides win over the YAML file
ENV_KEYS: Dict[str, str] = {
    "log_level": "MLFQ_LOG_LEVEL",
    "priority_levels": "MLFQ_PRIORITY_LEVELS",
    "base_quantum": "MLFQ_BASE_QUANTUM",
    "quantum_step": "MLFQ_QUANTUM_STEP",
    "blocking_quantum": "MLFQ_BLOCKING_QUANTUM",
    "tick": "MLFQ_TICK",
    "preset": "MLFQ_PRESET",
}


class Config:
    """Central configuration loader for the simulator."""

    _loaded = False
    _values: Dict[str, Any] = dict(DEFAULTS)

    BASE_DIR = Path(__file__).resolve().parent.parent

    @classmethod
    def config_path(cls) -> Path:
        return Path(os.getenv("MLFQ_CONFIG_PATH", cls.BASE_DIR / "mlfq.yml"))

    @classmethod
    def load(cls, force: bool = False) -> None:
        if cls._loaded and not force:
            return

        values = dict(DEFAULTS)
        path = cls.config_path()
        logger.info("Loading config from: %s", path)
        if path.exists():
            with open(path, "r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError(f"{path} must contain a mapping")
            for key in DEFAULTS:
                if key in data:
                    values[key] = data[key]
        else:
            logger.info("No config file found, using defaults")

        for key, env_name in ENV_KEYS.items():
            raw = os.getenv(env_name)
            if raw is not None and raw.strip():
                values[key] = raw.strip()

        cls._values = cls._coerce(values)
        cls._loaded = True

    @staticmethod
    def _coerce(values: Dict[str, Any]) -> Dict[str, Any]:
        out = dict(values)
        out["log_level"] = str(values["log_level"]).upper()
        for key in ("priority_levels", "preset"):
            out[key] = int(values[key])
        for key in ("base_quantum", "quantum_step", "blocking_quantum", "tick"):
            number = float(values[key])
            out[key] = int(number) if number.is_integer() else number
        return out

    @classmethod
    def get(cls, key: str) -> Any:
        cls.load()
        return cls._values[key]

    @classmethod
    def get_log_level(cls) -> str:
        return cls.get("log_level")

    @classmethod
    def scheduler_defaults(cls) -> Dict[str, Any]:
        cls.load()
        return {key: cls._values[key] for key in DEFAULTS if key != "log_level"}
