# config_manager.py - JSON config manager

import json
import logging
import os

from rich.console import Console
from rich.table import Table

logger = logging.getLogger(__name__)

DEFAULTS = {
    "vector_size": 10,         # embedding width
    "learning_rate": 0.1,      # co-occurrence pull strength
    "train_every": 5,          # shell retrains + saves after this many commands
    "min_suggest_chars": 2,    # no suggestions for shorter input
    "model_path": "autocomplete_model.dat",
    "seed": None,
    "log_level": "INFO",
}

# must be > 0
POSITIVE = ("vector_size", "learning_rate", "train_every")


def _cast(key, val):
    """Convert `val` to the type of the key's default. Raises ValueError/TypeError."""
    default = DEFAULTS[key]
    if default is None:
        # only "seed" is nullable
        return None if val in (None, "", "none", "None") else int(val)
    out = type(default)(val)
    if key in POSITIVE and out <= 0:
        raise ValueError(f"{key} must be positive, got {out}")
    return out


class Config:
    def __init__(self, path="config.json"):
        self.path = path
        self.data = dict(DEFAULTS)
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    loaded = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("Could not read config %s (%s); using defaults", self.path, e)
                return
            if not isinstance(loaded, dict):
                logger.warning("Config %s is not a JSON object; using defaults", self.path)
                return
            for key, val in loaded.items():
                if key not in DEFAULTS:
                    self.data[key] = val
                    continue
                try:
                    self.data[key] = _cast(key, val)
                except (TypeError, ValueError) as e:
                    logger.warning("Bad value for %r in %s (%s); keeping default %r",
                                   key, self.path, e, DEFAULTS[key])
        else:
            self.save()

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def get(self, key, default=None):
        return self.data.get(key, default)

    def __getitem__(self, key):
        return self.data[key]

    def show(self, console=None):
        table = Table(title="config")
        table.add_column("key", style="cyan")
        table.add_column("value")
        for k, v in self.data.items():
            table.add_row(k, repr(v))
        (console or Console()).print(table)

    def set(self, key, val):
        if key not in DEFAULTS:
            raise KeyError(f"No such option: {key}")
        self.data[key] = _cast(key, val)
        self.save()
