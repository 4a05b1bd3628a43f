"""Named paper size presets loaded from a YAML config file."""

import functools
from pathlib import Path

import yaml

from oliva.errors import InvalidDimensionsError
from oliva.models.notebook import PaperDimensions

_CONFIG_PATH = Path(__file__).resolve().parent / "paper_sizes.yaml"


@functools.lru_cache
def load_paper_sizes() -> dict[str, PaperDimensions]:
    """Load paper presets from YAML, keyed by lowercase name. Result is cached."""
    with open(_CONFIG_PATH, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return {
        name.lower(): PaperDimensions(name=name, width=size["width"], height=size["height"])
        for name, size in data.get("sizes", {}).items()
    }


def get_paper_size(name: str) -> PaperDimensions:
    """Return a fresh copy of the named preset. Lookup is case-insensitive."""
    preset = load_paper_sizes().get(name.lower())
    if preset is None:
        raise InvalidDimensionsError(f"Unknown paper size: {name!r}")
    return preset.model_copy()
