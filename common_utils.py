import os
from pathlib import Path
from functools import lru_cache
from typing import Optional

import yaml

from search.config import IndexConfig

CONFIG_FILE_NAME = ".design-tokens.yaml"


def load_index_config(config_path: Optional[str] = None) -> IndexConfig:
    """Read index settings from YAML, then apply environment overrides."""
    path = Path(config_path or os.getenv("DESIGN_TOKENS_CONFIG") or Path.cwd() / CONFIG_FILE_NAME)
    data = {}
    if path.is_file():
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"{path} must parse to a mapping")

    sources = _split_env("DESIGN_TOKENS_SOURCES")
    if sources:
        data["sources"] = sources
    roots = _split_env("DESIGN_TOKENS_ROOTS")
    if roots:
        data["roots"] = roots
    return IndexConfig.from_mapping(data)


@lru_cache(maxsize=1)
def get_index_config() -> IndexConfig:
    """Process-wide index settings. Cached for performance."""
    return load_index_config()


def _split_env(name: str) -> list:
    raw = os.getenv(name, "")
    return [part.strip() for part in raw.split(",") if part.strip()]
