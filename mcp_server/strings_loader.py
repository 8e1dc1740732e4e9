"""Loader for MCP tool descriptions and the help prompt."""

from pathlib import Path
import yaml

STRINGS_FILE = Path(__file__).parent / "strings.yaml"


def load_strings(path: Path = STRINGS_FILE) -> dict:
    """Load tool descriptions and help text from a strings YAML file."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must parse to a dict")
    return {
        "tools": data.get("tools") or {},
        "help": data.get("help") or "",
    }
