import json
from pathlib import Path
from typing import Any


def load_config_file(path: Path) -> Any:
    """Read the enrichment configuration document from a JSON file.

    Raises:
        FileNotFoundError: if the file does not exist.
        json.JSONDecodeError: if the file is not valid JSON.
    """
    if not path.exists():
        raise FileNotFoundError(f"PII configuration not found: {path}")
    return json.loads(path.read_text(encoding="utf-8"))
