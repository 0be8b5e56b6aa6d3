import json
from pathlib import Path

import pytest

from tests.factories import json_entry, make_config, pojo


@pytest.fixture()
def config_file(tmp_path: Path) -> Path:
    """Write an enrichment config covering scalar, contexts and unstruct fields."""
    config = make_config(
        pii=[
            pojo("user_id"),
            pojo("user_ipaddress"),
            json_entry("contexts", "iglu:com.acme/user/jsonschema/1-*-*", "$.emails"),
            json_entry("unstruct_event", "iglu:com.acme/signup/jsonschema/1-0-*", "$.userId"),
        ]
    )
    path = tmp_path / "pii.json"
    path.write_text(json.dumps(config), encoding="utf-8")
    return path
