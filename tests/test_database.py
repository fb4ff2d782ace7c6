"""Tests for the DynamoDB connection helpers and the provisioning script."""

from collections.abc import Callable
from typing import Any

import pytest

from scripts import create_table as script
from user_directory.core.config import Settings
from user_directory.core.database import get_client


@pytest.mark.unit
def test_get_client_uses_configured_endpoint(make_settings: Callable[..., Settings]) -> None:
    client = get_client(make_settings(dynamodb_endpoint_url="http://dynamo:9000"))

    assert client.meta.endpoint_url == "http://dynamo:9000"
    assert client.meta.region_name == "us-east-1"


@pytest.fixture
def script_target(
    monkeypatch: pytest.MonkeyPatch, make_settings: Callable[..., Settings]
) -> Callable[..., Any]:
    """Run the script's main() and return the client it would have used."""

    def _run(*argv: str, **overrides: Any) -> Any:
        seen: dict[str, Any] = {}

        def table_exists(client: Any, table_name: str) -> bool:
            seen["client"] = client
            return True

        monkeypatch.setattr(script, "get_settings", lambda: make_settings(**overrides))
        monkeypatch.setattr(script, "table_exists", table_exists)
        monkeypatch.setattr(script, "print_table_summary", lambda client, name: None)
        monkeypatch.setattr("sys.argv", ["create_table.py", *argv])
        with pytest.raises(SystemExit):
            script.main()
        return seen["client"]

    return _run


@pytest.mark.unit
def test_script_honours_endpoint_setting(script_target: Callable[..., Any]) -> None:
    client = script_target(dynamodb_endpoint_url="http://dynamo:9000")

    assert client.meta.endpoint_url == "http://dynamo:9000"


@pytest.mark.unit
def test_script_local_flag_overrides_endpoint(script_target: Callable[..., Any]) -> None:
    client = script_target("--local", dynamodb_endpoint_url="http://dynamo:9000")

    assert client.meta.endpoint_url == script.LOCAL_ENDPOINT
