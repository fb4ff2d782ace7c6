"""Tests for application startup: connection, seeding and health."""

from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from fastapi.testclient import TestClient

from user_directory.core.config import Settings
from user_directory.core.database import table_exists
from user_directory.dao.user_dao import UserDAO
from user_directory.main import create_app


def _ids(client: TestClient) -> list[str]:
    return sorted(u["userUniqueId"] for u in client.get("/api/users").json()["data"])


@pytest.mark.unit
def test_empty_table_is_seeded(table: Any, make_settings: Callable[..., Settings]) -> None:
    with TestClient(create_app(make_settings(seed_sample_users=True))) as client:
        assert _ids(client) == ["1", "2", "3"]
        user = client.get("/api/users/1").json()["data"]
        assert user["userName"] == "Aditya Gupta"
        assert user["address"]["city"] == "Amman"


@pytest.mark.unit
def test_non_empty_table_is_not_seeded(table: Any, make_settings: Callable[..., Settings]) -> None:
    UserDAO(table).create(
        {
            "userUniqueId": "77",
            "userName": "Existing",
            "userEmail": "existing@x.com",
            "userAge": "40",
            "dateOfBirth": "1984-02-02",
            "address": {"street": "S", "city": "C", "state": "St", "zipCode": "Z", "country": "Jordan"},
        }
    )

    with TestClient(create_app(make_settings(seed_sample_users=True))) as client:
        assert _ids(client) == ["77"]


@pytest.mark.unit
def test_restart_does_not_reseed(table: Any, make_settings: Callable[..., Settings]) -> None:
    settings = make_settings(seed_sample_users=True)
    with TestClient(create_app(settings)) as client:
        client.delete("/api/users/2")

    with TestClient(create_app(settings)) as client:
        assert _ids(client) == ["1", "3"]


@pytest.mark.unit
def test_missing_table_is_fatal(aws: None, make_settings: Callable[..., Settings]) -> None:
    app = create_app(make_settings(dynamodb_table_name="Missing"))

    with pytest.raises(ClientError):
        with TestClient(app):
            pass


@pytest.mark.unit
def test_create_table_if_missing(aws: None, make_settings: Callable[..., Settings]) -> None:
    settings = make_settings(dynamodb_table_name="Fresh", create_table_if_missing=True)

    with TestClient(create_app(settings)) as client:
        assert client.get("/api/users").json()["count"] == 0

    assert table_exists(boto3.client("dynamodb", region_name="us-east-1"), "Fresh")


@pytest.mark.unit
def test_health(client: TestClient) -> None:
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "ok"
