"""Pytest configuration and fixtures."""

from collections.abc import Callable, Iterator
from typing import Any

import boto3
import pytest
from fastapi.testclient import TestClient
from moto import mock_aws

from user_directory.core.config import Settings
from user_directory.core.database import create_table
from user_directory.dao.user_dao import UserDAO
from user_directory.main import create_app
from user_directory.services.user_service import UserService

TABLE_NAME = "UserDirectoryTest"
REGION = "us-east-1"


def make_settings(**overrides: Any) -> Settings:
    values: dict[str, Any] = {
        "dynamodb_table_name": TABLE_NAME,
        "dynamodb_endpoint_url": None,
        "aws_region": REGION,
        "seed_sample_users": False,
        "create_table_if_missing": False,
        "log_level": "warning",
    }
    values.update(overrides)
    return Settings(**values)


@pytest.fixture(autouse=True)
def aws_credentials(monkeypatch: pytest.MonkeyPatch) -> None:
    """Fake credentials so nothing can reach a real AWS account."""
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "testing")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "testing")
    monkeypatch.setenv("AWS_SECURITY_TOKEN", "testing")
    monkeypatch.setenv("AWS_SESSION_TOKEN", "testing")
    monkeypatch.setenv("AWS_DEFAULT_REGION", REGION)


@pytest.fixture
def aws() -> Iterator[None]:
    with mock_aws():
        yield


@pytest.fixture
def table(aws: None) -> Any:
    create_table(boto3.client("dynamodb", region_name=REGION), TABLE_NAME)
    return boto3.resource("dynamodb", region_name=REGION).Table(TABLE_NAME)


@pytest.fixture
def dao(table: Any) -> UserDAO:
    return UserDAO(table)


@pytest.fixture
def service(dao: UserDAO) -> UserService:
    return UserService(dao)


@pytest.fixture(name="make_settings")
def make_settings_fixture() -> Callable[..., Settings]:
    """Settings pointing at the mocked table; keyword arguments override fields."""
    return make_settings


@pytest.fixture
def client(table: Any) -> Iterator[TestClient]:
    """Test client over an empty table, sample seeding off."""
    with TestClient(create_app(make_settings())) as c:
        yield c


@pytest.fixture
def user_payload() -> Callable[..., dict[str, Any]]:
    """Factory for a complete JSON create body; keyword arguments override fields."""

    def _make(**overrides: Any) -> dict[str, Any]:
        data: dict[str, Any] = {
            "userUniqueId": "9",
            "userName": "Test",
            "userEmail": "t@x.com",
            "userAge": "30",
            "dateOfBirth": "1994-01-01",
            "address": {"street": "S", "city": "C", "state": "St", "zipCode": "Z"},
        }
        data.update(overrides)
        return data

    return _make
