"""Tests for flat form input → canonical request models."""

from datetime import date

import pytest

from user_directory.core.errors import UserValidationError
from user_directory.models.forms import UserForm

FULL_FORM = {
    "userUniqueId": "7",
    "userName": "Lina",
    "userEmail": "lina@example.com",
    "userAge": "28",
    "dateOfBirth": "1996-03-04",
    "street": "10 Hill St",
    "city": "Madaba",
    "state": "Madaba Governorate",
    "zipCode": "17110",
    "country": "",
}


@pytest.mark.unit
def test_blank_fields_become_none() -> None:
    form = UserForm(userUniqueId="7", userName="  ", country="")
    assert form.userName is None
    assert form.country is None


@pytest.mark.unit
def test_create_request_nests_address() -> None:
    req = UserForm(**FULL_FORM).to_create_request()

    assert req.userUniqueId == "7"
    assert req.dateOfBirth == date(1996, 3, 4)
    assert req.address.city == "Madaba"
    # Blank country is left for the service to default
    assert req.address.country is None


@pytest.mark.unit
def test_create_request_missing_street() -> None:
    form = UserForm(**{**FULL_FORM, "street": ""})

    with pytest.raises(UserValidationError, match="address.street"):
        form.to_create_request()


@pytest.mark.unit
def test_create_request_bad_date() -> None:
    form = UserForm(**{**FULL_FORM, "dateOfBirth": "not-a-date"})

    with pytest.raises(UserValidationError, match="dateOfBirth"):
        form.to_create_request()


@pytest.mark.unit
def test_update_request_without_address_fields() -> None:
    req = UserForm(userUniqueId="7", userAge="29").to_update_request()

    assert req.model_dump(exclude_none=True) == {"userAge": "29"}


@pytest.mark.unit
def test_update_request_any_address_field_supplies_address() -> None:
    req = UserForm(userUniqueId="7", zipCode="11111").to_update_request()

    assert req.address is not None
    assert req.address.model_dump(exclude_none=True) == {"zipCode": "11111"}
