"""Shared BDD fixtures and step definitions for phone login."""

import pytest
from identity.errors import OtpVerificationError
from identity.session import AuthSession
from pytest_bdd import given, parsers, then, when


@pytest.fixture()
def outcome():
    """Container for the error raised by the step under test."""
    return {"exc": None}


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a shopper on a new device", target_fixture="session")
def shopper_on_new_device(identity_provider, storage):
    return AuthSession(identity_provider, storage)


@given(parsers.cfparse('the shopper requested an OTP for "{phone}"'))
@when(parsers.cfparse('the shopper requests an OTP for "{phone}"'))
def request_otp(session, phone):
    session.send_otp(phone)


# ---------------------------------------------------------------------------
# When steps
# ---------------------------------------------------------------------------
@when(parsers.cfparse('the shopper enters the code "{code}"'))
def enter_code(session, outcome, code):
    try:
        session.verify_otp(code)
    except OtpVerificationError as exc:
        outcome["exc"] = exc


# ---------------------------------------------------------------------------
# Then steps
# ---------------------------------------------------------------------------
@then("the shopper is logged in")
def shopper_logged_in(session, outcome):
    assert outcome["exc"] is None
    assert session.is_authenticated


@then("the shopper is not logged in")
def shopper_not_logged_in(session):
    assert not session.is_authenticated
