"""Tests for account registration, lookup and search."""

from __future__ import annotations

import pytest

from conftest import female_fields, male_fields
from offerboard.errors import DuplicateUsername, ValidationFailed
from offerboard.models import AccountFields
from offerboard.services.account_service import ACCOUNT_ID_COUNTER_KEY
from offerboard.utils.common import hash_password


def test_create_assigns_sequential_ids(marketplace, kv):
    first = marketplace.accounts.create(male_fields("bob"))
    second = marketplace.accounts.create(female_fields("alice"))

    assert first.id == "U1000"
    assert second.id == "U1001"
    assert kv.get(ACCOUNT_ID_COUNTER_KEY) == "1002"


def test_create_stores_digest_not_password(marketplace):
    account = marketplace.accounts.create(male_fields("bob", password="pw2"))

    assert account.password_hash == hash_password("pw2")
    assert "pw2" not in str(account.to_dict())


def test_find_by_username_and_id(marketplace):
    created = marketplace.accounts.create(female_fields("alice"))

    assert marketplace.accounts.find_by_username("alice") == created
    assert marketplace.accounts.find_by_id(created.id) == created
    assert marketplace.accounts.find_by_username("Alice") is None
    assert marketplace.accounts.find_by_id("U9999") is None


def test_duplicate_username_rejected(marketplace):
    marketplace.accounts.create(male_fields("bob"))

    with pytest.raises(DuplicateUsername):
        marketplace.accounts.create(female_fields("bob"))

    assert len(marketplace.accounts.all()) == 1


def test_usernames_are_case_sensitive(marketplace):
    marketplace.accounts.create(male_fields("bob"))
    marketplace.accounts.create(male_fields("Bob"))

    assert len(marketplace.accounts.all()) == 2


def test_male_accounts_need_no_measurements(marketplace):
    account = marketplace.accounts.create(male_fields("bob"))

    assert account.profile.measurements is None
    assert "measurements" not in account.to_dict()
    assert "braSize" not in account.to_dict()


def test_non_male_accounts_require_measurements(marketplace):
    fields = female_fields("alice")
    fields.bra_size = ""

    with pytest.raises(ValidationFailed):
        marketplace.accounts.create(fields)


def test_non_male_accounts_keep_measurements(marketplace):
    account = marketplace.accounts.create(female_fields("alice"))

    data = account.to_dict()
    assert data["measurements"] == {"bust": "34", "waist": "26", "hips": "36"}
    assert data["braSize"] == "34B"


@pytest.mark.parametrize("missing", ["username", "password", "name", "gender", "age"])
def test_missing_required_field(marketplace, missing):
    fields = male_fields("bob")
    setattr(fields, missing, "")

    with pytest.raises(ValidationFailed):
        marketplace.accounts.create(fields)


def test_password_confirmation_must_match(marketplace):
    fields = male_fields("bob")
    fields.confirm_password = "other"

    with pytest.raises(ValidationFailed, match="Passwords do not match"):
        marketplace.accounts.create(fields)


def test_age_must_be_non_negative_integer(marketplace):
    with pytest.raises(ValidationFailed):
        marketplace.accounts.create(AccountFields(
            username="bob", password="pw", name="Bob", gender="male", age="old",
        ))
    with pytest.raises(ValidationFailed):
        marketplace.accounts.create(AccountFields(
            username="bob", password="pw", name="Bob", gender="male", age="-1",
        ))


def test_search_matches_username_or_name(marketplace):
    marketplace.accounts.create(female_fields("alice", name="Alice Liddell"))
    marketplace.accounts.create(male_fields("bob", name="Robert Smith"))

    assert [a.username for a in marketplace.accounts.search("ALI")] == ["alice"]
    assert [a.username for a in marketplace.accounts.search("smith")] == ["bob"]
    assert marketplace.accounts.search("   ") == []


def test_clear_accounts_logs_out(marketplace):
    marketplace.accounts.create(male_fields("bob", password="pw"))
    marketplace.sessions.login("bob", "pw")

    marketplace.clear_accounts()

    assert marketplace.accounts.all() == []
    assert marketplace.sessions.current() is None


def test_password_digest_is_sha256_hex():
    assert hash_password("abc") == "ba7816bf8f01cfea414140de5dae2223b00361a396177a9cb410ff61f20015ad"


def test_store_helpers_do_not_depend_on_flask():
    from offerboard.utils import common

    assert "flask" not in vars(common)
    assert "current_app" not in vars(common)
