"""Tests for bankable item selection."""

import logging

from abafile.domain.bankable import filter_bankable, is_complete
from abafile.domain.entities import PayeeBankProfile, PaymentItem

from builders import make_item


def test_complete_profile():
    profile = PayeeBankProfile(bsb="032-001", account_number="123456789", account_name="X")
    assert is_complete(profile)
    assert profile.missing_fields() == []


def test_missing_profile_is_incomplete():
    assert not is_complete(None)


def test_blank_fields_are_missing():
    profile = PayeeBankProfile(bsb=" ", account_number=None, account_name="Name")
    assert not is_complete(profile)
    assert profile.missing_fields() == ["bsb", "account_number"]


def test_order_preserved():
    items = [
        make_item(1, "First", 100),
        make_item(2, "Unbanked", 200, account_number=None),
        make_item(3, "Third", 300),
        make_item(4, "Fourth", 400),
    ]

    result = filter_bankable(items)

    assert [item.id for item in result] == [1, 3, 4]


def test_duplicate_payees_not_merged():
    """Two payments to the same payee stay separate."""
    items = [make_item(1, "Same", 100), make_item(2, "Same", 100)]

    assert len(filter_bankable(items)) == 2


def test_empty_input():
    assert filter_bankable([]) == []


def test_exclusion_logged(caplog):
    item = PaymentItem(id=7, batch_id=1, payee_id=3, payee_name="No Bank", amount=100)

    with caplog.at_level(logging.INFO, logger="abafile"):
        assert filter_bankable([item]) == []

    assert "No Bank" in caplog.text
    assert "bank profile" in caplog.text
