"""Tests for the payment batch service."""

import logging
import pytest
from datetime import date

from abafile.domain.aba import parse_file
from abafile.domain.entities import Originator
from abafile.domain.errors import (
    ConflictError,
    FieldOverflowError,
    InvalidAmountError,
    NotFoundError,
    ValidationError,
)

from builders import ORIGINATOR_ACCOUNT, ORIGINATOR_BSB, ORIGINATOR_NAME, PROCESSING_DATE

ORIGINATOR = Originator(bsb=ORIGINATOR_BSB, account_number=ORIGINATOR_ACCOUNT, name=ORIGINATOR_NAME)


class TestProviders:
    def test_create_provider_normalizes_bsb(self, payment_service):
        payment_service.create_provider(
            "Care Plus", bsb="062000", account_number="987654321", account_name="CARE PLUS"
        )

        provider = payment_service.get_provider("Care Plus")
        assert provider.bank_profile.bsb == "062-000"
        assert provider.bank_profile.is_complete

    def test_create_provider_without_bank_details(self, payment_service):
        payment_service.create_provider("Unbanked", bsb=" ", account_number="")

        profile = payment_service.get_provider("Unbanked").bank_profile
        assert profile.missing_fields() == ["bsb", "account_number", "account_name"]

    def test_duplicate_provider(self, payment_service):
        payment_service.create_provider("Care Plus")

        with pytest.raises(ConflictError):
            payment_service.create_provider("Care Plus")

    def test_blank_provider_name(self, payment_service):
        with pytest.raises(ValidationError):
            payment_service.create_provider("   ")

    @pytest.mark.parametrize(
        "bsb, account_number, error",
        [
            ("06200", "123", ValidationError),
            ("0620001", "123", FieldOverflowError),
            ("062-000", "1234567890", FieldOverflowError),
            ("062-000", "abc", ValidationError),
        ],
    )
    def test_malformed_bank_details(self, payment_service, bsb, account_number, error):
        with pytest.raises(error):
            payment_service.create_provider("Bad Bank", bsb=bsb, account_number=account_number)

    def test_get_missing_provider(self, payment_service):
        with pytest.raises(NotFoundError) as excinfo:
            payment_service.get_provider("Nobody")
        assert "Nobody" in str(excinfo.value)

    def test_update_bank_details(self, payment_service, sample_providers):
        payment_service.update_bank_details(
            "Unbanked Support Co", "033 000", "11223344", "UNBANKED SUPPORT"
        )

        profile = payment_service.get_provider("Unbanked Support Co").bank_profile
        assert profile.bsb == "033-000"
        assert profile.is_complete


class TestBatches:
    def test_create_duplicate_batch(self, payment_service):
        payment_service.create_batch("PAY-001")

        with pytest.raises(ConflictError):
            payment_service.create_batch("PAY-001")

    def test_add_item_requires_positive_amount(self, payment_service, sample_providers):
        payment_service.create_batch("PAY-001")

        for amount in (0, -100):
            with pytest.raises(InvalidAmountError):
                payment_service.add_item("PAY-001", "Care Plus", amount)

    @pytest.mark.parametrize("amount", [10**10, 99999999999999999999])
    def test_add_item_rejects_amount_wider_than_file_column(self, payment_service, sample_providers, amount):
        payment_service.create_batch("PAY-001")

        with pytest.raises(FieldOverflowError):
            payment_service.add_item("PAY-001", "Care Plus", amount)

        assert payment_service.get_snapshot("PAY-001").items == ()

    def test_add_item_accepts_largest_file_amount(self, payment_service, sample_providers):
        payment_service.create_batch("PAY-001")

        payment_service.add_item("PAY-001", "Care Plus", 9999999999)

        assert payment_service.get_snapshot("PAY-001").total_amount == 9999999999

    def test_add_item_to_resolved_batch(self, payment_service, sample_providers):
        batch_id = payment_service.create_batch("PAY-001")

        payment_service.add_item_to(batch_id, "Care Plus", 1500, " INV-5 ")

        item = payment_service.get_snapshot("PAY-001").items[0]
        assert (item.payee_name, item.amount, item.reference) == ("Care Plus", 1500, "INV-5")

    def test_add_item_unknown_batch(self, payment_service, sample_providers):
        with pytest.raises(NotFoundError):
            payment_service.add_item("PAY-404", "Care Plus", 100)

    def test_add_item_unknown_provider(self, payment_service):
        payment_service.create_batch("PAY-001")

        with pytest.raises(NotFoundError):
            payment_service.add_item("PAY-001", "Nobody", 100)

    def test_snapshot_keeps_insertion_order(self, sample_batch):
        assert [item.payee_name for item in sample_batch.items] == [
            "Therapy Solutions",
            "Unbanked Support Co",
            "Care Plus",
        ]
        assert sample_batch.total_amount == 475050

    def test_list_batches(self, payment_service, sample_batch):
        payment_service.create_batch("PAY-000")

        assert [b.batch_number for b in payment_service.list_batches()] == ["PAY-000", "PAY-001"]


class TestGenerateFile:
    def test_generate_excludes_unbanked(self, payment_service, sample_batch):
        generated = payment_service.generate_file(
            "PAY-001", ORIGINATOR, "NDIS PAYMENTS", PROCESSING_DATE
        )

        assert generated.record_count == 2
        assert generated.credit_total == 425050
        assert [item.payee_name for item in generated.excluded] == ["Unbanked Support Co"]

        parsed = parse_file(generated.to_bytes())
        assert [d.lodgement_reference for d in parsed.details] == ["INV-1001", "INV-1003"]
        assert parsed.details[1].bsb == "062-000"
        assert parsed.verify() == []

    def test_generate_logs_exclusions(self, payment_service, sample_batch, caplog):
        with caplog.at_level(logging.INFO, logger="abafile"):
            payment_service.generate_file("PAY-001", ORIGINATOR, "NDIS PAYMENTS", PROCESSING_DATE)

        assert "Unbanked Support Co" in caplog.text
        assert any(
            r.levelno == logging.WARNING and "left out" in r.getMessage() for r in caplog.records
        )

    def test_regenerate_picks_up_new_bank_details(self, payment_service, sample_batch):
        payment_service.update_bank_details(
            "Unbanked Support Co", "033-000", "11223344", "UNBANKED SUPPORT"
        )

        generated = payment_service.generate_file(
            "PAY-001", ORIGINATOR, "NDIS PAYMENTS", PROCESSING_DATE
        )

        assert generated.record_count == 3
        assert generated.credit_total == 475050
        assert generated.excluded == ()

    def test_generate_defaults_to_today(self, payment_service, sample_batch):
        generated = payment_service.generate_file("PAY-001", ORIGINATOR, "NDIS")

        assert generated.header[74:80] == date.today().strftime("%d%m%y")

    def test_generate_is_repeatable(self, payment_service, sample_batch):
        first = payment_service.generate_file("PAY-001", ORIGINATOR, "NDIS", date(2024, 3, 15))
        second = payment_service.generate_file("PAY-001", ORIGINATOR, "NDIS", date(2024, 3, 15))

        assert first.to_bytes() == second.to_bytes()

    def test_generate_unknown_batch(self, payment_service):
        with pytest.raises(NotFoundError):
            payment_service.generate_file("PAY-404", ORIGINATOR, "NDIS")
