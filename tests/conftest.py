"""Shared pytest fixtures for abafile tests."""

import tempfile
import os
from pathlib import Path
import pytest

from abafile.database.factories import create_sqlite_database
from abafile.domain.aba import DirectEntryFileCodec
from abafile.domain.entities import PaymentBatch
from abafile.domain.payment import PaymentService
from abafile.logging_config import reset_logging

from builders import make_item


@pytest.fixture(autouse=True)
def clean_logging():
    """Undo logging configuration done by CLI invocations."""
    yield
    reset_logging()


@pytest.fixture
def codec():
    """Create a codec with default settings."""
    return DirectEntryFileCodec()


@pytest.fixture
def two_item_batch():
    """Batch of two bankable payments, 2500.00 and 1750.50."""
    return PaymentBatch(
        id=1,
        batch_number="PAY-TEST-001",
        items=(
            make_item(1, "Therapy Solutions", 250000, reference="inv1,inv2"),
            make_item(
                2,
                "Care Plus",
                175050,
                bsb="062-000",
                account_number="987654321",
                account_name="CARE PLUS PTY LTD",
                reference="inv3",
            ),
        ),
    )


@pytest.fixture
def empty_batch():
    """Batch without payments."""
    return PaymentBatch(id=2, batch_number="PAY-EMPTY")


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    # Create a temporary file for the database
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    # Create database
    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    # Cleanup
    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def payment_service(temp_db):
    """Create a PaymentService with a temporary database."""
    return PaymentService(temp_db)


@pytest.fixture
def sample_providers(payment_service):
    """Two providers with bank details and one without."""
    payment_service.create_provider(
        "Therapy Solutions", bsb="032-001", account_number="123456789", account_name="THERAPY SOLUTIONS"
    )
    payment_service.create_provider(
        "Care Plus", bsb="062000", account_number="987654321", account_name="CARE PLUS PTY LTD"
    )
    payment_service.create_provider("Unbanked Support Co")
    return payment_service.list_providers()


@pytest.fixture
def sample_batch(payment_service, sample_providers):
    """Stored batch with two bankable payments and one unbanked payment between them."""
    payment_service.create_batch("PAY-001")
    payment_service.add_item("PAY-001", "Therapy Solutions", 250000, "INV-1001")
    payment_service.add_item("PAY-001", "Unbanked Support Co", 50000, "INV-1002")
    payment_service.add_item("PAY-001", "Care Plus", 175050, "INV-1003")
    return payment_service.get_snapshot("PAY-001")


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture
def fixtures_dir():
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"
