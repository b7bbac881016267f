"""CSV import of payment items into a batch."""

import csv
from pathlib import Path
from typing import Any

from abafile.database.base import Database
from abafile.domain.errors import DomainError, ValidationError
from abafile.domain.payment import PaymentService
from abafile.logging_config import get_logger
from abafile.utils.amount_parser import parse_amount_cents

logger = get_logger("csv_import")

REQUIRED_COLUMNS = {"provider", "amount"}


class BatchImportService:
    """Service for importing payment items from CSV files.

    The CSV needs a ``provider`` column naming an existing provider and an
    ``amount`` column in dollars; ``reference`` is optional. Column names
    are matched case-insensitively.
    """

    def __init__(self, db: Database):
        """Initialize batch import service.

        Args:
            db: Database instance
        """
        self.db = db
        self.payment_service = PaymentService(db)

    def import_csv(self, csv_file_path: str, batch_number: str) -> dict[str, Any]:
        """Import payment items from a CSV file, in file order.

        Args:
            csv_file_path: Path to CSV file
            batch_number: Batch to append items to

        Returns:
            Dict with import statistics:
            - imported: number of items added
            - errors: list of row error messages

        Raises:
            NotFoundError: If the batch doesn't exist
            ValidationError: If required columns are missing
            FileNotFoundError: If CSV file doesn't exist
        """
        batch_id = self.payment_service.get_snapshot(batch_number).id

        csv_path = Path(csv_file_path)
        if not csv_path.exists():
            raise FileNotFoundError(f"CSV file not found: {csv_file_path}")

        imported = 0
        errors = []

        with open(csv_path, "r", encoding="utf-8-sig", newline="") as f:
            sample = f.read(1024)
            f.seek(0)
            try:
                delimiter = csv.Sniffer().sniff(sample, delimiters=",;\t").delimiter
            except csv.Error:
                delimiter = ","

            reader = csv.DictReader(f, delimiter=delimiter)
            if reader.fieldnames is None:
                raise ValidationError("CSV file has no columns")

            columns = {name.strip().lower(): name for name in reader.fieldnames if name}
            missing_columns = REQUIRED_COLUMNS - set(columns)
            if missing_columns:
                raise ValidationError(
                    f"CSV file missing required columns: {', '.join(sorted(missing_columns))}"
                )

            for row_num, row in enumerate(reader, start=2):  # Start at 2 (header is row 1)
                provider_name = (row.get(columns["provider"]) or "").strip()
                amount_str = (row.get(columns["amount"]) or "").strip()
                reference = (
                    (row.get(columns["reference"]) or "").strip() if "reference" in columns else ""
                )

                if not provider_name:
                    errors.append(f"Row {row_num}: Missing provider")
                    continue
                if not amount_str:
                    errors.append(f"Row {row_num}: Missing amount")
                    continue

                try:
                    amount = parse_amount_cents(amount_str)
                    self.payment_service.add_item_to(batch_id, provider_name, amount, reference)
                except (DomainError, ValueError) as e:
                    errors.append(f"Row {row_num}: {e}")
                    continue
                imported += 1

        logger.info(
            "Imported %d item(s) into batch %s from %s (%d error(s))",
            imported,
            batch_number,
            csv_path.name,
            len(errors),
        )
        return {"imported": imported, "errors": errors}
