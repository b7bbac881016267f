"""Direct Entry (ABA) payment file codec.

A Direct Entry file is a sequence of 120-character records: one
descriptive record (type 0), one detail record (type 1) per payment and
one file total record (type 7). Offsets below are 0-indexed.

Descriptive record::

    [0,1)     "0"
    [1,18)    blank
    [18,20)   reel sequence number "01"
    [20,23)   financial institution mnemonic
    [23,30)   blank
    [30,56)   user name (remitter)
    [56,62)   APCA user id
    [62,74)   description of entries
    [74,80)   processing date DDMMYY
    [80,120)  blank

Detail record::

    [0,1)     "1"
    [1,8)     payee BSB "DDD-DDD"
    [8,17)    payee account number
    [17,18)   indicator
    [18,20)   transaction code ("53" pay)
    [20,30)   amount in cents
    [30,62)   payee account name
    [62,80)   lodgement reference
    [80,87)   trace BSB (remitter)
    [87,96)   trace account number (remitter)
    [96,112)  remitter name
    [112,120) withholding tax amount

File total record::

    [0,1)     "7"
    [1,8)     "999-999"
    [8,20)    blank
    [20,30)   net total
    [30,40)   credit total
    [40,50)   debit total
    [50,56)   blank
    [56,62)   count of detail records
    [62,120)  blank
"""

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional, Union

from abafile.domain.bankable import filter_bankable
from abafile.domain.entities import GeneratedFile, Originator, PaymentBatch, PaymentItem
from abafile.domain.errors import (
    FileFormatError,
    InvalidAmountError,
    ValidationError,
    non_positive_amount,
)
from abafile.domain.fields import digits, format_bsb, normalize_text, numeric, text
from abafile.logging_config import get_logger

logger = get_logger("aba")

RECORD_LENGTH = 120

DESCRIPTIVE_RECORD = "0"
DETAIL_RECORD = "1"
FILE_TOTAL_RECORD = "7"

REEL_SEQUENCE = "01"
CREDIT_TRANSACTION_CODE = "53"
FILE_TOTAL_BSB = "999-999"
DATE_FORMAT = "%d%m%y"

CREDIT_CODES = frozenset({"50", "51", "52", "53", "54", "55", "56", "57"})
DEBIT_CODES = frozenset({"13"})

LINE_TERMINATORS = ("\r\n", "\n")


def _assemble(fields: list[str]) -> str:
    line = "".join(fields)
    assert len(line) == RECORD_LENGTH, f"record is {len(line)} characters, expected {RECORD_LENGTH}"
    return line


def _require(value: Optional[str], name: str) -> None:
    if value is None or not value.strip():
        raise ValidationError(f"{name} is required")


def _check_amount(item: PaymentItem) -> None:
    amount = item.amount
    if isinstance(amount, bool) or not isinstance(amount, int) or amount <= 0:
        raise InvalidAmountError(non_positive_amount(amount, item.payee_name))


class DirectEntryFileCodec:
    """Builds Direct Entry payment files from payment batch snapshots.

    The codec holds no state between calls: identical inputs always produce
    byte-identical output, and one instance can be shared freely.
    """

    def __init__(self, line_terminator: str = "\r\n", uppercase: bool = False):
        """Initialize the codec.

        Args:
            line_terminator: Record separator, "\\r\\n" or "\\n"
            uppercase: Upper-case text fields (names, references, description)
        """
        if line_terminator not in LINE_TERMINATORS:
            raise ValidationError(f"Unsupported line terminator {line_terminator!r}")
        self.line_terminator = line_terminator
        self.uppercase = uppercase

    def generate(
        self,
        batch: PaymentBatch,
        originator_bsb: str,
        originator_account_number: str,
        originator_name: str,
        description: str,
        *,
        apca_id: str = "000000",
        financial_institution: Optional[str] = None,
        processing_date: Optional[date] = None,
    ) -> bytes:
        """Generate the Direct Entry file for a batch as ASCII bytes.

        Items whose payee lacks a BSB, account number or account name are
        left out. An empty batch yields only the descriptive and file total
        records.

        Args:
            batch: Payment batch snapshot with resolved bank profiles
            originator_bsb: Remitter's BSB
            originator_account_number: Remitter's account number
            originator_name: Remitter's name
            description: Description of entries, also the default lodgement
                reference
            apca_id: APCA user identification number
            financial_institution: Bank mnemonic for the descriptive record
                (defaults to the first three digits of the remitter's BSB)
            processing_date: Date the bank should process the file
                (defaults to today)

        Returns:
            File content

        Raises:
            ValidationError: If inputs are missing or malformed
            InvalidAmountError: If any item amount is not positive
            FieldOverflowError: If a numeric value does not fit its column
        """
        return self.build(
            batch,
            originator_bsb,
            originator_account_number,
            originator_name,
            description,
            apca_id=apca_id,
            financial_institution=financial_institution,
            processing_date=processing_date,
        ).to_bytes()

    def build(
        self,
        batch: PaymentBatch,
        originator_bsb: str,
        originator_account_number: str,
        originator_name: str,
        description: str,
        *,
        apca_id: str = "000000",
        financial_institution: Optional[str] = None,
        processing_date: Optional[date] = None,
    ) -> GeneratedFile:
        """Same as :meth:`generate` but returns the records and totals."""
        originator = Originator(
            bsb=originator_bsb,
            account_number=originator_account_number,
            name=originator_name,
            apca_id=apca_id,
            financial_institution=financial_institution,
        )
        return self.build_for(batch, originator, description, processing_date or date.today())

    def build_for(
        self,
        batch: PaymentBatch,
        originator: Originator,
        description: str,
        processing_date: date,
    ) -> GeneratedFile:
        """Build the file for a batch paid from ``originator`` on ``processing_date``.

        Output depends only on the arguments.
        """
        if batch is None:
            raise ValidationError("Payment batch is required")
        if not isinstance(processing_date, date):
            raise ValidationError(f"Processing date is required, got {processing_date!r}")
        _require(originator.bsb, "Originator BSB")
        _require(originator.account_number, "Originator account number")
        _require(originator.name, "Originator name")

        for item in batch.items:
            _check_amount(item)

        bankable = filter_bankable(batch.items)

        lines = [self._descriptive_record(originator, description, processing_date)]
        credit_total = 0
        for item in bankable:
            lines.append(self._detail_record(item, originator, description))
            credit_total += item.amount
        lines.append(self._file_total_record(credit_total, len(bankable)))

        included = {id(item) for item in bankable}
        excluded = tuple(item for item in batch.items if id(item) not in included)

        logger.info(
            "Generated Direct Entry file for batch %s: %d records, credit total %d cents, %d excluded",
            batch.batch_number,
            len(bankable),
            credit_total,
            len(excluded),
        )
        return GeneratedFile(
            lines=tuple(lines),
            credit_total=credit_total,
            record_count=len(bankable),
            line_terminator=self.line_terminator,
            excluded=excluded,
        )

    def _text(self, value: Optional[str], width: int) -> str:
        return text(normalize_text(value, uppercase=self.uppercase), width)

    def _descriptive_record(
        self, originator: Originator, description: str, processing_date: date
    ) -> str:
        institution = originator.financial_institution
        if not institution:
            institution = format_bsb(originator.bsb, "originator BSB")[:3]

        return _assemble(
            [
                DESCRIPTIVE_RECORD,
                " " * 17,
                REEL_SEQUENCE,
                self._text(institution, 3),
                " " * 7,
                self._text(originator.name, 26),
                digits(originator.apca_id, 6, "APCA user id"),
                self._text(description, 12),
                processing_date.strftime(DATE_FORMAT),
                " " * 40,
            ]
        )

    def _detail_record(
        self, item: PaymentItem, originator: Originator, description: str
    ) -> str:
        profile = item.bank_profile
        reference = item.reference if item.reference and item.reference.strip() else description

        return _assemble(
            [
                DETAIL_RECORD,
                format_bsb(profile.bsb, f"BSB for '{item.payee_name}'"),
                digits(profile.account_number, 9, f"account number for '{item.payee_name}'"),
                " ",
                CREDIT_TRANSACTION_CODE,
                numeric(item.amount, 10, f"amount for '{item.payee_name}'"),
                self._text(profile.account_name, 32),
                self._text(reference, 18),
                format_bsb(originator.bsb, "originator BSB"),
                digits(originator.account_number, 9, "originator account number"),
                self._text(originator.name, 16),
                "0" * 8,
            ]
        )

    def _file_total_record(self, credit_total: int, record_count: int) -> str:
        debit_total = 0
        return _assemble(
            [
                FILE_TOTAL_RECORD,
                FILE_TOTAL_BSB,
                " " * 12,
                numeric(credit_total - debit_total, 10, "net total"),
                numeric(credit_total, 10, "credit total"),
                numeric(debit_total, 10, "debit total"),
                " " * 6,
                numeric(record_count, 6, "record count"),
                " " * 58,
            ]
        )


# Reading


@dataclass(frozen=True)
class DescriptiveRecord:
    """Type 0 record."""

    reel_sequence: str
    financial_institution: str
    user_name: str
    apca_id: str
    description: str
    processing_date: date


@dataclass(frozen=True)
class DetailRecord:
    """Type 1 record."""

    bsb: str
    account_number: str
    indicator: str
    transaction_code: str
    amount: int
    account_name: str
    lodgement_reference: str
    trace_bsb: str
    trace_account_number: str
    remitter_name: str
    withholding_tax: int


@dataclass(frozen=True)
class FileTotalRecord:
    """Type 7 record."""

    bsb_filler: str
    net_total: int
    credit_total: int
    debit_total: int
    record_count: int


@dataclass(frozen=True)
class ParsedFile:
    """A Direct Entry file read back into records."""

    header: DescriptiveRecord
    details: tuple[DetailRecord, ...]
    footer: FileTotalRecord

    @property
    def credit_total(self) -> int:
        return sum(d.amount for d in self.details if d.transaction_code in CREDIT_CODES)

    @property
    def debit_total(self) -> int:
        return sum(d.amount for d in self.details if d.transaction_code in DEBIT_CODES)

    def verify(self) -> list[str]:
        """Compare the file total record against the detail records.

        Returns:
            List of discrepancy messages, empty if the file is consistent
        """
        problems = []
        footer = self.footer
        if footer.bsb_filler != FILE_TOTAL_BSB:
            problems.append(f"File total BSB filler is '{footer.bsb_filler}', expected '{FILE_TOTAL_BSB}'")
        if footer.record_count != len(self.details):
            problems.append(
                f"Record count is {footer.record_count} but file has {len(self.details)} detail records"
            )
        if footer.credit_total != self.credit_total:
            problems.append(f"Credit total is {footer.credit_total} but details sum to {self.credit_total}")
        if footer.debit_total != self.debit_total:
            problems.append(f"Debit total is {footer.debit_total} but details sum to {self.debit_total}")
        if footer.net_total != abs(footer.credit_total - footer.debit_total):
            problems.append(
                f"Net total is {footer.net_total}, expected {abs(footer.credit_total - footer.debit_total)}"
            )
        for number, detail in enumerate(self.details, start=2):
            code = detail.transaction_code
            if code not in CREDIT_CODES and code not in DEBIT_CODES:
                problems.append(f"Line {number}: unknown transaction code '{code}'")
        return problems


def _int_field(line: str, start: int, width: int, name: str, line_number: int) -> int:
    raw = line[start : start + width]
    if not raw.isdigit() or not raw.isascii():
        raise FileFormatError(f"Line {line_number}: {name} '{raw}' is not numeric")
    return int(raw)


def _parse_descriptive(line: str, line_number: int) -> DescriptiveRecord:
    raw_date = line[74:80]
    try:
        processing_date = datetime.strptime(raw_date, DATE_FORMAT).date()
    except ValueError:
        raise FileFormatError(f"Line {line_number}: processing date '{raw_date}' is not DDMMYY")

    return DescriptiveRecord(
        reel_sequence=line[18:20],
        financial_institution=line[20:23].rstrip(),
        user_name=line[30:56].rstrip(),
        apca_id=line[56:62],
        description=line[62:74].rstrip(),
        processing_date=processing_date,
    )


def _parse_detail(line: str, line_number: int) -> DetailRecord:
    return DetailRecord(
        bsb=line[1:8],
        account_number=line[8:17].strip(),
        indicator=line[17],
        transaction_code=line[18:20],
        amount=_int_field(line, 20, 10, "amount", line_number),
        account_name=line[30:62].rstrip(),
        lodgement_reference=line[62:80].rstrip(),
        trace_bsb=line[80:87],
        trace_account_number=line[87:96].strip(),
        remitter_name=line[96:112].rstrip(),
        withholding_tax=_int_field(line, 112, 8, "withholding tax", line_number),
    )


def _parse_file_total(line: str, line_number: int) -> FileTotalRecord:
    return FileTotalRecord(
        bsb_filler=line[1:8],
        net_total=_int_field(line, 20, 10, "net total", line_number),
        credit_total=_int_field(line, 30, 10, "credit total", line_number),
        debit_total=_int_field(line, 40, 10, "debit total", line_number),
        record_count=_int_field(line, 56, 6, "record count", line_number),
    )


def parse_file(data: Union[bytes, str]) -> ParsedFile:
    """Read Direct Entry file content into records.

    Accepts CRLF or LF line endings and a trailing line terminator.

    Raises:
        FileFormatError: If the content is not a well-formed Direct Entry file
    """
    if isinstance(data, bytes):
        try:
            data = data.decode("ascii")
        except UnicodeDecodeError as e:
            raise FileFormatError(f"File is not ASCII: {e}")

    lines = [line[:-1] if line.endswith("\r") else line for line in data.split("\n")]
    if lines and lines[-1] == "":
        lines.pop()

    if len(lines) < 2:
        raise FileFormatError("File must contain a descriptive record and a file total record")

    for number, line in enumerate(lines, start=1):
        if len(line) != RECORD_LENGTH:
            raise FileFormatError(f"Line {number}: record is {len(line)} characters, expected {RECORD_LENGTH}")

    if lines[0][0] != DESCRIPTIVE_RECORD:
        raise FileFormatError(f"Line 1: expected descriptive record, found type '{lines[0][0]}'")
    if lines[-1][0] != FILE_TOTAL_RECORD:
        raise FileFormatError(f"Line {len(lines)}: expected file total record, found type '{lines[-1][0]}'")

    details = []
    for number, line in enumerate(lines[1:-1], start=2):
        if line[0] != DETAIL_RECORD:
            raise FileFormatError(f"Line {number}: expected detail record, found type '{line[0]}'")
        details.append(_parse_detail(line, number))

    return ParsedFile(
        header=_parse_descriptive(lines[0], 1),
        details=tuple(details),
        footer=_parse_file_total(lines[-1], len(lines)),
    )
