"""Journal ledger domain service."""

import uuid
from dataclasses import replace
from datetime import date, datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Union

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.database.mappers import (
    account_from_record,
    journal_entry_from_record,
    journal_entry_to_record,
)
from sakledger.domain.entities import Account, JournalEntry, JournalLine, JournalStatus
from sakledger.domain.errors import (
    InvalidStateTransitionError,
    NotFoundError,
    UnbalancedEntryError,
    ValidationError,
    invalid_amount,
    journal_entry_not_draft,
    journal_entry_not_found,
    journal_entry_unbalanced,
    negative_line_amount,
)
from sakledger.logging_config import get_logger

logger = get_logger("domain.journal")

LineInput = Union[JournalLine, Mapping[str, Any]]


def to_decimal(value: Any) -> Decimal:
    """Convert an int, float, str or Decimal amount to Decimal.

    Floats go through str() so that 0.1 becomes Decimal("0.1").

    Raises:
        ValidationError: If the value is not a finite number
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        amount = value
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise ValidationError(invalid_amount(value))
    if not amount.is_finite():
        raise ValidationError(invalid_amount(value))
    return amount


def to_date(value: Union[date, datetime]) -> date:
    """Normalise a datetime to its calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


class JournalService:
    """Service for creating and posting journal entries."""

    def __init__(self, store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize journal service.

        Args:
            store: Key-value store instance
            config: Storage keys and tolerances
        """
        self.store = store
        self.config = config

    def create_entry(
        self,
        date: Union[date, datetime],
        lines: Iterable[LineInput],
        reference: Optional[str] = None,
        description: str = "",
        created_by: str = "system",
    ) -> JournalEntry:
        """Create a draft journal entry.

        Args:
            date: Transaction date
            lines: Journal lines, as JournalLine objects or mappings with
                account_id, debit and credit (account_code, account_name and
                description are optional)
            reference: Reference number (generated if not provided)
            description: Entry description
            created_by: User creating the entry

        Returns:
            The created entry in draft status

        Raises:
            ValidationError: If a line has a negative or non-numeric debit
                or credit
            UnbalancedEntryError: If total debit and total credit differ by
                the balance tolerance or more
        """
        accounts = self._account_index()
        entry_lines = tuple(self._build_line(line, accounts) for line in lines)

        total_debit = sum((line.debit for line in entry_lines), Decimal("0"))
        total_credit = sum((line.credit for line in entry_lines), Decimal("0"))
        if abs(total_debit - total_credit) >= self.config.balance_tolerance:
            logger.warning(
                "rejected unbalanced entry: debit=%s credit=%s", total_debit, total_credit
            )
            raise UnbalancedEntryError(journal_entry_unbalanced(total_debit, total_credit))

        created_at = datetime.now(UTC)
        entry = JournalEntry(
            id=f"journal_{uuid.uuid4().hex}",
            date=to_date(date),
            reference=reference or f"JE{created_at:%Y%m%d%H%M%S}",
            description=description,
            lines=entry_lines,
            status=JournalStatus.DRAFT,
            created_by=created_by,
            created_at=created_at,
        )

        records, version = self._load_records()
        records.append(journal_entry_to_record(entry))
        self.store.save(self.config.journals_key, records, expected_version=version)

        logger.info("created journal entry %s (%s)", entry.id, entry.reference)
        return entry

    def post(self, entry_id: str) -> JournalEntry:
        """Post a draft journal entry.

        Args:
            entry_id: Journal entry ID

        Returns:
            The posted entry

        Raises:
            NotFoundError: If the entry does not exist
            InvalidStateTransitionError: If the entry is not a draft
        """
        records, version = self._load_records()
        for index, record in enumerate(records):
            if record["id"] == entry_id:
                break
        else:
            raise NotFoundError(journal_entry_not_found(entry_id))

        entry = journal_entry_from_record(records[index])
        if entry.status != JournalStatus.DRAFT:
            logger.warning("refused to post %s in status %s", entry_id, entry.status.value)
            raise InvalidStateTransitionError(
                journal_entry_not_draft(entry_id, entry.status.value)
            )

        posted = replace(entry, status=JournalStatus.POSTED, posted_at=datetime.now(UTC))
        records[index] = journal_entry_to_record(posted)
        self.store.save(self.config.journals_key, records, expected_version=version)

        logger.info("posted journal entry %s", entry_id)
        return posted

    def get_entry(self, entry_id: str) -> Optional[JournalEntry]:
        """Get journal entry by ID, or None if not found."""
        for entry in self.list_all():
            if entry.id == entry_id:
                return entry
        return None

    def list_all(self) -> list[JournalEntry]:
        """List every journal entry in creation order."""
        records, _ = self._load_records()
        return [journal_entry_from_record(record) for record in records]

    def list_posted(
        self,
        period_start: Union[date, datetime],
        period_end: Union[date, datetime],
    ) -> list[JournalEntry]:
        """List posted entries dated within [period_start, period_end].

        Both bounds are inclusive and compare against the entry date, not
        the posting time.
        """
        start = to_date(period_start)
        end = to_date(period_end)
        return [
            entry
            for entry in self.list_all()
            if entry.status == JournalStatus.POSTED and start <= entry.date <= end
        ]

    def _load_records(self) -> tuple[list[dict[str, Any]], int]:
        records, version = self.store.load_versioned(self.config.journals_key)
        return list(records or []), version

    def _account_index(self) -> dict[str, Account]:
        records = self.store.load(self.config.accounts_key) or []
        return {record["id"]: account_from_record(record) for record in records}

    def _build_line(self, line: LineInput, accounts: dict[str, Account]) -> JournalLine:
        """Normalise a line input, filling code and name from the chart."""
        if isinstance(line, JournalLine):
            data = {
                "account_id": line.account_id,
                "account_code": line.account_code,
                "account_name": line.account_name,
                "debit": line.debit,
                "credit": line.credit,
                "description": line.description,
            }
        else:
            data = dict(line)

        account_id = data.get("account_id")
        if not account_id:
            raise ValidationError("Journal line is missing account_id")
        debit = to_decimal(data.get("debit"))
        credit = to_decimal(data.get("credit"))
        if debit < 0 or credit < 0:
            raise ValidationError(negative_line_amount(account_id))

        account = accounts.get(account_id)
        account_code = data.get("account_code") or (account.code if account else "")
        account_name = data.get("account_name") or (
            account.name_indonesian if account else ""
        )
        return JournalLine(
            account_id=account_id,
            account_code=account_code,
            account_name=account_name,
            debit=debit,
            credit=credit,
            description=data.get("description"),
        )
