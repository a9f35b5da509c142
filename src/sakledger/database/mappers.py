"""Mapper functions to convert between domain entities and stored JSON records.

Amounts are stored as decimal strings and dates as ISO-8601 strings so that a
record read back from the store rebuilds an identical entity.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from sakledger.domain.entities import (
    Account,
    AccountCategory,
    CalculationMethod,
    JournalEntry,
    JournalLine,
    JournalStatus,
    NormalBalance,
    TaxRate,
    TaxType,
)


def _date_or_none(value: Optional[str]) -> Optional[date]:
    return date.fromisoformat(value) if value else None


def _datetime_or_none(value: Optional[str]) -> Optional[datetime]:
    return datetime.fromisoformat(value) if value else None


def _iso_or_none(value: Optional[date]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def account_to_record(account: Account) -> dict[str, Any]:
    """Convert domain Account entity to a JSON record."""
    return {
        "id": account.id,
        "code": account.code,
        "name": account.name,
        "name_indonesian": account.name_indonesian,
        "category": account.category.value,
        "subcategory": account.subcategory,
        "normal_balance": account.normal_balance.value,
        "is_active": account.is_active,
        "level": account.level,
    }


def account_from_record(record: dict[str, Any]) -> Account:
    """Convert a JSON record to domain Account entity."""
    return Account(
        id=record["id"],
        code=record["code"],
        name=record["name"],
        name_indonesian=record.get("name_indonesian", record["name"]),
        category=AccountCategory(record["category"]),
        subcategory=record.get("subcategory", ""),
        normal_balance=NormalBalance(record["normal_balance"]),
        is_active=record.get("is_active", True),
        level=record.get("level", 1),
    )


def journal_line_to_record(line: JournalLine) -> dict[str, Any]:
    """Convert domain JournalLine to a JSON record."""
    return {
        "account_id": line.account_id,
        "account_code": line.account_code,
        "account_name": line.account_name,
        "debit": str(line.debit),
        "credit": str(line.credit),
        "description": line.description,
    }


def journal_line_from_record(record: dict[str, Any]) -> JournalLine:
    """Convert a JSON record to domain JournalLine."""
    return JournalLine(
        account_id=record["account_id"],
        account_code=record.get("account_code", ""),
        account_name=record.get("account_name", ""),
        debit=Decimal(record.get("debit", "0")),
        credit=Decimal(record.get("credit", "0")),
        description=record.get("description"),
    )


def journal_entry_to_record(entry: JournalEntry) -> dict[str, Any]:
    """Convert domain JournalEntry to a JSON record."""
    return {
        "id": entry.id,
        "date": entry.date.isoformat(),
        "reference": entry.reference,
        "description": entry.description,
        "lines": [journal_line_to_record(line) for line in entry.lines],
        "total_debit": str(entry.total_debit),
        "total_credit": str(entry.total_credit),
        "status": entry.status.value,
        "created_by": entry.created_by,
        "created_at": entry.created_at.isoformat(),
        "posted_at": _iso_or_none(entry.posted_at),
        "reversed_at": _iso_or_none(entry.reversed_at),
        "reversal_reason": entry.reversal_reason,
    }


def journal_entry_from_record(record: dict[str, Any]) -> JournalEntry:
    """Convert a JSON record to domain JournalEntry."""
    return JournalEntry(
        id=record["id"],
        date=date.fromisoformat(record["date"]),
        reference=record["reference"],
        description=record.get("description", ""),
        lines=tuple(journal_line_from_record(line) for line in record.get("lines", [])),
        status=JournalStatus(record["status"]),
        created_by=record.get("created_by", "system"),
        created_at=datetime.fromisoformat(record["created_at"]),
        posted_at=_datetime_or_none(record.get("posted_at")),
        reversed_at=_datetime_or_none(record.get("reversed_at")),
        reversal_reason=record.get("reversal_reason"),
    )


def tax_rate_to_record(tax_rate: TaxRate) -> dict[str, Any]:
    """Convert domain TaxRate to a JSON record."""
    return {
        "id": tax_rate.id,
        "type": tax_rate.type.value,
        "name": tax_rate.name,
        "name_indonesian": tax_rate.name_indonesian,
        "rate": str(tax_rate.rate),
        "calculation_method": tax_rate.calculation_method.value,
        "applicable_from": tax_rate.applicable_from.isoformat(),
        "applicable_to": _iso_or_none(tax_rate.applicable_to),
        "is_active": tax_rate.is_active,
        "description": tax_rate.description,
    }


def tax_rate_from_record(record: dict[str, Any]) -> TaxRate:
    """Convert a JSON record to domain TaxRate."""
    return TaxRate(
        id=record["id"],
        type=TaxType(record["type"]),
        name=record["name"],
        name_indonesian=record.get("name_indonesian", record["name"]),
        rate=Decimal(record["rate"]),
        calculation_method=CalculationMethod(record["calculation_method"]),
        applicable_from=date.fromisoformat(record["applicable_from"]),
        applicable_to=_date_or_none(record.get("applicable_to")),
        is_active=record.get("is_active", True),
        description=record.get("description"),
    )
