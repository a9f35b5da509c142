"""Domain model entities for sakledger.

These are pure data classes representing bookkeeping and tax concepts,
independent of how the key-value store serialises them. Mapping to and from
stored JSON lives in sakledger.database.mappers.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional


class AccountCategory(str, Enum):
    """SAK ETAP account category."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    REVENUE = "revenue"
    EXPENSE = "expense"


class NormalBalance(str, Enum):
    """Side on which an account balance is conventionally positive."""

    DEBIT = "debit"
    CREDIT = "credit"


def normal_balance_for(category: AccountCategory) -> NormalBalance:
    """Return the normal balance implied by an account category."""
    if category in (AccountCategory.ASSET, AccountCategory.EXPENSE):
        return NormalBalance.DEBIT
    return NormalBalance.CREDIT


class JournalStatus(str, Enum):
    """Journal entry lifecycle status."""

    DRAFT = "draft"
    POSTED = "posted"
    # Declared for stored data compatibility; nothing transitions into it.
    REVERSED = "reversed"


class StatementType(str, Enum):
    """Financial statement kinds."""

    BALANCE_SHEET = "balance_sheet"
    INCOME_STATEMENT = "income_statement"
    CASH_FLOW_STATEMENT = "cash_flow_statement"
    EQUITY_STATEMENT = "equity_statement"


class TaxType(str, Enum):
    """Indonesian tax kinds."""

    PPN = "ppn"
    PPH21 = "pph21"
    PPH23 = "pph23"
    PPH25 = "pph25"
    PPH29 = "pph29"
    PBB = "pbb"
    METERAI = "meterai"


class CalculationMethod(str, Enum):
    """How a tax rate is applied."""

    PERCENTAGE = "percentage"
    FIXED_AMOUNT = "fixed_amount"
    PROGRESSIVE = "progressive"


class MaritalStatus(str, Enum):
    """Marital status used for the PTKP threshold."""

    SINGLE = "single"
    MARRIED = "married"


@dataclass(frozen=True)
class Account:
    """Chart of accounts entry."""

    id: str
    code: str
    name: str
    name_indonesian: str
    category: AccountCategory
    subcategory: str
    normal_balance: NormalBalance
    is_active: bool = True
    level: int = 1


@dataclass(frozen=True)
class JournalLine:
    """One debit or credit line of a journal entry."""

    account_id: str
    account_code: str
    account_name: str
    debit: Decimal = Decimal("0")
    credit: Decimal = Decimal("0")
    description: Optional[str] = None


@dataclass(frozen=True)
class JournalEntry:
    """Journal entry header with its ordered lines."""

    id: str
    date: date
    reference: str
    description: str
    lines: tuple[JournalLine, ...]
    status: JournalStatus
    created_by: str
    created_at: datetime
    posted_at: Optional[datetime] = None
    reversed_at: Optional[datetime] = None
    reversal_reason: Optional[str] = None

    @property
    def total_debit(self) -> Decimal:
        return sum((line.debit for line in self.lines), Decimal("0"))

    @property
    def total_credit(self) -> Decimal:
        return sum((line.credit for line in self.lines), Decimal("0"))


@dataclass(frozen=True)
class TrialBalanceLine:
    """Per-account totals for a trial balance period."""

    account_id: str
    account_code: str
    account_name: str
    beginning_balance: Decimal
    total_debit: Decimal
    total_credit: Decimal
    ending_balance: Decimal

    def as_dict(self) -> dict[str, Any]:
        return {
            "account_id": self.account_id,
            "account_code": self.account_code,
            "account_name": self.account_name,
            "beginning_balance": self.beginning_balance,
            "total_debit": self.total_debit,
            "total_credit": self.total_credit,
            "ending_balance": self.ending_balance,
        }


@dataclass(frozen=True)
class TrialBalance:
    """Derived trial balance snapshot.

    generated_at is excluded from equality so that two computations over
    the same ledger state compare equal.
    """

    period_start: date
    period_end: date
    accounts: tuple[TrialBalanceLine, ...]
    total_debit: Decimal
    total_credit: Decimal
    is_balanced: bool
    generated_at: datetime = field(compare=False)

    def line_for(self, account_id: str) -> Optional[TrialBalanceLine]:
        """Return the line for an account, or None if it had no activity."""
        for line in self.accounts:
            if line.account_id == account_id:
                return line
        return None


@dataclass(frozen=True)
class FinancialStatement:
    """Derived financial statement."""

    type: StatementType
    period_start: date
    period_end: date
    data: dict[str, Any]
    id: str = field(compare=False)
    generated_at: datetime = field(compare=False)


@dataclass(frozen=True)
class TaxRate:
    """Effective-dated statutory tax configuration."""

    id: str
    type: TaxType
    name: str
    name_indonesian: str
    rate: Decimal
    calculation_method: CalculationMethod
    applicable_from: date
    is_active: bool = True
    applicable_to: Optional[date] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class PPh21Result:
    """Outcome of an employee income tax calculation."""

    annual_gross: Decimal
    ptkp: Decimal
    pkp: Decimal
    annual_tax: Decimal
    monthly_tax: Decimal
