"""Financial statement domain service."""

import uuid
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Any, Iterable, Union

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.domain.entities import (
    Account,
    FinancialStatement,
    StatementType,
    TrialBalance,
    TrialBalanceLine,
)
from sakledger.domain.errors import (
    ConfigurationError,
    UnsupportedStatementTypeError,
    unclassified_accounts,
    unsupported_statement_type,
)
from sakledger.domain.trial_balance import TrialBalanceService
from sakledger.logging_config import get_logger

logger = get_logger("domain.statements")

ZERO = Decimal("0")

# Account code -> (statement section, bucket). Must cover every active account
# in the chart; validate_classification() enforces this before each report.
STATEMENT_CLASSIFICATION: dict[str, tuple[str, str]] = {
    "1-1000": ("assets", "current"),
    "1-1100": ("assets", "current"),
    "1-1200": ("assets", "current"),
    "1-1300": ("assets", "non_current"),
    "2-2000": ("liabilities", "current"),
    "2-2100": ("liabilities", "current"),
    "2-2200": ("liabilities", "long_term"),
    "3-3000": ("equity", "capital"),
    "3-3100": ("equity", "capital"),
    "4-4000": ("revenue", "operating"),
    "4-4100": ("revenue", "other"),
    "5-5000": ("expenses", "cost_of_goods_sold"),
    "5-5100": ("expenses", "operating"),
    "5-5200": ("expenses", "administrative"),
}

# Indonesian report names used by the mobile app
STATEMENT_TYPE_ALIASES = {
    "neraca": StatementType.BALANCE_SHEET,
    "laba_rugi": StatementType.INCOME_STATEMENT,
    "arus_kas": StatementType.CASH_FLOW_STATEMENT,
    "perubahan_ekuitas": StatementType.EQUITY_STATEMENT,
}


def resolve_statement_type(statement_type: Union[StatementType, str]) -> StatementType:
    """Resolve a statement type from its enum, value or Indonesian name.

    Raises:
        UnsupportedStatementTypeError: If the type is not recognized
    """
    if isinstance(statement_type, StatementType):
        return statement_type
    key = str(statement_type).strip().lower()
    if key in STATEMENT_TYPE_ALIASES:
        return STATEMENT_TYPE_ALIASES[key]
    try:
        return StatementType(key)
    except ValueError:
        raise UnsupportedStatementTypeError(unsupported_statement_type(str(statement_type)))


def validate_classification(accounts: Iterable[Account]) -> None:
    """Check that every active account has a statement classification.

    Raises:
        ConfigurationError: Listing the codes with no classification
    """
    missing = [
        account.code
        for account in accounts
        if account.is_active and account.code not in STATEMENT_CLASSIFICATION
    ]
    if missing:
        raise ConfigurationError(unclassified_accounts(missing))


def _bucket(lines: Iterable[TrialBalanceLine], section: str, bucket: str) -> list[dict[str, Any]]:
    return [
        line.as_dict()
        for line in lines
        if STATEMENT_CLASSIFICATION.get(line.account_code) == (section, bucket)
    ]


def _section_total(lines: Iterable[TrialBalanceLine], section: str) -> Decimal:
    return sum(
        (
            line.ending_balance
            for line in lines
            if STATEMENT_CLASSIFICATION.get(line.account_code, ("", ""))[0] == section
        ),
        ZERO,
    )


def build_balance_sheet(trial_balance: TrialBalance) -> dict[str, Any]:
    """Build balance sheet data from a trial balance."""
    lines = trial_balance.accounts
    return {
        "assets": {
            "current": _bucket(lines, "assets", "current"),
            "non_current": _bucket(lines, "assets", "non_current"),
            "total": _section_total(lines, "assets"),
        },
        "liabilities": {
            "current": _bucket(lines, "liabilities", "current"),
            "long_term": _bucket(lines, "liabilities", "long_term"),
            "total": _section_total(lines, "liabilities"),
        },
        "equity": {
            "capital": _bucket(lines, "equity", "capital"),
            "total": _section_total(lines, "equity"),
        },
    }


def build_income_statement(trial_balance: TrialBalance) -> dict[str, Any]:
    """Build income statement data from a trial balance."""
    lines = trial_balance.accounts
    total_revenue = _section_total(lines, "revenue")
    total_expenses = _section_total(lines, "expenses")
    return {
        "revenue": {
            "operating": _bucket(lines, "revenue", "operating"),
            "other": _bucket(lines, "revenue", "other"),
            "total": total_revenue,
        },
        "expenses": {
            "cost_of_goods_sold": _bucket(lines, "expenses", "cost_of_goods_sold"),
            "operating": _bucket(lines, "expenses", "operating"),
            "administrative": _bucket(lines, "expenses", "administrative"),
            "total": total_expenses,
        },
        "net_income": total_revenue - total_expenses,
    }


def build_cash_flow_statement(trial_balance: TrialBalance) -> dict[str, Any]:
    """Build cash flow statement data.

    Cash flows are not derived from ledger activity yet; every figure is
    zero and only the report shape is fixed.
    """
    return {
        "operating": {
            "receipts_from_customers": ZERO,
            "payments_to_suppliers": ZERO,
            "net_cash_from_operating": ZERO,
        },
        "investing": {
            "purchase_of_fixed_assets": ZERO,
            "net_cash_from_investing": ZERO,
        },
        "financing": {
            "loan_proceeds": ZERO,
            "loan_repayments": ZERO,
            "net_cash_from_financing": ZERO,
        },
        "net_change_in_cash": ZERO,
        "cash_at_beginning": ZERO,
        "cash_at_end": ZERO,
    }


def build_equity_statement(trial_balance: TrialBalance) -> dict[str, Any]:
    """Build statement of changes in equity.

    Only the total is derived; the roll-forward blocks stay zero because
    there is no beginning-balance carry-forward.
    """
    return {
        "share_capital": {
            "beginning_balance": ZERO,
            "additions": ZERO,
            "ending_balance": ZERO,
        },
        "retained_earnings": {
            "beginning_balance": ZERO,
            "net_income": ZERO,
            "dividends_paid": ZERO,
            "ending_balance": ZERO,
        },
        "total_equity": _section_total(trial_balance.accounts, "equity"),
    }


STATEMENT_BUILDERS = {
    StatementType.BALANCE_SHEET: build_balance_sheet,
    StatementType.INCOME_STATEMENT: build_income_statement,
    StatementType.CASH_FLOW_STATEMENT: build_cash_flow_statement,
    StatementType.EQUITY_STATEMENT: build_equity_statement,
}


class FinancialStatementService:
    """Service for generating financial statements from the trial balance."""

    def __init__(self, store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize financial statement service.

        Args:
            store: Key-value store instance
            config: Storage keys and tolerances
        """
        self.trial_balance = TrialBalanceService(store, config)

    def generate(
        self,
        statement_type: Union[StatementType, str],
        period_start: Union[date, datetime],
        period_end: Union[date, datetime],
    ) -> FinancialStatement:
        """Generate a financial statement for a period.

        Args:
            statement_type: Statement type, by enum, value or Indonesian name
            period_start: First day of the period
            period_end: Last day of the period

        Returns:
            FinancialStatement with statement-specific data

        Raises:
            UnsupportedStatementTypeError: If the type is not recognized
            ConfigurationError: If the chart has accounts with no
                statement classification
        """
        resolved = resolve_statement_type(statement_type)
        validate_classification(self.trial_balance.chart.list_accounts())

        trial_balance = self.trial_balance.compute(period_start, period_end)
        data = STATEMENT_BUILDERS[resolved](trial_balance)

        logger.info(
            "generated %s for %s..%s",
            resolved.value,
            trial_balance.period_start,
            trial_balance.period_end,
        )
        return FinancialStatement(
            type=resolved,
            period_start=trial_balance.period_start,
            period_end=trial_balance.period_end,
            data=data,
            id=f"fs_{resolved.value}_{uuid.uuid4().hex}",
            generated_at=datetime.now(UTC),
        )
