"""Tests for the financial statement service."""

import pytest
from datetime import date
from decimal import Decimal

from sakledger.database.mappers import account_to_record
from sakledger.domain.chart_of_accounts import build_default_accounts
from sakledger.domain.entities import Account, AccountCategory, NormalBalance, StatementType
from sakledger.domain.errors import ConfigurationError, UnsupportedStatementTypeError
from sakledger.domain.statements import (
    STATEMENT_CLASSIFICATION,
    resolve_statement_type,
    validate_classification,
)

START = date(2024, 1, 1)
END = date(2024, 12, 31)


@pytest.fixture
def trading_year(post_entry):
    """Post a small year of gift-box trading."""
    post_entry("acc_1000", "acc_3000", 50000000, description="Owner capital")
    post_entry("acc_1200", "acc_2000", 15000000, description="Packaging stock on credit")
    post_entry("acc_1300", "acc_1000", 20000000, description="Cutting machine")
    post_entry("acc_1000", "acc_4000", 30000000, description="Gift box sales")
    post_entry("acc_1100", "acc_4100", 500000, description="Workshop rental")
    post_entry("acc_5000", "acc_1200", 12000000, description="Materials used")
    post_entry("acc_5100", "acc_1000", 3000000, description="Electricity")
    post_entry("acc_5200", "acc_2200", 1500000, description="Staff allowance")


def _codes(bucket):
    return [line["account_code"] for line in bucket]


def test_balance_sheet(statement_service, trading_year):
    """Test balance sheet buckets and totals."""
    statement = statement_service.generate(StatementType.BALANCE_SHEET, START, END)
    data = statement.data

    assert statement.type == StatementType.BALANCE_SHEET
    assert _codes(data["assets"]["current"]) == ["1-1000", "1-1100", "1-1200"]
    assert _codes(data["assets"]["non_current"]) == ["1-1300"]
    # Cash 50M - 20M + 30M - 3M, receivable 0.5M, stock 15M - 12M, PPE 20M
    assert data["assets"]["total"] == Decimal("80500000")
    assert _codes(data["liabilities"]["current"]) == ["2-2000"]
    assert _codes(data["liabilities"]["long_term"]) == ["2-2200"]
    assert data["liabilities"]["total"] == Decimal("16500000")
    assert _codes(data["equity"]["capital"]) == ["3-3000"]
    assert data["equity"]["total"] == Decimal("50000000")


def test_income_statement(statement_service, trading_year):
    """Test revenue and expense buckets and net income."""
    data = statement_service.generate("income_statement", START, END).data

    assert data["revenue"]["total"] == Decimal("30500000")
    assert _codes(data["revenue"]["operating"]) == ["4-4000"]
    assert _codes(data["revenue"]["other"]) == ["4-4100"]
    assert data["expenses"]["total"] == Decimal("16500000")
    assert _codes(data["expenses"]["cost_of_goods_sold"]) == ["5-5000"]
    assert _codes(data["expenses"]["operating"]) == ["5-5100"]
    assert _codes(data["expenses"]["administrative"]) == ["5-5200"]
    assert data["net_income"] == Decimal("14000000")


def test_accounting_equation_holds(statement_service, trading_year):
    """Test assets = liabilities + equity + net income before closing."""
    balance_sheet = statement_service.generate("balance_sheet", START, END).data
    income = statement_service.generate("income_statement", START, END).data

    assert balance_sheet["assets"]["total"] == (
        balance_sheet["liabilities"]["total"]
        + balance_sheet["equity"]["total"]
        + income["net_income"]
    )


def test_cash_flow_statement_is_zero_filled(statement_service, trading_year):
    """Test the cash flow statement has a fixed zero shape."""
    data = statement_service.generate("cash_flow_statement", START, END).data

    assert set(data) == {
        "operating",
        "investing",
        "financing",
        "net_change_in_cash",
        "cash_at_beginning",
        "cash_at_end",
    }
    assert data["operating"]["net_cash_from_operating"] == Decimal("0")
    assert data["cash_at_end"] == Decimal("0")


def test_equity_statement(statement_service, trading_year):
    """Test equity statement totals equity accounts only."""
    data = statement_service.generate("equity_statement", START, END).data

    assert data["total_equity"] == Decimal("50000000")
    assert data["share_capital"]["ending_balance"] == Decimal("0")
    assert data["retained_earnings"]["beginning_balance"] == Decimal("0")


def test_empty_ledger_yields_zero_totals(statement_service):
    """Test statements over an empty ledger succeed with zero totals."""
    data = statement_service.generate("balance_sheet", START, END).data

    assert data["assets"]["total"] == Decimal("0")
    assert data["assets"]["current"] == []
    assert statement_service.generate("income_statement", START, END).data["net_income"] == 0


def test_indonesian_type_names(statement_service):
    """Test the mobile app's Indonesian statement names are accepted."""
    assert statement_service.generate("neraca", START, END).type == StatementType.BALANCE_SHEET
    assert statement_service.generate("laba_rugi", START, END).type == StatementType.INCOME_STATEMENT
    assert resolve_statement_type("arus_kas") == StatementType.CASH_FLOW_STATEMENT
    assert resolve_statement_type("perubahan_ekuitas") == StatementType.EQUITY_STATEMENT


def test_unsupported_type(statement_service):
    """Test an unknown statement type raises."""
    with pytest.raises(UnsupportedStatementTypeError, match="profit_forecast"):
        statement_service.generate("profit_forecast", START, END)


def test_statements_compare_equal_across_runs(statement_service, trading_year):
    """Test regenerated statements are equal apart from id and timestamp."""
    first = statement_service.generate("balance_sheet", START, END)
    second = statement_service.generate("balance_sheet", START, END)

    assert first.id != second.id
    assert first == second


def test_classification_covers_default_chart():
    """Test every seeded account has a classification."""
    accounts = build_default_accounts()
    validate_classification(accounts)
    assert {acc.code for acc in accounts} == set(STATEMENT_CLASSIFICATION)


def test_unclassified_account_is_configuration_error(temp_store, statement_service):
    """Test an account added outside the mapping blocks statement generation."""
    records = temp_store.load("sak_etap_accounts")
    records.append(
        account_to_record(
            Account(
                id="acc_1400",
                code="1-1400",
                name="Prepaid Expenses",
                name_indonesian="Beban Dibayar Dimuka",
                category=AccountCategory.ASSET,
                subcategory="Aset Lancar",
                normal_balance=NormalBalance.DEBIT,
            )
        )
    )
    temp_store.save("sak_etap_accounts", records)

    with pytest.raises(ConfigurationError, match="1-1400"):
        statement_service.generate("balance_sheet", START, END)


def test_inactive_unclassified_account_is_allowed():
    """Test an inactive account outside the mapping does not block statements."""
    accounts = build_default_accounts() + [
        Account(
            id="acc_1400",
            code="1-1400",
            name="Prepaid Expenses",
            name_indonesian="Beban Dibayar Dimuka",
            category=AccountCategory.ASSET,
            subcategory="Aset Lancar",
            normal_balance=NormalBalance.DEBIT,
            is_active=False,
        )
    ]

    validate_classification(accounts)
