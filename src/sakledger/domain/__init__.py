"""Domain layer for sakledger application."""

from sakledger.domain.chart_of_accounts import ChartOfAccountsService
from sakledger.domain.journal import JournalService
from sakledger.domain.trial_balance import TrialBalanceService
from sakledger.domain.statements import FinancialStatementService
from sakledger.domain.tax import TaxService

__all__ = [
    "ChartOfAccountsService",
    "JournalService",
    "TrialBalanceService",
    "FinancialStatementService",
    "TaxService",
]
