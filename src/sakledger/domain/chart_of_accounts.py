"""Chart of accounts domain service."""

from typing import Optional

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.database.mappers import account_from_record, account_to_record
from sakledger.domain.entities import (
    Account,
    AccountCategory,
    NormalBalance,
    normal_balance_for,
)
from sakledger.domain.errors import NotFoundError, account_not_found
from sakledger.logging_config import get_logger

logger = get_logger("domain.chart_of_accounts")


# SAK ETAP seed: (code, name, Indonesian name, category, subcategory)
DEFAULT_ACCOUNTS = [
    ("1-1000", "Cash and Cash Equivalents", "Kas dan Setara Kas", AccountCategory.ASSET, "Aset Lancar"),
    ("1-1100", "Accounts Receivable", "Piutang Usaha", AccountCategory.ASSET, "Aset Lancar"),
    ("1-1200", "Inventory", "Persediaan", AccountCategory.ASSET, "Aset Lancar"),
    ("1-1300", "Property, Plant & Equipment", "Aset Tetap", AccountCategory.ASSET, "Aset Tidak Lancar"),
    ("2-2000", "Accounts Payable", "Utang Usaha", AccountCategory.LIABILITY, "Liabilitas Jangka Pendek"),
    ("2-2100", "Tax Payable - PPN", "Utang Pajak - PPN", AccountCategory.LIABILITY, "Liabilitas Jangka Pendek"),
    ("2-2200", "Employee Benefits Payable", "Utang Kesejahteraan Karyawan", AccountCategory.LIABILITY, "Liabilitas Jangka Pendek"),
    ("3-3000", "Share Capital", "Modal Saham", AccountCategory.EQUITY, "Modal"),
    ("3-3100", "Retained Earnings", "Saldo Laba", AccountCategory.EQUITY, "Laba Ditahan"),
    ("4-4000", "Sales Revenue", "Pendapatan Penjualan", AccountCategory.REVENUE, "Pendapatan Operasional"),
    ("4-4100", "Other Income", "Pendapatan Lain-lain", AccountCategory.REVENUE, "Pendapatan Non-Operasional"),
    ("5-5000", "Cost of Goods Sold", "Harga Pokok Penjualan", AccountCategory.EXPENSE, "Beban Pokok"),
    ("5-5100", "Operating Expenses", "Beban Operasional", AccountCategory.EXPENSE, "Beban Usaha"),
    ("5-5200", "Administrative Expenses", "Beban Administrasi", AccountCategory.EXPENSE, "Beban Usaha"),
]


def build_default_accounts() -> list[Account]:
    """Build the seeded SAK ETAP accounts.

    Account ids follow the numeric part of the code, e.g. 1-1000 -> acc_1000.
    """
    accounts = []
    for code, name, name_indonesian, category, subcategory in DEFAULT_ACCOUNTS:
        accounts.append(
            Account(
                id=f"acc_{code.split('-', 1)[1]}",
                code=code,
                name=name,
                name_indonesian=name_indonesian,
                category=category,
                subcategory=subcategory,
                normal_balance=normal_balance_for(category),
            )
        )
    return accounts


class ChartOfAccountsService:
    """Service for the seeded chart of accounts."""

    def __init__(self, store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize chart of accounts service.

        Args:
            store: Key-value store instance
            config: Storage keys and tolerances
        """
        self.store = store
        self.config = config

    def initialize(self) -> list[Account]:
        """Seed the default chart of accounts.

        Any previously stored chart is replaced, not merged.

        Returns:
            The seeded accounts
        """
        accounts = build_default_accounts()
        self.store.save(
            self.config.accounts_key,
            [account_to_record(account) for account in accounts],
        )
        logger.info("seeded %d SAK ETAP accounts", len(accounts))
        return accounts

    def list_accounts(self) -> list[Account]:
        """List all accounts in chart order."""
        records = self.store.load(self.config.accounts_key) or []
        return [account_from_record(record) for record in records]

    def list(self) -> list[Account]:
        """Alias of list_accounts."""
        return self.list_accounts()

    def get_account(self, account_id: str) -> Optional[Account]:
        """Get account by ID.

        Args:
            account_id: Account ID (e.g. "acc_1000")

        Returns:
            Account entity or None if not found
        """
        for account in self.list_accounts():
            if account.id == account_id:
                return account
        return None

    def get_account_by_code(self, code: str) -> Optional[Account]:
        """Get account by its code (e.g. "1-1000")."""
        for account in self.list_accounts():
            if account.code == code:
                return account
        return None

    def normal_balance_of(self, account_id: str) -> NormalBalance:
        """Return the normal balance side of an account.

        Raises:
            NotFoundError: If the account does not exist
        """
        account = self.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))
        return account.normal_balance
