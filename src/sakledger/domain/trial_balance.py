"""Trial balance domain service."""

from collections import defaultdict
from datetime import date, datetime, UTC
from decimal import Decimal
from typing import Union

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.domain.chart_of_accounts import ChartOfAccountsService
from sakledger.domain.entities import (
    NormalBalance,
    TrialBalance,
    TrialBalanceLine,
)
from sakledger.domain.journal import JournalService, to_date
from sakledger.logging_config import get_logger

logger = get_logger("domain.trial_balance")

ZERO = Decimal("0")


class TrialBalanceService:
    """Service for deriving per-account period balances from posted entries."""

    def __init__(self, store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize trial balance service.

        Args:
            store: Key-value store instance
            config: Storage keys and tolerances
        """
        self.config = config
        self.chart = ChartOfAccountsService(store, config)
        self.journal = JournalService(store, config)

    def compute(
        self,
        period_start: Union[date, datetime],
        period_end: Union[date, datetime],
    ) -> TrialBalance:
        """Compute the trial balance for a period.

        Only posted entries dated within the inclusive period count. Each
        account's ending balance is signed by its normal balance, and
        accounts with no debit, credit or balance are left out. Beginning
        balances are always zero; nothing is carried over from earlier
        periods.

        Args:
            period_start: First day of the period
            period_end: Last day of the period

        Returns:
            TrialBalance snapshot
        """
        start = to_date(period_start)
        end = to_date(period_end)
        accounts = self.chart.list_accounts()
        entries = self.journal.list_posted(start, end)

        debits: dict[str, Decimal] = defaultdict(lambda: ZERO)
        credits: dict[str, Decimal] = defaultdict(lambda: ZERO)
        for entry in entries:
            for line in entry.lines:
                debits[line.account_id] += line.debit
                credits[line.account_id] += line.credit

        lines = []
        for account in accounts:
            total_debit = debits.get(account.id, ZERO)
            total_credit = credits.get(account.id, ZERO)
            if account.normal_balance == NormalBalance.DEBIT:
                ending_balance = total_debit - total_credit
            else:
                ending_balance = total_credit - total_debit

            if total_debit == 0 and total_credit == 0 and ending_balance == 0:
                continue

            lines.append(
                TrialBalanceLine(
                    account_id=account.id,
                    account_code=account.code,
                    account_name=account.name_indonesian,
                    beginning_balance=ZERO,
                    total_debit=total_debit,
                    total_credit=total_credit,
                    ending_balance=ending_balance,
                )
            )

        total_debit = sum((line.total_debit for line in lines), ZERO)
        total_credit = sum((line.total_credit for line in lines), ZERO)
        is_balanced = abs(total_debit - total_credit) < self.config.balance_tolerance

        if not is_balanced:
            logger.warning(
                "trial balance %s..%s out of balance: debit=%s credit=%s",
                start,
                end,
                total_debit,
                total_credit,
            )

        return TrialBalance(
            period_start=start,
            period_end=end,
            accounts=tuple(lines),
            total_debit=total_debit,
            total_credit=total_credit,
            is_balanced=is_balanced,
            generated_at=datetime.now(UTC),
        )
