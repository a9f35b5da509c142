"""Maintenance helpers for stored ledger data."""

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.logging_config import get_logger

logger = get_logger("domain.maintenance")


def clear_all(store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG) -> None:
    """Remove the stored chart of accounts, journal and tax rates."""
    for key in config.storage_keys():
        store.remove(key)
    logger.info("cleared ledger data under %s", ", ".join(config.storage_keys()))
