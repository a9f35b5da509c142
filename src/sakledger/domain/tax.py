"""Indonesian tax domain service."""

from datetime import date
from decimal import Decimal
from typing import Any, Optional, Union

from sakledger.config import LedgerConfig, DEFAULT_CONFIG
from sakledger.database.base import KeyValueStore
from sakledger.database.mappers import tax_rate_from_record, tax_rate_to_record
from sakledger.domain.entities import (
    CalculationMethod,
    MaritalStatus,
    PPh21Result,
    TaxRate,
    TaxType,
)
from sakledger.domain.errors import (
    ConfigurationError,
    ValidationError,
    tax_rate_not_configured,
)
from sakledger.domain.journal import to_decimal
from sakledger.logging_config import get_logger

logger = get_logger("domain.tax")

# PTKP (non-taxable income) thresholds, annual
PTKP_SINGLE = Decimal("54000000")
PTKP_MARRIED = Decimal("58500000")
PTKP_PER_DEPENDENT = Decimal("4500000")

# PPh21 progressive schedule: (upper bound of bracket or None, rate)
PPH21_BRACKETS: list[tuple[Optional[Decimal], Decimal]] = [
    (Decimal("60000000"), Decimal("0.05")),
    (Decimal("250000000"), Decimal("0.15")),
    (Decimal("500000000"), Decimal("0.25")),
    (None, Decimal("0.30")),
]

DEFAULT_TAX_RATES = [
    TaxRate(
        id="tax_ppn",
        type=TaxType.PPN,
        name="Value Added Tax",
        name_indonesian="Pajak Pertambahan Nilai",
        rate=Decimal("11"),
        calculation_method=CalculationMethod.PERCENTAGE,
        applicable_from=date(2022, 4, 1),
        description="Pajak yang dikenakan atas konsumsi barang dan jasa di dalam negeri",
    ),
    TaxRate(
        id="tax_pph21",
        type=TaxType.PPH21,
        name="Employee Income Tax",
        name_indonesian="Pajak Penghasilan Pasal 21",
        rate=Decimal("0"),
        calculation_method=CalculationMethod.PROGRESSIVE,
        applicable_from=date(2021, 1, 1),
        description="Pajak atas penghasilan berupa gaji, upah, honorarium, tunjangan",
    ),
    TaxRate(
        id="tax_pph23",
        type=TaxType.PPH23,
        name="Withholding Tax on Services",
        name_indonesian="Pajak Penghasilan Pasal 23",
        rate=Decimal("2"),
        calculation_method=CalculationMethod.PERCENTAGE,
        applicable_from=date(2021, 1, 1),
        description="Pajak yang dipotong atas penghasilan dari jasa",
    ),
]


def calculate_ptkp(
    marital_status: Union[MaritalStatus, str], dependents: int = 0
) -> Decimal:
    """Return the annual non-taxable threshold.

    Dependents only raise the married threshold and are not capped.
    """
    try:
        status = MaritalStatus(marital_status)
    except ValueError:
        raise ValidationError(f"Unknown marital status: {marital_status}")
    if status == MaritalStatus.MARRIED:
        return PTKP_MARRIED + PTKP_PER_DEPENDENT * max(dependents, 0)
    return PTKP_SINGLE


def progressive_tax(pkp: Decimal) -> Decimal:
    """Apply the PPh21 bracket schedule to taxable income."""
    tax = Decimal("0")
    lower = Decimal("0")
    for upper, rate in PPH21_BRACKETS:
        if pkp <= lower:
            break
        in_bracket = pkp - lower if upper is None else min(pkp, upper) - lower
        tax += in_bracket * rate
        if upper is None:
            break
        lower = upper
    return tax


class TaxService:
    """Service for statutory tax configuration and calculations."""

    def __init__(self, store: KeyValueStore, config: LedgerConfig = DEFAULT_CONFIG):
        """Initialize tax service.

        Args:
            store: Key-value store instance
            config: Storage keys and tolerances
        """
        self.store = store
        self.config = config

    def initialize(self) -> list[TaxRate]:
        """Seed the default tax rates, replacing any stored ones."""
        self.store.save(
            self.config.tax_rates_key,
            [tax_rate_to_record(rate) for rate in DEFAULT_TAX_RATES],
        )
        logger.info("seeded %d tax rates", len(DEFAULT_TAX_RATES))
        return list(DEFAULT_TAX_RATES)

    def list_rates(self) -> list[TaxRate]:
        """List all stored tax rates."""
        records = self.store.load(self.config.tax_rates_key) or []
        return [tax_rate_from_record(record) for record in records]

    def get_active_rate(self, tax_type: Union[TaxType, str]) -> Optional[TaxRate]:
        """Get the first active rate for a tax type, or None."""
        wanted = TaxType(tax_type)
        for rate in self.list_rates():
            if rate.type == wanted and rate.is_active:
                return rate
        return None

    def calculate_ppn(self, amount: Any, includes_tax: bool = False) -> Decimal:
        """Calculate PPN (VAT) for an amount.

        Args:
            amount: Transaction amount
            includes_tax: If True, amount already contains PPN and the
                embedded tax is extracted; otherwise the tax to add is returned

        Returns:
            PPN amount

        Raises:
            ConfigurationError: If no active percentage PPN rate is configured
            ValidationError: If amount is not a finite number
        """
        rate = self._require_percentage_rate(TaxType.PPN)
        value = to_decimal(amount)
        if includes_tax:
            return value * rate.rate / (Decimal("100") + rate.rate)
        return value * rate.rate / Decimal("100")

    def calculate_withholding(self, tax_type: Union[TaxType, str], amount: Any) -> Decimal:
        """Apply a flat percentage withholding rate, such as PPh23, to an amount.

        Raises:
            ConfigurationError: If no active percentage rate exists for the type
            ValidationError: If amount is not a finite number
        """
        rate = self._require_percentage_rate(TaxType(tax_type))
        return to_decimal(amount) * rate.rate / Decimal("100")

    def calculate_pph21(
        self,
        gross_monthly_salary: Any,
        marital_status: Union[MaritalStatus, str],
        dependents: int = 0,
    ) -> PPh21Result:
        """Calculate annual and monthly PPh21 for a monthly salary.

        Args:
            gross_monthly_salary: Gross salary per month
            marital_status: "single" or "married"
            dependents: Number of dependents

        Returns:
            PPh21Result with PTKP, PKP and the annual and monthly tax

        Raises:
            ValidationError: If the salary is not a finite number or the
                marital status is unknown
        """
        annual_gross = to_decimal(gross_monthly_salary) * 12
        ptkp = calculate_ptkp(marital_status, dependents)
        pkp = max(Decimal("0"), annual_gross - ptkp)
        annual_tax = progressive_tax(pkp)
        return PPh21Result(
            annual_gross=annual_gross,
            ptkp=ptkp,
            pkp=pkp,
            annual_tax=annual_tax,
            monthly_tax=annual_tax / 12,
        )

    def _require_percentage_rate(self, tax_type: TaxType) -> TaxRate:
        rate = self.get_active_rate(tax_type)
        if rate is None or rate.calculation_method != CalculationMethod.PERCENTAGE:
            logger.warning("no active percentage rate for %s", tax_type.value)
            raise ConfigurationError(tax_rate_not_configured(tax_type.value))
        return rate
