"""Tests for the tax service."""

import pytest
from decimal import Decimal

from sakledger.domain.entities import CalculationMethod, TaxType
from sakledger.domain.errors import ConfigurationError, ValidationError
from sakledger.domain.tax import (
    TaxService,
    calculate_ptkp,
    progressive_tax,
)


class TestTaxRates:
    """Tests for tax rate configuration."""

    def test_initialize_seeds_defaults(self, tax_service):
        """Test default rates are seeded."""
        rates = {rate.type: rate for rate in tax_service.list_rates()}

        assert set(rates) == {TaxType.PPN, TaxType.PPH21, TaxType.PPH23}
        assert rates[TaxType.PPN].rate == Decimal("11")
        assert rates[TaxType.PPH21].calculation_method == CalculationMethod.PROGRESSIVE
        assert rates[TaxType.PPH23].rate == Decimal("2")

    def test_get_active_rate(self, tax_service):
        """Test looking up the active rate by type."""
        assert tax_service.get_active_rate("ppn").id == "tax_ppn"
        assert tax_service.get_active_rate(TaxType.PBB) is None


class TestPPN:
    """Tests for PPN calculation."""

    def test_tax_exclusive(self, tax_service):
        """Test PPN to add on a net amount."""
        assert tax_service.calculate_ppn(100000) == Decimal("11000")

    def test_tax_inclusive(self, tax_service):
        """Test extracting PPN from a gross amount."""
        assert tax_service.calculate_ppn(111000, includes_tax=True) == Decimal("11000")

    def test_round_trip(self, tax_service):
        """Test net -> gross -> extracted tax returns the same tax."""
        tax = tax_service.calculate_ppn(100000, includes_tax=False)
        extracted = tax_service.calculate_ppn(tax + 100000, includes_tax=True)

        assert abs(extracted - tax) < Decimal("0.01")

    def test_round_trip_odd_amount(self, tax_service):
        """Test the round trip on an amount with cents."""
        net = Decimal("123456.78")
        tax = tax_service.calculate_ppn(net)
        extracted = tax_service.calculate_ppn(net + tax, includes_tax=True)

        assert abs(extracted - tax) < Decimal("0.01")

    def test_missing_configuration(self, temp_store):
        """Test PPN without configured rates raises ConfigurationError."""
        service = TaxService(temp_store)
        with pytest.raises(ConfigurationError, match="PPN"):
            service.calculate_ppn(100000)

    def test_inactive_rate_is_missing(self, temp_store, tax_service):
        """Test an inactive PPN rate is not used."""
        records = temp_store.load("indonesian_tax_configs")
        for record in records:
            if record["type"] == "ppn":
                record["is_active"] = False
        temp_store.save("indonesian_tax_configs", records)

        with pytest.raises(ConfigurationError):
            tax_service.calculate_ppn(100000)


    def test_invalid_amount(self, tax_service):
        """Test a non-numeric or non-finite amount is a validation error."""
        with pytest.raises(ValidationError):
            tax_service.calculate_ppn("abc")
        with pytest.raises(ValidationError):
            tax_service.calculate_ppn(float("inf"), includes_tax=True)


class TestWithholding:
    """Tests for flat-rate withholding."""

    def test_pph23(self, tax_service):
        """Test PPh23 at 2%."""
        assert tax_service.calculate_withholding("pph23", 5000000) == Decimal("100000")

    def test_invalid_amount(self, tax_service):
        """Test NaN is rejected before the rate is applied."""
        with pytest.raises(ValidationError):
            tax_service.calculate_withholding("pph23", float("nan"))

    def test_progressive_type_rejected(self, tax_service):
        """Test a progressive tax cannot be used as a flat rate."""
        with pytest.raises(ConfigurationError):
            tax_service.calculate_withholding(TaxType.PPH21, 5000000)


class TestPPh21:
    """Tests for PPh21 calculation."""

    def test_married_with_two_dependents(self, tax_service):
        """Test the married, two dependents worked example."""
        result = tax_service.calculate_pph21(10_000_000, "married", 2)

        assert result.ptkp == Decimal("67500000")
        assert result.annual_gross == Decimal("120000000")
        assert result.pkp == Decimal("52500000")
        assert result.annual_tax == Decimal("2625000")
        assert result.monthly_tax == Decimal("218750")

    def test_single(self, tax_service):
        """Test the single threshold."""
        result = tax_service.calculate_pph21(5_000_000, "single")

        assert result.ptkp == Decimal("54000000")
        assert result.pkp == Decimal("6000000")
        assert result.annual_tax == Decimal("300000")

    def test_dependents_only_raise_married_threshold(self):
        """Test dependents do not change the single threshold."""
        assert calculate_ptkp("single", 3) == Decimal("54000000")
        assert calculate_ptkp("married", 0) == Decimal("58500000")
        assert calculate_ptkp("married", 10) == Decimal("103500000")

    def test_below_threshold(self, tax_service):
        """Test income under PTKP is untaxed."""
        result = tax_service.calculate_pph21(4_000_000, "single")

        assert result.pkp == Decimal("0")
        assert result.annual_tax == Decimal("0")

    def test_zero_and_negative_salary(self, tax_service):
        """Test zero or negative salary yields zero tax."""
        assert tax_service.calculate_pph21(0, "single").annual_tax == 0
        assert tax_service.calculate_pph21(-1_000_000, "married", 1).annual_tax == 0

    @pytest.mark.parametrize(
        "pkp, expected",
        [
            (Decimal("60000000"), Decimal("3000000")),
            (Decimal("250000000"), Decimal("31500000")),
            (Decimal("500000000"), Decimal("94000000")),
            (Decimal("600000000"), Decimal("124000000")),
        ],
    )
    def test_bracket_boundaries(self, pkp, expected):
        """Test cumulative tax at and above each bracket ceiling."""
        assert progressive_tax(pkp) == expected

    def test_first_bracket_is_five_percent(self):
        """Test PKP below the first ceiling is taxed at 5%."""
        for pkp in (Decimal("1"), Decimal("12345678"), Decimal("59999999")):
            assert progressive_tax(pkp) == pkp * Decimal("0.05")

    def test_monotonic_in_salary(self, tax_service):
        """Test higher salary never gives lower annual tax."""
        previous = Decimal("-1")
        for salary in range(0, 60_000_001, 1_250_000):
            tax = tax_service.calculate_pph21(salary, "married", 1).annual_tax
            assert tax >= previous
            previous = tax

    def test_does_not_need_configuration(self, temp_store):
        """Test PPh21 works without seeded tax rates."""
        result = TaxService(temp_store).calculate_pph21(10_000_000, "single")
        assert result.annual_tax > 0

    def test_invalid_salary(self, tax_service):
        """Test a malformed salary is a validation error."""
        with pytest.raises(ValidationError):
            tax_service.calculate_pph21("ten million", "single")

    def test_unknown_marital_status(self, tax_service):
        """Test an unknown marital status is a validation error."""
        with pytest.raises(ValidationError):
            tax_service.calculate_pph21(10_000_000, "widowed")
