"""
Formula calculator behind the site's finance, health and construction pages.

Each method validates its arguments, applies one closed-form formula (or, for
IRR, Newton-Raphson) and returns a CalculationResult carrying the inputs and
the formula used, so a page can show how the number was obtained.

Rates are entered in percent throughout, as they are on the forms
(``annual_rate=5`` means 5 % p.a.).

Usage:
    from calckit.tools.calculator import get_calculator

    result = get_calculator().annuity_payment(principal=2_000_000, annual_rate=5, years=20)
    result.value                    # monthly payment, rounded to 2 places
    result.details["total_interest"]
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..numeric.formatting import round_number
from ..numeric.percentage import calculate_percentage, calculate_percentage_change
from ..utils.numeric_matcher import is_finite_real, within_tolerance

logger = logging.getLogger(__name__)


class CalculatorOperation(Enum):
    """Operations reachable through ``Calculator.execute``."""
    # Percentages
    PERCENTAGE = "percentage"
    PERCENTAGE_CHANGE = "percentage_change"

    # Finance
    ANNUITY_PAYMENT = "annuity_payment"
    REMAINING_BALANCE = "remaining_balance"
    COMPOUND_INTEREST = "compound_interest"
    NPV = "npv"
    IRR = "irr"
    ROI = "roi"
    VAT = "vat"

    # Health
    BMI = "bmi"
    BODY_FAT = "body_fat"

    # Construction
    CONCRETE_MATERIALS = "concrete_materials"


@dataclass
class CalculationResult:
    """Result of a calculation with audit trail."""
    value: float
    operation: str
    inputs: Dict[str, Any]
    formula: Optional[str] = None
    details: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "value": self.value,
            "operation": self.operation,
            "inputs": self.inputs,
            "formula": self.formula,
            "details": self.details,
        }


# Concrete grades: cement : sand : gravel by volume.
CONCRETE_MIXES: Dict[str, Tuple[float, float, float]] = {
    "C12/15": (1, 3, 6),
    "C16/20": (1, 2.5, 5),
    "C20/25": (1, 2, 4),
    "C25/30": (1, 1.5, 3),
    "C30/37": (1, 1.5, 2.5),
}

# Bulk densities in kg/m3.
CEMENT_DENSITY = 1500
AGGREGATE_DENSITY = 1600
WATER_CEMENT_RATIO = 0.5

BMI_CATEGORIES = (
    (18.5, "underweight"),
    (25.0, "normal"),
    (30.0, "overweight"),
    (math.inf, "obese"),
)

BODY_FAT_CATEGORIES = {
    "male": ((6, "essential"), (14, "athletic"), (18, "fitness"), (25, "average"), (math.inf, "obese")),
    "female": ((16, "essential"), (21, "athletic"), (25, "fitness"), (32, "average"), (math.inf, "obese")),
}


def _require(condition: bool, message: str) -> None:
    if not condition:
        raise ValueError(message)


def _require_finite(**values: Any) -> None:
    for name, value in values.items():
        _require(is_finite_real(value), f"{name} must be a finite number, got {value!r}")


def _finite(value: float, what: str) -> float:
    if not is_finite_real(value):
        raise ValueError(f"{what} is out of range for these inputs")
    return value


def _compound(base: float, exponent: float) -> float:
    """``base ** exponent`` that reports overflow as ValueError."""
    try:
        return _finite(base ** exponent, "growth factor")
    except OverflowError:
        raise ValueError("growth factor is out of range for these inputs") from None


def _categorize(value: float, bands: Sequence[Tuple[float, str]]) -> str:
    for upper, label in bands:
        if value < upper:
            return label
    return bands[-1][1]


class Calculator:
    """
    Formula calculator for the calculator pages.

    Methods raise ValueError for invalid arguments; the forms are expected to
    run ``is_valid_number``/``parse_number`` on raw input first.
    """

    # =========================================================================
    # Percentage Operations
    # =========================================================================

    def percentage(self, percentage: float, base: float) -> CalculationResult:
        _require_finite(percentage=percentage, base=base)
        return CalculationResult(
            value=round_number(_finite(calculate_percentage(percentage, base), "percentage"), 4),
            operation="percentage",
            inputs={"percentage": percentage, "base": base},
            formula="percentage / 100 * base",
        )

    def percentage_change(self, old_value: float, new_value: float) -> CalculationResult:
        """Calculate percentage change: (new - old) / |old| * 100"""
        _require_finite(old_value=old_value, new_value=new_value)
        return CalculationResult(
            value=round_number(_finite(calculate_percentage_change(old_value, new_value), "percentage change"), 4),
            operation="percentage_change",
            inputs={"old_value": old_value, "new_value": new_value},
            formula="(new - old) / |old| * 100",
        )

    # =========================================================================
    # Loans and Savings
    # =========================================================================

    def annuity_payment(
        self,
        principal: float,
        annual_rate: float,
        years: float,
        payments_per_year: int = 12,
    ) -> CalculationResult:
        """
        Calculate the fixed payment of an amortizing loan.

        Args:
            principal: Amount borrowed
            annual_rate: Nominal annual interest rate in percent
            years: Loan term in years
            payments_per_year: Payments per year (12 = monthly)
        """
        _require_finite(principal=principal, annual_rate=annual_rate, years=years)
        _require(principal > 0, "principal must be positive")
        _require(annual_rate >= 0, "annual_rate cannot be negative")
        _require(years > 0, "years must be positive")
        _require(payments_per_year > 0, "payments_per_year must be positive")

        n = years * payments_per_year
        r = annual_rate / 100 / payments_per_year

        if r == 0:
            payment = principal / n
        else:
            growth = _compound(1 + r, n)
            payment = _finite(principal * r * growth / (growth - 1), "payment")

        total_paid = _finite(payment * n, "total paid")
        return CalculationResult(
            value=round_number(payment, 2),
            operation="annuity_payment",
            inputs={
                "principal": principal,
                "annual_rate": annual_rate,
                "years": years,
                "payments_per_year": payments_per_year,
            },
            formula="P * r * (1+r)^n / ((1+r)^n - 1)",
            details={
                "payments": n,
                "total_paid": round_number(total_paid, 2),
                "total_interest": round_number(total_paid - principal, 2),
            },
        )

    def remaining_balance(
        self,
        principal: float,
        annual_rate: float,
        years: float,
        payments_made: int,
        payments_per_year: int = 12,
    ) -> CalculationResult:
        """Outstanding principal after ``payments_made`` regular payments."""
        payment = self.annuity_payment(principal, annual_rate, years, payments_per_year)
        n = payment.details["payments"]
        _require(0 <= payments_made <= n, f"payments_made must be between 0 and {n}")

        r = annual_rate / 100 / payments_per_year
        # Unrounded payment; the rounded one drifts over long terms.
        if r == 0:
            exact_payment = principal / n
            balance = principal - exact_payment * payments_made
        else:
            growth = _compound(1 + r, n)
            exact_payment = principal * r * growth / (growth - 1)
            grown = _compound(1 + r, payments_made)
            balance = _finite(principal * grown - exact_payment * (grown - 1) / r, "balance")

        return CalculationResult(
            value=round_number(max(balance, 0.0), 2),
            operation="remaining_balance",
            inputs={
                "principal": principal,
                "annual_rate": annual_rate,
                "years": years,
                "payments_made": payments_made,
                "payments_per_year": payments_per_year,
            },
            formula="P * (1+r)^k - M * ((1+r)^k - 1) / r",
            details={
                "payment": payment.value,
                "principal_repaid": round_number(principal - max(balance, 0.0), 2),
            },
        )

    def compound_interest(
        self,
        principal: float,
        annual_rate: float,
        years: float,
        compounding_per_year: int = 1,
        monthly_contribution: float = 0.0,
    ) -> CalculationResult:
        """
        Future value of a deposit with optional monthly contributions.

        Args:
            principal: Initial deposit
            annual_rate: Annual interest rate in percent
            years: Saving period in years
            compounding_per_year: Times per year (1=annual, 12=monthly, 0=continuous)
            monthly_contribution: Amount added at the end of every month
        """
        _require_finite(
            principal=principal,
            annual_rate=annual_rate,
            years=years,
            monthly_contribution=monthly_contribution,
        )
        _require(principal >= 0, "principal cannot be negative")
        _require(years >= 0, "years cannot be negative")
        _require(compounding_per_year >= 0, "compounding_per_year cannot be negative")
        _require(monthly_contribution >= 0, "monthly_contribution cannot be negative")
        _require(annual_rate > -100, "annual_rate must be greater than -100 %")

        rate = annual_rate / 100
        if compounding_per_year == 0:
            future_value = principal * _compound(math.e, rate * years)
        else:
            n = compounding_per_year
            future_value = principal * _compound(1 + rate / n, n * years)

        months = years * 12
        if monthly_contribution:
            monthly_rate = rate / 12
            if monthly_rate == 0:
                future_value += monthly_contribution * months
            else:
                future_value += monthly_contribution * (_compound(1 + monthly_rate, months) - 1) / monthly_rate
        future_value = _finite(future_value, "future value")

        total_contributions = _finite(principal + monthly_contribution * months, "total contributions")
        return CalculationResult(
            value=round_number(future_value, 2),
            operation="compound_interest",
            inputs={
                "principal": principal,
                "annual_rate": annual_rate,
                "years": years,
                "compounding_per_year": compounding_per_year,
                "monthly_contribution": monthly_contribution,
            },
            formula="P * (1 + r/n)^(n*t)" if compounding_per_year > 0 else "P * e^(r*t)",
            details={
                "total_contributions": round_number(total_contributions, 2),
                "interest_earned": round_number(future_value - total_contributions, 2),
            },
        )

    # =========================================================================
    # Investment Appraisal
    # =========================================================================

    @staticmethod
    def _npv_at(rate: float, cash_flows: Sequence[float]) -> float:
        return sum(cf / _compound(1 + rate, t) for t, cf in enumerate(cash_flows))

    def npv(self, rate: float, cash_flows: Sequence[float]) -> CalculationResult:
        """
        Calculate Net Present Value.

        Args:
            rate: Discount rate per period in percent
            cash_flows: Cash flows per period (index 0 is time 0, usually negative)
        """
        _require_finite(rate=rate)
        _require(len(cash_flows) > 0, "cash_flows cannot be empty")
        _require(all(is_finite_real(cf) for cf in cash_flows), "cash_flows must be finite numbers")
        _require(rate > -100, "rate must be greater than -100 %")

        r = rate / 100
        present_values = [_finite(cf / _compound(1 + r, t), "present value") for t, cf in enumerate(cash_flows)]
        npv_value = _finite(sum(present_values), "NPV")

        investment = -sum(pv for pv in present_values if pv < 0)
        returns = sum(pv for pv in present_values if pv > 0)
        details: Dict[str, Any] = {
            "present_values": [round_number(pv, 2) for pv in present_values],
        }
        if investment > 0:
            details["profitability_index"] = round_number(returns / investment, 4)

        return CalculationResult(
            value=round_number(npv_value, 2),
            operation="npv",
            inputs={"rate": rate, "cash_flows": list(cash_flows)},
            formula="sum(CF_t / (1+r)^t)",
            details=details,
        )

    def irr(
        self,
        cash_flows: Sequence[float],
        guess: float = 10.0,
        max_iterations: int = 1000,
        tolerance: float = 1e-10,
    ) -> CalculationResult:
        """
        Calculate Internal Rate of Return (in percent) using Newton-Raphson.

        Args:
            cash_flows: Cash flows per period (index 0 is time 0, usually negative)
            guess: Initial guess for IRR in percent
        """
        _require(len(cash_flows) >= 2, "IRR needs at least two cash flows")
        _require(all(is_finite_real(cf) for cf in cash_flows), "cash_flows must be finite numbers")
        _require(
            any(cf < 0 for cf in cash_flows) and any(cf > 0 for cf in cash_flows),
            "IRR needs at least one negative and one positive cash flow",
        )
        _require(is_finite_real(guess) and guess > -100, "guess must be greater than -100 %")

        rate = guess / 100
        for iteration in range(1, max_iterations + 1):
            try:
                npv_value = self._npv_at(rate, cash_flows)
                derivative = sum(
                    -t * cf / _compound(1 + rate, t + 1)
                    for t, cf in enumerate(cash_flows)
                )
            except ValueError:
                raise ValueError("IRR did not converge: rate left the valid range") from None
            if abs(derivative) < 1e-12:
                raise ValueError("IRR did not converge: derivative vanished")

            new_rate = rate - npv_value / derivative
            if not math.isfinite(new_rate) or new_rate <= -1:
                raise ValueError("IRR did not converge: rate left the valid range")

            if within_tolerance(new_rate, rate, rel_tolerance=0, abs_tolerance=tolerance):
                rate = new_rate
                break
            rate = new_rate
        else:
            raise ValueError(f"IRR did not converge after {max_iterations} iterations")

        logger.debug("IRR converged to %s after %d iterations", rate, iteration)
        return CalculationResult(
            value=round_number(rate * 100, 4),
            operation="irr",
            inputs={"cash_flows": list(cash_flows), "guess": guess},
            formula="NPV(IRR, cash_flows) = 0",
            details={"iterations": iteration},
        )

    def roi(
        self,
        investment: float,
        final_value: float,
        years: Optional[float] = None,
    ) -> CalculationResult:
        """Return on investment in percent, annualized when ``years`` is given."""
        _require_finite(investment=investment, final_value=final_value)
        _require(investment > 0, "investment must be positive")

        roi_value = _finite((final_value - investment) / investment * 100, "ROI")
        details: Dict[str, Any] = {"net_profit": round_number(_finite(final_value - investment, "net profit"), 2)}
        if years is not None:
            _require(is_finite_real(years) and years > 0, "years must be positive")
            growth = final_value / investment
            if growth > 0:
                details["annualized_roi"] = round_number((_compound(growth, 1 / years) - 1) * 100, 4)

        return CalculationResult(
            value=round_number(roi_value, 4),
            operation="roi",
            inputs={"investment": investment, "final_value": final_value, "years": years},
            formula="(final - investment) / investment * 100",
            details=details,
        )

    def vat(self, amount: float, rate: float = 21.0, includes_vat: bool = False) -> CalculationResult:
        """
        Split an amount into base and VAT.

        ``value`` is the VAT itself; ``details`` carries the net and gross
        amounts. With ``includes_vat`` the amount is treated as gross.
        """
        _require_finite(amount=amount, rate=rate)
        _require(rate >= 0, "rate cannot be negative")

        if includes_vat:
            net = amount / (1 + rate / 100)
            gross = amount
        else:
            net = amount
            gross = _finite(amount * (1 + rate / 100), "gross amount")

        return CalculationResult(
            value=round_number(gross - net, 2),
            operation="vat",
            inputs={"amount": amount, "rate": rate, "includes_vat": includes_vat},
            formula="gross / (1 + rate/100)" if includes_vat else "net * rate / 100",
            details={"net": round_number(net, 2), "gross": round_number(gross, 2)},
        )

    # =========================================================================
    # Health
    # =========================================================================

    def bmi(self, weight_kg: float, height_cm: float) -> CalculationResult:
        _require_finite(weight_kg=weight_kg, height_cm=height_cm)
        _require(weight_kg > 0 and height_cm > 0, "weight and height must be positive")

        height_m = height_cm / 100
        bmi_value = _finite(weight_kg / (height_m * height_m), "BMI")
        return CalculationResult(
            value=round_number(bmi_value, 1),
            operation="bmi",
            inputs={"weight_kg": weight_kg, "height_cm": height_cm},
            formula="weight / height_m^2",
            details={"category": _categorize(bmi_value, BMI_CATEGORIES)},
        )

    def body_fat(
        self,
        weight_kg: float,
        height_cm: float,
        age: float,
        sex: str,
        method: str = "navy",
        neck_cm: Optional[float] = None,
        waist_cm: Optional[float] = None,
        hip_cm: Optional[float] = None,
    ) -> CalculationResult:
        """
        Estimate body fat percentage.

        ``method="navy"`` uses the US Navy circumference formula and needs
        neck and waist (plus hip for women); ``method="bmi"`` uses the
        Deurenberg BMI/age formula. The estimate is clamped to 3-50 %.
        """
        _require_finite(weight_kg=weight_kg, height_cm=height_cm, age=age)
        _require(weight_kg > 0 and height_cm > 0 and age > 0, "weight, height and age must be positive")
        sex = sex.lower()
        _require(sex in BODY_FAT_CATEGORIES, "sex must be 'male' or 'female'")
        is_male = sex == "male"

        height_m = height_cm / 100
        bmi_value = _finite(weight_kg / (height_m * height_m), "BMI")

        if method == "navy":
            _require(neck_cm is not None and waist_cm is not None, "navy method needs neck_cm and waist_cm")
            _require_finite(neck_cm=neck_cm, waist_cm=waist_cm)
            if is_male:
                circumference = waist_cm - neck_cm
                _require(circumference > 0, "waist must be larger than neck")
                density = 1.0324 - 0.19077 * math.log10(circumference) + 0.15456 * math.log10(height_cm)
            else:
                _require(hip_cm is not None, "navy method for women needs hip_cm")
                _require_finite(hip_cm=hip_cm)
                circumference = waist_cm + hip_cm - neck_cm
                _require(circumference > 0, "waist plus hip must be larger than neck")
                density = 1.29579 - 0.35004 * math.log10(circumference) + 0.22100 * math.log10(height_cm)
            body_fat_pct = 495 / density - 450
            formula = "495 / density - 450"
        elif method == "bmi":
            body_fat_pct = 1.20 * bmi_value + 0.23 * age - (16.2 if is_male else 5.4)
            formula = "1.20 * BMI + 0.23 * age - (16.2 | 5.4)"
        else:
            raise ValueError(f"Unknown body fat method '{method}'")

        body_fat_pct = min(50.0, max(3.0, body_fat_pct))
        fat_mass = body_fat_pct / 100 * weight_kg

        return CalculationResult(
            value=round_number(body_fat_pct, 1),
            operation="body_fat",
            inputs={
                "weight_kg": weight_kg,
                "height_cm": height_cm,
                "age": age,
                "sex": sex,
                "method": method,
                "neck_cm": neck_cm,
                "waist_cm": waist_cm,
                "hip_cm": hip_cm,
            },
            formula=formula,
            details={
                "category": _categorize(body_fat_pct, BODY_FAT_CATEGORIES[sex]),
                "fat_mass": round_number(fat_mass, 1),
                "lean_mass": round_number(weight_kg - fat_mass, 1),
                "bmi": round_number(bmi_value, 1),
            },
        )

    # =========================================================================
    # Construction
    # =========================================================================

    def concrete_materials(
        self,
        volume_m3: float,
        grade: str = "C20/25",
        waste: float = 0.05,
    ) -> CalculationResult:
        """
        Materials for ``volume_m3`` of concrete of the given grade.

        ``value`` is the ordered volume including waste; ``details`` holds the
        cement, sand, gravel and water weights in kg.
        """
        _require_finite(volume_m3=volume_m3, waste=waste)
        _require(volume_m3 > 0, "volume_m3 must be positive")
        _require(0 <= waste < 1, "waste must be a fraction between 0 and 1")
        mix = CONCRETE_MIXES.get(grade)
        _require(mix is not None, f"Unknown concrete grade '{grade}'")

        cement, sand, gravel = mix
        total_ratio = cement + sand + gravel
        ordered = _finite(volume_m3 * (1 + waste), "ordered volume")
        _finite(ordered * max(CEMENT_DENSITY, AGGREGATE_DENSITY), "material weight")

        cement_kg = ordered * cement / total_ratio * CEMENT_DENSITY
        sand_kg = ordered * sand / total_ratio * AGGREGATE_DENSITY
        gravel_kg = ordered * gravel / total_ratio * AGGREGATE_DENSITY

        return CalculationResult(
            value=round_number(ordered, 3),
            operation="concrete_materials",
            inputs={"volume_m3": volume_m3, "grade": grade, "waste": waste},
            formula="volume * (1 + waste) * part / total_ratio * density",
            details={
                "cement_kg": round_number(cement_kg, 1),
                "sand_kg": round_number(sand_kg, 1),
                "gravel_kg": round_number(gravel_kg, 1),
                "water_kg": round_number(cement_kg * WATER_CEMENT_RATIO, 1),
            },
        )

    # =========================================================================
    # Unified Execute Method
    # =========================================================================

    def execute(self, operation: str, **kwargs: Any) -> CalculationResult:
        """
        Execute a calculation by operation name, e.g.
        ``execute("bmi", weight_kg=80, height_cm=180)``.
        """
        try:
            op = CalculatorOperation(operation.lower())
        except ValueError:
            raise ValueError(f"Unknown operation: {operation}") from None

        method = getattr(self, op.value)
        try:
            return method(**kwargs)
        except TypeError as exc:
            raise ValueError(f"Invalid arguments for {op.value}: {exc}") from exc

    @staticmethod
    def operations() -> List[str]:
        return [op.value for op in CalculatorOperation]


# Singleton instance
_calculator_instance: Optional[Calculator] = None


def get_calculator() -> Calculator:
    """Get the singleton Calculator instance."""
    global _calculator_instance
    if _calculator_instance is None:
        _calculator_instance = Calculator()
    return _calculator_instance
