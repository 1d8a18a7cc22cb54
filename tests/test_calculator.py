import math

import pytest

from calckit.tools.calculator import Calculator, CalculatorOperation, get_calculator


def test_percentage_operations():
    calc = Calculator()
    assert calc.percentage(10, 200).value == 20
    result = calc.percentage_change(100, 150)
    assert result.value == 50
    assert result.operation == "percentage_change"


def test_annuity_payment():
    calc = Calculator()
    result = calc.annuity_payment(principal=100_000, annual_rate=6, years=30)
    assert result.value == pytest.approx(599.55, abs=0.01)
    assert result.details["payments"] == 360
    assert result.details["total_interest"] > 0


def test_annuity_payment_without_interest():
    calc = Calculator()
    result = calc.annuity_payment(principal=12_000, annual_rate=0, years=1)
    assert result.value == 1000
    assert result.details["total_interest"] == 0


def test_annuity_payment_validation():
    calc = Calculator()
    with pytest.raises(ValueError):
        calc.annuity_payment(principal=0, annual_rate=5, years=10)
    with pytest.raises(ValueError):
        calc.annuity_payment(principal=1000, annual_rate=-1, years=10)
    with pytest.raises(ValueError):
        calc.annuity_payment(principal=float("nan"), annual_rate=5, years=10)


def test_remaining_balance():
    calc = Calculator()
    assert calc.remaining_balance(12_000, 0, 1, payments_made=6).value == 6000
    assert calc.remaining_balance(100_000, 6, 30, payments_made=0).value == 100_000
    assert calc.remaining_balance(100_000, 6, 30, payments_made=360).value == 0
    with pytest.raises(ValueError):
        calc.remaining_balance(100_000, 6, 30, payments_made=361)


def test_compound_interest():
    calc = Calculator()
    assert calc.compound_interest(1000, 10, 2).value == 1210
    assert calc.compound_interest(1000, 10, 1, compounding_per_year=0).value == pytest.approx(
        1000 * math.exp(0.1), abs=0.01
    )
    saved = calc.compound_interest(0, 0, 1, monthly_contribution=100)
    assert saved.value == 1200
    assert saved.details["interest_earned"] == 0


def test_npv():
    calc = Calculator()
    result = calc.npv(rate=10, cash_flows=[-100, 110])
    assert result.value == 0
    assert result.details["present_values"] == [-100, 100]
    assert result.details["profitability_index"] == 1
    with pytest.raises(ValueError):
        calc.npv(rate=10, cash_flows=[])


def test_irr():
    calc = Calculator()
    assert calc.irr([-100, 110]).value == 10
    assert calc.irr([-100, 0, 121]).value == pytest.approx(10, abs=1e-4)


def test_irr_needs_sign_change():
    calc = Calculator()
    with pytest.raises(ValueError):
        calc.irr([100, 110])
    with pytest.raises(ValueError):
        calc.irr([-100])


def test_irr_agrees_with_npv():
    calc = Calculator()
    flows = [-1000, 300, 400, 500]
    rate = calc.irr(flows).value
    assert calc.npv(rate, flows).value == pytest.approx(0, abs=0.05)


def test_roi():
    calc = Calculator()
    result = calc.roi(1000, 1500)
    assert result.value == 50
    assert result.details["net_profit"] == 500
    annualized = calc.roi(1000, 1500, years=2)
    assert annualized.details["annualized_roi"] == pytest.approx(22.4745, abs=1e-3)


def test_vat():
    calc = Calculator()
    added = calc.vat(100, rate=21)
    assert added.value == 21
    assert added.details["gross"] == 121
    included = calc.vat(121, rate=21, includes_vat=True)
    assert included.value == 21
    assert included.details["net"] == 100


def test_bmi():
    calc = Calculator()
    result = calc.bmi(weight_kg=80, height_cm=180)
    assert result.value == 24.7
    assert result.details["category"] == "normal"
    assert calc.bmi(weight_kg=90, height_cm=180).details["category"] == "overweight"
    with pytest.raises(ValueError):
        calc.bmi(weight_kg=80, height_cm=0)


def test_body_fat_navy():
    calc = Calculator()
    result = calc.body_fat(80, 180, 30, "male", neck_cm=40, waist_cm=90)
    assert result.value == pytest.approx(18.4, abs=0.1)
    assert result.details["category"] == "average"
    with pytest.raises(ValueError):
        calc.body_fat(80, 180, 30, "male", neck_cm=90, waist_cm=40)
    with pytest.raises(ValueError):
        calc.body_fat(60, 165, 30, "female", neck_cm=32, waist_cm=70)


def test_body_fat_bmi_method():
    calc = Calculator()
    result = calc.body_fat(80, 180, 30, "Male", method="bmi")
    assert result.value == 20.3
    assert result.details["category"] == "average"
    with pytest.raises(ValueError):
        calc.body_fat(80, 180, 30, "male", method="calipers")


def test_concrete_materials():
    calc = Calculator()
    result = calc.concrete_materials(1, grade="C20/25", waste=0.05)
    assert result.value == 1.05
    assert result.details["cement_kg"] == 225
    assert result.details["sand_kg"] == 480
    assert result.details["gravel_kg"] == 960
    assert result.details["water_kg"] == 112.5
    with pytest.raises(ValueError):
        calc.concrete_materials(1, grade="C99/99")


def test_execute_dispatches_by_name():
    calc = get_calculator()
    assert calc is get_calculator()
    assert calc.execute("BMI", weight_kg=80, height_cm=180).value == 24.7
    assert "irr" in calc.operations()
    assert len(calc.operations()) == len(CalculatorOperation)


def test_execute_errors():
    calc = Calculator()
    with pytest.raises(ValueError):
        calc.execute("black_scholes")
    with pytest.raises(ValueError):
        calc.execute("bmi", weight=80)


def test_result_to_dict():
    result = Calculator().vat(100)
    data = result.to_dict()
    assert data["operation"] == "vat"
    assert data["inputs"]["rate"] == 21
    assert data["details"]["gross"] == 121


@pytest.mark.parametrize(
    "operation,kwargs",
    [
        ("annuity_payment", {"principal": 1000, "annual_rate": 1000, "years": 10000}),
        ("remaining_balance", {"principal": 1000, "annual_rate": 1000, "years": 10000, "payments_made": 1}),
        ("compound_interest", {"principal": 1000, "annual_rate": 1000, "years": 10000}),
        ("compound_interest", {"principal": 1000, "annual_rate": 1000, "years": 10000, "compounding_per_year": 0}),
        ("compound_interest", {"principal": 0, "annual_rate": 1000, "years": 10000, "monthly_contribution": 1}),
        ("npv", {"rate": 1e300, "cash_flows": [-100, 0, 110]}),
        ("irr", {"cash_flows": [-100, 0, 110], "guess": 1e300}),
        ("roi", {"investment": 1e-300, "final_value": 1e300}),
        ("roi", {"investment": 1, "final_value": 1e300, "years": 0.001}),
        ("vat", {"amount": 1e308, "rate": 100}),
        ("bmi", {"weight_kg": 1e308, "height_cm": 1e-10}),
        ("concrete_materials", {"volume_m3": 1e306}),
        ("percentage", {"percentage": 1e308, "base": 1e308}),
    ],
)
def test_results_beyond_float_range_raise_value_error(operation, kwargs):
    calc = Calculator()
    with pytest.raises(ValueError, match="range|converge"):
        calc.execute(operation, **kwargs)
    with pytest.raises(ValueError):
        getattr(calc, operation)(**kwargs)


def test_compound_interest_rejects_total_loss_rate():
    with pytest.raises(ValueError):
        Calculator().compound_interest(1000, -100, 1)
