from pathlib import Path

from calckit import (
    default_registry,
    evaluate_math_expression,
    format_number_with_commas,
    get_calculator,
    is_valid_number,
    number_range,
    parse_number,
)
from calckit.numeric import NumberFormat


def main() -> None:
    raw_inputs = ["1 250 000", "2500000", "0x1F", "", "abc"]
    print("▶ Form input")
    for raw in raw_inputs:
        print(f"  {raw!r:>12} valid={is_valid_number(raw)!s:<5} parsed={parse_number(raw)}")

    calc = get_calculator()
    loan = calc.annuity_payment(principal=2_500_000, annual_rate=5.2, years=25)
    print("\n▶ Mortgage")
    print(f"  Monthly payment: {format_number_with_commas(loan.value)}")
    print(f"  Total interest:  {format_number_with_commas(loan.details['total_interest'], 0, NumberFormat.CS)} Kč")

    print("\n▶ Schedule of balances")
    for year in number_range(0, 25, 5):
        balance = calc.remaining_balance(2_500_000, 5.2, 25, payments_made=int(year) * 12)
        print(f"  year {int(year):>2}: {format_number_with_commas(balance.value)}")

    print("\n▶ Custom formula")
    area = evaluate_math_expression("PI * r ^ 2", {"r": 2.5})
    print(f"  PI * r ^ 2 with r=2.5 -> {area}")
    print(f"  1 / 0 -> {evaluate_math_expression('1 / 0')}")

    registry = default_registry(Path(__file__).with_name("units.yaml"))
    print("\n▶ Units")
    print(f"  10 km = {registry.convert(10, 'km', 'mi'):.3f} mi")
    print(f"  1 kWh = {registry.convert(1, 'kWh', 'kcal'):.1f} kcal")
    print(f"  37 °C = {registry.convert(37, '°C', '°F'):.1f} °F")


if __name__ == "__main__":
    main()
