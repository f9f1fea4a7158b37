"""
Experiment: compare Always On, Setback and Timed heating on one house.

Runs all three strategies on the same house, heating system and weather,
prints a metrics table and saves comparison plots.

Usage:
    python -m heatcompare.experiments.compare_strategies
    python -m heatcompare.experiments.compare_strategies --weather freezing --source heat_pump
    python -m heatcompare.experiments.compare_strategies --target-average --method brentq
"""

import argparse
import os

from heatcompare.models.categories import (
    BuildEra, EmitterType, HeatingSource, HouseType, StrategyType, WeatherPreset
)
from heatcompare.models.config import HouseConfig, StrategyConfig, SystemConfig
from heatcompare.runner import compare_strategies
from heatcompare.utils.metrics import compute_all_metrics
from heatcompare.utils.parameters import COMFORT_TEMP, SETBACK_TEMP
from heatcompare.utils.plotting import plot_energy_bar, plot_strategy_comparison


def _choices(enum_cls):
    return [member.name.lower() for member in enum_cls]


def _member(enum_cls, name):
    return enum_cls[name.upper()]


def build_parser():
    parser = argparse.ArgumentParser(
        description="Compare heating strategies for one house and weather.")
    parser.add_argument('--house-type', choices=_choices(HouseType),
                        default='semi_detached')
    parser.add_argument('--era', choices=_choices(BuildEra),
                        default='era_1930_1980')
    parser.add_argument('--size', type=float, default=1.0,
                        help="size multiplier, 0.8 (small) to 1.5 (large)")
    parser.add_argument('--draughtiness', type=float, default=0.5)
    parser.add_argument('--thermal-mass', type=float, default=0.5)
    parser.add_argument('--source', choices=_choices(HeatingSource),
                        default='gas_boiler')
    parser.add_argument('--emitter', choices=_choices(EmitterType),
                        default='radiators')
    parser.add_argument('--max-power', type=float, default=None,
                        help="rated output in kW (default: per source)")
    parser.add_argument('--comfort', type=float, default=COMFORT_TEMP)
    parser.add_argument('--setback', type=float, default=SETBACK_TEMP)
    parser.add_argument('--weather', choices=_choices(WeatherPreset),
                        default='cold')
    parser.add_argument('--target-average', action='store_true',
                        help="treat --comfort as the desired 24 h average")
    parser.add_argument('--method', choices=['fixed_point', 'brentq'],
                        default='fixed_point')
    parser.add_argument('--output-dir', default=None,
                        help="where to save plots (default: ./results)")
    parser.add_argument('--no-plots', action='store_true')
    return parser


def print_metrics_table(results):
    """Print one row of summary metrics per strategy."""
    baseline = results[StrategyType.ALWAYS_ON]
    header = (f"{'Strategy':<18} {'Energy':>8} {'Saved':>7} {'Avg':>7} "
              f"{'Min':>7} {'Max':>7} {'Below':>7} {'Recov':>7} {'Setpt':>7}")
    print(header)
    print("-" * len(header))
    for strategy_type, result in results.items():
        m = compute_all_metrics(result, baseline=baseline)
        print(f"{strategy_type.value:<18} {m['energy_kwh']:>8.1f} "
              f"{m['saved_pct']:>6.0f}% {m['avg_temp']:>7.2f} "
              f"{m['min_temp']:>7.2f} {m['max_temp']:>7.2f} "
              f"{m['hours_below_comfort']:>6.1f}h "
              f"{m['recovery_minutes']:>5d}m {m['setpoint']:>7.2f}")


def main(argv=None):
    args = build_parser().parse_args(argv)

    house = HouseConfig(
        house_type=_member(HouseType, args.house_type),
        era=_member(BuildEra, args.era),
        size_multiplier=args.size,
        draughtiness=args.draughtiness,
        thermal_mass=args.thermal_mass,
    )
    system = SystemConfig(
        source=_member(HeatingSource, args.source),
        emitter=_member(EmitterType, args.emitter),
        max_power=args.max_power,
    )
    strategy = StrategyConfig(comfort_temp=args.comfort,
                              setback_temp=args.setback)
    weather = _member(WeatherPreset, args.weather)

    print("=" * 70)
    print("Heating Strategy Comparison")
    print("=" * 70)
    print(f"House:   {house.era.value} {house.house_type.value}, "
          f"size x{house.size_multiplier}")
    print(f"System:  {system.max_power:g} kW {system.source.value}, "
          f"{system.emitter.value}")
    print(f"Weather: {weather.value}")
    mode = "target average" if args.target_average else "comfort setpoint"
    print(f"Mode:    {mode} {strategy.comfort_temp}°C\n")

    results = compare_strategies(house, system, strategy, weather,
                                 target_average_mode=args.target_average,
                                 method=args.method)
    print_metrics_table(results)

    if not args.no_plots:
        output_dir = args.output_dir or os.path.join(os.getcwd(), 'results')
        os.makedirs(output_dir, exist_ok=True)
        print("\n--- Generating plots ---")
        plot_strategy_comparison(
            results, comfort_temp=strategy.comfort_temp,
            title=f"{house.house_type.value}, {weather.value}",
            save_path=os.path.join(output_dir, 'strategy_comparison.png'))
        plot_energy_bar(
            results, baseline_key=StrategyType.ALWAYS_ON,
            save_path=os.path.join(output_dir, 'strategy_energy.png'))
        print("\nAll results saved to:", output_dir)
    print("=" * 70)


if __name__ == "__main__":
    main()
