"""
Plotting utilities for heating strategy comparisons.

Figures are rendered with the non-interactive backend, optionally saved,
and closed before returning.
"""

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

from heatcompare.utils.metrics import energy_savings


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        plt.savefig(save_path, dpi=150, bbox_inches='tight')
        print(f"Saved: {save_path}")
    plt.close(fig)
    return fig


def plot_strategy_comparison(results, comfort_temp=None, title=None,
                             save_path=None):
    """
    Dual-panel plot: indoor/outdoor temperature and delivered power.

    Parameters
    ----------
    results : dict
        {StrategyType or name: SimulationResult}.
    comfort_temp : float, optional
        Drawn as a reference line.
    title : str, optional
    save_path : str, optional
        Path to save figure.
    """
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(14, 8), sharex=True,
                                    gridspec_kw={'height_ratios': [3, 1]})

    colors = plt.cm.tab10(np.linspace(0, 1, 10))
    outdoor_drawn = False

    for (key, result), color in zip(results.items(), colors):
        name = getattr(key, 'value', str(key))
        arrays = result.to_arrays()
        ax1.plot(arrays['hours'], arrays['indoor_temp'], linewidth=1.5,
                 label=name, color=color)
        ax2.plot(arrays['hours'], arrays['power_input'], linewidth=1.2,
                 label=name, color=color)
        if not outdoor_drawn:
            ax1.plot(arrays['hours'], arrays['outdoor_temp'], color='cyan',
                     linestyle=':', linewidth=1.2, label='Outdoor')
            outdoor_drawn = True

    if comfort_temp is not None:
        ax1.axhline(y=comfort_temp, color='k', linestyle='--', alpha=0.5,
                    label=f'Comfort = {comfort_temp}°C')
    ax1.set_ylabel('Temperature (°C)', fontsize=12)
    ax1.set_title(title or 'Heating Strategy Comparison', fontsize=14)
    ax1.legend(fontsize=9)
    ax1.grid(True, alpha=0.3)

    ax2.set_xlabel('Time of day (h)', fontsize=12)
    ax2.set_ylabel('Power (kW)', fontsize=12)
    ax2.set_xlim(0, 24)
    ax2.set_xticks(range(0, 25, 3))
    ax2.legend(fontsize=9)
    ax2.grid(True, alpha=0.3)

    return _finish(fig, save_path)


def plot_energy_bar(results, baseline_key=None, save_path=None):
    """
    Daily energy per strategy, annotated with savings against a baseline.

    Parameters
    ----------
    results : dict
        {StrategyType or name: SimulationResult}.
    baseline_key : optional
        Key of the result to compare against; defaults to the first entry.
    """
    keys = list(results.keys())
    names = [getattr(k, 'value', str(k)) for k in keys]
    energies = [results[k].total_energy for k in keys]
    baseline = results[baseline_key if baseline_key is not None else keys[0]]

    fig, ax = plt.subplots(figsize=(10, 6))
    colors = plt.cm.Set2(np.linspace(0, 1, len(names)))
    bars = ax.bar(names, energies, color=colors)

    for bar, key in zip(bars, keys):
        _, saved_pct = energy_savings(baseline, results[key])
        ax.annotate(f'{bar.get_height():.1f} kWh\n({saved_pct:+.0f}% saved)',
                    (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                    ha='center', va='bottom', fontsize=9,
                    xytext=(0, 3), textcoords='offset points')

    ax.set_ylabel('Energy (kWh/day)', fontsize=12)
    ax.set_title('Daily Energy Use', fontsize=14)
    ax.grid(True, alpha=0.3, axis='y')

    return _finish(fig, save_path)
