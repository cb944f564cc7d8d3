from __future__ import annotations

from bigidle.simulation import SimulationReport


def plot_simulation(
    report: SimulationReport,
    output_path: str | None = None,
) -> None:
    """Plot counter and production magnitude (digit count) over time.

    Requires matplotlib (optional dependency).
    """
    try:
        import matplotlib.pyplot as plt
    except ImportError:
        raise ImportError(
            "matplotlib is required for visualization. "
            "Install with: pip install bigidle[viz]"
        )

    series = report.digits_series()
    fig, ax = plt.subplots(figsize=(10, 6))
    fig.suptitle(f"bigidle simulation: {report.total_time:.0f}s, {report.upgrades} upgrades")

    if series:
        times, counter_digits, production_digits = zip(*series)
        ax.step(times, counter_digits, where="post", label="counter")
        ax.step(times, production_digits, where="post", label="production")
    ax.set_xlabel("Time (s)")
    ax.set_ylabel("Decimal digits")
    ax.legend()
    ax.grid(True, alpha=0.3)

    plt.tight_layout()

    if output_path:
        plt.savefig(output_path, dpi=150)
    else:
        plt.show()
