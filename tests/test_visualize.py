"""Smoke tests for src.visualization.visualize."""

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402

from src.visualization import visualize as viz  # noqa: E402


def test_scenario_panels(reference_result):
    fig = viz.plot_scenario(reference_result, title="reference")
    assert len(fig.axes) == 4
    # Two trajectories plus three spray markers on the first panel.
    assert len(fig.axes[0].lines) == 5
    plt.close(fig)


def test_yield_curve_plot(curve):
    fig, ax = plt.subplots()
    viz.plot_yield_curve(curve.alpha, curve.k, t_max=150.0, ax=ax)
    assert ax.get_ylim() == (0.0, 1.0)
    plt.close(fig)


def test_save_scenario_figures(tmp_path, reference_result, curve):
    paths = viz.save_scenario_figures(reference_result, curve, tmp_path / "figures")
    assert [p.name for p in paths] == ["states.png", "yield_curve.png"]
    assert all(p.exists() for p in paths)
