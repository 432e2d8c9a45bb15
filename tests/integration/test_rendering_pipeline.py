"""Integration tests for collection followed by graph rendering."""

import pytest

from winbox_stats.charts import render_all
from winbox_stats.cli import main


@pytest.mark.integration
class TestRenderingPipeline:
    """Test charts rendered from collected scopes."""

    def test_one_chart_per_metric(self, month_of_ticks, configured_env, sample_readings):
        data_dir = configured_env["data_dir"]

        outputs = render_all()

        assert sorted(p.name for p in outputs) == sorted(
            f"202511@TESTHOST@{label}.png" for label in sample_readings
        )
        for out in outputs:
            assert out.parent == data_dir
            assert out.stat().st_size > 0

    def test_graph_command_is_silent(self, month_of_ticks, configured_env, capsys):
        assert main(["graph"]) == 0

        captured = capsys.readouterr()
        assert captured.out == ""
        assert captured.err == ""

    def test_rerun_overwrites_charts(self, month_of_ticks, configured_env):
        first = render_all()
        second = render_all()

        assert first == second
