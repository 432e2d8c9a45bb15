"""Tests for JSON export of per-metric scopes."""

import json

import pytest

from winbox_stats.export import export_all, export_file


class TestExportFile:
    """Tests for export_file."""

    def test_writes_sorted_rows(self, tmp_data_dir, make_table):
        db = tmp_data_dir / "2025-11@HOST@CPU.sqlite"
        make_table(
            db, "stats", ("ts", "value"),
            [("2025-11-03 11:00:00", 2.0), ("2025-11-03 10:00:00", 1.5)],
        )

        out = export_file(db)

        assert out == tmp_data_dir / "2025-11@HOST@CPU.json"
        assert json.loads(out.read_text()) == [
            {"Timestamp": "2025-11-03 10:00:00", "Value": 1.5},
            {"Timestamp": "2025-11-03 11:00:00", "Value": 2.0},
        ]

    def test_empty_table_writes_empty_array(self, tmp_data_dir, make_table):
        db = tmp_data_dir / "2025-11@HOST@RAM.sqlite"
        make_table(db, "stats", ("ts", "value"), [])

        assert json.loads(export_file(db).read_text()) == []

    def test_wrong_schema_raises(self, tmp_data_dir, make_table):
        db = tmp_data_dir / "2025-11@HOST@RAM.sqlite"
        make_table(db, "stats", ("Timestamp", "Value"), [("2025-11-03 10:00:00", 1.0)])

        with pytest.raises(RuntimeError, match="Failed to read"):
            export_file(db)


class TestExportAll:
    """Tests for export_all."""

    def test_walks_tree_and_skips_monthly(self, tmp_data_dir, make_table):
        nested = tmp_data_dir / "2025" / "11"
        nested.mkdir(parents=True)
        make_table(nested / "2025-11@HOST@CPU.sqlite", "stats", ("ts", "value"),
                   [("2025-11-03 10:00:00", 5.0)])
        make_table(tmp_data_dir / "2025-10@HOST@RAM.SQLITE", "stats", ("ts", "value"),
                   [("2025-10-03 10:00:00", 6.0)])
        make_table(tmp_data_dir / "202511@HOST.sqlite", "CPU", ("Timestamp", "Value"),
                   [("2025-11-03 10:00:00", 7.0)])
        (tmp_data_dir / "garbage.sqlite").write_bytes(b"not sqlite" * 50)

        written = export_all(tmp_data_dir)

        assert sorted(written) == sorted([
            nested / "2025-11@HOST@CPU.json",
            tmp_data_dir / "2025-10@HOST@RAM.json",
        ])
        assert not (tmp_data_dir / "202511@HOST.json").exists()
        assert not (tmp_data_dir / "garbage.json").exists()

    def test_nothing_to_export(self, tmp_data_dir):
        assert export_all(tmp_data_dir) == []

    def test_stats_table_name_case_insensitive(self, tmp_data_dir, make_table):
        """An upper-case STATS table is exported like the chart reader picks it."""
        db = tmp_data_dir / "2025-11@HOST@CPU.sqlite"
        make_table(db, "STATS", ("ts", "value"), [("2025-11-03 10:00:00", 4.0)])

        assert export_all(tmp_data_dir) == [tmp_data_dir / "2025-11@HOST@CPU.json"]
        assert json.loads((tmp_data_dir / "2025-11@HOST@CPU.json").read_text()) == [
            {"Timestamp": "2025-11-03 10:00:00", "Value": 4.0}
        ]
