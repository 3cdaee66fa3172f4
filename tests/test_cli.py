"""
Tests for the command line interface.
"""

import io
import json

import pytest

from promiseparser_cli.cli import entrance


class TestCli:
    """Tests for the promiseparser command."""

    def test_text_argument(self, capsys):
        assert entrance(["next year", "--base-date", "2024-03-15"]) == 0
        output = json.loads(capsys.readouterr().out)
        assert len(output) == 1
        assert output[0]["value"] == "2025"
        assert output[0]["precision"] == "YEAR"
        assert output[0]["date_from"] == "2025-01-01"
        assert output[0]["correct"] is True

    def test_history_flag(self, capsys):
        entrance(["next year 2030", "--base-date", "2024-03-15", "--history"])
        output = json.loads(capsys.readouterr().out)
        assert output[0]["value"] == "2030"
        assert output[0]["alerts"] == [
            {"code": 16, "name": "INCONSISTENT", "label": "ALERT1"}
        ]

    def test_reads_stdin(self, capsys, monkeypatch):
        monkeypatch.setattr("sys.stdin", io.StringIO("05/2021"))
        entrance(["--base-date", "2024-03-15"])
        output = json.loads(capsys.readouterr().out)
        assert [item["text"] for item in output] == ["/", "2021"]

    def test_invalid_base_date(self):
        with pytest.raises(SystemExit):
            entrance(["next year", "--base-date", "someday"])
