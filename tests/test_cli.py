"""Tests for the management command line."""

import pytest

from followfeed import cli


class TestCli:

    def test_crontab_prints_entry(self, capsys):
        assert cli.main(["crontab"]) == 0
        out = capsys.readouterr().out.strip()
        assert out.startswith("* * * * * ")
        assert "-m followfeed schedule:run" in out

    def test_crontab_file(self, capsys):
        cli.main(["crontab", "--file"])
        out = capsys.readouterr().out
        assert out.startswith("#")
        assert out.endswith("2>&1\n")

    def test_schedule_list(self, capsys):
        assert cli.main(["schedule:list"]) == 0
        assert "notifications:unread-summary [one server]" in capsys.readouterr().out

    def test_command_required(self):
        with pytest.raises(SystemExit):
            cli.main([])
