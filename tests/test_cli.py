"""End-to-end tests of the locsync command line."""

import logging
import os
import re
from unittest.mock import patch

import pytest

from conftest import status_payload
from locsync.cli import create_argument_parser, main

ANSI_ESCAPE = re.compile(r"\x1b\[[0-9;]*m")


def _plain(text):
    return ANSI_ESCAPE.sub("", text)


@pytest.fixture
def in_project(project_dir, monkeypatch):
    monkeypatch.chdir(project_dir)
    for name in ("LOCSYNC_API_KEY", "LOCSYNC_PROJECT_ID", "LOCSYNC_API_URL"):
        monkeypatch.delenv(name, raising=False)
    return project_dir


@pytest.fixture
def cli_client(fake_client):
    with patch("locsync.cli.TranslationClient.from_config", return_value=fake_client), \
            patch("locsync.cli.signal.signal"):
        yield fake_client


class TestArgumentParser:
    """Flag parsing."""

    def test_should_accept_verbose_after_subcommand(self) -> None:
        args = create_argument_parser().parse_args(["push", "--verbose", "--prefix", "x"])

        assert args.verbose is True
        assert args.prefix == "x"

    def test_global_verbose_should_survive_subcommand(self) -> None:
        args = create_argument_parser().parse_args(["--verbose", "pull", "--no-cache"])

        assert args.verbose is True
        assert args.no_cache is True


class TestMain:
    """Subcommand dispatch and exit codes."""

    def test_status_should_print_matrix(self, in_project, cli_client, capsys) -> None:
        cli_client.status_by_locale = {
            "fr-FR": status_payload(awaiting=2, in_progress=1, completed=5),
            "de-DE": status_payload(completed=7),
        }

        assert main(["status"]) == 0

        out = _plain(capsys.readouterr().out)
        assert "Awaiting Authorization -> In Progress -> Completed" in out
        assert "strings.json   2 -> 1 -> 5 0 -> 0 -> 7" in out
        assert "i18n/copy.json 2 -> 1 -> 5 0 -> 0 -> 7" in out

    def test_status_should_remove_temp_uploads(self, in_project, cli_client) -> None:
        assert main(["status"]) == 0

        assert len(cli_client.deletes) == 2

    def test_pull_should_write_files_and_report_cache_use(self, in_project, cli_client, capsys) -> None:
        assert main(["pull"]) == 0
        assert main(["pull"]) == 0

        out = _plain(capsys.readouterr().out)
        assert os.path.exists(in_project / "i18n" / "copy.fr-FR.json")
        assert "strings.de-DE.json (using cache)" in out
        assert "Wrote 4 file(s) (4 from cache)" in out

    def test_push_should_report_kept_uploads_only(self, in_project, cli_client, capsys) -> None:
        cli_client.status_by_path = {
            "/feature-x/strings.json": status_payload(awaiting=3),
            "/feature-x/i18n/copy.json": status_payload(completed=1),
        }

        assert main(["push", "--prefix", "feature-x"]) == 0

        out = _plain(capsys.readouterr().out)
        assert "Using prefix /feature-x" in out
        assert "  3 unauthorised strings in /feature-x/strings.json" in out
        assert "/feature-x/i18n/copy.json" not in out
        assert cli_client.deletes == ["/feature-x/i18n/copy.json"]

    @patch("locsync.modes.push_handler.default_push_prefix", return_value="")
    def test_push_on_canonical_branch_should_not_prefix(self, mock_prefix, in_project, cli_client) -> None:
        assert main(["push"]) == 0

        assert sorted(remote for _, remote, _, _ in cli_client.uploads) == ["i18n/copy.json", "strings.json"]
        assert cli_client.deletes == []

    def test_push_without_prefix_should_report_every_upload(self, in_project, cli_client, capsys) -> None:
        cli_client.status_by_locale = {"fr-FR": status_payload(completed=4)}

        assert main(["push", "--prefix", "/"]) == 0

        out = _plain(capsys.readouterr().out)
        assert "Using prefix" not in out
        assert "  0 unauthorised strings in strings.json" in out
        assert "  0 unauthorised strings in i18n/copy.json" in out
        assert cli_client.deletes == []

    def test_service_failure_should_exit_nonzero(self, in_project, cli_client, caplog) -> None:
        cli_client.fail_on = "status"

        with caplog.at_level(logging.ERROR, logger="locsync"):
            assert main(["status"]) == 1

        assert "status failed" in caplog.text
        assert len(cli_client.deletes) == 2

    def test_missing_config_should_exit_nonzero(self, tmp_path, monkeypatch, capsys) -> None:
        monkeypatch.chdir(tmp_path)

        assert main(["status"]) == 1
        assert "No locsync.json found" in capsys.readouterr().out

    def test_invalid_worker_count_should_exit_nonzero(self, in_project, cli_client) -> None:
        assert main(["--workers", "0", "status"]) == 1
        assert cli_client.uploads == []

    def test_no_subcommand_should_print_help(self, in_project, capsys) -> None:
        assert main([]) == 1
        assert "usage: locsync" in capsys.readouterr().out

    def test_config_option_should_update_project_file(self, in_project) -> None:
        assert main(["--config", '{"max_workers": 2}']) == 0
        assert '"max_workers": 2' in (in_project / "locsync.json").read_text()
