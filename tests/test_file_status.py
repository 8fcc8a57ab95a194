"""Tests for FileStatus and StatusMatrix."""

import threading

import pytest

from locsync.exceptions import DuplicateStatusError
from locsync.models.file_status import FileStatus, StatusMatrix


class TestFileStatus:
    """Derived counts of a single status snapshot."""

    def test_should_sum_sub_states_into_derived_counts(self) -> None:
        status = FileStatus.from_dict({
            "fileUri": "/strings.json",
            "stringCount": 20,
            "notAuthorizedStringCount": 3,
            "awaitingAuthorizationStringCount": 2,
            "authorizedStringCount": 4,
            "inProgressStringCount": 1,
            "completedStringCount": 10,
        }, locale="fr-FR")

        assert status.awaiting_authorization_count() == 5
        assert status.in_progress_count() == 5
        assert status.completed_string_count() == 10
        assert status.locale == "fr-FR"
        assert status.file_uri == "/strings.json"

    def test_should_default_missing_sub_states_to_zero(self) -> None:
        status = FileStatus.from_dict({}, locale="de-DE")

        assert status.awaiting_authorization_count() == 0
        assert status.in_progress_count() == 0
        assert status.completed_string_count() == 0

    def test_should_clamp_negative_and_invalid_counts(self) -> None:
        status = FileStatus.from_dict({
            "notAuthorizedStringCount": -4,
            "authorizedStringCount": "abc",
            "completedStringCount": "7",
        })

        assert status.awaiting_authorization_count() == 0
        assert status.in_progress_count() == 0
        assert status.completed_string_count() == 7

    def test_should_format_counts_as_arrow_chain(self) -> None:
        status = FileStatus(sub_states={
            "notAuthorizedStringCount": 2,
            "authorizedStringCount": 1,
            "completedStringCount": 5,
        })

        assert status.format_counts() == "2 -> 1 -> 5"

    def test_should_round_trip_service_payload_fields(self) -> None:
        status = FileStatus.from_dict({"fileUri": "/a.json", "completedStringCount": 3}, locale="fr-FR")

        data = status.to_dict()

        assert data["fileUri"] == "/a.json"
        assert data["locale"] == "fr-FR"
        assert data["completedStringCount"] == 3


class TestStatusMatrix:
    """Write-once matrix semantics."""

    def test_should_store_one_entry_per_pair(self) -> None:
        matrix = StatusMatrix()
        matrix.set("a.json", "fr-FR", FileStatus(locale="fr-FR"))
        matrix.set("a.json", "de-DE", FileStatus(locale="de-DE"))
        matrix.set("b.json", "fr-FR", FileStatus(locale="fr-FR"))

        assert len(matrix) == 3
        assert ("a.json", "de-DE") in matrix
        assert ("b.json", "de-DE") not in matrix
        assert matrix.get("b.json", "de-DE") is None
        assert set(matrix.row("a.json")) == {"fr-FR", "de-DE"}

    def test_should_reject_second_write_to_same_cell(self) -> None:
        matrix = StatusMatrix()
        matrix.set("a.json", "fr-FR", FileStatus())

        with pytest.raises(DuplicateStatusError):
            matrix.set("a.json", "fr-FR", FileStatus())

    def test_should_accept_concurrent_writes_to_disjoint_keys(self) -> None:
        matrix = StatusMatrix()
        locales = [f"l{i}" for i in range(50)]

        threads = [
            threading.Thread(target=matrix.set, args=(f"f{j}.json", locale, FileStatus()))
            for j in range(4) for locale in locales
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(matrix) == 200
        assert sorted(matrix.files()) == ["f0.json", "f1.json", "f2.json", "f3.json"]
