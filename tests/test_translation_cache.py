"""Tests for the persistent translation cache."""

import json
import logging
import threading
import time
from unittest.mock import Mock

import pytest

from locsync.services.translation.cache import TranslationCache


@pytest.fixture
def source_file(tmp_path):
    path = tmp_path / "strings.json"
    path.write_text('{"hello": "Hello"}')
    return path


class FakeClock:
    def __init__(self, now=1_000_000.0):
        self.now = now

    def __call__(self):
        return self.now


class TestTranslationCache:
    """Hit/miss behaviour and invalidation."""

    def test_should_fetch_on_miss_then_serve_identical_bytes(self, source_file, cache_paths) -> None:
        fetch = Mock(return_value=b"\x00bonjour\xff")
        cache = TranslationCache(fetch, paths=cache_paths)

        first = cache.get("fr-FR", str(source_file), "json")
        second = cache.get("fr-FR", str(source_file), "json")

        assert first.hit is False
        assert second.hit is True
        assert second.payload == first.payload == b"\x00bonjour\xff"
        fetch.assert_called_once_with("fr-FR", str(source_file), "json", {})

    def test_should_unpack_into_hit_and_payload(self, source_file, cache_paths) -> None:
        cache = TranslationCache(Mock(return_value=b"x"), paths=cache_paths)

        hit, payload = cache.get("fr-FR", str(source_file), "json")

        assert hit is False
        assert payload == b"x"

    def test_should_miss_after_source_content_changes(self, source_file, cache_paths) -> None:
        fetch = Mock(side_effect=[b"v1", b"v2"])
        cache = TranslationCache(fetch, paths=cache_paths)

        cache.get("fr-FR", str(source_file), "json")
        source_file.write_text('{"hello": "Hello", "bye": "Bye"}')
        result = cache.get("fr-FR", str(source_file), "json")

        assert result.hit is False
        assert result.payload == b"v2"

    def test_should_key_on_locale_file_type_and_parser_config(self, source_file, cache_paths) -> None:
        fetch = Mock(return_value=b"x")
        cache = TranslationCache(fetch, paths=cache_paths)

        cache.get("fr-FR", str(source_file), "json")
        assert cache.get("de-DE", str(source_file), "json").hit is False
        assert cache.get("fr-FR", str(source_file), "yaml").hit is False
        assert cache.get("fr-FR", str(source_file), "json", {"placeholder_format": "C"}).hit is False
        assert fetch.call_count == 4

    def test_should_expire_entries_older_than_max_age(self, source_file, cache_paths) -> None:
        clock = FakeClock()
        fetch = Mock(return_value=b"x")
        cache = TranslationCache(fetch, paths=cache_paths, max_age_hours=1, clock=clock)

        cache.get("fr-FR", str(source_file), "json")
        clock.now += 1800
        assert cache.get("fr-FR", str(source_file), "json").hit is True

        clock.now += 3600
        assert cache.get("fr-FR", str(source_file), "json").hit is False
        assert fetch.call_count == 2

    def test_should_keep_entries_forever_when_max_age_is_zero(self, source_file, cache_paths) -> None:
        clock = FakeClock()
        cache = TranslationCache(Mock(return_value=b"x"), paths=cache_paths, max_age_hours=0, clock=clock)

        cache.get("fr-FR", str(source_file), "json")
        clock.now += 365 * 24 * 3600

        assert cache.get("fr-FR", str(source_file), "json").hit is True

    def test_should_treat_corrupt_entry_as_miss(self, source_file, cache_paths, caplog) -> None:
        fetch = Mock(return_value=b"fresh")
        cache = TranslationCache(fetch, paths=cache_paths)

        key = cache.get("fr-FR", str(source_file), "json").key
        with open(cache_paths.get_entry_path(key), "w") as f:
            f.write("{not json")

        with caplog.at_level(logging.DEBUG, logger="locsync"):
            result = cache.get("fr-FR", str(source_file), "json")

        assert result.hit is False
        assert result.payload == b"fresh"
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]

    def test_should_treat_bad_timestamp_as_miss(self, source_file, cache_paths) -> None:
        fetch = Mock(side_effect=[b"old", b"new"])
        cache = TranslationCache(fetch, paths=cache_paths)

        key = cache.get("fr-FR", str(source_file), "json").key
        entry_path = cache_paths.get_entry_path(key)
        with open(entry_path) as f:
            entry = json.load(f)
        entry["created_utc_ts"] = "yesterday"
        with open(entry_path, "w") as f:
            json.dump(entry, f)

        assert cache.get("fr-FR", str(source_file), "json").payload == b"new"

    def test_refresh_should_bypass_lookup_and_replace_entry(self, source_file, cache_paths) -> None:
        fetch = Mock(side_effect=[b"old", b"new"])
        cache = TranslationCache(fetch, paths=cache_paths)

        cache.get("fr-FR", str(source_file), "json")
        refreshed = cache.get("fr-FR", str(source_file), "json", refresh=True)
        after = cache.get("fr-FR", str(source_file), "json")

        assert refreshed.hit is False
        assert refreshed.payload == b"new"
        assert after.hit is True
        assert after.payload == b"new"

    def test_should_fetch_once_for_concurrent_misses_on_same_key(self, source_file, cache_paths) -> None:
        calls = []

        def slow_fetch(locale, local_path, file_type, parser_config):
            calls.append(locale)
            time.sleep(0.05)
            return b"payload"

        cache = TranslationCache(slow_fetch, paths=cache_paths)
        results = []

        def worker():
            results.append(cache.get("fr-FR", str(source_file), "json"))

        threads = [threading.Thread(target=worker) for _ in range(5)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert len(calls) == 1
        assert [r.payload for r in results] == [b"payload"] * 5
        assert sum(1 for r in results if not r.hit) == 1

    def test_should_not_store_entry_when_fetch_fails(self, source_file, cache_paths) -> None:
        fetch = Mock(side_effect=[RuntimeError("service down"), b"ok"])
        cache = TranslationCache(fetch, paths=cache_paths)

        with pytest.raises(RuntimeError):
            cache.get("fr-FR", str(source_file), "json")

        assert cache.get("fr-FR", str(source_file), "json").hit is False

    def test_clear_should_remove_all_entries(self, source_file, cache_paths) -> None:
        fetch = Mock(return_value=b"x")
        cache = TranslationCache(fetch, paths=cache_paths)
        cache.get("fr-FR", str(source_file), "json")

        cache.clear()

        assert cache.get("fr-FR", str(source_file), "json").hit is False
