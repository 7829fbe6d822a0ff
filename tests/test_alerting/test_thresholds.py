"""
Tests for ThresholdStore.

Covers:
- Case-insensitive set/get
- Last write wins
- Non-finite thresholds ignored
- Concurrent writers never tear values
"""

import math
import threading

import pytest

from weatheralert.alerting.thresholds import ThresholdStore


class TestSetGet:
    def test_unset_condition_is_none(self, store):
        assert store.get("humidity") is None

    def test_set_then_get(self, store):
        store.set("wind_speed", 10)
        assert store.get("wind_speed") == 10.0
        assert isinstance(store.get("wind_speed"), float)

    @pytest.mark.parametrize(
        "registered,queried",
        [
            ("Temperature", "temperature"),
            ("temperature", "TEMPERATURE"),
            ("WIND_SPEED", "Wind_Speed"),
        ],
    )
    def test_lookup_is_case_insensitive(self, store, registered, queried):
        store.set(registered, 25.5)
        assert store.get(queried) == 25.5

    def test_last_write_wins(self, store):
        store.set("Humidity", 80)
        store.set("humidity", 60)
        assert store.get("HUMIDITY") == 60.0
        assert len(store) == 1

    def test_negative_and_zero_accepted(self, store):
        store.set("temperature", -12.5)
        store.set("wind_speed", 0)
        assert store.get("temperature") == -12.5
        assert store.get("wind_speed") == 0.0

    def test_contains_is_normalized(self, store):
        store.set("Wind_Speed", 3)
        assert "wind_speed" in store
        assert "WIND_SPEED" in store
        assert "humidity" not in store
        assert 42 not in store

    def test_initial_thresholds(self):
        store = ThresholdStore({"Wind_Speed": 10, "humidity": 90})
        assert store.snapshot() == {"wind_speed": 10.0, "humidity": 90.0}


# ── Invalid Input ──────────────────────────────────────────────────────


class TestInvalidThresholds:
    @pytest.mark.parametrize("bad", [math.nan, math.inf, -math.inf, "10", None, True, 10**400])
    def test_rejected_value_leaves_store_unchanged(self, store, bad):
        store.set("temperature", 20)
        store.set("temperature", bad)
        assert store.get("temperature") == 20.0

    def test_rejected_value_never_registers(self, store):
        store.set("humidity", math.nan)
        assert store.get("humidity") is None
        assert len(store) == 0

    @pytest.mark.parametrize("condition", [None, 42, b"humidity", ["humidity"]])
    def test_non_string_condition_is_ignored(self, store, condition):
        store.set(condition, 10)
        assert len(store) == 0
        assert store.get(condition) is None
        assert condition not in store

    def test_whitespace_is_not_stripped(self, store):
        store.set(" wind_speed ", 10)
        assert store.get("wind_speed") is None
        assert store.get(" WIND_SPEED ") == 10.0


# ── Snapshot & Concurrency ─────────────────────────────────────────────


class TestSnapshot:
    def test_snapshot_is_a_copy(self, store):
        store.set("temperature", 28)
        snap = store.snapshot()
        snap["temperature"] = 0.0
        assert store.get("temperature") == 28.0

    def test_concurrent_writes_keep_whole_values(self, store):
        values = [float(v) for v in range(20)]

        def writer(v: float):
            for _ in range(50):
                store.set("wind_speed", v)
                assert store.get("wind_speed") in values

        threads = [threading.Thread(target=writer, args=(v,)) for v in values]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert store.get("wind_speed") in values
        assert len(store) == 1
