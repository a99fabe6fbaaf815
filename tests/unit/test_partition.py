"""Tests for splitting whole scripts across workers."""

from __future__ import annotations

import copy
import logging
from typing import Any

import pytest

from phasesplit._internal.errors import ConfigError, DistributionError, SpecError
from phasesplit.partition import divide_work, is_idle_script, split_phases
from phasesplit.phases import ConstantRate, Pause, classify_phase


def _script(*phases: dict[str, Any]) -> dict[str, Any]:
    return {"config": {"target": "http://localhost", "phases": list(phases)}}


def _phases(worker_script: dict[str, Any]) -> list[dict[str, Any]]:
    return worker_script["config"]["phases"]


# =========================================================================
# divide_work
# =========================================================================


class TestDivideWork:
    """Tests for the full split, filter and annotate pipeline."""

    def test_idle_workers_are_dropped(self) -> None:
        workers = divide_work(_script({"duration": 60, "arrivalRate": 2}), 4)
        assert len(workers) == 2
        assert [_phases(w)[0]["arrivalRate"] for w in workers] == [1, 1]

    def test_survivors_are_annotated(self) -> None:
        workers = divide_work(_script({"duration": 60, "arrivalRate": 2}), 4)
        for index, worker in enumerate(workers, start=1):
            phase = _phases(worker)[0]
            assert phase["totalWorkers"] == 2
            assert phase["worker"] == index

    def test_fixed_count_runs_on_first_worker_only(self) -> None:
        script = _script(
            {"duration": 60, "arrivalRate": 3},
            {"name": "burst", "duration": 60, "arrivalCount": 50},
        )
        workers = divide_work(script, 3)
        assert len(workers) == 3
        assert _phases(workers[0])[1]["arrivalCount"] == 50
        for worker in workers[1:]:
            burst = _phases(worker)[1]
            assert burst["pause"] == 60
            assert burst["name"] == "burst"
            assert "arrivalCount" not in burst

    def test_fixed_count_alone_keeps_one_worker(self) -> None:
        workers = divide_work(_script({"duration": 60, "arrivalCount": 50}), 3)
        assert len(workers) == 1
        phase = _phases(workers[0])[0]
        assert phase["arrivalCount"] == 50
        assert phase["totalWorkers"] == 1
        assert phase["worker"] == 1

    def test_hooks_are_stripped(self, mixed_script: dict[str, Any]) -> None:
        for worker in divide_work(mixed_script, 3):
            assert "before" not in worker
            assert "after" not in worker

    def test_scripts_without_hooks_are_fine(self) -> None:
        workers = divide_work(_script({"duration": 10, "arrivalRate": 1}), 1)
        assert "before" not in workers[0]
        assert "after" not in workers[0]

    def test_other_fields_preserved(self, mixed_script: dict[str, Any]) -> None:
        for worker in divide_work(mixed_script, 2):
            assert worker["scenarios"] == mixed_script["scenarios"]
            assert worker["config"]["target"] == "http://localhost:8080"
            assert worker["config"]["variables"] == {"ids": [1, 2, 3]}

    def test_phase_count_and_order_preserved(self, mixed_script: dict[str, Any]) -> None:
        names = [p["name"] for p in mixed_script["config"]["phases"]]
        for worker in divide_work(mixed_script, 4):
            assert [p["name"] for p in _phases(worker)] == names

    def test_input_not_mutated(self, mixed_script: dict[str, Any]) -> None:
        original = copy.deepcopy(mixed_script)
        divide_work(mixed_script, 4)
        assert mixed_script == original

    def test_workers_share_no_state(self, mixed_script: dict[str, Any]) -> None:
        first, second = divide_work(mixed_script, 2)
        first["config"]["variables"]["ids"].append(4)
        first["scenarios"][0]["name"] = "changed"
        assert second["config"]["variables"]["ids"] == [1, 2, 3]
        assert second["scenarios"][0]["name"] == "browse"

    def test_constant_rate_totals_preserved(self) -> None:
        workers = divide_work(_script({"duration": 60, "arrivalRate": 61, "maxVusers": 7}), 4)
        phases = [_phases(w)[0] for w in workers]
        assert [p["arrivalRate"] for p in phases] == [16, 15, 15, 15]
        assert sum(p["maxVusers"] for p in phases) == 7

    def test_ramp_cap_distribution(self) -> None:
        script = _script({"duration": 60, "arrivalRate": 0, "rampTo": 10, "maxVusers": 100})
        workers = divide_work(script, 5)
        phases = [_phases(w)[0] for w in workers]
        assert [p["rampTo"] for p in phases] == [2, 2, 2, 2, 2]
        assert [p["maxVusers"] for p in phases] == [20, 20, 20, 20, 20]

    def test_ramp_keeps_every_worker(self) -> None:
        workers = divide_work(_script({"duration": 60, "rampTo": 1}), 8)
        assert len(workers) == 8
        assert sum(_phases(w)[0]["rampTo"] for w in workers) == pytest.approx(1)

    def test_only_pauses_yields_no_workers(self) -> None:
        assert divide_work(_script({"pause": 10}, {"pause": 20}), 3) == []

    def test_empty_phase_list_yields_no_workers(self) -> None:
        assert divide_work(_script(), 3) == []

    def test_unknown_phase_keeps_workers_and_warns(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        raw = {"name": "odd", "duration": 10, "arrivalsPerMinute": 5}
        with caplog.at_level(logging.WARNING, logger="phasesplit"):
            workers = divide_work(_script(raw), 2)
        assert len(workers) == 2
        for index, worker in enumerate(workers, start=1):
            assert _phases(worker)[0] == {**raw, "totalWorkers": 2, "worker": index}
        assert "Unknown phase" in caplog.text

    def test_mixed_script(self, mixed_script: dict[str, Any]) -> None:
        workers = divide_work(mixed_script, 3)
        assert len(workers) == 3
        sustain = [_phases(w)[1] for w in workers]
        assert [p["arrivalRate"] for p in sustain] == [4, 3, 3]
        assert [p["maxVusers"] for p in sustain] == [17, 17, 16]
        warm_up = [_phases(w)[0] for w in workers]
        assert sum(p["rampTo"] for p in warm_up) == pytest.approx(9)
        assert all(p["rampTo"] == pytest.approx(3) for p in warm_up)

    def test_logs_dropped_workers(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.INFO, logger="phasesplit"):
            divide_work(_script({"duration": 60, "arrivalRate": 1}), 3)
        assert "Dropped 2 of 3 workers" in caplog.text

    @pytest.mark.parametrize("workers", [0, -1])
    def test_rejects_non_positive_worker_count(self, workers: int) -> None:
        with pytest.raises(ConfigError, match="num_workers"):
            divide_work(_script({"duration": 60, "arrivalRate": 1}), workers)

    def test_rejects_missing_config(self) -> None:
        with pytest.raises(SpecError, match="config"):
            divide_work({"scenarios": []}, 2)

    def test_rejects_missing_phases(self) -> None:
        with pytest.raises(SpecError, match="config.phases"):
            divide_work({"config": {"target": "http://localhost"}}, 2)

    def test_rejects_non_mapping_phase(self) -> None:
        with pytest.raises(SpecError, match="mapping"):
            divide_work({"config": {"phases": ["warm up"]}}, 2)

    def test_fractional_constant_rate_is_fatal(self) -> None:
        with pytest.raises(DistributionError):
            divide_work(_script({"duration": 60, "arrivalRate": 0.5}), 2)


# =========================================================================
# split_phases / is_idle_script
# =========================================================================


class TestSplitPhases:
    """Tests for per-worker regrouping of split phases."""

    def test_regroups_by_worker(self) -> None:
        phases = [
            classify_phase({"duration": 10, "arrivalRate": 3}),
            classify_phase({"name": "rest", "pause": 5}),
        ]
        per_worker = split_phases(phases, 2)
        assert per_worker == [
            [ConstantRate(arrival_rate=2, duration=10), Pause(duration=5, name="rest")],
            [ConstantRate(arrival_rate=1, duration=10), Pause(duration=5, name="rest")],
        ]

    def test_no_phases(self) -> None:
        assert split_phases([], 3) == [[], [], []]


class TestIsIdleScript:
    """Tests for whole-script idleness."""

    def test_pauses_only(self) -> None:
        assert is_idle_script(_script({"pause": 5}, {"duration": 5, "arrivalRate": 0}))

    def test_any_load_makes_it_active(self) -> None:
        assert not is_idle_script(_script({"pause": 5}, {"duration": 5, "arrivalCount": 1}))

    def test_worker_output_with_annotations(self) -> None:
        workers = divide_work(_script({"duration": 5, "arrivalRate": 1}), 1)
        assert not is_idle_script(workers[0])
