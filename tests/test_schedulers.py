import pytest

from schedsim.algorithms import Algorithm, run_algorithm, schedule_fcfs, schedule_rr, schedule_sjf
from schedsim.errors import EmptyProcessSetError, InvalidInputError, InvalidQuantumError
from schedsim.models import Process


def _procs():
    return [
        Process("P1", arrival_time=0, burst_time=5),
        Process("P2", arrival_time=1, burst_time=3),
        Process("P3", arrival_time=2, burst_time=8),
    ]


def _completions(result):
    return {p.pid: p.completion_time for p in result.processes}


def test_fcfs_order():
    res = schedule_fcfs(_procs())
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]
    assert _completions(res) == {"P1": 5, "P2": 8, "P3": 16}


def test_fcfs_idle_gap_and_stable_ties():
    procs = [
        Process("B", arrival_time=10, burst_time=2),
        Process("A", arrival_time=0, burst_time=3),
        Process("C", arrival_time=10, burst_time=1),
    ]
    res = schedule_fcfs(procs)
    assert [p.pid for p in res.processes] == ["A", "B", "C"]
    assert [p.completion_time for p in res.processes] == [3, 12, 13]


def test_fcfs_is_repeatable_and_does_not_touch_input():
    procs = _procs()
    first = schedule_fcfs(procs)
    second = schedule_fcfs(procs)
    assert first.processes == second.processes
    assert procs == _procs()


def test_sjf_order():
    res = schedule_sjf(_procs())
    # P1 is alone at t=0; at t=5 P2 (3) beats P3 (8).
    assert [s.pid for s in res.timeline] == ["P1", "P2", "P3"]
    assert _completions(res) == {"P1": 5, "P2": 8, "P3": 16}


def test_sjf_picks_shortest_ready_job():
    procs = [
        Process("A", arrival_time=0, burst_time=6),
        Process("B", arrival_time=1, burst_time=8),
        Process("C", arrival_time=2, burst_time=2),
        Process("D", arrival_time=3, burst_time=4),
    ]
    res = schedule_sjf(procs)
    assert [p.pid for p in res.processes] == ["A", "C", "D", "B"]
    assert [p.completion_time for p in res.processes] == [6, 8, 12, 20]


def test_sjf_equal_bursts_keep_input_order():
    procs = [
        Process("X", arrival_time=0, burst_time=4),
        Process("Y", arrival_time=0, burst_time=4),
        Process("Z", arrival_time=0, burst_time=4),
    ]
    res = schedule_sjf(procs)
    assert [p.pid for p in res.processes] == ["X", "Y", "Z"]


def test_sjf_skips_idle_time():
    procs = [Process("late", arrival_time=7, burst_time=2)]
    res = schedule_sjf(procs)
    assert res.processes[0].completion_time == 9
    assert res.timeline[0].start_time == 7


def test_sjf_duplicate_pids_are_distinct_entries():
    procs = [
        Process("P", arrival_time=0, burst_time=2),
        Process("P", arrival_time=0, burst_time=1),
    ]
    res = schedule_sjf(procs)
    assert [(p.pid, p.burst_time, p.completion_time) for p in res.processes] == [
        ("P", 1, 1),
        ("P", 2, 3),
    ]


def test_rr_quantum_2():
    procs = [
        Process("P1", arrival_time=0, burst_time=5),
        Process("P2", arrival_time=1, burst_time=3),
        Process("P3", arrival_time=2, burst_time=3),
    ]
    res = schedule_rr(procs, quantum=2)
    # P2 and P3 arrive during P1's first slice and queue ahead of it.
    assert [(s.pid, s.start_time, s.end_time) for s in res.timeline] == [
        ("P1", 0, 2),
        ("P2", 2, 4),
        ("P3", 4, 6),
        ("P1", 6, 8),
        ("P2", 8, 9),
        ("P3", 9, 10),
        ("P1", 10, 11),
    ]
    assert [p.pid for p in res.processes] == ["P2", "P3", "P1"]
    assert _completions(res) == {"P1": 11, "P2": 9, "P3": 10}
    assert res.quantum == 2


def test_rr_arrival_at_slice_end_goes_before_preempted_process():
    procs = [
        Process("A", arrival_time=0, burst_time=4),
        Process("B", arrival_time=2, burst_time=1),
    ]
    res = schedule_rr(procs, quantum=2)
    assert [s.pid for s in res.timeline] == ["A", "B", "A"]
    assert _completions(res) == {"A": 5, "B": 3}


def test_rr_idle_cpu_jumps_to_next_arrival():
    procs = [
        Process("A", arrival_time=0, burst_time=1),
        Process("B", arrival_time=5, burst_time=3),
    ]
    res = schedule_rr(procs, quantum=2)
    assert _completions(res) == {"A": 1, "B": 8}
    assert res.timeline[1].start_time == 5


def test_rr_large_quantum_matches_fcfs():
    procs = _procs()
    rr = schedule_rr(procs, quantum=max(p.burst_time for p in procs))
    fcfs = schedule_fcfs(procs)
    assert rr.processes == fcfs.processes


@pytest.mark.parametrize("quantum", [None, 0, -3, "abc", 1.5, True])
def test_rr_rejects_bad_quantum(quantum):
    with pytest.raises(InvalidQuantumError):
        schedule_rr(_procs(), quantum=quantum)


@pytest.mark.parametrize("scheduler", [schedule_fcfs, schedule_sjf])
def test_completion_never_before_arrival_plus_burst(scheduler):
    procs = [
        Process("A", arrival_time=3, burst_time=4),
        Process("B", arrival_time=0, burst_time=9),
        Process("C", arrival_time=3, burst_time=1),
        Process("D", arrival_time=20, burst_time=2),
    ]
    for p in scheduler(procs).processes:
        assert p.completion_time >= p.arrival_time + p.burst_time


@pytest.mark.parametrize("scheduler", [schedule_fcfs, schedule_sjf, schedule_rr])
def test_empty_process_set_is_rejected(scheduler):
    with pytest.raises(EmptyProcessSetError):
        scheduler([], quantum=2)


@pytest.mark.parametrize(
    "bad",
    [
        Process("", arrival_time=0, burst_time=1),
        Process("P", arrival_time=-1, burst_time=1),
        Process("P", arrival_time=0, burst_time=0),
        Process("P", arrival_time=0, burst_time=-4),
    ],
)
def test_invalid_process_is_rejected_before_running(bad):
    with pytest.raises(InvalidInputError):
        run_algorithm("fcfs", [Process("ok", 0, 1), bad])


def test_dispatcher_selects_algorithm():
    assert run_algorithm("FCFS", _procs()).algorithm == "FCFS"
    assert run_algorithm(Algorithm.SJF, _procs()).algorithm == "SJF (non-preemptive)"
    assert run_algorithm("round-robin", _procs(), quantum=4).algorithm == "Round Robin"


def test_dispatcher_ignores_quantum_for_non_preemptive():
    res = run_algorithm("sjf", _procs(), quantum=-1)
    assert res.quantum is None


def test_dispatcher_rejects_unknown_algorithm():
    with pytest.raises(InvalidInputError):
        run_algorithm("priority", _procs())
