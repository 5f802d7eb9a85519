from __future__ import annotations

import argparse
import logging
import os
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import Algorithm, run_algorithm
from .errors import SchedulerError
from .gantt import build_rich_gantt
from .metrics import compute_metrics, compute_system_metrics
from .models import Process, ScheduleResult
from .workload_io import add_process, clear_workload, load_workload

logger = logging.getLogger(__name__)

DEFAULT_WORKLOAD = os.environ.get("SCHEDSIM_WORKLOAD", "processes.json")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions at debug level.",
    )

    workload_opts = argparse.ArgumentParser(add_help=False)
    workload_opts.add_argument(
        "--workload",
        "-w",
        default=DEFAULT_WORKLOAD,
        help=f"JSON or CSV file holding the process list (default: {DEFAULT_WORKLOAD}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    add_parser = subparsers.add_parser("add", parents=[workload_opts], help="Add a process to the saved list.")
    add_parser.add_argument("pid", help="Process identifier.")
    add_parser.add_argument("arrival", help="Arrival time (non-negative integer).")
    add_parser.add_argument("burst", help="Burst time (positive integer).")

    subparsers.add_parser("list", parents=[workload_opts], help="Show the saved process list.")
    subparsers.add_parser("clear", parents=[workload_opts], help="Remove all saved processes.")

    run_parser = subparsers.add_parser("run", parents=[workload_opts], help="Simulate one algorithm on the saved list.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help="Algorithm to use (fcfs, sjf, rr).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        default=None,
        help="Time quantum for round-robin (ignored by FCFS and SJF).",
    )
    run_parser.add_argument(
        "--no-gantt",
        action="store_true",
        help="Skip the Gantt chart.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        parents=[workload_opts],
        help="Run several algorithms on the same list and compare averages.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=[a.value for a in Algorithm],
        help="Algorithms to compare (default: fcfs sjf rr).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _print_processes(processes: List[Process], console: Console) -> None:
    if not processes:
        console.print("[yellow]No processes added[/yellow]")
        return

    table = Table(title="Processes", box=box.SIMPLE_HEAVY)
    table.add_column("PID", justify="center")
    table.add_column("Arrival", justify="right")
    table.add_column("Burst", justify="right")
    for p in processes:
        table.add_row(escape(p.pid), str(p.arrival_time), str(p.burst_time))
    console.print(table)


def _print_result(result: ScheduleResult, console: Console, show_gantt: bool = True) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")
    console.print()

    if show_gantt:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
        console.print()

    report = compute_metrics(result.processes)

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in ["PID", "Arrival", "Burst", "Completion", "Turnaround", "Waiting"]:
        proc_table.add_column(h, justify="center" if h == "PID" else "right")

    for m in report.processes:
        proc_table.add_row(
            escape(m.pid),
            str(m.arrival_time),
            str(m.burst_time),
            str(m.completion_time),
            str(m.turnaround_time),
            str(m.waiting_time),
        )

    console.print(proc_table)

    system = compute_system_metrics(result)
    sys_table = Table(title="Summary", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")
    sys_table.add_row("Average waiting time", f"{report.avg_waiting:.2f}")
    sys_table.add_row("Average turnaround time", f"{report.avg_turnaround:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization * 100:.1f}%")
    console.print(sys_table)


def _run_compare(processes: List[Process], algorithms: List[str], quantum, console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")

    for name in algorithms:
        algorithm = Algorithm.parse(name)
        q = quantum if algorithm.uses_quantum else None
        result = run_algorithm(algorithm, processes, quantum=q)
        report = compute_metrics(result.processes)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{report.avg_waiting:.2f}",
            f"{report.avg_turnaround:.2f}",
        )

    console.print(summary_table)


def _dispatch(parser: argparse.ArgumentParser, args: argparse.Namespace, console: Console) -> int:
    workload_path = Path(args.workload)

    if args.command == "add":
        p = add_process(workload_path, args.pid, args.arrival, args.burst)
        console.print(f"Added [bold]{escape(p.pid)}[/bold] (arrival {p.arrival_time}, burst {p.burst_time})")
        return 0

    if args.command == "list":
        _print_processes(load_workload(workload_path), console)
        return 0

    if args.command == "clear":
        clear_workload(workload_path)
        console.print("Cleared all processes")
        return 0

    if args.command == "run":
        processes = load_workload(workload_path)
        result = run_algorithm(args.algorithm, processes, quantum=args.quantum)
        _print_result(result, console, show_gantt=not args.no_gantt)
        return 0

    if args.command == "compare":
        _run_compare(load_workload(workload_path), args.algorithms, args.quantum, console)
        return 0

    parser.error(f"Unknown command: {args.command}")
    return 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.verbose)

    console = Console()
    try:
        return _dispatch(parser, args, console)
    except SchedulerError as exc:
        logger.debug("Command %s failed", args.command, exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
