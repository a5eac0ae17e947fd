from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .engine import Simulation
from .errors import SchedulerError
from .gantt import build_rich_gantt, build_rich_waiting_chart, render_gantt
from .models import Algorithm, Process
from .workload_io import load_workload, sample_workload

ALGORITHM_CHOICES = [a.short_name for a in Algorithm]

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="Tick-by-tick CPU scheduling simulator (FCFS, SJF, SRTF, RR, Priority).",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging verbosity (default: WARNING). DEBUG traces every dispatch decision.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Simulate one algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({', '.join(ALGORITHM_CHOICES)}).",
    )
    run_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in sample of three processes).",
    )
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum for round-robin (default: 2, ignored by the other algorithms).",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Print every tick as it is simulated.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between ticks when --step is used (default: 0.3).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        default=None,
        help="Path to JSON or CSV workload file (default: built-in sample).",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=ALGORITHM_CHOICES,
        help=f"Algorithms to compare (default: {' '.join(ALGORITHM_CHOICES)}).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=2,
        help="Time quantum used for RR when included (default: 2).",
    )

    return parser


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )


def _load(workload: Optional[str]) -> List[Process]:
    if workload is None:
        logger.info("No workload given, using the built-in sample")
        return sample_workload()
    return load_workload(Path(workload))


def _print_result(sim: Simulation, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {sim.algorithm.value}")
    if sim.algorithm.uses_quantum:
        console.print(f"[bold]Quantum:[/bold] {sim.quantum}")

    console.print()

    if console.is_terminal:
        panel, time_marks = build_rich_gantt(sim.gantt)
        console.print(panel)
        if time_marks:
            console.print(time_marks)
    else:
        console.print(render_gantt(sim.gantt), markup=False, highlight=False)

    console.print()
    console.print(build_rich_waiting_chart(sim.waiting_history))
    console.print()

    metrics = sim.compute_metrics()
    if metrics is None:
        console.print("[yellow]Simulation has not finished; metrics are not available.[/yellow]")
        return

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Start",
        "Finish",
        "Wait",
        "Turnaround",
        "Response",
        "Priority",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in metrics.processes:
        proc_table.add_row(
            p.pid,
            str(p.arrival),
            str(p.burst),
            str(p.start),
            str(p.finish),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
            str(p.priority),
        )

    console.print(proc_table)
    console.print()

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Makespan", str(metrics.makespan))
    sys_table.add_row("Avg waiting", f"{metrics.avg_wait:.2f}")
    sys_table.add_row("Avg turnaround", f"{metrics.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{metrics.avg_response:.2f}")
    sys_table.add_row("Throughput (proc/time)", f"{metrics.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{metrics.cpu_util*100:.1f}%")
    sys_table.add_row("Idle ticks", str(metrics.idle_time))
    sys_table.add_row("Context switches", str(metrics.context_switches))

    console.print(sys_table)


def _step_through(sim: Simulation, delay: float, console: Console) -> None:
    """
    Drive the engine one tick at a time and print what ran, the waiting
    count and every process status after the tick.
    """
    console.print(f"[bold]Simulating {sim.algorithm.value}[/bold]")
    console.print("[dim]Press Ctrl+C to skip to the end.[/dim]")

    while not sim.is_finished:
        t = sim.sim_time
        sim.advance_tick()
        ran = sim.gantt[-1].pid
        waiting = sim.waiting_history[-1].waiting_count
        label = "[dim]idle[/dim]" if sim.gantt[-1].is_idle else f"[green]{ran}[/green]"
        statuses = " ".join(f"{p.pid}={sim.status_of(p).value}" for p in sim.processes)
        console.print(f"t={t:2d}: {label}  waiting={waiting}  {statuses}")
        time.sleep(delay)


def _run(args: argparse.Namespace, console: Console) -> int:
    processes = _load(args.workload)
    sim = Simulation.from_processes(processes, algorithm=args.algorithm, quantum=args.quantum)

    if args.step:
        try:
            _step_through(sim, delay=args.step_delay, console=console)
        except KeyboardInterrupt:
            console.print("[yellow]Stepping skipped.[/yellow]")

    # Pacing has no effect on the schedule; finish whatever is left.
    sim.run_to_completion()
    _print_result(sim, console)
    return 0


def _compare(args: argparse.Namespace, console: Console) -> int:
    processes = _load(args.workload)

    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Makespan", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("CPU util", justify="right")

    for name in args.algorithms:
        sim = Simulation.from_processes(processes, algorithm=name, quantum=args.quantum)
        sim.run_to_completion()
        metrics = sim.compute_metrics()
        if metrics is None:
            continue
        summary_table.add_row(
            sim.algorithm.value,
            str(sim.quantum) if sim.algorithm.uses_quantum else "",
            str(metrics.makespan),
            f"{metrics.avg_wait:.2f}",
            f"{metrics.avg_turnaround:.2f}",
            f"{metrics.avg_response:.2f}",
            f"{metrics.cpu_util*100:.1f}%",
        )

    console.print(summary_table)
    return 0


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.log_level)
    console = Console()

    try:
        if args.command == "run":
            return _run(args, console)
        if args.command == "compare":
            return _compare(args, console)
    except (SchedulerError, OSError) as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
