"""Command-line interface for animatr.

Inspects easing curves and springs, and runs animations offline with a fake
clock so their frame-by-frame values can be checked without a display.
"""

from __future__ import annotations

import argparse
import logging
import math
import sys
from collections.abc import Sequence
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from animatr.core.config.loader import configure_logging, load_app_config
from animatr.core.config.models import AppConfig, KineticValueConfig
from animatr.core.curves.library import (
    CURVE_CONTROL_POINTS,
    EasingSpec,
    NamedCurve,
    get_curve,
    parse_curve_name,
)
from animatr.core.curves.sampling import sample_easing
from animatr.core.curves.spring import solve_spring
from animatr.core.playback.kinetic import KineticValue
from animatr.core.playback.simulation import Sample, Simulation, simulate
from animatr.core.utils.logging import configure_logging as configure_logging_level
from animatr.core.utils.logging import get_logger

console = Console()
logger = logging.getLogger(__name__)

BAR_WIDTH = 40


def _parse_ease(text: str) -> EasingSpec:
    """Parse a curve name or comma-separated cubic-bezier control points."""
    if "," in text:
        points = [float(p) for p in text.split(",")]
        if len(points) != 4:
            raise ValueError(f"expected 4 control points x1,y1,x2,y2, got {len(points)}")
        return tuple(points)
    return parse_curve_name(text)


def _setup(args: argparse.Namespace) -> AppConfig:
    """Load app config and configure logging (an explicit --log-level wins)."""
    config_path = Path(args.config) if getattr(args, "config", None) else None
    app_config = load_app_config(config_path)
    if args.log_level:
        configure_logging_level(level=args.log_level)
    else:
        configure_logging(app_config)
    return app_config


def _bar(value: float, lo: float, hi: float) -> str:
    if hi == lo:
        return ""
    filled = round((value - lo) / (hi - lo) * BAR_WIDTH)
    return "█" * max(0, min(BAR_WIDTH, filled))


def _print_samples(title: str, samples: Sequence[Sample], max_rows: int) -> None:
    if not samples:
        console.print("[yellow]No samples recorded[/yellow]")
        return
    lo = min(s.value for s in samples)
    hi = max(s.value for s in samples)
    stride = max(1, math.ceil(len(samples) / max_rows))
    shown = list(samples[::stride])
    if shown[-1] is not samples[-1]:
        shown.append(samples[-1])

    table = Table(title=title, show_header=True)
    table.add_column("t (ms)", style="cyan", justify="right")
    table.add_column("Value", style="yellow", justify="right")
    table.add_column("", style="green", width=BAR_WIDTH)
    for sample in shown:
        table.add_row(f"{sample.t_ms:.1f}", f"{sample.value:.4f}", _bar(sample.value, lo, hi))
    console.print(table)


def cmd_curves(args: argparse.Namespace) -> int:
    """List the named curves, or sample one of them."""
    _setup(args)

    if args.name:
        curve = parse_curve_name(args.name)
        points = sample_easing(get_curve(curve), args.samples)
        _print_samples(
            f"{curve.value} ({args.samples} samples)",
            [Sample(p.t, p.v) for p in points],
            max_rows=args.samples,
        )
        return 0

    table = Table(title="Named Curves", show_header=True)
    table.add_column("Name", style="cyan")
    table.add_column("Control points (x1, y1, x2, y2)", style="yellow")
    for curve in NamedCurve:
        points = CURVE_CONTROL_POINTS.get(curve)
        table.add_row(curve.value, "identity" if points is None else ", ".join(f"{p:g}" for p in points))
    console.print(table)
    return 0


def cmd_spring(args: argparse.Namespace) -> int:
    """Solve a spring curve and print its parameters and samples."""
    _setup(args)

    curve = solve_spring(
        damping=args.damping,
        stiffness=args.stiffness,
        initial_position=args.position,
        initial_velocity=args.velocity,
    )
    console.print(
        f"[bold]Spring[/bold] zeta={curve.zeta:g} A={curve.A:g} B={curve.B:.6g} "
        f"omega={curve.omega:.6g} omega_d={curve.omega_d:.6g}"
    )
    points = curve.sample(args.samples)
    _print_samples("Displacement", [Sample(p.t, p.v) for p in points], max_rows=args.samples)
    return 0


def cmd_simulate(args: argparse.Namespace) -> int:
    """Play an AnimatedValue offline and print its values per frame."""
    app_config = _setup(args)

    if args.preset:
        if args.preset not in app_config.animations:
            raise ValueError(f"no animation preset named {args.preset!r}")
        preset = app_config.animations[args.preset]
        start, end, ease = preset.start, preset.end, preset.ease
    else:
        start, end, ease = args.start, args.end, _parse_ease(args.ease)

    frame_ms = args.frame_ms if args.frame_ms is not None else app_config.scheduler.frame_interval_ms
    result = simulate(start, end, args.duration, ease, frame_ms=frame_ms, max_frames=args.max_frames)

    _print_samples(f"{start:g} -> {end:g} over {args.duration:g} ms", result.samples, args.max_rows)
    for warning in result.warnings:
        console.print(f"[yellow]⚠️  {warning}[/yellow]")
    console.print(f"Frames: {result.frames}  Completed: {result.completed}")
    return 0 if result.completed else 1


def cmd_kinetic(args: argparse.Namespace) -> int:
    """Spring a KineticValue through a series of targets offline."""
    app_config = _setup(args)

    frame_ms = args.frame_ms if args.frame_ms is not None else app_config.scheduler.frame_interval_ms
    sim = Simulation(frame_ms)

    if args.preset:
        if args.preset not in app_config.kinetics:
            raise ValueError(f"no kinetic preset named {args.preset!r}")
        config = app_config.kinetics[args.preset]
    else:
        config = KineticValueConfig(
            start=args.start,
            stiffness=args.stiffness,
            damping=args.damping,
            duration=args.duration,
        )
    value = KineticValue.from_config(config, scheduler=sim.scheduler, name="cli-kinetic")

    log = get_logger(__name__, command="kinetic", preset=args.preset)
    samples: list[Sample] = []
    signal = None
    for index, target in enumerate(args.targets):
        log.debug("Retarget to %s at %.1f ms", target, sim.now())
        signal = value.play_to(target)
        is_last = index == len(args.targets) - 1
        until_ms = None if is_last else sim.now() + args.retarget_ms
        chunk = sim.run(value.value, until_ms=until_ms, max_frames=args.max_frames)
        if samples and chunk and chunk[0].t_ms == samples[-1].t_ms:
            chunk = chunk[1:]
        samples.extend(chunk)

    targets = ", ".join(f"{t:g}" for t in args.targets)
    _print_samples(f"Kinetic {config.start:g} -> [{targets}]", samples, args.max_rows)
    completed = signal is not None and signal.done() and signal.result()
    console.print(f"Frames: {sim.host.frames_delivered}  Final value: {value.value():.4f}")
    return 0 if completed else 1


def build_arg_parser() -> argparse.ArgumentParser:
    """Build argument parser for CLI."""
    p = argparse.ArgumentParser(
        prog="animatr",
        description="animatr - frame-driven value animation with easing and spring physics",
    )
    p.add_argument(
        "--log-level",
        default=None,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the log level from the app config",
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    def add_config_args(parser: argparse.ArgumentParser) -> None:
        parser.add_argument("--config", default=None, help="Path to app config (JSON or YAML)")
        parser.add_argument("--preset", default=None, help="Named preset from the app config")

    curves = sub.add_parser("curves", help="List named curves or sample one")
    curves.add_argument("--name", default=None, help="Curve to sample (e.g. ease-out)")
    curves.add_argument("--samples", type=int, default=11, help="Number of samples (default: 11)")
    curves.set_defaults(func=cmd_curves)

    spring = sub.add_parser("spring", help="Solve and sample a spring curve")
    spring.add_argument("--damping", type=float, default=0.8, help="Damping ratio in [0, 1)")
    spring.add_argument("--stiffness", type=int, default=3, help="Half cycles before settling")
    spring.add_argument("--position", type=float, default=1.0, help="Initial displacement")
    spring.add_argument("--velocity", type=float, default=0.0, help="Initial velocity")
    spring.add_argument("--samples", type=int, default=21, help="Number of samples (default: 21)")
    spring.set_defaults(func=cmd_spring)

    sim = sub.add_parser("simulate", help="Play an animated value offline")
    sim.add_argument("--start", type=float, default=0.0)
    sim.add_argument("--end", type=float, default=1.0)
    sim.add_argument("--ease", default="linear", help="Curve name or x1,y1,x2,y2")
    sim.add_argument("--duration", type=float, default=300.0, help="Play time in ms")
    sim.add_argument("--frame-ms", type=float, default=None, help="Frame step in ms")
    sim.add_argument("--max-frames", type=int, default=10_000)
    sim.add_argument("--max-rows", type=int, default=40, help="Rows to print")
    add_config_args(sim)
    sim.set_defaults(func=cmd_simulate)

    kin = sub.add_parser("kinetic", help="Spring a kinetic value through targets offline")
    kin.add_argument("--targets", type=float, nargs="+", required=True)
    kin.add_argument("--retarget-ms", type=float, default=300.0, help="Time between targets")
    kin.add_argument("--start", type=float, default=0.0)
    kin.add_argument("--stiffness", type=int, default=3)
    kin.add_argument("--damping", type=float, default=0.8)
    kin.add_argument("--duration", type=float, default=1000.0, help="Spring window in ms")
    kin.add_argument("--frame-ms", type=float, default=None, help="Frame step in ms")
    kin.add_argument("--max-frames", type=int, default=10_000)
    kin.add_argument("--max-rows", type=int, default=40, help="Rows to print")
    add_config_args(kin)
    kin.set_defaults(func=cmd_kinetic)

    for parser in (curves, spring):
        parser.add_argument("--config", default=None, help="Path to app config (JSON or YAML)")

    return p


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for CLI."""
    p = build_arg_parser()
    args = p.parse_args(argv)
    logger.debug("Running command %s", args.cmd)

    try:
        return args.func(args)
    except (TypeError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]ERROR: {escape(str(e))}[/red]")
        return 1


if __name__ == "__main__":
    sys.exit(main())
