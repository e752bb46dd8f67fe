from __future__ import annotations

"""Command line interface for interpkit using Typer."""

from pathlib import Path
from typing import Dict, List, Optional

import json
import logging

import numpy as np
import typer
from pydantic import ValidationError

from ._typer import bad_parameter, fail
from .config import Settings, load_settings
from .core import (
    DegreeOptimizer,
    Denoiser,
    SampleGenerator,
    available_interpolators,
    compare_interpolators,
    create_interpolator,
)
from .errors import EvaluationError, InterpolationError
from .expression import ExpressionEvaluator
from .synthetic import multi_frequency, sine_with_clicks, sine_with_gaps, sine_with_noise
from .types import AudioBuffer
from .utils.logging import get_logger

app = typer.Typer(help="Interpolation, sampling and signal repair utilities")
logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Configuration overrides
# ---------------------------------------------------------------------------


def _parse_override_value(raw: str) -> object:
    lower = raw.lower()
    if lower in {"true", "false"}:
        return lower == "true"
    if lower in {"null", "none"}:
        return None
    for convert in (int, float):
        try:
            return convert(raw)
        except ValueError:
            pass
    if raw.startswith("[") or raw.startswith("{"):
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            bad_parameter(f"invalid JSON override value: {raw}", param_hint="--set")
    return raw


def _ensure_path(settings: Settings, keys: List[str]) -> None:
    current: object = settings
    for key in keys:
        if not hasattr(current, key):
            bad_parameter(f"unknown configuration key: {'.'.join(keys)}", param_hint="--set")
        current = getattr(current, key)


def _apply_override(data: Dict[str, object], keys: List[str], value: object) -> None:
    target = data
    for key in keys[:-1]:
        existing = target.get(key)
        if not isinstance(existing, dict):
            existing = {}
            target[key] = existing
        target = existing
    target[keys[-1]] = value


# ---------------------------------------------------------------------------
# Array files
# ---------------------------------------------------------------------------


def _load_array(path: Path) -> np.ndarray:
    if not path.exists():
        bad_parameter(f"input file not found: {path}", param_hint="INPUT")
    try:
        if path.suffix.lower() in {".csv", ".txt"}:
            return np.loadtxt(path, delimiter=",", ndmin=1)
        return np.load(path)
    except (OSError, ValueError) as exc:
        bad_parameter(f"failed to read {path}: {exc}", param_hint="INPUT")


def _save_array(path: Path, data: np.ndarray) -> None:
    if path.suffix.lower() in {".csv", ".txt"}:
        np.savetxt(path, data, delimiter=",")
    else:
        np.save(path, data)


def _load_points(path: Path) -> tuple[np.ndarray, np.ndarray]:
    data = _load_array(path)
    if data.ndim != 2 or data.shape[1] < 2:
        bad_parameter(
            f"{path} must hold two columns (x, y), got shape {data.shape}", param_hint="INPUT"
        )
    return data[:, 0], data[:, 1]


def _expression(text: str) -> ExpressionEvaluator:
    try:
        return ExpressionEvaluator(text)
    except EvaluationError as exc:
        bad_parameter(str(exc), param_hint="EXPRESSION")


# ---------------------------------------------------------------------------
# Commands
# ---------------------------------------------------------------------------


@app.callback()
def init(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        dir_okay=False,
        file_okay=True,
        exists=False,
        help="Path to a YAML or JSON configuration file.",
    ),
    set_overrides: List[str] = typer.Option(
        [],
        "--set",
        help="Override configuration values using dotted paths, e.g. denoise.threshold=2.5",
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialise the Typer context with validated settings."""

    if config is not None and not config.exists():
        bad_parameter(f"configuration file not found: {config}", param_hint="--config")

    try:
        settings = load_settings(config) if config else Settings()
    except (RuntimeError, TypeError, ValidationError, json.JSONDecodeError) as exc:
        bad_parameter(f"failed to load configuration: {exc}", param_hint="--config")

    if set_overrides:
        data = settings.model_dump()
        for override in set_overrides:
            if "=" not in override:
                bad_parameter(
                    "overrides must be of the form --set section.key=value", param_hint="--set"
                )
            key, raw_value = override.split("=", 1)
            if not key:
                bad_parameter("override key cannot be empty", param_hint="--set")
            keys = key.split(".")
            _ensure_path(settings, keys)
            _apply_override(data, keys, _parse_override_value(raw_value))
        try:
            settings = Settings.model_validate(data)
        except ValidationError as exc:
            bad_parameter(f"invalid configuration override: {exc}", param_hint="--set")

    get_logger("interpkit", logging.DEBUG if verbose else settings.logging.level)
    ctx.obj = settings


@app.command()
def evaluate(
    expression: str = typer.Argument(..., help="Expression in x, e.g. 'sin(x)^2'"),
    x: List[float] = typer.Option(..., "--x", "-x", help="Point(s) to evaluate at"),
) -> None:
    """Evaluate a single-variable expression at one or more points."""

    evaluator = _expression(expression)
    for value in x:
        try:
            typer.echo(f"f({value:g}) = {evaluator.evaluate(value):.10g}")
        except EvaluationError as exc:
            fail(exc)


@app.command()
def sample(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression in x"),
    x_min: Optional[float] = typer.Option(None, "--x-min"),
    x_max: Optional[float] = typer.Option(None, "--x-max"),
    n: Optional[int] = typer.Option(None, "--n", "-n"),
    chebyshev: Optional[bool] = typer.Option(None, "--chebyshev/--uniform"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Sample an expression on uniform or Chebyshev nodes."""

    cfg: Settings = ctx.obj
    x_min = cfg.sampling.x_min if x_min is None else x_min
    x_max = cfg.sampling.x_max if x_max is None else x_max
    n = cfg.sampling.n if n is None else n
    chebyshev = cfg.sampling.chebyshev if chebyshev is None else chebyshev

    generator = SampleGenerator(_expression(expression))
    try:
        samples = generator.generate_samples(x_min, x_max, n, chebyshev=chebyshev)
    except InterpolationError as exc:
        fail(exc)

    table = np.column_stack([samples.x, samples.y])
    if output:
        _save_array(output, table)
        typer.echo(f"saved {len(samples)} samples to {output}")
    else:
        for xv, yv in zip(samples.x, samples.y):
            typer.echo(f"{xv:.10g},{yv:.10g}")


@app.command()
def interpolate(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Two-column (x, y) .csv or .npy file"),
    method: Optional[str] = typer.Option(None, "--method", "-m"),
    at: List[float] = typer.Option([], "--at", help="Evaluate the fit at these points"),
    points: Optional[int] = typer.Option(None, "--points", "-p"),
    output: Optional[Path] = typer.Option(None, "--output", "-o"),
) -> None:
    """Fit one method to a point file and evaluate or resample it."""

    cfg: Settings = ctx.obj
    method = method or cfg.interpolation.method
    points = points or cfg.interpolation.points
    xs, ys = _load_points(input)

    try:
        interpolator = create_interpolator(method)
    except InterpolationError as exc:
        bad_parameter(str(exc), param_hint="--method")
    try:
        interpolator.set_data(xs, ys)
        typer.echo(interpolator.get_polynomial_equation())
        for value in at:
            typer.echo(f"{interpolator.name}({value:g}) = {interpolator.interpolate(value):.10g}")
        if output:
            lo, hi = interpolator.x_points[0], interpolator.x_points[-1]
            curve = interpolator.interpolate_range(lo, hi, points)
            _save_array(output, np.column_stack([np.linspace(lo, hi, points), curve]))
            typer.echo(f"saved {points} points to {output}")
    except InterpolationError as exc:
        fail(exc)


@app.command()
def compare(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Two-column (x, y) .csv or .npy file"),
    method: List[str] = typer.Option([], "--method", "-m", help="Methods to compare (default: all)"),
    points: Optional[int] = typer.Option(None, "--points", "-p"),
) -> None:
    """Fit several methods to the same points and report their errors."""

    cfg: Settings = ctx.obj
    xs, ys = _load_points(input)
    results, failures = compare_interpolators(
        xs, ys, method or available_interpolators(), points or cfg.interpolation.points
    )
    for result in results:
        typer.echo(str(result))
        typer.echo(f"  {result.equation}")
    for name, message in failures.items():
        typer.secho(f"{name}: failed: {message}", err=True)
    if not results:
        raise typer.Exit(1)


@app.command()
def optimize(
    ctx: typer.Context,
    expression: str = typer.Argument(..., help="Expression in x"),
    x_min: Optional[float] = typer.Option(None, "--x-min"),
    x_max: Optional[float] = typer.Option(None, "--x-max"),
    target: Optional[float] = typer.Option(None, "--target", "-t", help="Maximum absolute error"),
    min_n: Optional[int] = typer.Option(None, "--min-n"),
    max_n: Optional[int] = typer.Option(None, "--max-n"),
    method: Optional[str] = typer.Option(None, "--method", "-m"),
) -> None:
    """Find the smallest number of Chebyshev samples meeting an error target."""

    cfg: Settings = ctx.obj
    x_min = cfg.sampling.x_min if x_min is None else x_min
    x_max = cfg.sampling.x_max if x_max is None else x_max
    evaluator = _expression(expression)

    try:
        optimizer = DegreeOptimizer(evaluator, x_min, x_max, method, settings=cfg)
        result = optimizer.find_minimum_degree(target, min_n, max_n)
    except InterpolationError as exc:
        fail(exc)

    status = "reached" if result.converged else "not reached"
    typer.echo(
        f"n={result.n} (degree {result.n - 1}) max error={result.error:.3e} target {status}"
    )
    if not result.converged:
        raise typer.Exit(2)


SIGNALS = {
    "noise": lambda rng, f, d, sr: sine_with_noise(rng, f, d, sr, noise_level=0.05),
    "clicks": lambda rng, f, d, sr: sine_with_clicks(rng, f, d, sr),
    "gaps": lambda rng, f, d, sr: sine_with_gaps(rng, f, d, sr),
    "multi": lambda rng, f, d, sr: multi_frequency(rng, (f / 2, f, 2 * f), d, sr),
}


@app.command()
def generate(
    ctx: typer.Context,
    kind: str = typer.Argument(..., help=f"Signal kind: {', '.join(SIGNALS)}"),
    output: Path = typer.Option(..., "--output", "-o"),
    duration: float = typer.Option(1.0, "--duration", "-d", help="Length in seconds"),
    frequency: float = typer.Option(440.0, "--frequency", "-f", help="Base frequency in Hz"),
) -> None:
    """Write a synthetic test signal seeded from ``synthetic.seed``."""

    cfg: Settings = ctx.obj
    builder = SIGNALS.get(kind.lower())
    if builder is None:
        bad_parameter(f"unknown signal kind: {kind}", param_hint="KIND")

    rng = np.random.default_rng(cfg.synthetic.seed)
    try:
        buffer = builder(rng, frequency, duration, cfg.synthetic.sample_rate)
    except ValueError as exc:
        bad_parameter(str(exc), param_hint="--duration")

    _save_array(output, buffer.samples)
    logger.debug("generated %s signal with seed %d", kind, cfg.synthetic.seed)
    typer.echo(f"saved {buffer.frames} samples ({buffer.duration:.3f}s) to {output}")


@app.command()
def denoise(
    ctx: typer.Context,
    input: Path = typer.Argument(..., help="Sample buffer (.npy or .csv); 2-D input is averaged to mono"),
    output: Path = typer.Option(..., "--output", "-o"),
    method: Optional[str] = typer.Option(None, "--method", "-m"),
    threshold: Optional[float] = typer.Option(None, "--threshold", "-k"),
    window_size: Optional[int] = typer.Option(None, "--window-size", "-w"),
) -> None:
    """Smooth a sample buffer and repair its outliers."""

    cfg: Settings = ctx.obj
    data = _load_array(input)
    channels = data.shape[1] if data.ndim == 2 else 1
    buffer = AudioBuffer(data, cfg.synthetic.sample_rate, channels)

    try:
        repaired, report = Denoiser(cfg).repair_with_report(
            buffer, method, threshold, window_size
        )
    except InterpolationError as exc:
        fail(exc)

    _save_array(output, repaired)
    typer.echo(
        f"{report.outliers} outliers ({100.0 * report.outlier_ratio:.2f}%), "
        f"{report.interpolated} repaired, {report.fallback_windows} fallback windows"
    )
    typer.echo(f"saved {report.length} samples to {output}")


def main() -> None:
    """Execute the Typer application."""

    app()


if __name__ == "__main__":
    main()
