"""Typer-based command line interface.

Three commands operate on a breakdown file (``.json``, ``.yml`` or ``.yaml``):

``rank``
    Rank characters by salience and print (or write) the records.
``elements``
    Build the per-category element catalogue with location and wardrobe
    groups.
``run``
    Do both and write an analysis bundle directory.

Exit codes
----------
0 success
3 I/O error (missing file, unsupported extension, filesystem issues)
4 configuration error
5 input error (undecodable document, unexpected breakdown shape) or pipeline error
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from time import perf_counter
from types import TracebackType
from typing import Any, Optional

import typer
import yaml

from .breakdown import Breakdown, parse_breakdown
from .config import ConfigModel, load_config
from .io import read_document, write_document
from .link import build_global_elements, elements_to_dict
from .rank import rank_characters, rankings_to_dicts
from .report import analyze, document_digest, write_bundle
from .utils.errors import BreakdownError, UnsupportedFormatError
from .utils.logging import configure_logging

if not sys.stdout.isatty():  # pragma: no cover - CLI test context
    os.environ.setdefault("NO_COLOR", "1")

app = typer.Typer(
    name="sceneintel",
    help=(
        "Entity clustering and character salience for scene breakdowns. "
        "Use 'sceneintel run' to write a full analysis bundle."
    ),
)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _safe_exit(code: int, msg: str | None = None) -> None:
    """Exit the CLI with ``code`` emitting ``msg`` to stderr if provided."""

    if msg:
        typer.echo(msg, err=True)
    raise typer.Exit(code)


class Timing:
    """Context manager measuring elapsed milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end = 0.0

    def __enter__(self) -> "Timing":
        self._start = perf_counter()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._end = perf_counter()

    @property
    def ms(self) -> float:
        return (self._end - self._start) * 1000.0


def _load(
    in_path: Path, config_path: Path | None, verbose: bool
) -> tuple[ConfigModel, Any, Breakdown]:
    """Return configuration, raw document and parsed breakdown or exit."""

    configure_logging(verbose)
    try:
        cfg = load_config(config_path)
    except Exception as exc:  # pragma: no cover - diverse
        _safe_exit(4, str(exc).splitlines()[0] if str(exc) else type(exc).__name__)
    if verbose:
        typer.echo("Loaded config", err=True)

    try:
        document = read_document(in_path)
    except (FileNotFoundError, UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as exc:
        _safe_exit(5, f"{in_path}: {exc}")

    try:
        breakdown = parse_breakdown(document)
    except BreakdownError as exc:
        _safe_exit(5, str(exc))
    if verbose:
        typer.echo(f"Read {len(breakdown.scenes)} scenes", err=True)
    return cfg, document, breakdown


def _emit(data: Any, out_path: Path | None) -> None:
    if out_path is None:
        typer.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return
    try:
        write_document(out_path, data)
    except (UnsupportedFormatError, OSError) as exc:
        _safe_exit(3, str(exc))


@app.callback()
def main() -> None:
    """Entry point for the sceneintel command group."""
    pass


@app.command()
def rank(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Breakdown file (.json, .yml, .yaml)"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Write rankings to this .json file instead of stdout"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Rank characters by salience and assign tiers."""

    cfg, _, breakdown = _load(in_path, config_path, verbose)
    try:
        with Timing() as t_rank:
            rankings = rank_characters(breakdown.scenes, cfg)
    except Exception as exc:  # pragma: no cover - unexpected
        _safe_exit(5, f"{type(exc).__name__}: {exc}" if verbose else str(exc))
    if verbose:
        typer.echo(f"Ranked {len(rankings)} characters in {t_rank.ms:.1f} ms", err=True)
    _emit(rankings_to_dicts(rankings), out_path)


@app.command()
def elements(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Breakdown file (.json, .yml, .yaml)"
    ),
    out_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--out", help="Write the catalogue to this .json file instead of stdout"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    strategy: Optional[str] = typer.Option(  # noqa: B008
        None, "--strategy", help="Location clustering strategy [seed|transitive]"
    ),
    drop_vehicles: Optional[bool] = typer.Option(  # noqa: B008
        None,
        "--drop-vehicles/--keep-vehicles",
        help="Drop locations that read as picture vehicles",
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Build the element catalogue with location and wardrobe groups."""

    cfg, _, breakdown = _load(in_path, config_path, verbose)
    if strategy is not None and strategy not in ("seed", "transitive"):
        _safe_exit(4, f"unknown strategy: {strategy}")
    cfg = _apply_overrides(cfg, strategy=strategy, drop_vehicles=drop_vehicles)
    try:
        with Timing() as t_build:
            catalogue = build_global_elements(breakdown, cfg)
    except Exception as exc:  # pragma: no cover - unexpected
        _safe_exit(5, f"{type(exc).__name__}: {exc}" if verbose else str(exc))
    if verbose:
        groups = sum(len(data.groups) for data in catalogue.values())
        typer.echo(f"Built {groups} groups in {t_build.ms:.1f} ms", err=True)
    _emit(elements_to_dict(catalogue), out_path)


def _apply_overrides(
    cfg: ConfigModel,
    *,
    strategy: str | None,
    drop_vehicles: bool | None,
) -> ConfigModel:
    """Return a copy of ``cfg`` with CLI overrides applied."""

    new_cfg = cfg.model_copy(deep=True)
    if strategy is not None:
        new_cfg.locations.strategy = strategy  # type: ignore[assignment]
    if drop_vehicles is not None:
        new_cfg.locations.drop_vehicles = drop_vehicles
    return new_cfg


@app.command()
def run(
    in_path: Path = typer.Option(  # noqa: B008
        ..., "--in", "--input", help="Breakdown file (.json, .yml, .yaml)"
    ),
    out_dir: Path = typer.Option(  # noqa: B008
        ..., "--out-dir", help="Directory to write the analysis bundle"
    ),
    config_path: Optional[Path] = typer.Option(  # noqa: B008
        None, "--config", help="YAML config to override defaults"
    ),
    verbose: bool = typer.Option(  # noqa: B008
        False, "--verbose", "-v", help="Emit progress messages to stderr"
    ),
) -> None:
    """Build elements and rankings and write them as a bundle."""

    cfg, document, breakdown = _load(in_path, config_path, verbose)
    try:
        with Timing() as t_all:
            bundle = analyze(breakdown, cfg, input_sha256=document_digest(document))
    except Exception as exc:  # pragma: no cover - unexpected
        _safe_exit(5, f"{type(exc).__name__}: {exc}" if verbose else str(exc))
    if verbose:
        typer.echo(f"Analyzed in {t_all.ms:.1f} ms", err=True)

    try:
        written = write_bundle(out_dir, bundle)
    except OSError as exc:
        _safe_exit(3, str(exc))
    if verbose:
        for name, path in written.items():
            typer.echo(f"Wrote {name}: {path}", err=True)
