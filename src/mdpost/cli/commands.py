"""CLI command implementations"""

from pathlib import Path
from typing import Annotated, Optional

import typer

from mdpost.config import Settings, load_config
from mdpost.core.metadata import extract_metadata
from mdpost.core.pipeline import convert_file, run_build


def _fail(msg: str, cause: Exception = None) -> None:
    """Print a user-friendly error to stderr and exit 1."""
    typer.echo(f"Error: {msg}", err=True)
    if cause:
        typer.echo(f"  {cause}", err=True)
    raise typer.Exit(1)


def _settings(overrides: dict = None) -> Settings:
    """Load config with standard CLI error handling."""
    try:
        return load_config(overrides=overrides)
    except ValueError as e:
        _fail(str(e))


def _read(path: str) -> Path:
    p = Path(path)
    if not p.is_file():
        _fail(f"Input file not found: {path}")
    return p


def convert_cmd(
    path: Annotated[str, typer.Argument(help="Markdown note to convert")],
    backend: Annotated[Optional[str], typer.Option("--backend", help="html or tree")] = None,
    title: Annotated[Optional[str], typer.Option("--fallback-title", help="Title when none is found (default: file name)")] = None,
    policy: Annotated[Optional[str], typer.Option("--subtitle-policy", help="frontmatter or extended")] = None,
    out: Annotated[Optional[str], typer.Option("--out", "-o", help="Write result JSON here instead of stdout")] = None,
    ):
    """Convert one note and print the result (title, subtitle, tags, document) as JSON."""
    settings = _settings(overrides={"backend": backend, "subtitle_policy": policy, "fallback_title": title})
    source = _read(path)
    result = convert_file(
        source,
        settings.backend,
        settings.subtitle_policy,
        fallback_title=settings.fallback_title,
        subtitle_max_length=settings.subtitle_max_length,
    )
    payload = result.model_dump_json(indent=2)
    if out:
        Path(out).write_text(payload, encoding='utf-8')
        typer.echo(f"  {source} -> {out}")
    else:
        typer.echo(payload)


def meta_cmd(
    path: Annotated[str, typer.Argument(help="Markdown note to inspect")],
    title: Annotated[Optional[str], typer.Option("--fallback-title", help="Title when none is found (default: file name)")] = None,
    ):
    """Print every publishing field (title, tags, categories, schedule, ...) as JSON."""
    settings = _settings(overrides={"fallback_title": title})
    source = _read(path)
    meta = extract_metadata(source.read_text(encoding='utf-8'), settings.fallback_title or source.stem)
    typer.echo(meta.model_dump_json(indent=2, exclude={"content"}))


def build_cmd(
    path: Annotated[str, typer.Argument(help="File or directory to convert")],
    out: Annotated[Optional[str], typer.Option("--out-dir", help="Output directory")] = None,
    backend: Annotated[Optional[str], typer.Option("--backend", help="html or tree")] = None,
    policy: Annotated[Optional[str], typer.Option("--subtitle-policy", help="frontmatter or extended")] = None,
    title: Annotated[Optional[str], typer.Option("--fallback-title", help="Title when none is found (default: file name)")] = None,
    ):
    """Convert every note under path, writing <slug>.json (and <slug>.html) files."""
    settings = _settings(overrides={
        "output_dir": out, "backend": backend, "subtitle_policy": policy, "fallback_title": title,
    })
    output_dir = Path(settings.output_dir)
    try:
        results = run_build(
            path, output_dir, settings.backend, settings.subtitle_policy, settings.subtitle_max_length,
            fallback_title=settings.fallback_title,
        )
    except RuntimeError as e:
        _fail(str(e))
    for src, written in results:
        typer.echo(f"  {src} -> {', '.join(str(w) for w in written)}")
    typer.echo(f"Converted {len(results)} note(s) to {output_dir}/")
