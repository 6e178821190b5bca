"""Batch conversion: discover notes, convert each, write HTML/JSON output files"""

import logging
from pathlib import Path

from mdpost.core.convert import Backend, convert
from mdpost.core.metadata import SUBTITLE_MAX_LENGTH, SubtitlePolicy
from mdpost.core.models import ConversionResult
from mdpost.core.utils.slug import slugify


logger = logging.getLogger(__name__)

MD_EXTENSIONS = {'.md', '.markdown'}


def discover_files(path: Path) -> list[Path]:
    """Return sorted markdown files under path, or [path] if a single markdown file."""
    if path.is_file():
        return [path] if path.suffix in MD_EXTENSIONS else []
    return sorted(p for p in path.rglob('*') if p.suffix in MD_EXTENSIONS)


def convert_file(
    path: Path,
    backend: Backend | str = Backend.html,
    subtitle_policy: SubtitlePolicy | str = SubtitlePolicy.frontmatter,
    fallback_title: str = None,
    subtitle_max_length: int = SUBTITLE_MAX_LENGTH,
    ) -> ConversionResult:
    """Convert one note; the file stem is the fallback title unless one is given."""
    raw = path.read_text(encoding='utf-8')
    return convert(
        raw,
        fallback_title or path.stem,
        backend=backend,
        subtitle_policy=subtitle_policy,
        subtitle_max_length=subtitle_max_length,
    )


def write_result(result: ConversionResult, output_dir: Path, slug: str) -> list[Path]:
    """Write <slug>.json and, for HTML documents, <slug>.html. Returns written paths."""
    output_dir.mkdir(parents=True, exist_ok=True)
    json_path = output_dir / f"{slug}.json"
    json_path.write_text(result.model_dump_json(indent=2), encoding='utf-8')
    written = [json_path]
    if isinstance(result.document, str):
        html_path = output_dir / f"{slug}.html"
        html_path.write_text(result.document, encoding='utf-8')
        written.append(html_path)
    return written


def run_build(
    path: str,
    output_dir: Path,
    backend: Backend | str = Backend.html,
    subtitle_policy: SubtitlePolicy | str = SubtitlePolicy.frontmatter,
    subtitle_max_length: int = SUBTITLE_MAX_LENGTH,
    fallback_title: str = None,
    ) -> list[tuple[Path, list[Path]]]:
    """Convert every note under path into output_dir. Returns (source_path, written_files) pairs.

    Notes without a title fall back to fallback_title, or to their file stem when it is None.

    Output mirrors the source directory structure:
      output_dir / <parent relative to path> / <slug>.{json|html}
    """
    root = Path(path)
    results = []
    for p in discover_files(root):
        dest_dir = output_dir / p.parent.relative_to(root) if root.is_dir() else output_dir
        try:
            result = convert_file(p, backend, subtitle_policy, fallback_title, subtitle_max_length)
            written = write_result(result, dest_dir, slugify(p.stem))
        except Exception as e:
            raise RuntimeError(f"Failed to convert {p}: {e}") from e
        logger.debug("Converted %s -> %s", p, ", ".join(str(w) for w in written))
        results.append((p, written))
    return results
