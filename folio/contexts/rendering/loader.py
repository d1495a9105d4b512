"""Load theme template sources from disk."""

from pathlib import Path
from typing import Dict

from folio.contexts.rendering.logger import _log_info


def load_template_sources(templates_dir: Path, extension: str = ".html") -> Dict[str, str]:
    """
    Read every template under a directory, keyed by logical path.

    The logical path is the file path relative to templates_dir, using forward
    slashes and without the extension:
        templates/components/header.html -> "components/header"

    Args:
        templates_dir: Root directory of the theme templates
        extension: Template file extension

    Returns:
        Dict mapping logical path to template source, sorted by path

    Raises:
        FileNotFoundError: If templates_dir does not exist
    """
    templates_dir = Path(templates_dir)
    if not templates_dir.is_dir():
        raise FileNotFoundError(f"Templates directory not found: {templates_dir}")

    sources = {}
    for template_file in sorted(templates_dir.rglob(f"*{extension}")):
        logical_path = template_file.relative_to(templates_dir).with_suffix("").as_posix()
        sources[logical_path] = template_file.read_text(encoding="utf-8")

    _log_info(f"Loaded {len(sources)} templates from {templates_dir}")
    return sources
