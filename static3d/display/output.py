"""Write generated HTML files into an output directory."""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

from static3d.display.iframe import Part


class OutputError(Exception):
    """Raised when an output file or directory cannot be written."""


@dataclass
class OutputFile:
    """A file to write, relative to the output directory."""

    relative_path: str
    content: str
    cache_control: str | None = None


def write_output_files(
    output_dir: str | os.PathLike[str], files: Iterable[OutputFile]
) -> list[Path]:
    """Write `files` under `output_dir`, creating parent directories as needed.

    Returns the paths written, in order.
    """
    root = Path(output_dir)
    written: list[Path] = []
    for file in files:
        dest = root / file.relative_path
        parent = dest.parent
        try:
            parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise OutputError(f"I/O error writing `{parent}`: {exc}") from exc
        try:
            dest.write_bytes(file.content.encode("utf-8"))
        except OSError as exc:
            raise OutputError(f"I/O error writing `{dest}`: {exc}") from exc
        written.append(dest)
    return written


def collect_output_files(
    parent_html: str,
    parts: Sequence[Part],
    part_htmls: Sequence[str],
    index_name: str = "index.html",
) -> list[OutputFile]:
    """Build the list of output files without writing them; the index comes first."""
    files = [OutputFile(relative_path=index_name, content=parent_html)]
    files.extend(
        OutputFile(relative_path=part.output_path, content=html, cache_control=part.cache_control)
        for part, html in zip(parts, part_htmls)
    )
    return files