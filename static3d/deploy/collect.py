"""Collect the asset files under a directory, applying glob and size filters."""

from __future__ import annotations

import os
import re
from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from pathlib import Path

from static3d.types.asset import CollectedAsset

# `.gitkeep` only keeps empty directories alive; strategy definitions are
# folded into the manifest and never served from the CDN.
DEFAULT_IGNORE_PATTERNS: tuple[str, ...] = ("**/.gitkeep", "assetsStrategy/**")

_UNITS = {
    "": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
}
_NUMBER = re.compile(r"\+?[0-9]+")


class CollectError(Exception):
    """Raised when a glob pattern is invalid or a file cannot be inspected."""


@dataclass
class CollectOptions:
    """Filters applied while collecting assets."""

    ignore: list[str] = field(default_factory=list)
    """Case-insensitive glob patterns to skip, added to the default ignores."""
    include: list[str] = field(default_factory=list)
    """Glob patterns a file must match; empty means every file."""
    max_file_size: str | None = None
    """Largest file size to keep, e.g. "10MB"; larger files are skipped."""


def parse_max_file_size(text: str) -> int | None:
    """Convert a size such as "10MB", "512KB", "1GB" or "4096" to bytes.

    Returns None when the text is not a valid size.
    """
    text = text.strip()
    pos = next((i for i, ch in enumerate(text) if ch.isalpha()), len(text))
    number, unit = text[:pos].strip(), text[pos:].upper()
    if not _NUMBER.fullmatch(number):
        return None
    multiplier = _UNITS.get(unit)
    if multiplier is None:
        return None
    return int(number) * multiplier


def _glob_to_regex(pattern: str) -> str:
    parts: list[str] = []
    in_alternate = False
    i, n = 0, len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "*":
            if pattern.startswith("**", i):
                after = i + 2
                at_segment_start = i == 0 or pattern[i - 1] == "/"
                if at_segment_start and after < n and pattern[after] == "/":
                    parts.append("(?:.*/)?")
                    i = after + 1
                else:
                    parts.append(".*")
                    i = after
            else:
                parts.append(".*")
                i += 1
        elif ch == "?":
            parts.append(".")
            i += 1
        elif ch == "[":
            j = i + 1
            negate = j < n and pattern[j] in "!^"
            if negate:
                j += 1
            body_start = j
            if j < n and pattern[j] == "]":
                j += 1
            close = pattern.find("]", j)
            if close < 0:
                raise ValueError("unclosed character class")
            body = "".join("-" if c == "-" else re.escape(c) for c in pattern[body_start:close])
            parts.append(f"[{'^' if negate else ''}{body}]")
            i = close + 1
        elif ch == "{":
            if in_alternate:
                raise ValueError("nested alternate groups are not allowed")
            in_alternate = True
            parts.append("(?:")
            i += 1
        elif ch == "}" and in_alternate:
            in_alternate = False
            parts.append(")")
            i += 1
        elif ch == "," and in_alternate:
            parts.append("|")
            i += 1
        elif ch == "\\":
            if i + 1 >= n:
                raise ValueError("dangling escape")
            parts.append(re.escape(pattern[i + 1]))
            i += 2
        else:
            parts.append(re.escape(ch))
            i += 1
    if in_alternate:
        raise ValueError("unclosed alternate group")
    return "".join(parts)


def _compile_glob(pattern: str) -> re.Pattern[str]:
    try:
        return re.compile(_glob_to_regex(pattern), re.IGNORECASE | re.DOTALL)
    except (ValueError, re.error) as exc:
        raise CollectError(f"glob pattern error `{pattern}`: {exc}") from exc


def _build_globset(patterns: Sequence[str]) -> list[re.Pattern[str]] | None:
    if not patterns:
        return None
    return [_compile_glob(p) for p in patterns]


def _matches(globset: list[re.Pattern[str]], key: str) -> bool:
    return any(rx.fullmatch(key) for rx in globset)


def _walk_files(root: Path) -> Iterator[Path]:
    """Yield every file below `root`, following links and skipping unreadable entries."""
    if root.is_file():
        yield root
        return
    visited: set[tuple[int, int]] = set()
    for dirpath, dirnames, filenames in os.walk(root, followlinks=True):
        try:
            st = os.stat(dirpath)
        except OSError:
            dirnames[:] = []
            continue
        ident = (st.st_dev, st.st_ino)
        if ident in visited:
            dirnames[:] = []
            continue
        visited.add(ident)
        for name in filenames:
            path = Path(dirpath, name)
            if path.is_file():
                yield path


def collect(root_dir: str | os.PathLike[str], opts: CollectOptions | None = None) -> list[CollectedAsset]:
    """Walk `root_dir` recursively and return its assets sorted by key.

    The key is the path relative to `root_dir` with "/" separators. Files
    matching an ignore pattern, not matching any include pattern, or larger
    than the size limit are skipped.
    """
    opts = opts or CollectOptions()
    root = Path(root_dir)
    ignore_set = _build_globset([*DEFAULT_IGNORE_PATTERNS, *opts.ignore])
    include_set = _build_globset(opts.include)
    max_bytes = parse_max_file_size(opts.max_file_size) if opts.max_file_size is not None else None

    assets: list[CollectedAsset] = []
    for path in _walk_files(root):
        try:
            rel = path.relative_to(root)
        except ValueError:
            rel = path
        key = "" if rel == Path(".") else str(rel).replace("\\", "/")

        if ignore_set is not None and _matches(ignore_set, key):
            continue
        if include_set is not None and not _matches(include_set, key):
            continue

        try:
            size = os.stat(path).st_size
        except OSError as exc:
            raise CollectError(f"I/O error at `{path}`: {exc}") from exc

        if max_bytes is not None and size > max_bytes:
            continue

        assets.append(CollectedAsset(key=key, absolute_path=path, size=size))

    assets.sort(key=lambda asset: asset.key)
    return assets