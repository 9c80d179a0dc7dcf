"""Split pages at part markers and turn iframe markers into iframe tags.

Two kinds of comment marker are understood:

* ``<!-- s3d-part: <id> -->`` ... ``<!-- s3d-part-end -->`` cuts the enclosed
  content out into its own part; the parent page gets an ``<iframe>`` in its place.
* ``<!-- s3d-iframe: <id> src="<url>" -->`` is a single marker replaced by an
  ``<iframe>`` that links to separately generated content, tagged with
  ``data-s3d-id`` so clients can find it.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from static3d.display.display_config import IframePartRule

DEFAULT_IFRAME_ATTRS = 'width="100%" frameborder="0"'

_PART_PREFIX = "<!-- s3d-part:"
_PART_END = "<!-- s3d-part-end -->"
_IFRAME_PREFIX = "<!-- s3d-iframe:"
_SUFFIX = "-->"


@dataclass
class Part:
    """One part cut out of a page."""

    id: str
    content: str
    output_path: str
    cache_control: str | None = None


@dataclass
class IframePartition:
    """A page split into its parent content and the parts cut out of it."""

    parent_content: str
    parts: list[Part] = field(default_factory=list)


@dataclass
class IframeMarker:
    """An ``s3d-iframe`` marker that was replaced."""

    id: str
    src: str


def _find_part_start(html: str) -> tuple[int, int, str] | None:
    """Return (start, end, id) of the first part start marker."""
    start = html.find(_PART_PREFIX)
    if start < 0:
        return None
    body_start = start + len(_PART_PREFIX)
    end_rel = html.find(_SUFFIX, body_start)
    if end_rel < 0:
        return None
    return start, end_rel + len(_SUFFIX), html[body_start:end_rel].strip()


def _resolve_rule(rules: Sequence[IframePartRule], part_id: str) -> tuple[str, str | None]:
    rule = next((r for r in rules if r.id == part_id), None)
    if rule is None:
        return f"parts/{part_id}.html", None
    return rule.output_path, rule.cache_control


def partition_page(
    html: str,
    rules: Sequence[IframePartRule],
    iframe_attrs: str | None = None,
) -> IframePartition:
    """Split `html` at ``s3d-part`` markers.

    Each part is replaced in the parent by an ``<iframe>`` pointing at the
    part's output path, taken from the matching rule or ``parts/<id>.html``.
    A start marker without an end marker leaves the rest of the page as is.
    """
    attrs = iframe_attrs if iframe_attrs is not None else DEFAULT_IFRAME_ATTRS
    pieces: list[str] = []
    parts: list[Part] = []
    remaining = html

    while remaining:
        found = _find_part_start(remaining)
        if found is None:
            pieces.append(remaining)
            break
        start, marker_end, part_id = found
        pieces.append(remaining[:start])

        end = remaining.find(_PART_END, marker_end)
        if end < 0:
            pieces.append(remaining[start:])
            break

        output_path, cache_control = _resolve_rule(rules, part_id)
        pieces.append(f'<iframe src="{output_path}" {attrs}></iframe>')
        parts.append(
            Part(
                id=part_id,
                content=remaining[marker_end:end].strip(),
                output_path=output_path,
                cache_control=cache_control,
            )
        )
        remaining = remaining[end + len(_PART_END):]

    return IframePartition(parent_content="".join(pieces), parts=parts)


def _parse_src_attr(text: str) -> str | None:
    """Extract the value of ``src="..."`` or ``src='...'``."""
    pos = text.find("src=")
    if pos < 0:
        return None
    after = text[pos + 4:]
    if not after or after[0] not in "\"'":
        return None
    quote = after[0]
    end = after.find(quote, 1)
    if end < 0:
        return None
    return after[1:end]


def _find_iframe_marker(html: str) -> tuple[int, int, str, str] | None:
    """Return (start, end, id, src) of the first iframe marker, if it parses."""
    start = html.find(_IFRAME_PREFIX)
    if start < 0:
        return None
    body_start = start + len(_IFRAME_PREFIX)
    end_rel = html.find(_SUFFIX, body_start)
    if end_rel < 0:
        return None
    pieces = html[body_start:end_rel].strip().split(None, 1)
    if len(pieces) != 2:
        return None
    marker_id, rest = pieces
    src = _parse_src_attr(rest.strip())
    if src is None:
        return None
    return start, end_rel + len(_SUFFIX), marker_id, src


def replace_iframe_markers(
    html: str, iframe_attrs: str | None = None
) -> tuple[str, list[IframeMarker]]:
    """Replace ``s3d-iframe`` markers with ``<iframe>`` tags.

    Returns the rewritten HTML and the markers found, in order. Scanning stops
    at the first marker that cannot be parsed; the rest is kept unchanged.
    """
    attrs = iframe_attrs if iframe_attrs is not None else DEFAULT_IFRAME_ATTRS
    pieces: list[str] = []
    markers: list[IframeMarker] = []
    remaining = html

    while remaining:
        found = _find_iframe_marker(remaining)
        if found is None:
            pieces.append(remaining)
            break
        start, end, marker_id, src = found
        pieces.append(remaining[:start])
        pieces.append(f'<iframe src="{src}" data-s3d-id="{marker_id}" {attrs}></iframe>')
        markers.append(IframeMarker(id=marker_id, src=src))
        remaining = remaining[end:]

    return "".join(pieces), markers