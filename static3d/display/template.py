"""HTML templates for the parent page and for the parts split out of it.

Each page embeds the delivery strategy as a JSON script block and a small
bootstrap script that exposes it, together with the manifest URL, as
``window.__S3D_CONFIG__``.
"""

from __future__ import annotations

import json
from dataclasses import dataclass

from static3d.loader.strategy import AssetsStrategyConfig

_HEAD_PREAMBLE = (
    "<!DOCTYPE html>",
    '<html lang="en">',
    "<head>",
    '  <meta charset="UTF-8">',
    '  <meta name="viewport" content="width=device-width, initial-scale=1.0">',
)


@dataclass
class TemplateOptions:
    """Values shared by every generated page."""

    title: str
    manifest_url: str
    assets_strategy: AssetsStrategyConfig
    extra_head: str | None = None
    """HTML inserted at the end of ``<head>``."""


def escape_html(text: str) -> str:
    """Escape the HTML special characters in `text`."""
    replacements = {"&": "&amp;", "<": "&lt;", ">": "&gt;", '"': "&quot;", "'": "&#39;"}
    return "".join(replacements.get(ch, ch) for ch in text)


def _strategy_json(opts: TemplateOptions) -> str:
    try:
        return opts.assets_strategy.to_json(indent=2)
    except (TypeError, ValueError):
        return "{}"


def _json_string(value: str) -> str:
    return json.dumps(value, ensure_ascii=False)


def _bootstrap_script(fields: list[tuple[str, str]], trailer: str) -> list[str]:
    """Lines of the script that publishes the page configuration."""
    assignments = ",\n".join(f"        {name}: {value}" for name, value in fields)
    return [
        '  <script type="text/javascript">',
        "    (function() {",
        "      var cfg = JSON.parse(document.getElementById('s3d-strategy').textContent);",
        "      window.__S3D_CONFIG__ = {",
        assignments,
        "      };",
        "    })();",
        f"  </script>{trailer}",
    ]


def _document(
    title_html: str,
    after_title: str,
    fields: list[tuple[str, str]],
    after_scripts: str,
    body_content: str,
    opts: TemplateOptions,
) -> str:
    lines = [
        *_HEAD_PREAMBLE,
        f"  <title>{title_html}</title>{after_title}",
        '  <script type="application/json" id="s3d-strategy">',
        _strategy_json(opts),
        "  </script>",
        *_bootstrap_script(fields, after_scripts),
        "</head>",
        "<body>",
        body_content,
        "</body>",
        "</html>",
    ]
    return "\n".join(lines)


def render_parent_page(body_content: str, opts: TemplateOptions) -> str:
    """Render the complete parent page around `body_content`.

    `body_content` is expected to already hold the ``<iframe>`` tags that
    replace the parts cut out of it.
    """
    extra_head = f"\n  {opts.extra_head}" if opts.extra_head else ""
    fields = [
        ("manifestUrl", _json_string(opts.manifest_url)),
        ("strategy", "cfg"),
    ]
    return _document(escape_html(opts.title), "", fields, extra_head, body_content, opts)


def render_part_page(
    part_id: str,
    body_content: str,
    cache_control: str | None,
    opts: TemplateOptions,
) -> str:
    """Render a standalone page for one part.

    A Cache-Control value, when given, is emitted as an ``http-equiv`` meta tag.
    """
    cc_meta = ""
    if cache_control is not None:
        cc_meta = f'\n  <meta http-equiv="Cache-Control" content="{escape_html(cache_control)}">'
    fields = [
        ("manifestUrl", _json_string(opts.manifest_url)),
        ("strategy", "cfg"),
        ("partId", _json_string(part_id)),
    ]
    title_html = f"{escape_html(opts.title)} \u2014 {escape_html(part_id)}"
    return _document(title_html, cc_meta, fields, "", body_content, opts)