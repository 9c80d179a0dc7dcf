# static3d

A library for preparing static 3D web applications for delivery through a CDN:

- **`static3d.deploy`** – walk an asset directory, hash file contents,
  build a deployment manifest and compare the manifests of two releases.
- **`static3d.loader`** – the declarative asset delivery strategy, an
  in-memory asset cache and client-side manifest comparison.
- **`static3d.display`** – read a display project configuration, split
  HTML into iframe parts, render parent and part pages and write them out.
- **`static3d.types`** – the shared data model: assets, manifests,
  project configuration and loader options, with JSON conversion.

## Installation

```
pip install .
```

Python 3.10 or newer is required. There are no third-party runtime
dependencies.

## Building a manifest

```python
from pathlib import Path

from static3d.deploy.collect import CollectOptions, collect
from static3d.deploy.hashing import DEFAULT_HASH_LENGTH, hash_assets
from static3d.deploy.manifest_builder import (
    ManifestOptions,
    build_manifest,
    manifest_to_json,
    rewrite_urls_to_cdn,
)

collected = collect(Path("public"), CollectOptions(ignore=["**/*.map"], max_file_size="10MB"))
hashed = hash_assets(collected, DEFAULT_HASH_LENGTH)

manifest = build_manifest(
    hashed,
    ManifestOptions(
        cdn_base_url="",
        version="1.0.0",
        build_time="2026-01-01T00:00:00Z",
        hashed_keys={a.key for a in hashed},
    ),
)
rewrite_urls_to_cdn(manifest, "https://cdn.example.com")
Path("manifest.json").write_text(manifest_to_json(manifest))
```

- `collect` returns assets sorted by key, the path relative to the root
  with `/` separators. `.gitkeep` files and everything under
  `assetsStrategy/` are always skipped. `ignore` and `include` globs are
  matched without regard to case; `max_file_size` accepts sizes such as
  `"4096"`, `"512KB"`, `"10MB"` or `"1GB"` (see `parse_max_file_size`).
- `insert_hash_into_key("assets/model.glb", "a1b2c3d4")` gives
  `"assets/model.a1b2c3d4.glb"`.
- `build_manifest` keys entries by the original key. Only keys listed in
  `hashed_keys` get the hashed path in their URL. An empty `cdn_base_url`
  produces root-relative URLs, which `rewrite_urls_to_cdn` later turns into
  absolute ones; URLs that are already absolute are left alone.
- `guess_content_type` knows `.glb`, `.gltf`, `.ktx2`, `.basis`, `.bin`,
  `.draco` and `.drc`, and otherwise falls back to the standard library's
  MIME table. For `.gltf` files, external buffer and image URIs are resolved
  to the hashed keys of the matching assets and stored as `dependencies`.

## Working out what to upload

```python
from static3d.deploy.deploy_diff import diff_manifests, needs_delete, needs_upload

entries = diff_manifests(previous_manifest, manifest)  # previous_manifest may be None
to_upload = needs_upload(entries)
to_delete = needs_delete(entries)
```

An asset is unchanged only when both its hash and its URL match.
`static3d.loader.runtime_diff` offers the client-side variant, which
compares hashes only and keeps each entry's new URL, hash and size;
`needs_fetch` and `needs_evict` select from it, and
`static3d.loader.cache.AssetCache.evict_stale` drops cache entries whose
hash no longer matches the current manifest.

## Rendering pages

```python
from static3d.display.display_config import DisplayProjectConfig
from static3d.display.iframe import partition_page, replace_iframe_markers
from static3d.display.output import collect_output_files, write_output_files
from static3d.display.template import TemplateOptions, render_parent_page, render_part_page

config = DisplayProjectConfig.from_file("s3d-display.json")
opts = TemplateOptions(
    title=config.page_title(),
    manifest_url=config.manifest_url,
    assets_strategy=config.assets_strategy,
    extra_head=config.extra_head,
)

split = partition_page(body_html, config.iframe.partition_rules, config.iframe.iframe_attrs)
parent_body, markers = replace_iframe_markers(split.parent_content, config.iframe.iframe_attrs)

files = collect_output_files(
    render_parent_page(parent_body, opts),
    split.parts,
    [render_part_page(p.id, p.content, p.cache_control, opts) for p in split.parts],
    "index.html",
)
write_output_files(config.output_dir, files)
```

`DisplayProjectConfig.from_file` and `from_json` raise `ConfigError` when
the file cannot be read or parsed, when `outputDir` or `manifestUrl` is
empty, or when partition rule ids are empty or repeated.

Markers understood in HTML:

```html
<!-- s3d-part: header -->
<header>...</header>
<!-- s3d-part-end -->

<!-- s3d-iframe: price-123 src="parts/price-123.html" -->
```

`partition_page` cuts each part out and puts an `<iframe>` pointing at the
part's output path in its place (`parts/<id>.html` when no rule names it).
`replace_iframe_markers` turns the second form into an `<iframe>` carrying a
`data-s3d-id` attribute.

## What this package does not do

- It does not fetch assets over the network or upload them to storage;
  it computes what to fetch, cache, upload or delete.
- It has no ready-made display plugin that produces a site from a
  manifest in one call, and no storage plugin interface; pages are put
  together from the functions shown above.
- It provides no command-line tool.

## Running the tests

```
pip install ".[test]"
pytest
```