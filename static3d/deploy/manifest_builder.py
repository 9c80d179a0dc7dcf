"""Build a deployment manifest from hashed assets and serialise it as JSON."""

from __future__ import annotations

import json
import mimetypes
from collections.abc import Sequence
from dataclasses import dataclass, field

from static3d.types.asset import HashedAsset
from static3d.types.manifest import AssetEntry, DeployManifest

_DEFAULT_BUILD_TIME = "1970-01-01T00:00:00Z"
_OCTET_STREAM = "application/octet-stream"

_ASSET_TYPES = {
    "glb": "model/gltf-binary",
    "gltf": "model/gltf+json",
    "bin": _OCTET_STREAM,
    "ktx2": "image/ktx2",
    "basis": "image/basis",
    "draco": _OCTET_STREAM,
    "drc": _OCTET_STREAM,
}


class ManifestError(Exception):
    """Raised when an asset cannot be read or the manifest cannot be serialised."""


@dataclass
class ManifestOptions:
    """Settings for building a manifest."""

    cdn_base_url: str
    """CDN base URL; empty produces root-relative URLs such as "/js/main.js"."""
    version: str
    build_time: str | None = None
    """RFC 3339 build time; defaults to the Unix epoch when not given."""
    hashed_keys: set[str] = field(default_factory=set)
    """Keys whose URL uses the hashed key; all others keep their original key."""


def guess_content_type(key: str) -> str:
    """Guess a MIME type from the extension of `key`, knowing 3D asset formats."""
    ext = key.rsplit(".", 1)[-1].lower()
    known = _ASSET_TYPES.get(ext)
    if known is not None:
        return known
    guessed, _ = mimetypes.guess_type(key, strict=False)
    return guessed or _OCTET_STREAM


def _gltf_uris(document: object) -> list[str]:
    if not isinstance(document, dict):
        return []
    uris: list[str] = []
    for section in ("buffers", "images"):
        items = document.get(section)
        if not isinstance(items, list):
            continue
        for item in items:
            if isinstance(item, dict) and isinstance(item.get("uri"), str):
                uris.append(item["uri"])
    return uris


def _extract_gltf_dependencies(content: bytes, assets: Sequence[HashedAsset]) -> list[str]:
    """Resolve the external buffers and images of a glTF document to hashed keys."""
    try:
        document = json.loads(content)
    except ValueError:
        return []

    dependencies: list[str] = []
    for uri in _gltf_uris(document):
        if uri.startswith("data:"):
            continue
        match = next(
            (a for a in assets if a.key.rsplit("/", 1)[-1] == uri or a.key == uri),
            None,
        )
        if match is not None:
            dependencies.append(match.hashed_key)
    return dependencies


def build_manifest(assets: Sequence[HashedAsset], opts: ManifestOptions) -> DeployManifest:
    """Build a manifest keyed by each asset's original key.

    URLs are "{cdn_base_url}/{path}", or "/{path}" when the base URL is empty;
    glTF files get their external dependencies resolved.
    """
    base = opts.cdn_base_url.rstrip("/")
    build_time = opts.build_time if opts.build_time is not None else _DEFAULT_BUILD_TIME

    entries: dict[str, AssetEntry] = {}
    for asset in assets:
        url_path = asset.hashed_key if asset.key in opts.hashed_keys else asset.key
        url = f"{base}/{url_path}" if base else f"/{url_path}"

        dependencies = None
        if asset.key.endswith(".gltf"):
            try:
                content = asset.absolute_path.read_bytes()
            except OSError as exc:
                raise ManifestError(f"I/O error reading `{asset.absolute_path}`: {exc}") from exc
            dependencies = _extract_gltf_dependencies(content, assets) or None

        entries[asset.key] = AssetEntry(
            url=url,
            size=asset.size,
            hash=asset.hash,
            content_type=guess_content_type(asset.key),
            dependencies=dependencies,
        )

    return DeployManifest(
        schema_version=1,
        version=opts.version,
        build_time=build_time,
        assets=entries,
    )


def rewrite_urls_to_cdn(manifest: DeployManifest, cdn_base_url: str) -> None:
    """Turn root-relative asset URLs into absolute CDN URLs, in place.

    URLs that do not start with "/" are left alone, so repeating this is harmless.
    """
    base = cdn_base_url.rstrip("/")
    for entry in manifest.assets.values():
        if entry.url.startswith("/"):
            entry.url = f"{base}/{entry.url.lstrip('/')}"


def manifest_to_json(manifest: DeployManifest) -> str:
    """Serialise a manifest as indented JSON."""
    try:
        return manifest.to_json(indent=2)
    except (TypeError, ValueError) as exc:
        raise ManifestError(f"JSON serialization error: {exc}") from exc