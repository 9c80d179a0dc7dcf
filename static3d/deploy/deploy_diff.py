"""Compare the manifests of two deployments to decide what to upload or delete."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from static3d.types.asset import AssetDiff
from static3d.types.manifest import DeployManifest


@dataclass
class DiffEntry:
    """One asset key and how it changed."""

    key: str
    diff: AssetDiff


def diff_manifests(old: DeployManifest | None, new: DeployManifest) -> list[DiffEntry]:
    """Compare the previous manifest (None on first deploy) with a new one, sorted by key.

    An asset is unchanged only when both its hash and its URL are the same.
    """
    if old is None:
        return sorted(
            (DiffEntry(key=key, diff=AssetDiff.ADDED) for key in new.assets),
            key=lambda entry: entry.key,
        )

    entries: list[DiffEntry] = []
    for key, new_entry in new.assets.items():
        old_entry = old.assets.get(key)
        if old_entry is None:
            diff = AssetDiff.ADDED
        elif old_entry.hash == new_entry.hash and old_entry.url == new_entry.url:
            diff = AssetDiff.UNCHANGED
        else:
            diff = AssetDiff.MODIFIED
        entries.append(DiffEntry(key=key, diff=diff))

    entries.extend(
        DiffEntry(key=key, diff=AssetDiff.DELETED) for key in old.assets if key not in new.assets
    )
    entries.sort(key=lambda entry: entry.key)
    return entries


def needs_upload(entries: Iterable[DiffEntry]) -> list[str]:
    """Keys that must be uploaded: added or modified."""
    return [e.key for e in entries if e.diff in (AssetDiff.ADDED, AssetDiff.MODIFIED)]


def needs_delete(entries: Iterable[DiffEntry]) -> list[str]:
    """Keys that are candidates for deletion."""
    return [e.key for e in entries if e.diff == AssetDiff.DELETED]