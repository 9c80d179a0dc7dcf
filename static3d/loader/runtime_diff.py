"""Client-side comparison of a cached manifest with a freshly fetched one."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from static3d.types.asset import AssetDiff
from static3d.types.manifest import DeployManifest


@dataclass
class DiffEntry:
    """One key's change between two manifests."""

    key: str
    diff: AssetDiff
    url: str | None = None
    hash: str | None = None
    size: int = 0


def diff_manifests(old: DeployManifest | None, new: DeployManifest) -> list[DiffEntry]:
    """Compare a cached manifest (None on first load) with a new one, sorted by key.

    An asset is unchanged when its hash is the same; the URL is not compared.
    """
    old_assets = old.assets if old is not None else {}
    entries: list[DiffEntry] = []

    for key, new_entry in new.assets.items():
        old_entry = old_assets.get(key)
        if old_entry is None:
            diff = AssetDiff.ADDED
        elif old_entry.hash == new_entry.hash:
            diff = AssetDiff.UNCHANGED
        else:
            diff = AssetDiff.MODIFIED
        entries.append(
            DiffEntry(key=key, diff=diff, url=new_entry.url, hash=new_entry.hash, size=new_entry.size)
        )

    entries.extend(
        DiffEntry(key=key, diff=AssetDiff.DELETED)
        for key in old_assets
        if key not in new.assets
    )

    entries.sort(key=lambda entry: entry.key)
    return entries


def needs_fetch(entries: Iterable[DiffEntry]) -> list[DiffEntry]:
    """Entries that must be downloaded: added or modified."""
    return [e for e in entries if e.diff in (AssetDiff.ADDED, AssetDiff.MODIFIED)]


def needs_evict(entries: Iterable[DiffEntry]) -> list[DiffEntry]:
    """Entries whose cached copy must be dropped: deleted or modified."""
    return [e for e in entries if e.diff in (AssetDiff.DELETED, AssetDiff.MODIFIED)]