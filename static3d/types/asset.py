"""Asset records produced while collecting and hashing files for deployment."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


@dataclass
class CollectedAsset:
    """A file found on disk, before its content hash is known."""

    key: str
    absolute_path: Path
    size: int

    def __post_init__(self) -> None:
        self.absolute_path = Path(self.absolute_path)


@dataclass
class HashedAsset:
    """A collected file together with its content hash and hashed names."""

    key: str
    absolute_path: Path
    size: int
    hash: str
    hashed_filename: str
    hashed_key: str

    def __post_init__(self) -> None:
        self.absolute_path = Path(self.absolute_path)


class AssetDiff(str, Enum):
    """How an asset differs from the previous version."""

    ADDED = "added"
    MODIFIED = "modified"
    DELETED = "deleted"
    UNCHANGED = "unchanged"


class AssetStrategy(str, Enum):
    """How an asset is delivered."""

    STATIC = "static"
    IFRAME = "iframe"
    CDN = "cdn"