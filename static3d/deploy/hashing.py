"""SHA-256 content hashes and hashed file names such as `model.a1b2c3d4.glb`."""

from __future__ import annotations

import hashlib
import os
from collections.abc import Iterable
from pathlib import Path

from static3d.types.asset import CollectedAsset, HashedAsset

DEFAULT_HASH_LENGTH = 8
"""Number of leading hex characters of the SHA-256 digest used in names."""

_CHUNK_SIZE = 65536


class HashError(Exception):
    """Raised when a file cannot be read for hashing."""


def sha256_file(path: str | os.PathLike[str]) -> str:
    """Return the hex SHA-256 digest of the whole file at `path`."""
    digest = hashlib.sha256()
    try:
        with open(path, "rb") as handle:
            for chunk in iter(lambda: handle.read(_CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise HashError(f"I/O error reading `{path}`: {exc}") from exc
    return digest.hexdigest()


def insert_hash_into_key(key: str, hash: str) -> str:
    """Insert `hash` before the extension of the file name in `key`.

    "assets/model.glb" becomes "assets/model.<hash>.glb"; a name without an
    extension gets ".<hash>" appended.
    """
    directory, slash, filename = key.rpartition("/")
    prefix = directory + slash
    stem, dot, ext = filename.rpartition(".")
    if dot:
        new_filename = f"{stem}.{hash}.{ext}"
    else:
        new_filename = f"{filename}.{hash}"
    return prefix + new_filename


def hash_assets(
    assets: Iterable[CollectedAsset], hash_length: int = DEFAULT_HASH_LENGTH
) -> list[HashedAsset]:
    """Hash each collected asset and derive its hashed key and file name."""
    result: list[HashedAsset] = []
    for asset in assets:
        full_hash = sha256_file(asset.absolute_path)
        short_hash = full_hash[:hash_length]
        hashed_key = insert_hash_into_key(asset.key, short_hash)
        result.append(
            HashedAsset(
                key=asset.key,
                absolute_path=Path(asset.absolute_path),
                size=asset.size,
                hash=short_hash,
                hashed_filename=hashed_key.rsplit("/", 1)[-1],
                hashed_key=hashed_key,
            )
        )
    return result