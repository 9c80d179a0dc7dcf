"""The deployment manifest: every deployed asset with its URL and hash."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


def _mapping(data: Any, owner: str) -> Mapping:
    if not isinstance(data, Mapping):
        raise ValueError(f"{owner}: expected a JSON object")
    return data


def _get(data: Mapping, name: str, kind: type, owner: str, *, optional: bool = False) -> Any:
    value = data.get(name)
    if value is None:
        if optional:
            return None
        raise ValueError(f"{owner}: missing field `{name}`")
    if kind is int:
        valid = isinstance(value, int) and not isinstance(value, bool) and value >= 0
    else:
        valid = isinstance(value, kind)
    if not valid:
        raise ValueError(f"{owner}: invalid value for `{name}`: {value!r}")
    return value


def _str_list(data: Mapping, name: str, owner: str, *, optional: bool = False) -> list[str] | None:
    items = _get(data, name, list, owner, optional=optional)
    if items is None:
        return None
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"{owner}: `{name}` must be a list of strings")
    return list(items)


@dataclass
class AssetEntry:
    """One asset in the manifest."""

    url: str
    size: int
    hash: str
    content_type: str
    dependencies: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> AssetEntry:
        owner = "AssetEntry"
        data = _mapping(data, owner)
        return cls(
            url=_get(data, "url", str, owner),
            size=_get(data, "size", int, owner),
            hash=_get(data, "hash", str, owner),
            content_type=_get(data, "contentType", str, owner),
            dependencies=_str_list(data, "dependencies", owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "size": self.size,
            "hash": self.hash,
            "contentType": self.content_type,
            "dependencies": list(self.dependencies) if self.dependencies is not None else None,
        }


@dataclass
class StrategyReload:
    """Reload section of a delivery strategy."""

    trigger: str
    strategy: str

    @classmethod
    def from_dict(cls, data: Mapping) -> StrategyReload:
        data = _mapping(data, "StrategyReload")
        return cls(
            trigger=_get(data, "trigger", str, "StrategyReload"),
            strategy=_get(data, "strategy", str, "StrategyReload"),
        )

    def to_dict(self) -> dict:
        return {"trigger": self.trigger, "strategy": self.strategy}


@dataclass
class StrategyEntry:
    """A named delivery strategy recorded in the manifest."""

    files: list[str]
    cache: bool
    initial: str | None = None
    max_age: str | None = None
    reload: StrategyReload | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> StrategyEntry:
        owner = "StrategyEntry"
        data = _mapping(data, owner)
        reload = _get(data, "reload", Mapping, owner, optional=True)
        return cls(
            files=_str_list(data, "files", owner),
            cache=_get(data, "cache", bool, owner),
            initial=_get(data, "initial", str, owner, optional=True),
            max_age=_get(data, "maxAge", str, owner, optional=True),
            reload=StrategyReload.from_dict(reload) if reload is not None else None,
        )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {"files": list(self.files)}
        if self.initial is not None:
            result["initial"] = self.initial
        result["cache"] = self.cache
        if self.max_age is not None:
            result["maxAge"] = self.max_age
        if self.reload is not None:
            result["reload"] = self.reload.to_dict()
        return result


@dataclass
class DeployManifest:
    """All assets of one deployed version, keyed by their original path."""

    schema_version: int
    version: str
    build_time: str
    assets: dict[str, AssetEntry] = field(default_factory=dict)
    strategies: dict[str, StrategyEntry] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Mapping) -> DeployManifest:
        owner = "DeployManifest"
        data = _mapping(data, owner)
        assets = _get(data, "assets", Mapping, owner)
        strategies = _get(data, "strategies", Mapping, owner, optional=True) or {}
        return cls(
            schema_version=_get(data, "schemaVersion", int, owner),
            version=_get(data, "version", str, owner),
            build_time=_get(data, "buildTime", str, owner),
            assets={key: AssetEntry.from_dict(entry) for key, entry in assets.items()},
            strategies={name: StrategyEntry.from_dict(entry) for name, entry in strategies.items()},
        )

    def to_dict(self) -> dict:
        result: dict[str, Any] = {
            "schemaVersion": self.schema_version,
            "version": self.version,
            "buildTime": self.build_time,
            "assets": {key: entry.to_dict() for key, entry in self.assets.items()},
        }
        if self.strategies:
            result["strategies"] = {name: entry.to_dict() for name, entry in self.strategies.items()}
        return result

    @classmethod
    def from_json(cls, text: str | bytes) -> DeployManifest:
        """Parse a manifest from JSON; raises ValueError on bad input."""
        return cls.from_dict(json.loads(text))

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)