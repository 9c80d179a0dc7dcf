"""Declarative asset delivery strategy settings."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
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


def _str_list(data: Mapping, name: str, owner: str) -> list[str]:
    items = _get(data, name, list, owner)
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"{owner}: `{name}` must be a list of strings")
    return list(items)


class ReloadTrigger(str, Enum):
    """What causes the manifest to be fetched again."""

    MANIFEST_CHANGE = "manifest-change"
    INTERVAL = "interval"
    MANUAL = "manual"


class ReloadStrategy(str, Enum):
    """Whether a reload fetches only changed assets or everything."""

    DIFF = "diff"
    FULL = "full"


@dataclass
class InitialConfig:
    """Assets needed for the first render."""

    sources: list[str]
    cache: bool
    fallback: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> InitialConfig:
        owner = "InitialConfig"
        data = _mapping(data, owner)
        return cls(
            sources=_str_list(data, "sources", owner),
            cache=_get(data, "cache", bool, owner),
            fallback=_get(data, "fallback", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {"sources": list(self.sources), "cache": self.cache, "fallback": self.fallback}


@dataclass
class CdnStrategyConfig:
    """Assets fetched asynchronously from the CDN."""

    files: list[str]
    cache: bool
    max_age: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> CdnStrategyConfig:
        owner = "CdnStrategyConfig"
        data = _mapping(data, owner)
        return cls(
            files=_str_list(data, "files", owner),
            cache=_get(data, "cache", bool, owner),
            max_age=_get(data, "maxAge", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {"files": list(self.files), "cache": self.cache, "maxAge": self.max_age}


@dataclass
class ReloadConfig:
    """Reload policy."""

    trigger: ReloadTrigger
    strategy: ReloadStrategy
    interval_ms: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> ReloadConfig:
        owner = "ReloadConfig"
        data = _mapping(data, owner)
        return cls(
            trigger=ReloadTrigger(_get(data, "trigger", str, owner)),
            strategy=ReloadStrategy(_get(data, "strategy", str, owner)),
            interval_ms=_get(data, "intervalMs", int, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "trigger": self.trigger.value,
            "strategy": self.strategy.value,
            "intervalMs": self.interval_ms,
        }


@dataclass
class AssetsStrategyConfig:
    """Complete delivery strategy: initial assets, CDN assets and reload policy."""

    initial: InitialConfig
    cdn: CdnStrategyConfig
    reload: ReloadConfig

    @classmethod
    def from_dict(cls, data: Mapping) -> AssetsStrategyConfig:
        owner = "AssetsStrategyConfig"
        data = _mapping(data, owner)
        return cls(
            initial=InitialConfig.from_dict(_get(data, "initial", Mapping, owner)),
            cdn=CdnStrategyConfig.from_dict(_get(data, "cdn", Mapping, owner)),
            reload=ReloadConfig.from_dict(_get(data, "reload", Mapping, owner)),
        )

    def to_dict(self) -> dict:
        return {
            "initial": self.initial.to_dict(),
            "cdn": self.cdn.to_dict(),
            "reload": self.reload.to_dict(),
        }

    def to_json(self, indent: int | None = None) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


@dataclass
class StrategyAsset:
    """An asset fetched according to a strategy."""

    key: str
    url: str
    hash: str
    size: int
    data: bytes