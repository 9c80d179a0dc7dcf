"""Display-side project configuration: output location, strategy and iframe split rules."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from static3d.loader.strategy import AssetsStrategyConfig

DEFAULT_TITLE = "s3d app"


class ConfigError(Exception):
    """Raised when a display configuration cannot be read, parsed or validated."""


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
    if not isinstance(value, kind):
        raise ValueError(f"{owner}: invalid value for `{name}`: {value!r}")
    return value


@dataclass
class IframePartRule:
    """How one marked part of a page is written out."""

    id: str
    output_path: str
    cache_control: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> IframePartRule:
        owner = "IframePartRule"
        data = _mapping(data, owner)
        return cls(
            id=_get(data, "id", str, owner),
            output_path=_get(data, "outputPath", str, owner),
            cache_control=_get(data, "cacheControl", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {"id": self.id, "outputPath": self.output_path, "cacheControl": self.cache_control}


@dataclass
class IframeConfig:
    """Iframe split settings; with no rules the page is written as a single file."""

    partition_rules: list[IframePartRule] = field(default_factory=list)
    iframe_attrs: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> IframeConfig:
        owner = "IframeConfig"
        data = _mapping(data, owner)
        rules = _get(data, "partitionRules", list, owner)
        return cls(
            partition_rules=[IframePartRule.from_dict(rule) for rule in rules],
            iframe_attrs=_get(data, "iframeAttrs", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "partitionRules": [rule.to_dict() for rule in self.partition_rules],
            "iframeAttrs": self.iframe_attrs,
        }


@dataclass
class DisplayProjectConfig:
    """Top-level display configuration."""

    output_dir: str
    manifest_url: str
    assets_strategy: AssetsStrategyConfig
    iframe: IframeConfig = field(default_factory=IframeConfig)
    title: str | None = None
    extra_head: str | None = None

    @classmethod
    def from_file(cls, path: str | Path) -> DisplayProjectConfig:
        """Read, parse and validate a configuration file."""
        try:
            text = Path(path).read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"I/O error reading config `{path}`: {exc}") from exc
        return cls.from_json(text, str(path))

    @classmethod
    def from_json(cls, text: str, source_path: str) -> DisplayProjectConfig:
        """Parse and validate JSON text; `source_path` is used in error messages."""
        try:
            config = cls.from_dict(json.loads(text))
        except ValueError as exc:
            raise ConfigError(f"JSON parse error in `{source_path}`: {exc}") from exc
        config.validate()
        return config

    @classmethod
    def from_dict(cls, data: Mapping) -> DisplayProjectConfig:
        """Build a configuration from decoded JSON without validating it."""
        owner = "DisplayProjectConfig"
        data = _mapping(data, owner)
        iframe = _get(data, "iframe", Mapping, owner, optional=True)
        return cls(
            output_dir=_get(data, "outputDir", str, owner),
            manifest_url=_get(data, "manifestUrl", str, owner),
            assets_strategy=AssetsStrategyConfig.from_dict(_get(data, "assetsStrategy", Mapping, owner)),
            iframe=IframeConfig.from_dict(iframe) if iframe is not None else IframeConfig(),
            title=_get(data, "title", str, owner, optional=True),
            extra_head=_get(data, "extraHead", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "outputDir": self.output_dir,
            "manifestUrl": self.manifest_url,
            "assetsStrategy": self.assets_strategy.to_dict(),
            "iframe": self.iframe.to_dict(),
            "title": self.title,
            "extraHead": self.extra_head,
        }

    def validate(self) -> None:
        """Raise ConfigError when required values are empty or part ids clash."""
        if not self.output_dir:
            raise ConfigError("Validation error: outputDir must not be empty")
        if not self.manifest_url:
            raise ConfigError("Validation error: manifestUrl must not be empty")
        seen: set[str] = set()
        for rule in self.iframe.partition_rules:
            if not rule.id:
                raise ConfigError("Validation error: partition rule id must not be empty")
            if rule.id in seen:
                raise ConfigError(f"Validation error: duplicate partition rule id: `{rule.id}`")
            seen.add(rule.id)

    def page_title(self) -> str:
        """The page title, defaulting to "s3d app"."""
        return self.title if self.title is not None else DEFAULT_TITLE