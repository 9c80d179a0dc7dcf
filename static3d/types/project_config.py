"""Project-wide configuration as read from the project's JSON config file."""

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


def _str_list(data: Mapping, name: str, owner: str, *, optional: bool = False) -> list[str] | None:
    items = _get(data, name, list, owner, optional=optional)
    if items is None:
        return None
    if not all(isinstance(item, str) for item in items):
        raise ValueError(f"{owner}: `{name}` must be a list of strings")
    return list(items)


class CdnProvider(str, Enum):
    """Supported CDN providers."""

    CLOUDFLARE_R2 = "cloudflare-r2"


@dataclass
class PagesConfig:
    """Where generated pages are written and served from."""

    output_dir: str
    custom_domain: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> PagesConfig:
        data = _mapping(data, "PagesConfig")
        return cls(
            output_dir=_get(data, "outputDir", str, "PagesConfig"),
            custom_domain=_get(data, "customDomain", str, "PagesConfig", optional=True),
        )

    def to_dict(self) -> dict:
        return {"outputDir": self.output_dir, "customDomain": self.custom_domain}


@dataclass
class CdnConfig:
    """CDN bucket settings."""

    provider: CdnProvider
    bucket: str
    base_url: str
    region: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> CdnConfig:
        data = _mapping(data, "CdnConfig")
        return cls(
            provider=CdnProvider(_get(data, "provider", str, "CdnConfig")),
            bucket=_get(data, "bucket", str, "CdnConfig"),
            base_url=_get(data, "baseUrl", str, "CdnConfig"),
            region=_get(data, "region", str, "CdnConfig", optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "provider": self.provider.value,
            "bucket": self.bucket,
            "baseUrl": self.base_url,
            "region": self.region,
        }


@dataclass
class AssetsDeployConfig:
    """Which asset files are deployed and how."""

    immediate_dir: str
    deferred_dir: str
    hash_length: int | None = None
    max_file_size: str | None = None
    ignore: list[str] | None = None
    include: list[str] | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> AssetsDeployConfig:
        owner = "AssetsDeployConfig"
        data = _mapping(data, owner)
        return cls(
            immediate_dir=_get(data, "immediateDir", str, owner),
            deferred_dir=_get(data, "deferredDir", str, owner),
            hash_length=_get(data, "hashLength", int, owner, optional=True),
            max_file_size=_get(data, "maxFileSize", str, owner, optional=True),
            ignore=_str_list(data, "ignore", owner, optional=True),
            include=_str_list(data, "include", owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "immediateDir": self.immediate_dir,
            "deferredDir": self.deferred_dir,
            "hashLength": self.hash_length,
            "maxFileSize": self.max_file_size,
            "ignore": self.ignore,
            "include": self.include,
        }


@dataclass
class DeployConfig:
    """Deployment settings."""

    pages: PagesConfig
    cdn: CdnConfig
    assets: AssetsDeployConfig
    old_version_retention: int | None = None
    old_version_max_age: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> DeployConfig:
        owner = "DeployConfig"
        data = _mapping(data, owner)
        return cls(
            pages=PagesConfig.from_dict(_get(data, "pages", Mapping, owner)),
            cdn=CdnConfig.from_dict(_get(data, "cdn", Mapping, owner)),
            assets=AssetsDeployConfig.from_dict(_get(data, "assets", Mapping, owner)),
            old_version_retention=_get(data, "oldVersionRetention", int, owner, optional=True),
            old_version_max_age=_get(data, "oldVersionMaxAge", str, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "pages": self.pages.to_dict(),
            "cdn": self.cdn.to_dict(),
            "assets": self.assets.to_dict(),
            "oldVersionRetention": self.old_version_retention,
            "oldVersionMaxAge": self.old_version_max_age,
        }


@dataclass
class LoaderDisplayConfig:
    """Loader tuning used by the display side."""

    concurrency: int | None = None
    retry_count: int | None = None
    retry_base_delay: int | None = None
    timeout: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> LoaderDisplayConfig:
        owner = "LoaderDisplayConfig"
        data = _mapping(data, owner)
        return cls(
            concurrency=_get(data, "concurrency", int, owner, optional=True),
            retry_count=_get(data, "retryCount", int, owner, optional=True),
            retry_base_delay=_get(data, "retryBaseDelay", int, owner, optional=True),
            timeout=_get(data, "timeout", int, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "concurrency": self.concurrency,
            "retryCount": self.retry_count,
            "retryBaseDelay": self.retry_base_delay,
            "timeout": self.timeout,
        }


@dataclass
class DisplayConfig:
    """Display settings."""

    loader: LoaderDisplayConfig

    @classmethod
    def from_dict(cls, data: Mapping) -> DisplayConfig:
        data = _mapping(data, "DisplayConfig")
        return cls(loader=LoaderDisplayConfig.from_dict(_get(data, "loader", Mapping, "DisplayConfig")))

    def to_dict(self) -> dict:
        return {"loader": self.loader.to_dict()}


@dataclass
class DraftPreviewConfig:
    """Draft preview settings."""

    expires_in: str | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> DraftPreviewConfig:
        data = _mapping(data, "DraftPreviewConfig")
        return cls(expires_in=_get(data, "expiresIn", str, "DraftPreviewConfig", optional=True))

    def to_dict(self) -> dict:
        return {"expiresIn": self.expires_in}


@dataclass
class DraftConfig:
    """Draft settings."""

    preview: DraftPreviewConfig

    @classmethod
    def from_dict(cls, data: Mapping) -> DraftConfig:
        data = _mapping(data, "DraftConfig")
        return cls(preview=DraftPreviewConfig.from_dict(_get(data, "preview", Mapping, "DraftConfig")))

    def to_dict(self) -> dict:
        return {"preview": self.preview.to_dict()}


@dataclass
class S3dConfig:
    """Top-level project configuration."""

    schema_version: int
    project: str
    deploy: DeployConfig | None = None
    display: DisplayConfig | None = None
    draft: DraftConfig | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> S3dConfig:
        owner = "S3dConfig"
        data = _mapping(data, owner)
        deploy = _get(data, "deploy", Mapping, owner, optional=True)
        display = _get(data, "display", Mapping, owner, optional=True)
        draft = _get(data, "draft", Mapping, owner, optional=True)
        return cls(
            schema_version=_get(data, "schemaVersion", int, owner),
            project=_get(data, "project", str, owner),
            deploy=DeployConfig.from_dict(deploy) if deploy is not None else None,
            display=DisplayConfig.from_dict(display) if display is not None else None,
            draft=DraftConfig.from_dict(draft) if draft is not None else None,
        )

    def to_dict(self) -> dict:
        return {
            "schemaVersion": self.schema_version,
            "project": self.project,
            "deploy": self.deploy.to_dict() if self.deploy else None,
            "display": self.display.to_dict() if self.display else None,
            "draft": self.draft.to_dict() if self.draft else None,
        }

    @classmethod
    def from_json(cls, text: str) -> S3dConfig:
        """Parse a configuration from JSON text; raises ValueError on bad input."""
        return cls.from_dict(json.loads(text))

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), ensure_ascii=False)