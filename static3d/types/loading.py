"""Options, progress events and errors used when loading assets."""

from __future__ import annotations

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


class ResponseType(str, Enum):
    """How an HTTP response body is received."""

    ARRAY_BUFFER = "arraybuffer"
    BLOB = "blob"
    JSON = "json"
    TEXT = "text"


class LoadErrorKind(str, Enum):
    """Category of a load failure."""

    NETWORK = "network"
    TIMEOUT = "timeout"
    INTEGRITY = "integrity"
    NOT_FOUND = "not-found"
    ABORT = "abort"
    UNKNOWN = "unknown"


@dataclass
class LoaderOptions:
    """Settings for an asset loader."""

    concurrency: int | None = None
    retry_count: int | None = None
    retry_delay: int | None = None
    timeout: int | None = None
    integrity: bool | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> LoaderOptions:
        owner = "LoaderOptions"
        data = _mapping(data, owner)
        return cls(
            concurrency=_get(data, "concurrency", int, owner, optional=True),
            retry_count=_get(data, "retryCount", int, owner, optional=True),
            retry_delay=_get(data, "retryDelay", int, owner, optional=True),
            timeout=_get(data, "timeout", int, owner, optional=True),
            integrity=_get(data, "integrity", bool, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "concurrency": self.concurrency,
            "retryCount": self.retry_count,
            "retryDelay": self.retry_delay,
            "timeout": self.timeout,
            "integrity": self.integrity,
        }


@dataclass
class LoadOptions:
    """Settings for loading a single asset."""

    response_type: ResponseType | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> LoadOptions:
        data = _mapping(data, "LoadOptions")
        raw = _get(data, "responseType", str, "LoadOptions", optional=True)
        return cls(response_type=ResponseType(raw) if raw is not None else None)

    def to_dict(self) -> dict:
        return {"responseType": self.response_type.value if self.response_type else None}


@dataclass
class LoadAllOptions:
    """Settings for loading many assets at once."""

    concurrency: int | None = None
    retry_count: int | None = None
    retry_delay: int | None = None
    timeout: int | None = None

    @classmethod
    def from_dict(cls, data: Mapping) -> LoadAllOptions:
        owner = "LoadAllOptions"
        data = _mapping(data, owner)
        return cls(
            concurrency=_get(data, "concurrency", int, owner, optional=True),
            retry_count=_get(data, "retryCount", int, owner, optional=True),
            retry_delay=_get(data, "retryDelay", int, owner, optional=True),
            timeout=_get(data, "timeout", int, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "concurrency": self.concurrency,
            "retryCount": self.retry_count,
            "retryDelay": self.retry_delay,
            "timeout": self.timeout,
        }


@dataclass
class ProgressEvent:
    """Progress of a running load."""

    loaded: int
    total: int
    asset: str
    completed_count: int
    total_count: int

    @classmethod
    def from_dict(cls, data: Mapping) -> ProgressEvent:
        owner = "ProgressEvent"
        data = _mapping(data, owner)
        return cls(
            loaded=_get(data, "loaded", int, owner),
            total=_get(data, "total", int, owner),
            asset=_get(data, "asset", str, owner),
            completed_count=_get(data, "completedCount", int, owner),
            total_count=_get(data, "totalCount", int, owner),
        )

    def to_dict(self) -> dict:
        return {
            "loaded": self.loaded,
            "total": self.total,
            "asset": self.asset,
            "completedCount": self.completed_count,
            "totalCount": self.total_count,
        }


@dataclass(eq=False)
class LoadError(Exception):
    """Raised when an asset cannot be loaded."""

    kind: LoadErrorKind
    key: str
    url: str
    cause: str | None = None
    status_code: int | None = None

    def __str__(self) -> str:
        text = f"{self.kind.value} error loading `{self.key}` from {self.url}"
        if self.status_code is not None:
            text += f" (status {self.status_code})"
        if self.cause:
            text += f": {self.cause}"
        return text

    @classmethod
    def from_dict(cls, data: Mapping) -> LoadError:
        owner = "LoadError"
        data = _mapping(data, owner)
        return cls(
            kind=LoadErrorKind(_get(data, "type", str, owner)),
            key=_get(data, "key", str, owner),
            url=_get(data, "url", str, owner),
            cause=_get(data, "cause", str, owner, optional=True),
            status_code=_get(data, "statusCode", int, owner, optional=True),
        )

    def to_dict(self) -> dict:
        return {
            "type": self.kind.value,
            "key": self.key,
            "url": self.url,
            "cause": self.cause,
            "statusCode": self.status_code,
        }