import json

import pytest

from static3d.types.project_config import (
    AssetsDeployConfig,
    CdnConfig,
    CdnProvider,
    LoaderDisplayConfig,
    PagesConfig,
    S3dConfig,
)

FULL_CONFIG = """
{
    "schemaVersion": 1,
    "project": "my-project",
    "deploy": {
        "pages": {"outputDir": "dist", "customDomain": "example.com"},
        "cdn": {
            "provider": "cloudflare-r2",
            "bucket": "my-bucket",
            "baseUrl": "https://cdn.example.com",
            "region": "auto"
        },
        "assets": {
            "immediateDir": "assets/immediate",
            "deferredDir": "assets/deferred",
            "hashLength": 8,
            "maxFileSize": "10MB",
            "ignore": ["**/*.map"],
            "include": ["**/*.js", "**/*.css"]
        },
        "oldVersionRetention": 3,
        "oldVersionMaxAge": "30d"
    },
    "display": {
        "loader": {"concurrency": 4, "retryCount": 3, "retryBaseDelay": 500, "timeout": 30000}
    },
    "draft": {"preview": {"expiresIn": "1h"}}
}
"""


def test_config_roundtrip():
    config = S3dConfig.from_json(FULL_CONFIG)
    assert config.schema_version == 1
    assert config.project == "my-project"

    deploy = config.deploy
    assert deploy.pages.output_dir == "dist"
    assert deploy.pages.custom_domain == "example.com"
    assert deploy.cdn.provider is CdnProvider.CLOUDFLARE_R2
    assert deploy.cdn.bucket == "my-bucket"
    assert deploy.cdn.base_url == "https://cdn.example.com"
    assert deploy.cdn.region == "auto"
    assert deploy.assets.immediate_dir == "assets/immediate"
    assert deploy.assets.deferred_dir == "assets/deferred"
    assert deploy.assets.hash_length == 8
    assert deploy.assets.ignore == ["**/*.map"]
    assert deploy.old_version_retention == 3
    assert deploy.old_version_max_age == "30d"

    loader = config.display.loader
    assert loader.concurrency == 4
    assert loader.retry_count == 3
    assert loader.retry_base_delay == 500
    assert loader.timeout == 30000

    assert config.draft.preview.expires_in == "1h"

    again = S3dConfig.from_json(config.to_json())
    assert again == config
    assert again.project == "my-project"


def test_config_to_dict_matches_input():
    data = json.loads(FULL_CONFIG)
    assert S3dConfig.from_dict(data).to_dict() == data


def test_config_minimal():
    config = S3dConfig.from_json('{"schemaVersion": 1, "project": "minimal"}')
    assert config.schema_version == 1
    assert config.project == "minimal"
    assert config.deploy is None
    assert config.display is None
    assert config.draft is None


def test_minimal_to_dict_keeps_null_fields():
    config = S3dConfig(schema_version=1, project="minimal")
    assert config.to_dict() == {
        "schemaVersion": 1,
        "project": "minimal",
        "deploy": None,
        "display": None,
        "draft": None,
    }


def test_missing_project_rejected():
    with pytest.raises(ValueError, match="project"):
        S3dConfig.from_json('{"schemaVersion": 1}')


def test_wrong_type_rejected():
    with pytest.raises(ValueError):
        S3dConfig.from_dict({"schemaVersion": "1", "project": "x"})


def test_invalid_json_rejected():
    with pytest.raises(ValueError):
        S3dConfig.from_json("{not json")


def test_unknown_provider_rejected():
    with pytest.raises(ValueError):
        CdnConfig.from_dict({"provider": "s3", "bucket": "b", "baseUrl": "https://cdn.example.com"})


def test_pages_config_optional_domain():
    pages = PagesConfig.from_dict({"outputDir": "out"})
    assert pages == PagesConfig(output_dir="out", custom_domain=None)
    assert pages.to_dict() == {"outputDir": "out", "customDomain": None}


def test_assets_ignore_must_be_strings():
    with pytest.raises(ValueError):
        AssetsDeployConfig.from_dict({"immediateDir": "a", "deferredDir": "b", "ignore": [1]})


def test_loader_display_config_empty():
    loader = LoaderDisplayConfig.from_dict({})
    assert loader.to_dict() == {
        "concurrency": None,
        "retryCount": None,
        "retryBaseDelay": None,
        "timeout": None,
    }