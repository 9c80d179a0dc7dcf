import json

import pytest

from static3d.loader.strategy import (
    AssetsStrategyConfig,
    CdnStrategyConfig,
    InitialConfig,
    ReloadConfig,
    ReloadStrategy,
    ReloadTrigger,
    StrategyAsset,
)


def sample_config():
    return AssetsStrategyConfig(
        initial=InitialConfig(
            sources=["js/main.js", "style.css"],
            cache=True,
            fallback="js/fallback.js",
        ),
        cdn=CdnStrategyConfig(files=["models/**/*.glb"], cache=True, max_age="1d"),
        reload=ReloadConfig(
            trigger=ReloadTrigger.MANIFEST_CHANGE,
            strategy=ReloadStrategy.DIFF,
            interval_ms=None,
        ),
    )


def test_config_roundtrip_json():
    cfg = sample_config()
    back = AssetsStrategyConfig.from_dict(json.loads(cfg.to_json()))
    assert back.initial.sources == cfg.initial.sources
    assert back.cdn.max_age == "1d"
    assert back.reload.trigger is ReloadTrigger.MANIFEST_CHANGE
    assert back.reload.strategy is ReloadStrategy.DIFF
    assert back == cfg


def test_reload_trigger_serde_kebab():
    data = sample_config().to_dict()
    assert data["reload"]["trigger"] == "manifest-change"
    assert json.dumps(ReloadTrigger.MANIFEST_CHANGE) == '"manifest-change"'
    assert ReloadTrigger("manifest-change") is ReloadTrigger.MANIFEST_CHANGE


def test_reload_strategy_serde():
    diff = ReloadConfig(trigger=ReloadTrigger.MANUAL, strategy=ReloadStrategy.DIFF)
    full = ReloadConfig(trigger=ReloadTrigger.INTERVAL, strategy=ReloadStrategy.FULL, interval_ms=500)
    assert diff.to_dict() == {"trigger": "manual", "strategy": "diff", "intervalMs": None}
    assert full.to_dict() == {"trigger": "interval", "strategy": "full", "intervalMs": 500}


def test_camel_case_keys():
    data = sample_config().to_dict()
    assert data["cdn"] == {"files": ["models/**/*.glb"], "cache": True, "maxAge": "1d"}
    assert data["initial"]["fallback"] == "js/fallback.js"


def test_parse_minimal_strategy():
    cfg = AssetsStrategyConfig.from_dict(
        {
            "initial": {"sources": ["js/main.js"], "cache": True},
            "cdn": {"files": ["models/**"], "cache": True},
            "reload": {"trigger": "manifest-change", "strategy": "diff"},
        }
    )
    assert cfg.initial.fallback is None
    assert cfg.cdn.max_age is None
    assert cfg.reload.interval_ms is None
    assert cfg.cdn.files == ["models/**"]


def test_unknown_trigger_rejected():
    with pytest.raises(ValueError):
        ReloadConfig.from_dict({"trigger": "sometimes", "strategy": "diff"})


def test_missing_sources_rejected():
    with pytest.raises(ValueError, match="sources"):
        InitialConfig.from_dict({"cache": True})


def test_cache_must_be_bool():
    with pytest.raises(ValueError):
        CdnStrategyConfig.from_dict({"files": [], "cache": "yes"})


def test_pretty_json_indented():
    text = sample_config().to_json(indent=2)
    assert text.startswith('{\n  "initial": {')


def test_strategy_asset_holds_bytes():
    asset = StrategyAsset(key="js/main.js", url="https://cdn.example.com/js/main.js", hash="abc", size=3, data=b"abc")
    assert asset.data == b"abc"
    assert asset.size == len(asset.data)