from static3d.loader.runtime_diff import diff_manifests, needs_evict, needs_fetch
from static3d.types.asset import AssetDiff
from static3d.types.manifest import AssetEntry, DeployManifest


def make_manifest(entries):
    assets = {
        key: AssetEntry(url=url, size=100, hash=hash_, content_type="application/javascript")
        for key, url, hash_ in entries
    }
    return DeployManifest(
        schema_version=1,
        version="1.0.0",
        build_time="2026-03-20T00:00:00Z",
        assets=assets,
    )


def test_first_deploy_all_added():
    new = make_manifest([
        ("js/main.js", "https://cdn/js/main.abc.js", "abc"),
        ("style.css", "https://cdn/style.xyz.css", "xyz"),
    ])
    entries = diff_manifests(None, new)
    assert len(entries) == 2
    assert all(e.diff == AssetDiff.ADDED for e in entries)


def test_unchanged_files_detected():
    old = make_manifest([("js/main.js", "https://cdn/js/main.abc.js", "abc")])
    new = make_manifest([("js/main.js", "https://cdn/js/main.abc.js", "abc")])
    entries = diff_manifests(old, new)
    assert entries[0].diff == AssetDiff.UNCHANGED


def test_same_hash_different_url_is_unchanged():
    old = make_manifest([("a.js", "https://cdn/a.js", "abc")])
    new = make_manifest([("a.js", "https://cdn/a.abc.js", "abc")])
    entries = diff_manifests(old, new)
    assert entries[0].diff == AssetDiff.UNCHANGED
    assert entries[0].url == "https://cdn/a.abc.js"


def test_modified_file_detected():
    old = make_manifest([("js/main.js", "https://cdn/js/main.abc.js", "abc")])
    new = make_manifest([("js/main.js", "https://cdn/js/main.def.js", "def")])
    entries = diff_manifests(old, new)
    assert entries[0].diff == AssetDiff.MODIFIED
    assert entries[0].hash == "def"
    assert entries[0].size == 100


def test_deleted_file_detected():
    old = make_manifest([
        ("js/main.js", "https://cdn/js/main.abc.js", "abc"),
        ("old.js", "https://cdn/old.xyz.js", "xyz"),
    ])
    new = make_manifest([("js/main.js", "https://cdn/js/main.abc.js", "abc")])
    entries = diff_manifests(old, new)
    deleted = [e for e in entries if e.diff == AssetDiff.DELETED]
    assert len(deleted) == 1
    assert deleted[0].key == "old.js"
    assert deleted[0].url is None
    assert deleted[0].hash is None
    assert deleted[0].size == 0


def test_entries_sorted_by_key():
    old = make_manifest([("z.js", "u", "1"), ("m.js", "u", "1")])
    new = make_manifest([("b.js", "u", "1"), ("m.js", "u", "2")])
    keys = [e.key for e in diff_manifests(old, new)]
    assert keys == ["b.js", "m.js", "z.js"]


def test_needs_fetch_filters_added_and_modified():
    old = make_manifest([
        ("a.js", "https://cdn/a.v1.js", "v1"),
        ("b.js", "https://cdn/b.v1.js", "v1"),
    ])
    new = make_manifest([
        ("a.js", "https://cdn/a.v2.js", "v2"),
        ("b.js", "https://cdn/b.v1.js", "v1"),
        ("c.js", "https://cdn/c.v1.js", "v1"),
    ])
    fetch = needs_fetch(diff_manifests(old, new))
    assert len(fetch) == 2
    keys = [e.key for e in fetch]
    assert "a.js" in keys
    assert "c.js" in keys


def test_needs_evict_filters_deleted_and_modified():
    old = make_manifest([
        ("a.js", "https://cdn/a.v1.js", "v1"),
        ("b.js", "https://cdn/b.v1.js", "v1"),
    ])
    new = make_manifest([("a.js", "https://cdn/a.v2.js", "v2")])
    evict = needs_evict(diff_manifests(old, new))
    assert len(evict) == 2
    assert {e.key for e in evict} == {"a.js", "b.js"}