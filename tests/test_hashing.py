import pytest

from static3d.deploy.hashing import (
    DEFAULT_HASH_LENGTH,
    HashError,
    hash_assets,
    insert_hash_into_key,
    sha256_file,
)
from static3d.types.asset import CollectedAsset


def test_sha256_known_content(tmp_path):
    path = tmp_path / "hello.txt"
    path.write_bytes(b"hello")
    assert sha256_file(path) == "2cf24dba5fb0a30e26e83b2ac5b9e29e1b161e5c1fa7425e73043362938b9824"


def test_sha256_missing_file_raises(tmp_path):
    with pytest.raises(HashError):
        sha256_file(tmp_path / "missing.bin")


def test_insert_hash_with_extension():
    assert insert_hash_into_key("assets/model.glb", "a1b2c3d4") == "assets/model.a1b2c3d4.glb"


def test_insert_hash_without_extension():
    assert insert_hash_into_key("assets/model", "a1b2c3d4") == "assets/model.a1b2c3d4"


def test_insert_hash_root_file():
    assert insert_hash_into_key("index.html", "deadbeef") == "index.deadbeef.html"


def test_insert_hash_dotfile():
    assert insert_hash_into_key(".gitignore", "abcd1234") == ".abcd1234.gitignore"


def test_insert_hash_uses_last_dot_of_filename_only():
    assert insert_hash_into_key("a.b/c.d.e", "ff") == "a.b/c.d.ff.e"


def test_hash_assets_produces_correct_key(tmp_path):
    path = tmp_path / "chunk.js"
    path.write_bytes(b"const x=1;")
    collected = [CollectedAsset(key="js/chunk.js", absolute_path=path, size=10)]

    hashed = hash_assets(collected, 8)
    assert len(hashed) == 1
    h = hashed[0]
    assert h.key == "js/chunk.js"
    assert len(h.hash) == 8
    assert h.hashed_key.startswith("js/chunk.")
    assert h.hashed_key.endswith(".js")
    assert h.hashed_filename == h.hashed_key.rsplit("/", 1)[-1]
    assert h.size == 10
    assert h.absolute_path == path


@pytest.mark.parametrize("length", [4, 8, 16])
def test_hash_length_is_respected(tmp_path, length):
    path = tmp_path / "a.bin"
    path.write_bytes(b"data")
    collected = [CollectedAsset(key="a.bin", absolute_path=path, size=4)]
    hashed = hash_assets(collected, length)
    assert len(hashed[0].hash) == length


def test_hash_is_prefix_of_full_digest(tmp_path):
    path = tmp_path / "hello.txt"
    path.write_bytes(b"hello")
    collected = [CollectedAsset(key="hello.txt", absolute_path=path, size=5)]
    hashed = hash_assets(collected)
    assert hashed[0].hash == "2cf24dba"
    assert len(hashed[0].hash) == DEFAULT_HASH_LENGTH
    assert hashed[0].hashed_key == "hello.2cf24dba.txt"


def test_hash_length_longer_than_digest_is_clamped(tmp_path):
    path = tmp_path / "a.bin"
    path.write_bytes(b"data")
    collected = [CollectedAsset(key="a.bin", absolute_path=path, size=4)]
    hashed = hash_assets(collected, 100)
    assert len(hashed[0].hash) == 64


def test_hash_assets_missing_file_raises(tmp_path):
    collected = [CollectedAsset(key="x.bin", absolute_path=tmp_path / "x.bin", size=0)]
    with pytest.raises(HashError):
        hash_assets(collected)