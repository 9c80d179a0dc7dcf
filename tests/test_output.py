import pytest

from static3d.display.iframe import Part
from static3d.display.output import (
    OutputError,
    OutputFile,
    collect_output_files,
    write_output_files,
)


@pytest.fixture
def sample_parts():
    return [
        Part(
            id="header",
            content="<h1>H</h1>",
            output_path="parts/header.html",
            cache_control="max-age=3600",
        ),
        Part(
            id="footer",
            content="<footer>F</footer>",
            output_path="parts/footer.html",
            cache_control=None,
        ),
    ]


def test_write_creates_files_and_dirs(tmp_path):
    files = [
        OutputFile(relative_path="index.html", content="<html>parent</html>"),
        OutputFile(
            relative_path="parts/header.html",
            content="<html>header</html>",
            cache_control="max-age=3600",
        ),
    ]
    written = write_output_files(tmp_path, files)
    assert written == [tmp_path / "index.html", tmp_path / "parts/header.html"]
    assert (tmp_path / "index.html").exists()
    assert (tmp_path / "parts/header.html").exists()
    assert "parent" in (tmp_path / "index.html").read_text(encoding="utf-8")


def test_collect_output_files_index_first(sample_parts):
    files = collect_output_files(
        "<html>parent</html>",
        sample_parts,
        ["<html>header</html>", "<html>footer</html>"],
        "index.html",
    )
    assert [f.relative_path for f in files] == [
        "index.html",
        "parts/header.html",
        "parts/footer.html",
    ]
    assert files[0].cache_control is None
    assert files[1].cache_control == "max-age=3600"
    assert files[2].cache_control is None
    assert files[2].content == "<html>footer</html>"


def test_collect_output_files_stops_at_shorter_list(sample_parts):
    files = collect_output_files("p", sample_parts, ["only one"], "main.html")
    assert len(files) == 2
    assert files[0].relative_path == "main.html"
    assert files[1].content == "only one"


def test_output_dir_created_if_not_exists(tmp_path):
    files = [OutputFile(relative_path="a/b/c/index.html", content="x")]
    write_output_files(tmp_path, files)
    assert (tmp_path / "a/b/c/index.html").read_text(encoding="utf-8") == "x"


def test_write_content_round_trips_unicode(tmp_path):
    content = "<p>こんにちは</p>\n"
    write_output_files(tmp_path, [OutputFile(relative_path="u.html", content=content)])
    assert (tmp_path / "u.html").read_bytes() == content.encode("utf-8")


def test_write_into_file_path_raises(tmp_path):
    (tmp_path / "blocker").write_text("not a dir", encoding="utf-8")
    files = [OutputFile(relative_path="blocker/x.html", content="x")]
    with pytest.raises(OutputError):
        write_output_files(tmp_path, files)