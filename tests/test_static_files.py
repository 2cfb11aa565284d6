import pytest

from inkpress.static_files import STATIC_ROUTES, StaticFiles


@pytest.fixture
def static_dir(tmp_path):
    (tmp_path / "robots.txt").write_bytes(b"User-agent: *\n")
    (tmp_path / "favicon.ico").write_bytes(b"\x00\x00\x01\x00")
    (tmp_path / "extra.txt").write_bytes(b"extra")
    return tmp_path


def test_every_route_is_served(tmp_path):
    for route in STATIC_ROUTES:
        (tmp_path / route.lstrip("/")).write_bytes(route.encode())
    files = StaticFiles(tmp_path)
    assert {route: files.get(route).content for route in STATIC_ROUTES} == {
        route: route.encode() for route in STATIC_ROUTES
    }
    assert files.get("/robots.txt").content == b"/robots.txt"


def test_get_cached_file(static_dir):
    files = StaticFiles(static_dir)
    robots = files.get("/robots.txt")
    assert robots.content == b"User-agent: *\n"
    assert robots.mime_type == "text/plain"
    assert robots.name == "robots.txt"
    assert robots.ext == ".txt"


def test_cached_content_is_kept(static_dir):
    files = StaticFiles(static_dir)
    (static_dir / "robots.txt").write_bytes(b"changed")
    assert files.get("/robots.txt").content == b"User-agent: *\n"


def test_uncached_file_read_from_disk(static_dir):
    files = StaticFiles(static_dir)
    extra = files.get("/extra.txt")
    assert extra.content == b"extra"


def test_missing_listed_file(static_dir):
    files = StaticFiles(static_dir)
    with pytest.raises(FileNotFoundError):
        files.get("/apple-touch-icon.png")


def test_path_outside_directory(static_dir):
    (static_dir.parent / "secret.txt").write_bytes(b"hidden")
    files = StaticFiles(static_dir)
    with pytest.raises(FileNotFoundError):
        files.get("/../secret.txt")


def test_missing_directory_loads_nothing(tmp_path):
    files = StaticFiles(tmp_path / "nowhere")
    with pytest.raises(FileNotFoundError):
        files.get("/robots.txt")