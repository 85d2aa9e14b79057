"""Shared fixtures: real directory trees with pinned mtimes."""

import os
from pathlib import Path

import pytest
import yaml


def _touch(file: Path, mtime: int) -> None:
    os.utime(file, (mtime, mtime))


def _write_page(
    directory: Path,
    filename: str = "default.md",
    mtime: int | None = None,
    **header: object,
) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    file = directory / filename
    if header:
        text = "---\n" + yaml.safe_dump(header, sort_keys=False) + "---\nBody\n"
    else:
        text = "Body\n"
    file.write_text(text, encoding="utf-8")
    if mtime is not None:
        _touch(file, mtime)
    return file


@pytest.fixture
def write_page():
    """Return a helper that writes a content file with a YAML header."""
    return _write_page


@pytest.fixture
def touch():
    return _touch


@pytest.fixture
def site(tmp_path) -> Path:
    """A small site covering content, hidden, and content-less folders.

    content/
      .DS_Store            ignored (mtime 9999)
      .git/HEAD            ignored
      01.home/default.md   1000
      02.blog/blog.md      2000
      02.blog/cover.jpg    3500
      02.blog/a/item.md    3000  date 2020-02-01
      02.blog/b/item.md    2500  date 2020-01-01
      about/               no content
      about/team/default.md 1500
      _sidebar/modular.md  1200
      _sidebar/inner/default.md 1100
    """
    root = tmp_path / "content"
    root.mkdir()

    ds_store = root / ".DS_Store"
    ds_store.write_bytes(b"\x00")
    _touch(ds_store, 9999)
    (root / ".git").mkdir()
    (root / ".git" / "HEAD").write_text("ref: refs/heads/main\n")

    _write_page(root / "01.home", mtime=1000, title="Home")
    _write_page(root / "02.blog", "blog.md", mtime=2000, title="Blog")
    cover = root / "02.blog" / "cover.jpg"
    cover.write_bytes(b"\xff\xd8")
    _touch(cover, 3500)
    _write_page(
        root / "02.blog" / "a",
        "item.md",
        mtime=3000,
        title="Alpha",
        date="2020-02-01",
        taxonomy={"tag": ["python"], "category": "blog"},
    )
    _write_page(
        root / "02.blog" / "b",
        "item.md",
        mtime=2500,
        title="Beta",
        date="2020-01-01",
        taxonomy={"tag": ["python", "web"]},
    )
    (root / "about").mkdir()
    _write_page(root / "about" / "team", mtime=1500, title="Team")
    _write_page(root / "_sidebar", "modular.md", mtime=1200, title="Sidebar")
    _write_page(root / "_sidebar" / "inner", mtime=1100, title="Inner")
    return root
