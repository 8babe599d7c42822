"""Unit tests for the content tree listing."""

import os
import socket
import sys
from pathlib import Path
from unittest.mock import patch

import pytest
from appxsync.core.content_tree import iter_content_tree
from appxsync.core.errors import AssetError


@pytest.fixture
def www(tmp_path: Path) -> Path:
    root = tmp_path / "www"
    (root / "js").mkdir(parents=True)
    (root / "css").mkdir()
    (root / "index.html").write_text("<html></html>")
    (root / "js" / "index.js").write_text("")
    (root / "css" / "index.css").write_text("")
    return root


class TestIterContentTree:
    """Tests for iter_content_tree function."""

    def test_lists_files_with_root_prefix(self, www: Path) -> None:
        """Every regular file is listed under the root name, sorted."""
        assert list(iter_content_tree("www", www)) == [
            "www/css/index.css",
            "www/index.html",
            "www/js/index.js",
        ]

    def test_is_lazy(self, www: Path) -> None:
        """The listing is produced by a generator."""
        listing = iter_content_tree("www", www)

        assert next(listing) == "www/css/index.css"

    def test_is_recomputed(self, www: Path) -> None:
        """A new call sees files added since the last one."""
        first = list(iter_content_tree("www", www))
        (www / "new.js").write_text("")

        second = list(iter_content_tree("www", www))

        assert "www/new.js" not in first
        assert "www/new.js" in second

    def test_skips_vcs_directories(self, www: Path) -> None:
        """Version-control metadata is never listed."""
        (www / ".svn").mkdir()
        (www / ".svn" / "entries").write_text("")
        (www / "js" / ".git").mkdir()
        (www / "js" / ".git" / "HEAD").write_text("")

        listing = list(iter_content_tree("www", www))

        assert not any(".svn" in p or ".git" in p for p in listing)

    def test_custom_skip_dirs(self, www: Path) -> None:
        """skip_dirs replaces the default exclusions."""
        listing = list(iter_content_tree("www", www, skip_dirs=frozenset({"css"})))

        assert listing == ["www/index.html", "www/js/index.js"]

    @pytest.mark.skipif(sys.platform == "win32", reason="symlinks need privileges on Windows")
    def test_ignores_symlinks(self, www: Path, tmp_path: Path) -> None:
        """Symlinks to files or directories are omitted."""
        outside = tmp_path / "outside"
        outside.mkdir()
        (outside / "secret.js").write_text("")
        os.symlink(outside, www / "linked")
        os.symlink(www / "index.html", www / "alias.html")

        listing = list(iter_content_tree("www", www))

        assert "www/alias.html" not in listing
        assert not any(p.startswith("www/linked") for p in listing)

    @pytest.mark.skipif(not hasattr(os, "mkfifo"), reason="FIFOs not supported")
    def test_ignores_fifos(self, www: Path) -> None:
        """Special files such as FIFOs are omitted."""
        os.mkfifo(www / "pipe")

        assert "www/pipe" not in list(iter_content_tree("www", www))

    @pytest.mark.skipif(not hasattr(socket, "AF_UNIX"), reason="Unix sockets not supported")
    def test_ignores_sockets(self, tmp_path: Path) -> None:
        """Unix domain sockets are omitted."""
        root = tmp_path / "w"
        root.mkdir()
        (root / "a.js").write_text("")
        sock = socket.socket(socket.AF_UNIX, socket.SOCK_STREAM)
        try:
            sock.bind(str(root / "s.sock"))
            listing = list(iter_content_tree("w", root))
        finally:
            sock.close()

        assert listing == ["w/a.js"]

    def test_missing_root_yields_nothing(self, tmp_path: Path) -> None:
        """A missing content root is an empty listing."""
        assert list(iter_content_tree("www", tmp_path / "missing")) == []


class TestIterContentTreeErrors:
    """Tests for names and directories that cannot be listed."""

    @pytest.mark.skipif(sys.platform != "linux", reason="needs byte-string file names")
    def test_skips_non_utf8_names(self, www: Path) -> None:
        """A file whose name is not valid UTF-8 is left out of the listing."""
        (www / os.fsdecode(b"caf\xe9.js")).write_text("")

        listing = list(iter_content_tree("www", www))

        assert listing == ["www/css/index.css", "www/index.html", "www/js/index.js"]

    def test_unreadable_directory_raises_asset_error(self, www: Path) -> None:
        with (
            patch.object(Path, "iterdir", side_effect=PermissionError("denied")),
            pytest.raises(AssetError, match="denied"),
        ):
            list(iter_content_tree("www", www))
