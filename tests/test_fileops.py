"""Tests for aptpool.fileops."""

import hashlib
import io
import shutil
import subprocess
import tarfile
import zipfile
from pathlib import Path
from unittest.mock import patch

import pytest

from aptpool import fileops
from aptpool.constants import HASH_BUFFER_SIZE
from aptpool.errors import ExternalToolError


class TestRunTool:
    def test_success(self) -> None:
        with patch("aptpool.fileops.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["tar"], 0)
            fileops.run_tool("tar", "-xvf", Path("/tmp/a.tar.gz"))
        mock_run.assert_called_once_with(["tar", "-xvf", "/tmp/a.tar.gz"], check=False)

    def test_failure(self) -> None:
        with patch("aptpool.fileops.subprocess.run") as mock_run:
            mock_run.return_value = subprocess.CompletedProcess(["rsync"], 23)
            with pytest.raises(ExternalToolError) as exc_info:
                fileops.run_tool("rsync", "-avz", "a", "b")
        assert exc_info.value.tool == "rsync"
        assert exc_info.value.returncode == 23
        assert str(exc_info.value) == "rsync command failed"

    def test_missing_tool(self) -> None:
        with pytest.raises(FileNotFoundError):
            fileops.run_tool("aptpool-no-such-tool-xyz")


class TestDigest:
    def test_md5(self, tmp_path: Path) -> None:
        path = tmp_path / "hello_1.0_amd64.deb"
        path.write_bytes(b"Hello, World!")
        assert fileops.md5_digest(path) == hashlib.md5(b"Hello, World!").hexdigest()

    def test_other_algorithm(self, tmp_path: Path) -> None:
        path = tmp_path / "data"
        path.write_bytes(b"abc")
        assert fileops.file_digest(path, "sha256") == hashlib.sha256(b"abc").hexdigest()

    def test_spans_multiple_chunks(self) -> None:
        data = b"x" * (HASH_BUFFER_SIZE * 3 + 17)
        assert fileops.stream_digest(io.BytesIO(data)) == hashlib.md5(data).hexdigest()

    def test_empty_file(self, tmp_path: Path) -> None:
        path = tmp_path / "empty"
        path.write_bytes(b"")
        assert fileops.md5_digest(path) == hashlib.md5(b"").hexdigest()

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fileops.md5_digest(tmp_path / "missing")


class TestUnlink:
    def test_removes_symlink_not_target(self, tmp_path: Path) -> None:
        target = tmp_path / "target"
        target.write_text("keep")
        link = tmp_path / "link"
        link.symlink_to(target)

        fileops.unlink(link)
        assert not link.is_symlink()
        assert target.read_text() == "keep"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fileops.unlink(tmp_path / "missing")


class TestExtract:
    def test_tar_dispatch(self, tmp_path: Path) -> None:
        archive = tmp_path / "hello-2.10.tar.xz"
        dest = tmp_path / "src"
        with patch("aptpool.fileops.run_tool") as mock_run:
            fileops.extract(archive, dest)
        mock_run.assert_called_once_with("tar", "-xvf", archive, "-C", dest, "--strip-components", "1")
        assert dest.is_dir()

    def test_tar_gz_dispatch(self, tmp_path: Path) -> None:
        with patch("aptpool.fileops.run_tool") as mock_run:
            fileops.extract(tmp_path / "hello-2.10.tar.gz", tmp_path / "src")
        assert mock_run.call_args.args[0] == "tar"

    def test_zip_dispatch(self, tmp_path: Path) -> None:
        archive = tmp_path / "upload.zip"
        dest = tmp_path / "src"
        with patch("aptpool.fileops.run_tool") as mock_run:
            fileops.extract(archive, dest)
        mock_run.assert_called_once_with("unzip", archive, "-d", dest)

    def test_unsupported(self, tmp_path: Path) -> None:
        with patch("aptpool.fileops.run_tool") as mock_run:
            with pytest.raises(NotImplementedError):
                fileops.extract(tmp_path / "hello.tar.bz2", tmp_path / "src")
        mock_run.assert_not_called()

    def test_replaces_existing_destination(self, tmp_path: Path) -> None:
        dest = tmp_path / "src"
        (dest / "old").mkdir(parents=True)
        (dest / "old" / "stale.txt").write_text("stale")
        with patch("aptpool.fileops.run_tool"):
            fileops.extract(tmp_path / "hello.tar.xz", dest)
        assert dest.is_dir()
        assert list(dest.iterdir()) == []

    def test_tool_failure(self, tmp_path: Path) -> None:
        with patch("aptpool.fileops.run_tool", side_effect=ExternalToolError("tar", 2)):
            with pytest.raises(ExternalToolError):
                fileops.extract(tmp_path / "hello.tar.xz", tmp_path / "src")

    @pytest.mark.skipif(shutil.which("tar") is None, reason="tar not installed")
    def test_real_tar_is_idempotent(self, tmp_path: Path) -> None:
        tree = tmp_path / "hello-2.10"
        (tree / "debian").mkdir(parents=True)
        (tree / "README").write_text("hello")
        (tree / "debian" / "control").write_text("Source: hello\n")
        archive = tmp_path / "hello-2.10.tar.gz"
        with tarfile.open(archive, "w:gz") as tf:
            tf.add(tree, arcname="hello-2.10")

        dest = tmp_path / "out"
        fileops.extract(archive, dest)
        first = sorted(p.relative_to(dest) for p in dest.rglob("*"))
        (dest / "extra").write_text("added between runs")
        fileops.extract(archive, dest)
        second = sorted(p.relative_to(dest) for p in dest.rglob("*"))

        assert first == second == [Path("README"), Path("debian"), Path("debian/control")]
        assert (dest / "README").read_text() == "hello"

    @pytest.mark.skipif(shutil.which("unzip") is None, reason="unzip not installed")
    def test_real_unzip(self, tmp_path: Path) -> None:
        archive = tmp_path / "upload.zip"
        with zipfile.ZipFile(archive, "w") as zf:
            zf.writestr("hello/README", "hello")

        dest = tmp_path / "out"
        fileops.extract(archive, dest)
        fileops.extract(archive, dest)
        assert (dest / "hello" / "README").read_text() == "hello"


class TestMirror:
    def test_local_creates_parent(self, tmp_path: Path) -> None:
        src = tmp_path / "repo"
        src.mkdir()
        dst = tmp_path / "mirrors" / "site" / "repo"
        with patch("aptpool.fileops.run_tool") as mock_run:
            fileops.mirror(src, dst)
        mock_run.assert_called_once_with("rsync", "-avz", src, dst)
        assert dst.parent.is_dir()
        assert not dst.exists()

    def test_does_not_create_src(self, tmp_path: Path) -> None:
        src = tmp_path / "missing"
        with patch("aptpool.fileops.run_tool"):
            fileops.mirror(src, tmp_path / "dst")
        assert not src.exists()

    def test_remote_target(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        with patch("aptpool.fileops.run_tool") as mock_run:
            fileops.mirror(tmp_path, "mirror.example.org:/srv/repo")
        mock_run.assert_called_once_with("rsync", "-avz", tmp_path, "mirror.example.org:/srv/repo")
        assert list(tmp_path.iterdir()) == []

    def test_failure(self, tmp_path: Path) -> None:
        with patch("aptpool.fileops.run_tool", side_effect=ExternalToolError("rsync", 1)):
            with pytest.raises(ExternalToolError, match="rsync command failed"):
                fileops.mirror(tmp_path, tmp_path / "dst")


class TestReadWrite:
    def test_text_round_trip(self, tmp_path: Path) -> None:
        path = tmp_path / "changelog"
        fileops.write(path, "hello (2.10-3) unstable; urgency=medium\n")
        assert fileops.read_to_string(path) == "hello (2.10-3) unstable; urgency=medium\n"

    def test_bytes_overwrite(self, tmp_path: Path) -> None:
        path = tmp_path / "blob"
        fileops.write(path, b"first")
        fileops.write(path, b"\x00\x01")
        assert fileops.read_bytes(path) == b"\x00\x01"

    def test_missing(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            fileops.read_to_string(tmp_path / "missing")
