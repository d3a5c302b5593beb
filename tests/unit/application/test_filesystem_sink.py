"""Tests for FilesystemSink."""

import pytest

from repogen.application.filesystem_sink import FilesystemSink
from repogen.domain.errors import SinkError


@pytest.fixture
def sink(tmp_path):
    return FilesystemSink(tmp_path / "out")


class TestFilesystemSink:
    def test_reset_creates_root(self, sink):
        assert sink.reset() is False
        assert sink.root.is_dir()

    def test_reset_removes_previous_tree(self, sink, caplog):
        sink.reset()
        sink.write_file("stale/old.txt", "old")

        assert sink.reset() is True

        assert sink.root.is_dir()
        assert list(sink.root.iterdir()) == []
        assert "already existed" in caplog.text

    def test_reset_replaces_plain_file(self, sink):
        sink.root.parent.mkdir(parents=True, exist_ok=True)
        sink.root.write_text("not a dir")

        assert sink.reset() is True
        assert sink.root.is_dir()

    def test_write_and_read(self, sink):
        sink.reset()

        target = sink.write_file("src/deep/a.ts", "export {}")

        assert target == (sink.root / "src" / "deep" / "a.ts").resolve()
        assert sink.read_file("src/deep/a.ts") == "export {}"

    def test_ensure_parent(self, sink):
        parent = sink.ensure_parent("x/y/z.txt")
        assert parent.is_dir()
        assert parent == (sink.root / "x" / "y").resolve()

    def test_ensure_dir_nested(self, sink):
        assert sink.ensure_dir("a/b").is_dir()

    @pytest.mark.parametrize("bad", ["../escape.txt", "/etc/passwd", "a/../../b"])
    def test_refuses_paths_outside_root(self, sink, bad):
        with pytest.raises(SinkError, match="outside output root"):
            sink.write_file(bad, "x")

    def test_os_error_wrapped(self, sink):
        sink.reset()
        sink.write_file("a", "file, not a directory")

        with pytest.raises(SinkError) as exc_info:
            sink.ensure_parent("a/b.txt")

        assert exc_info.value.cause is not None
        assert "Failed to create directory" in str(exc_info.value)

    def test_read_missing_file(self, sink):
        sink.reset()
        with pytest.raises(SinkError, match="Failed to read file"):
            sink.read_file("missing.txt")

    def test_remove_all_missing_root(self, sink):
        assert sink.remove_all() is False

    def test_line_endings_preserved(self, sink):
        sink.reset()

        target = sink.write_file("run.bat", "echo a\r\necho b\r\n")

        assert target.read_bytes() == b"echo a\r\necho b\r\n"
        assert sink.read_file("run.bat") == "echo a\r\necho b\r\n"

    def test_undecodable_file_raises_sink_error(self, sink):
        sink.reset()
        (sink.root / "bin.dat").write_bytes(b"\xff\xfe\xfa")

        with pytest.raises(SinkError, match="Failed to read file"):
            sink.read_file("bin.dat")

    def test_remove_file(self, sink):
        sink.reset()
        sink.write_file("a/b.txt", "x")

        assert sink.remove_file("a/b.txt") is True
        assert not (sink.root / "a" / "b.txt").exists()
        assert sink.remove_file("a/b.txt") is False
