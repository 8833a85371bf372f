"""Tests for file access, backups and discovery."""

import re
from datetime import datetime, timezone
from pathlib import Path

import pytest

from tsnarrow.errors import FileIOError, FileNotFound, FileTooLarge
from tsnarrow.files.accessor import FileAccessor, backup_timestamp
from tsnarrow.files.discovery import discover_files, expand_braces, is_ignored

DEFAULT_IGNORES = ["**/node_modules/**", "**/dist/**", "**/build/**"]


class TestFileAccessor:
    def test_read_write(self, tmp_path: Path):
        files = FileAccessor(1024)
        path = tmp_path / "a.ts"
        files.write(path, "let a = 1;\n")
        assert files.read(path) == "let a = 1;\n"

    def test_not_found(self, tmp_path: Path):
        with pytest.raises(FileNotFound):
            FileAccessor(1024).read(tmp_path / "nope.ts")

    def test_too_large(self, tmp_path: Path):
        path = tmp_path / "big.ts"
        path.write_text("x" * 11)
        with pytest.raises(FileTooLarge):
            FileAccessor(10).read(path)

    def test_directory_is_io_failure(self, tmp_path: Path):
        with pytest.raises(FileIOError):
            FileAccessor(1024 * 1024).read(tmp_path)

    def test_invalid_utf8(self, tmp_path: Path):
        path = tmp_path / "bin.ts"
        path.write_bytes(b"\xff\xfe\x00garbage")
        with pytest.raises(FileIOError):
            FileAccessor(1024).read(path)

    def test_backup_is_byte_identical(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_bytes(b"let a: any;\r\n")
        backup = FileAccessor(1024).backup(path)
        assert backup.parent == tmp_path
        assert re.fullmatch(r"a\.ts\.\d{4}-\d\d-\d\dT\d\d-\d\d-\d\d-\d{3}Z(-\d+)?\.bak", backup.name)
        assert backup.read_bytes() == path.read_bytes()

    def test_backups_never_collide(self, tmp_path: Path):
        path = tmp_path / "a.ts"
        path.write_text("x")
        files = FileAccessor(1024)
        names = {files.backup(path).name for _ in range(3)}
        assert len(names) == 3

    def test_backup_missing_source(self, tmp_path: Path):
        with pytest.raises(FileIOError):
            FileAccessor(1024).backup(tmp_path / "gone.ts")

    def test_timestamp_format(self):
        stamp = backup_timestamp(datetime(2024, 5, 1, 12, 30, 5, 123456, tzinfo=timezone.utc))
        assert stamp == "2024-05-01T12-30-05-123Z"


class TestDiscovery:
    @pytest.fixture
    def project(self, tmp_path: Path) -> Path:
        for rel in (
            "index.ts",
            "src/App.tsx",
            "src/util/math.ts",
            "src/styles.css",
            "node_modules/lib/index.ts",
            "dist/index.ts",
            "src/build/gen.ts",
            "src/distance.ts",
        ):
            path = tmp_path / rel
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text("export {};\n")
        return tmp_path

    def _rel(self, root: Path, files):
        return [Path(f).relative_to(root).as_posix() for f in files]

    def test_default_pattern_with_ignores(self, project: Path):
        found = discover_files(project, ignore_patterns=DEFAULT_IGNORES)
        assert self._rel(project, found) == [
            "index.ts",
            "src/App.tsx",
            "src/distance.ts",
            "src/util/math.ts",
        ]

    def test_without_ignores(self, project: Path):
        found = self._rel(project, discover_files(project))
        assert "node_modules/lib/index.ts" in found
        assert "dist/index.ts" in found

    def test_custom_pattern(self, project: Path):
        found = discover_files(project, "**/*.tsx", DEFAULT_IGNORES)
        assert self._rel(project, found) == ["src/App.tsx"]

    def test_expand_braces(self):
        assert expand_braces("**/*.{ts,tsx}") == ["**/*.ts", "**/*.tsx"]
        assert expand_braces("{a,b}/{c,d}") == ["a/c", "a/d", "b/c", "b/d"]
        assert expand_braces("*.ts") == ["*.ts"]

    def test_is_ignored(self):
        assert is_ignored("node_modules", DEFAULT_IGNORES)
        assert is_ignored("packages/x/node_modules/y.ts", DEFAULT_IGNORES)
        assert not is_ignored("src/distance.ts", DEFAULT_IGNORES)
