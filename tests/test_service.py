"""Tests for the Analyzer operation surface."""

from pathlib import Path

from tsnarrow.cache.store import ResultCache
from tsnarrow.config.schema import TsNarrowConfig
from tsnarrow.files.accessor import FileAccessor
from tsnarrow.service import Analyzer


class TestAnalyze:
    def test_reports_occurrences(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        result = analyzer.analyze(path)
        assert result.success
        assert result.total == 6
        assert result.content_hash
        assert result.from_cache is False

    def test_second_call_served_from_cache(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        first = analyzer.analyze(path)
        second = analyzer.analyze(path)
        assert second.from_cache is True
        assert second.to_dict() == first.to_dict()

    def test_changed_content_misses_cache(self, analyzer, write_source):
        path = write_source("a.ts", "let a: any;\n")
        analyzer.analyze(path)
        path.write_text("let a: any;\nlet b: any;\n", encoding="utf-8")
        result = analyzer.analyze(path)
        assert result.from_cache is False
        assert result.total == 2

    def test_use_cache_false(self, analyzer, write_source):
        path = write_source("a.ts", "let a: any;\n")
        analyzer.analyze(path)
        assert analyzer.analyze(path, use_cache=False).from_cache is False

    def test_disabled_cache_changes_nothing(self, config, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        config.analysis.cache_enabled = False
        uncached = Analyzer(config)
        first = uncached.analyze(path)
        second = uncached.analyze(path)
        assert second.from_cache is False
        assert second.to_dict() == first.to_dict()

    def test_missing_file(self, analyzer, tmp_path: Path):
        result = analyzer.analyze(tmp_path / "missing.ts")
        assert result.success is False
        assert result.error["kind"] == "not_found"

    def test_too_large(self, config, write_source):
        path = write_source("big.ts", "let a: any;\n" * 200)
        small = Analyzer(config, files=FileAccessor(max_size_bytes=100))
        result = small.analyze(path)
        assert result.success is False
        assert result.error["kind"] == "too_large"


class TestCacheIsolation:
    """Analyzers with different settings may share a cache directory."""

    SOURCE = "function f(data: any, z: any) {}\n"

    @staticmethod
    def _config(cache_dir: Path) -> TsNarrowConfig:
        cfg = TsNarrowConfig()
        cfg.analysis.cache_dir = str(cache_dir)
        return cfg

    def test_default_replacement_is_part_of_the_key(self, write_source, tmp_path: Path):
        path = write_source("a.ts", self.SOURCE)
        Analyzer(self._config(tmp_path / "shared")).analyze(path)

        cfg = self._config(tmp_path / "shared")
        cfg.fix.default_replacement = "object"
        result = Analyzer(cfg).analyze(path)

        assert result.from_cache is False
        assert result.occurrences[1].replacement == "object"

    def test_disabled_rule_is_part_of_the_key(self, write_source, tmp_path: Path):
        path = write_source("a.ts", self.SOURCE)
        first = Analyzer(self._config(tmp_path / "shared")).analyze(path)
        assert first.occurrences[0].rule_id == "DATA_OBJECT"

        cfg = self._config(tmp_path / "shared")
        cfg.rules.disable = ["DATA_OBJECT"]
        result = Analyzer(cfg).analyze(path)

        assert result.from_cache is False
        assert result.occurrences[0].rule_id is None
        assert result.occurrences[0].replacement == "unknown"

    def test_same_settings_still_share(self, write_source, tmp_path: Path):
        path = write_source("a.ts", self.SOURCE)
        Analyzer(self._config(tmp_path / "shared")).analyze(path)
        assert Analyzer(self._config(tmp_path / "shared")).analyze(path).from_cache is True


class TestFix:
    def test_dry_run_leaves_file_untouched(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        before = path.read_text(encoding="utf-8")
        result = analyzer.fix(path, dry_run=True)
        assert result.success
        assert result.total == 6
        assert result.applied is False
        assert result.backup_path is None
        assert path.read_text(encoding="utf-8") == before
        assert list(path.parent.glob("*.bak")) == []

    def test_rewrites_and_backs_up(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        before = path.read_bytes()
        result = analyzer.fix(path)
        assert result.applied
        assert result.backup_created
        backup = Path(result.backup_path)
        assert backup.name.startswith("module.ts.")
        assert backup.suffix == ".bak"
        assert backup.read_bytes() == before

        text = path.read_text(encoding="utf-8")
        assert "data: Record<string, unknown>" in text
        assert "flag: boolean" in text
        assert "userCount: number;" in text
        assert "createdAt: Date | string;" in text
        assert "Promise<unknown>" in text

    def test_round_trip_finds_nothing(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        analyzer.fix(path, backup=False)
        assert analyzer.analyze(path).total == 0

    def test_idempotent(self, analyzer, write_source, sample_module_source):
        path = write_source("module.ts", sample_module_source)
        analyzer.fix(path, backup=False)
        fixed = path.read_text(encoding="utf-8")
        second = analyzer.fix(path)
        assert second.total == 0
        assert second.applied is False
        assert second.backup_path is None
        assert path.read_text(encoding="utf-8") == fixed

    def test_replacement_default_override(self, analyzer, write_source):
        path = write_source("a.ts", "type T = any;\n")
        analyzer.fix(path, replacement_default="object", backup=False)
        assert path.read_text(encoding="utf-8") == "type T = object;\n"

    def test_array_element_rewrite(self, analyzer, write_source):
        path = write_source("a.ts", "function f(rows: any[], xs: Array<any>) {}\n")
        analyzer.fix(path, backup=False)
        assert path.read_text(encoding="utf-8") == (
            "function f(rows: Record<string, unknown>[], xs: Array<unknown>) {}\n"
        )

    def test_preserves_crlf(self, analyzer, tmp_path: Path):
        path = tmp_path / "crlf.ts"
        path.write_bytes(b"let a: any;\r\nlet b = 1;\r\n")
        analyzer.fix(path, backup=False)
        assert path.read_bytes() == b"let a: unknown;\r\nlet b = 1;\r\n"

    def test_backup_dir(self, config, write_source, tmp_path: Path):
        config.fix.backup_dir = str(tmp_path / "backups")
        path = write_source("a.ts", "let a: any;\n")
        result = Analyzer(config).fix(path)
        assert Path(result.backup_path).parent == tmp_path / "backups"

    def test_invalid_replacement_is_a_failed_result(self, analyzer, write_source):
        path = write_source("a.ts", "let a: any;\n")
        result = analyzer.fix(path, replacement_default="any")
        assert result.success is False
        assert result.error["kind"] == "invalid_option"
        assert result.applied is False
        assert path.read_text(encoding="utf-8") == "let a: any;\n"

    def test_missing_file_dry_run(self, analyzer, tmp_path: Path):
        result = analyzer.fix(tmp_path / "missing.ts", dry_run=True)
        assert result.success is False
        assert result.error["kind"] == "not_found"


class TestGenerateInterface:
    def test_renders_and_writes(self, analyzer, write_source, sample_component_source, tmp_path):
        path = write_source("Button.tsx", sample_component_source)
        out = tmp_path / "ChipProps.ts"
        result = analyzer.generate_interface(path, "Chip", out)
        assert result.success
        assert result.component_kind == "function"
        assert out.read_text(encoding="utf-8") == result.interface_text
        assert "interface ChipProps {" in result.interface_text

    def test_component_not_found(self, analyzer, write_source, sample_component_source):
        path = write_source("Button.tsx", sample_component_source)
        result = analyzer.generate_interface(path, "Missing")
        assert result.success is False
        assert result.error == {
            "kind": "component_not_found",
            "message": "Component Missing not found in file",
        }


class TestClearCache:
    def test_clear(self, config, write_source, tmp_path: Path):
        cache = ResultCache(tmp_path / "c", ttl=60)
        analyzer = Analyzer(config, cache=cache)
        analyzer.analyze(write_source("a.ts", "let a: any;\n"))
        analyzer.analyze(write_source("b.ts", "let b: any;\n"))
        assert analyzer.clear_cache() == 2
        assert analyzer.clear_cache() == 0
