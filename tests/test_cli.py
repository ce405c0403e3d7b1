"""
命令行入口测试
"""

import json
import shutil
import tempfile
from pathlib import Path

import pytest

from xliff_tools.cli import load_source_nodes, main
from xliff_tools.core import SourceNode, TranslationState, load_document, save_document
from xliff_tools.utils.errors import SourceNodeError


def _write_jsonl(path, rows):
    path.write_text("\n".join(json.dumps(r, ensure_ascii=False) for r in rows) + "\n", encoding="utf-8")


class TestCli:

    def setup_method(self):
        """每个测试方法前执行"""
        self.temp_dir = Path(tempfile.mkdtemp())
        self.source = self.temp_dir / "Strings.jsonl"
        self.xlf = self.temp_dir / "Strings.de.xlf"
        self.config = self.temp_dir / "xliff-tools.json"

    def teardown_method(self):
        """每个测试方法后执行"""
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def run(self, *args):
        return main(["--config", str(self.config), *args])

    def test_no_command_prints_help(self, capsys):
        assert main([]) == 0
        assert "xliff-tools" in capsys.readouterr().out

    def test_update_creates_sorted_document(self):
        _write_jsonl(self.source, [
            {"id": "b", "source": "Bye"},
            {"id": "c", "source": "Cancel"},
            {"id": "a", "source": "Hello", "note": "greeting"},
        ])
        assert self.run("update", str(self.source), str(self.xlf), "--target-language", "de") == 0

        doc = load_document(self.xlf)
        assert doc.document.ids() == ["a", "b", "c"]
        assert doc.document.original == "Strings.jsonl"
        assert doc.document.target_language == "de"
        assert doc.document.find("a").note == "greeting"

    def test_update_requires_language_for_new_document(self):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}])
        assert self.run("update", str(self.source), str(self.xlf)) == 1
        assert not self.xlf.exists()

    def test_update_custom_id_and_no_rewrite_when_unchanged(self):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}])
        args = ("update", str(self.source), str(self.xlf), "--target-language", "de", "--id", "res/Strings.resx")
        assert self.run(*args) == 0
        assert load_document(self.xlf).document.original == "res/Strings.resx"

        mtime = self.xlf.stat().st_mtime_ns
        assert self.run(*args) == 0
        assert self.xlf.stat().st_mtime_ns == mtime

    def test_update_existing_document_is_not_resorted(self):
        _write_jsonl(self.source, [{"id": "c", "source": "C"}, {"id": "a", "source": "A"}])
        self.run("update", str(self.source), str(self.xlf), "--target-language", "de")
        doc = load_document(self.xlf)
        doc.document.units.reverse()
        save_document(doc, self.xlf)

        _write_jsonl(self.source, [{"id": "c", "source": "C"}, {"id": "a", "source": "A"}, {"id": "b", "source": "B"}])
        assert self.run("update", str(self.source), str(self.xlf)) == 0
        assert load_document(self.xlf).document.ids() == ["b", "c", "a"]

        assert self.run("update", str(self.source), str(self.xlf), "--sort") == 0
        assert load_document(self.xlf).document.ids() == ["a", "b", "c"]

    def test_update_sort_new_documents_disabled(self):
        self.config.write_text(json.dumps({"sort_new_documents": False}), encoding="utf-8")
        _write_jsonl(self.source, [{"id": "a", "source": "A"}])
        self.run("update", str(self.source), str(self.xlf), "--target-language", "de")
        assert load_document(self.xlf).document.ids() == ["a"]

    def test_update_duplicate_id_fails(self):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}, {"id": "a", "source": "B"}])
        assert self.run("update", str(self.source), str(self.xlf), "--target-language", "de") == 1
        assert not self.xlf.exists()

    def test_update_malformed_xlf_fails(self):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}])
        self.xlf.write_text("<xliff>", encoding="utf-8")
        assert self.run("update", str(self.source), str(self.xlf)) == 1
        assert self.xlf.read_text(encoding="utf-8") == "<xliff>"

    def test_sort_command(self):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}, {"id": "b", "source": "B"}])
        self.run("update", str(self.source), str(self.xlf), "--target-language", "de")
        doc = load_document(self.xlf)
        doc.document.units.reverse()
        save_document(doc, self.xlf)

        assert self.run("sort", str(self.xlf)) == 0
        assert load_document(self.xlf).document.ids() == ["a", "b"]

    def test_sort_missing_file(self):
        assert self.run("sort", str(self.xlf)) == 1

    def test_translations_and_untranslated(self, capsys):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}, {"id": "b", "source": "B"}])
        self.run("update", str(self.source), str(self.xlf), "--target-language", "de")
        doc = load_document(self.xlf)
        unit = doc.document.find("b")
        unit.target, unit.state = "Bé", TranslationState.TRANSLATED
        save_document(doc, self.xlf)
        capsys.readouterr()

        assert self.run("translations", str(self.xlf)) == 0
        assert json.loads(capsys.readouterr().out) == {"a": "A", "b": "Bé"}

        out_file = self.temp_dir / "out" / "de.json"
        assert self.run("translations", str(self.xlf), "-o", str(out_file)) == 0
        assert json.loads(out_file.read_text(encoding="utf-8")) == {"a": "A", "b": "Bé"}

        capsys.readouterr()
        assert self.run("untranslated", str(self.xlf)) == 0
        assert capsys.readouterr().out.split() == ["a"]

    def test_status(self, capsys):
        _write_jsonl(self.source, [{"id": "a", "source": "A"}, {"id": "b", "source": "B"}])
        self.run("update", str(self.source), str(self.xlf), "--target-language", "de")
        capsys.readouterr()

        assert self.run("status", str(self.xlf)) == 0
        out = capsys.readouterr().out
        assert "new" in out
        assert "total" in out


class TestLoadSourceNodes:

    def setup_method(self):
        self.temp_dir = Path(tempfile.mkdtemp())
        self.path = self.temp_dir / "nodes.jsonl"

    def teardown_method(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_reads_in_order_and_skips_blank_lines(self):
        self.path.write_text('{"id": "b", "source": "B"}\n\n{"id": "a", "source": "A", "note": "n"}\n', encoding="utf-8")
        assert load_source_nodes(self.path) == [SourceNode("b", "B"), SourceNode("a", "A", "n")]

    def test_bad_json_reports_line(self):
        self.path.write_text('{"id": "a", "source": "A"}\n{oops\n', encoding="utf-8")
        with pytest.raises(SourceNodeError) as exc_info:
            load_source_nodes(self.path)
        assert exc_info.value.line_no == 2

    def test_bad_row_reports_line(self):
        self.path.write_text('{"id": "a"}\n', encoding="utf-8")
        with pytest.raises(SourceNodeError) as exc_info:
            load_source_nodes(self.path)
        assert exc_info.value.line_no == 1
        assert "nodes.jsonl:1" in str(exc_info.value)
