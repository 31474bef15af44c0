"""
Tests for the changelog: record rendering, document model, repository.

Run with:
    pytest tests/test_changelog.py -v
"""

import json
from datetime import datetime

import pytest

from commit_analyzer.changelog import (
    Anchor, ChangelogDocument, ChangelogIoError, ChangelogRepository, CommitRecord, format_timestamp,
)
from commit_analyzer.changelog.document import HISTORY_HEADING, LATEST_RECORDS_HEADING
from commit_analyzer.git.analyzer import DiffInfo
from commit_analyzer.git.classifier import analyze_changes


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def record():
    diff = DiffInfo(
        modified_files=("src/a.ts", "docs/new.md"),
        added_files=("docs/new.md",),
        deleted_files=(),
        added_lines=12,
        deleted_lines=3,
        diff_content="fix",
    )
    return CommitRecord.from_analysis(
        "docs(src): 更新文档: 新增1个文件: 修改2个文件\n\n变更统计信息:\n- 新增行数: 12",
        diff,
        analyze_changes(diff),
        branch="main",
        commit_hash="abc12345",
        remote_analysis="docs: describe parser",
        timestamp="2026/10/19 10:00:00",
    )


# ---------------------------------------------------------------------------
# CommitRecord
# ---------------------------------------------------------------------------

class TestCommitRecord:

    def test_format_timestamp(self):
        assert format_timestamp(datetime(2026, 1, 5, 9, 3, 7)) == "2026/1/5 09:03:07"

    def test_snapshot_fields(self, record):
        assert record.changes.added_lines == 12
        assert record.changes.modified_files == 2
        assert record.changes.added_files == 1
        assert record.changes.deleted_files == 0
        assert record.changes.complexity == "low"
        assert record.files.file_types == ("ts", "md")

    def test_heading_uses_subject_line(self, record):
        block = record.render_markdown()
        assert block.startswith("### docs(src): 更新文档: 新增1个文件: 修改2个文件\n")
        assert "变更统计信息" not in block.split("\n")[0]

    def test_metadata_and_stats(self, record):
        block = record.render_markdown()
        assert "- **时间**: 2026/10/19 10:00:00" in block
        assert "- **分支**: main" in block
        assert "- **提交哈希**: abc12345" in block
        assert "- **新增行数**: 12 行" in block
        assert "- **AI 分析**: docs: describe parser" in block

    def test_file_lists_quoted_and_empty_ones_skipped(self, record):
        block = record.render_markdown()
        assert "- **修改**: `src/a.ts`, `docs/new.md`" in block
        assert "- **新增**: `docs/new.md`" in block
        assert "- **删除**" not in block

    def test_optional_fields_omitted(self):
        diff = DiffInfo(modified_files=("a.py",))
        block = CommitRecord.from_analysis("feat: x", diff, analyze_changes(diff), "main", "").render_markdown()
        assert "AI 分析" not in block
        assert "变更模式" not in block
        assert "- **提交哈希**: -" in block

    def test_block_ends_with_rule(self, record):
        assert record.render_markdown().endswith("\n---\n")


# ---------------------------------------------------------------------------
# ChangelogDocument
# ---------------------------------------------------------------------------

class TestChangelogDocument:

    @pytest.mark.parametrize("text, anchor", [
        (f"# T\n\n{LATEST_RECORDS_HEADING}\n\nold\n", Anchor.LATEST_RECORDS),
        (f"# T\n\n{HISTORY_HEADING}\nold\n", Anchor.HISTORY),
        ("# T\n\nold\n", Anchor.TITLE),
        ("no headings here\n", None),
    ])
    def test_anchor_detection(self, text, anchor):
        assert ChangelogDocument.parse(text).anchor == anchor

    def test_latest_records_beats_history(self):
        text = f"# T\n{HISTORY_HEADING}\n{LATEST_RECORDS_HEADING}\n"
        doc = ChangelogDocument.parse(text)
        assert doc.anchor == Anchor.LATEST_RECORDS
        assert doc.head.endswith(f"{LATEST_RECORDS_HEADING}\n")

    def test_second_level_heading_is_not_a_title(self):
        assert ChangelogDocument.parse("## Section\ntext\n").anchor is None

    def test_render_unchanged(self):
        text = f"# T\n\n{LATEST_RECORDS_HEADING}\n\nold\n\n*最后更新：2020/1/1 00:00:00*\n"
        assert ChangelogDocument.parse(text).render() == text

    def test_newest_record_first(self):
        doc = ChangelogDocument.parse("# T\n")
        doc.add_record("first\n")
        doc.add_record("second\n")
        assert doc.render() == "# T\nsecond\n\nfirst\n\n"

    def test_touch_replaces_marker(self):
        doc = ChangelogDocument.parse("# T\n\n*最后更新：2020/1/1 00:00:00*\n")
        doc.touch("2026/10/19 10:00:00")
        assert doc.render() == "# T\n\n*最后更新：2026/10/19 10:00:00*\n"

    def test_touch_leaves_undecorated_marker(self):
        text = "# T\n\n最后更新: yesterday\n"
        doc = ChangelogDocument.parse(text)
        doc.touch("2026/10/19 10:00:00")
        assert doc.render() == text


# ---------------------------------------------------------------------------
# ChangelogRepository
# ---------------------------------------------------------------------------

class TestChangelogRepositoryLocate:

    def test_none_when_missing(self, tmp_path):
        assert ChangelogRepository(tmp_path).locate() is None

    def test_finds_lowercase_name(self, tmp_path):
        (tmp_path / "changelog.md").write_text("# x\n", encoding="utf-8")
        assert ChangelogRepository(tmp_path).locate().name.lower() == "changelog.md"

    def test_prefers_uppercase_name(self, tmp_path):
        (tmp_path / "CHANGELOG.md").write_text("# upper\n", encoding="utf-8")
        assert ChangelogRepository(tmp_path).locate() == tmp_path / "CHANGELOG.md"


class TestChangelogRepositoryCreate:

    def test_project_name_from_package_json(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"name": "my-app"}), encoding="utf-8")
        assert ChangelogRepository(tmp_path).project_name() == "my-app"

    def test_malformed_package_json_falls_back_to_directory(self, tmp_path):
        (tmp_path / "package.json").write_text("{not json", encoding="utf-8")
        assert ChangelogRepository(tmp_path).project_name() == tmp_path.name

    def test_package_json_without_name(self, tmp_path):
        (tmp_path / "package.json").write_text(json.dumps({"version": "1.0.0"}), encoding="utf-8")
        assert ChangelogRepository(tmp_path).project_name() == tmp_path.name

    def test_create_writes_template(self, tmp_path):
        path = ChangelogRepository(tmp_path).create()
        text = path.read_text(encoding="utf-8")

        assert path == tmp_path / "CHANGELOG.md"
        assert text.startswith(f"# {tmp_path.name} 变更日志\n")
        assert f"\n{LATEST_RECORDS_HEADING}\n" in text
        assert "## 📝 项目信息" in text
        assert "## 📈 提交统计" in text
        assert "*最后更新：" in text


class TestChangelogRepositoryUpdate:

    def test_inserts_after_latest_records_anchor(self, tmp_path, record):
        head = f"# Project\n\n{LATEST_RECORDS_HEADING}\n"
        rest = "\n### older record\n\nsome text\n"
        (tmp_path / "CHANGELOG.md").write_text(head + rest, encoding="utf-8")

        path = ChangelogRepository(tmp_path).update(record)
        text = path.read_text(encoding="utf-8")

        assert text == head + record.render_markdown() + "\n" + rest

    def test_falls_back_to_history_anchor(self, tmp_path, record):
        original = f"# Project\n\n{HISTORY_HEADING}\nolder\n"
        (tmp_path / "CHANGELOG.md").write_text(original, encoding="utf-8")

        text = ChangelogRepository(tmp_path).update(record).read_text(encoding="utf-8")
        assert text.startswith(f"# Project\n\n{HISTORY_HEADING}\n### ")
        assert text.endswith("\nolder\n")

    def test_falls_back_to_title(self, tmp_path, record):
        (tmp_path / "CHANGELOG.md").write_text("# Project\nolder\n", encoding="utf-8")
        text = ChangelogRepository(tmp_path).update(record).read_text(encoding="utf-8")
        assert text.startswith("# Project\n### ")
        assert text.endswith("\nolder\n")

    def test_prepends_without_any_anchor(self, tmp_path, record):
        (tmp_path / "CHANGELOG.md").write_text("plain notes\n", encoding="utf-8")
        text = ChangelogRepository(tmp_path).update(record).read_text(encoding="utf-8")
        assert text == record.render_markdown() + "\nplain notes\n"

    def test_create_then_update(self, tmp_path, record):
        repo = ChangelogRepository(tmp_path)
        repo.create()
        text = repo.update(record).read_text(encoding="utf-8")

        assert "## 📝 项目信息" in text
        assert text.count("\n### ") == 1
        assert text.index(LATEST_RECORDS_HEADING) < text.index("### docs(src)")
        assert text.index("### docs(src)") < text.index("## 📝 项目信息")

    def test_update_creates_missing_changelog(self, tmp_path, record):
        path = ChangelogRepository(tmp_path).update(record)
        assert path == tmp_path / "CHANGELOG.md"
        assert "### docs(src)" in path.read_text(encoding="utf-8")

    def test_refreshes_last_updated(self, tmp_path, record):
        (tmp_path / "CHANGELOG.md").write_text("# P\n\n*最后更新：1999/1/1 00:00:00*\n", encoding="utf-8")
        text = ChangelogRepository(tmp_path).update(record).read_text(encoding="utf-8")
        assert "1999/1/1" not in text
        assert text.count("*最后更新：") == 1

    def test_read_failure_raises_changelog_io_error(self, tmp_path, record):
        (tmp_path / "CHANGELOG.md").mkdir()
        with pytest.raises(ChangelogIoError) as excinfo:
            ChangelogRepository(tmp_path).update(record)
        assert isinstance(excinfo.value, OSError)

    def test_non_utf8_changelog_raises_changelog_io_error(self, tmp_path, record):
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes("# 项目\n".encode("gbk"))
        with pytest.raises(ChangelogIoError, match="Could not read"):
            ChangelogRepository(tmp_path).update(record)
        assert path.read_bytes() == "# 项目\n".encode("gbk")


class TestCrlfChangelog:

    TEXT = f"# P\r\n\r\n{LATEST_RECORDS_HEADING}\r\n\r\nold\r\n\r\n*最后更新：2020/1/1 00:00:00*\r\n"

    def test_anchor_line_includes_crlf(self):
        doc = ChangelogDocument.parse(self.TEXT)
        assert doc.anchor == Anchor.LATEST_RECORDS
        assert doc.head == f"# P\r\n\r\n{LATEST_RECORDS_HEADING}\r\n"
        assert doc.newline == "\r\n"

    def test_title_anchor_with_crlf(self):
        doc = ChangelogDocument.parse("# P\r\nold\r\n")
        assert doc.anchor == Anchor.TITLE
        assert doc.head == "# P\r\n"

    def test_update_keeps_line_endings(self, tmp_path, record):
        path = tmp_path / "CHANGELOG.md"
        path.write_bytes(self.TEXT.encode("utf-8"))

        ChangelogRepository(tmp_path).update(record)
        data = path.read_bytes().decode("utf-8")

        assert data.startswith(f"# P\r\n\r\n{LATEST_RECORDS_HEADING}\r\n### docs(src)")
        assert "\r\n\r\nold\r\n\r\n*最后更新：" in data
        assert data.endswith("*\r\n")
        assert data.count("\n") == data.count("\r\n")
        assert "2020/1/1" not in data
