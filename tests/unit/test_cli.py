"""CLI tests for chatlog commands."""

from __future__ import annotations

import asyncio

import pytest
from click.testing import CliRunner

from chatlog.cli.main import main
from chatlog.config import Settings
from chatlog.library import Library


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def invoke(runner, test_storage_dir):
    """Run the CLI against temporary storage."""

    def _invoke(*args: str, input: str | None = None):
        return runner.invoke(main, ["--storage-dir", str(test_storage_dir), *args], input=input)

    return _invoke


def _documents(storage_dir):
    async def _load():
        async with await Library.open(Settings(storage_dir=storage_dir)) as library:
            return library.documents

    return asyncio.run(_load())


class TestHelp:
    def test_help(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0
        for command in ("import", "list", "show", "delete", "assign", "folders"):
            assert command in result.output


class TestImportAndList:
    def test_import(self, invoke, transcript_file, test_storage_dir):
        result = invoke("import", str(transcript_file))

        assert result.exit_code == 0, result.output
        assert "Imported" in result.output
        assert [d.name for d in _documents(test_storage_dir)] == ["Session Notes"]

    def test_import_missing_file(self, invoke, tmp_path):
        result = invoke("import", str(tmp_path / "nope.md"))
        assert result.exit_code != 0

    def test_list_empty(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        assert "No documents found" in result.output

    def test_list_shows_documents(self, invoke, transcript_file):
        invoke("import", str(transcript_file))

        result = invoke("list")

        assert result.exit_code == 0, result.output
        assert "Session" in result.output
        assert "What is" in result.output

    def test_list_search(self, invoke, transcript_file):
        invoke("import", str(transcript_file))

        assert "Session" in invoke("list", "--search", "JUST A NOTE").output
        assert "No documents found" in invoke("list", "--search", "absent").output

    def test_list_conflicting_filters(self, invoke):
        result = invoke("list", "--folder", "work", "--uncategorized")
        assert result.exit_code == 2


class TestShow:
    def test_show_by_prefix(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        result = invoke("show", doc_id[:8])

        assert result.exit_code == 0, result.output
        assert "What is X?" in result.output
        assert "X is Y." in result.output
        assert "Just a note." in result.output
        assert "1 / 2" in result.output

    def test_show_outline(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        result = invoke("show", doc_id, "--outline")

        assert result.exit_code == 0, result.output
        assert "What is X?" in result.output
        assert "(no question)" in result.output
        assert "X is Y." not in result.output

    def test_show_missing(self, invoke):
        result = invoke("show", "deadbeef")
        assert result.exit_code == 1
        assert "not found" in result.output


class TestDelete:
    def test_delete_with_yes(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        result = invoke("delete", doc_id, "--yes")

        assert result.exit_code == 0, result.output
        assert _documents(test_storage_dir) == []

    def test_delete_aborted(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        result = invoke("delete", doc_id, input="n\n")

        assert "Aborted" in result.output
        assert len(_documents(test_storage_dir)) == 1


class TestFolders:
    def test_folder_workflow(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        assert invoke("folders", "add", "work").exit_code == 0
        assert invoke("folders", "add", "work").exit_code == 1

        result = invoke("assign", doc_id[:8], "work")
        assert result.exit_code == 0, result.output
        assert _documents(test_storage_dir)[0].folder == "work"

        assert "Session" in invoke("list", "--folder", "work").output
        assert "No documents found" in invoke("list", "--uncategorized").output

        listing = invoke("folders", "list")
        assert "work" in listing.output
        assert "(1)" in listing.output

        result = invoke("folders", "remove", "work")
        assert result.exit_code == 0, result.output
        assert "1 document(s) unassigned" in result.output
        assert _documents(test_storage_dir)[0].folder == ""
        assert "No folders" in invoke("folders", "list").output

    def test_assign_unknown_folder(self, invoke, transcript_file, test_storage_dir):
        invoke("import", str(transcript_file))
        doc_id = _documents(test_storage_dir)[0].id

        result = invoke("assign", doc_id, "nope")

        assert result.exit_code == 1
        assert "Unknown folder" in result.output

    def test_assign_needs_folder_or_clear(self, invoke):
        assert invoke("assign", "abc").exit_code == 2
        assert invoke("assign", "abc", "work", "--clear").exit_code == 2


class TestStoreUnavailable:
    def test_corrupt_database_exit_code(self, invoke, test_storage_dir):
        (test_storage_dir / "library.db").write_bytes(b"garbage" * 500)

        result = invoke("list")

        assert result.exit_code == 2
        assert "Store unavailable" in result.output
