"""Tests for install_reporter.data.logs — log store and error history."""

from __future__ import annotations

import asyncio

from install_reporter.data.logs import ErrorHistory, FileLogStore


class TestFileLogStore:
    def test_reads_log(self, tmp_path):
        log = tmp_path / "ubports-installer.log"
        log.write_text("line one\nline two\n", encoding="utf-8")
        assert asyncio.run(FileLogStore(str(log)).get()) == "line one\nline two\n"

    def test_missing_file_is_empty(self, tmp_path):
        store = FileLogStore(str(tmp_path / "nope.log"))
        assert asyncio.run(store.get()) == ""

    def test_no_path_is_empty(self):
        assert asyncio.run(FileLogStore(None).get()) == ""

    def test_directory_is_empty(self, tmp_path):
        assert asyncio.run(FileLogStore(str(tmp_path)).get()) == ""

    def test_invalid_utf8_replaced(self, tmp_path):
        log = tmp_path / "binary.log"
        log.write_bytes(b"ok \xff\xfe done")
        content = asyncio.run(FileLogStore(str(log)).get())
        assert content.startswith("ok ")
        assert content.endswith(" done")


class TestErrorHistory:
    def test_empty_by_default(self):
        assert ErrorHistory().errors == []

    def test_keeps_order(self):
        history = ErrorHistory(["first"])
        history.add("second")
        assert history.errors == ["first", "second"]

    def test_copies_initial_errors(self):
        initial = ["first"]
        history = ErrorHistory(initial)
        history.add("second")
        assert initial == ["first"]
