"""Tests for the breadth-first definition search."""

import asyncio

from lessgoto.config import DefinitionConfig
from lessgoto.features.classify import DefinitionPattern, SymbolKind
from lessgoto.features.imports import ImportResolver
from lessgoto.features.search import DefinitionResult, find_definition

PRIMARY = DefinitionPattern(SymbolKind.VARIABLE, "primary")


def run_search(less_project, fs, start="main.less", **kwargs):
    resolver = ImportResolver(less_project.config(), fs)
    return asyncio.run(
        find_definition(less_project.path(start), PRIMARY, resolver, fs, **kwargs)
    )


class TestFindDefinition:
    """Tests for find_definition."""

    def test_definition_in_start_file(self, less_project, recording_fs):
        less_project.write("main.less", '@import "vars";\n@primary: red;\n')
        less_project.write("vars.less", "@primary: blue;\n")

        result = run_search(less_project, recording_fs)

        assert result == DefinitionResult(less_project.path("main.less"), 1, 0)
        assert recording_fs.reads == [less_project.path("main.less")]

    def test_closest_import_wins(self, less_project, recording_fs):
        less_project.write("main.less", '@import "a";\n@import "b";\n')
        less_project.write("a.less", '@import "deep";\n')
        less_project.write("deep.less", "@primary: red;\n")
        less_project.write("b.less", "@primary: blue;\n")

        result = run_search(less_project, recording_fs)

        assert result == DefinitionResult(less_project.path("b.less"), 0, 0)
        assert recording_fs.reads == [
            less_project.path("main.less"),
            less_project.path("a.less"),
            less_project.path("b.less"),
        ]

    def test_import_order_breaks_ties(self, less_project, recording_fs):
        less_project.write("main.less", '@import "a";\n@import "b";\n')
        less_project.write("a.less", "\n@primary: red;\n")
        less_project.write("b.less", "@primary: blue;\n")

        result = run_search(less_project, recording_fs)

        assert result == DefinitionResult(less_project.path("a.less"), 1, 0)

    def test_circular_imports_terminate(self, less_project, recording_fs):
        less_project.write("main.less", '@import "a";\n')
        less_project.write("a.less", '@import "b";\n')
        less_project.write("b.less", '@import "a";\n@import "main";\n')

        assert run_search(less_project, recording_fs) is None
        assert sorted(recording_fs.reads) == sorted(
            less_project.path(name) for name in ("main.less", "a.less", "b.less")
        )

    def test_duplicate_imports_read_once(self, less_project, recording_fs):
        less_project.write("main.less", '@import "a";\n@import "./a.less";\n')
        less_project.write("a.less", "// nothing here\n")

        assert run_search(less_project, recording_fs) is None
        assert recording_fs.reads.count(less_project.path("a.less")) == 1

    def test_unreadable_start_file(self, less_project, recording_fs):
        assert run_search(less_project, recording_fs, start="gone.less") is None
        assert recording_fs.reads == [less_project.path("gone.less")]

    def test_unresolved_import_is_skipped(self, less_project, recording_fs):
        less_project.write("main.less", '@import "missing";\n@import "vars";\n')
        less_project.write("vars.less", "@primary: blue;\n")

        result = run_search(less_project, recording_fs)

        assert result == DefinitionResult(less_project.path("vars.less"), 0, 0)

    def test_imports_after_rules_are_ignored(self, less_project, recording_fs):
        less_project.write("main.less", '.box { color: @primary; }\n@import "vars";\n')
        less_project.write("vars.less", "@primary: blue;\n")

        assert run_search(less_project, recording_fs) is None

    def test_cancelled_search(self, less_project, recording_fs):
        less_project.write("main.less", "@primary: red;\n")

        result = run_search(less_project, recording_fs, is_cancelled=lambda: True)

        assert result is None
        assert recording_fs.reads == []

    def test_cancelled_between_files(self, less_project, recording_fs):
        less_project.write("main.less", '@import "vars";\n')
        less_project.write("vars.less", "@primary: blue;\n")

        def is_cancelled():
            return len(recording_fs.reads) >= 1

        assert run_search(less_project, recording_fs, is_cancelled=is_cancelled) is None
        assert recording_fs.reads == [less_project.path("main.less")]

    def test_max_files(self, less_project, recording_fs):
        less_project.write("main.less", '@import "vars";\n')
        less_project.write("vars.less", "@primary: blue;\n")

        assert run_search(less_project, recording_fs, max_files=1) is None
        result = run_search(less_project, recording_fs, max_files=2)
        assert result == DefinitionResult(less_project.path("vars.less"), 0, 0)
