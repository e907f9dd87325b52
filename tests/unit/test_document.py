"""Tests for path-addressed document access."""

from __future__ import annotations

import json

import pytest
import tomlkit

from release_bump.exceptions import DocumentFormatError, LookupFailure, VersionNotFoundError
from release_bump.project.document import (
    DocumentFormat,
    parse_document,
    read,
    split_path,
    write,
)


class TestReadWritePlain:
    """Traversal over plain mappings and lists."""

    def test_nested_tables(self):
        doc = {"a": {"b": {"c": "1.0.0", "d": "keep"}}, "x": 1}
        path = split_path("a.b.c")

        assert read(doc, path) == "1.0.0"
        write(doc, path, "1.0.1")
        assert read(doc, path) == "1.0.1"
        assert doc == {"a": {"b": {"c": "1.0.1", "d": "keep"}}, "x": 1}

    def test_array_index(self):
        doc = {"a": [{"v": "1.0.0"}, {"v": "9.9.9"}]}
        path = split_path("a.0.v")

        assert read(doc, path) == "1.0.0"
        write(doc, path, "1.0.1")
        assert read(doc, path) == "1.0.1"
        assert doc["a"][1] == {"v": "9.9.9"}

    def test_array_of_scalars(self):
        doc = {"versions": ["0.1.0", "0.2.0"]}
        write(doc, ["versions", "1"], "0.3.0")
        assert doc == {"versions": ["0.1.0", "0.3.0"]}

    def test_index_out_of_bounds(self):
        doc = {"a": [{"v": "1.0.0"}]}
        with pytest.raises(VersionNotFoundError) as exc_info:
            read(doc, split_path("a.5.v"))
        assert exc_info.value.reason == LookupFailure.INDEX_OUT_OF_BOUNDS

        with pytest.raises(VersionNotFoundError) as exc_info:
            write(doc, split_path("a.5.v"), "1.0.1")
        assert exc_info.value.reason == LookupFailure.INDEX_OUT_OF_BOUNDS

    @pytest.mark.parametrize("element", ["v", "-1", "1.5", ""])
    def test_non_integer_against_array(self, element: str):
        doc = {"a": [{"v": "1.0.0"}]}
        with pytest.raises(VersionNotFoundError) as exc_info:
            read(doc, ["a", element])
        assert exc_info.value.reason == LookupFailure.NOT_AN_INDEX

    def test_missing_field(self):
        with pytest.raises(VersionNotFoundError) as exc_info:
            read({"a": {}}, split_path("a.version"))
        assert exc_info.value.reason == LookupFailure.MISSING_FIELD
        assert "a.version" in str(exc_info.value)

    def test_path_past_leaf(self):
        with pytest.raises(VersionNotFoundError) as exc_info:
            read({"a": "1.0.0"}, split_path("a.b"))
        assert exc_info.value.reason == LookupFailure.PAST_LEAF

    def test_read_non_string_target(self):
        with pytest.raises(VersionNotFoundError) as exc_info:
            read({"version": 3}, ["version"])
        assert exc_info.value.reason == LookupFailure.NOT_A_STRING

    def test_write_replaces_non_string_target(self):
        doc = {"version": {"old": True}}
        write(doc, ["version"], "1.0.0")
        assert doc == {"version": "1.0.0"}

    def test_numeric_field_name_on_table(self):
        """Elements are field names on tables, even if they look like indices."""
        doc = {"0": {"version": "1.0.0"}}
        assert read(doc, split_path("0.version")) == "1.0.0"


class TestToml:
    """Traversal over tomlkit documents."""

    SOURCE = """\
# top comment
[package]
name = "demo"
version = "1.0.0"  # keep me
authors = ["a"]

[[bin]]
name = "first"
version = "0.1.0"

[[bin]]
name = "second"
version = "0.2.0"

[tool.release]
targets = [{ version = "3.0.0" }]
"""

    def test_write_preserves_everything_but_leaf(self):
        parsed = parse_document(self.SOURCE, DocumentFormat.TOML)
        write(parsed.root, split_path("package.version"), "1.0.1")

        assert parsed.dump() == self.SOURCE.replace('"1.0.0"', '"1.0.1"')

    def test_array_of_tables(self):
        parsed = parse_document(self.SOURCE, DocumentFormat.TOML)
        path = split_path("bin.1.version")

        assert read(parsed.root, path) == "0.2.0"
        write(parsed.root, path, "0.3.0")

        reparsed = tomlkit.parse(parsed.dump())
        assert reparsed["bin"][1]["version"] == "0.3.0"
        assert reparsed["bin"][0]["version"] == "0.1.0"
        assert reparsed["package"]["version"] == "1.0.0"

    def test_table_header_and_inline_array(self):
        parsed = parse_document(self.SOURCE, DocumentFormat.TOML)
        path = split_path("tool.release.targets.0.version")

        assert read(parsed.root, path) == "3.0.0"
        write(parsed.root, path, "3.1.0")
        assert tomlkit.parse(parsed.dump())["tool"]["release"]["targets"][0]["version"] == "3.1.0"

    def test_dotted_keys(self):
        source = 'name = "demo"\npackage.version = "1.0.0"\npackage.edition = "2021"\n'
        parsed = parse_document(source, DocumentFormat.TOML)
        path = split_path("package.version")

        assert read(parsed.root, path) == "1.0.0"
        write(parsed.root, path, "1.0.1")

        dumped = parsed.dump()
        assert 'package.version = "1.0.1"' in dumped
        reparsed = tomlkit.parse(dumped)
        assert reparsed["package"]["version"] == "1.0.1"
        assert reparsed["package"]["edition"] == "2021"
        assert reparsed["name"] == "demo"

    def test_invalid_toml(self):
        with pytest.raises(DocumentFormatError):
            parse_document("[package\nversion = ", DocumentFormat.TOML)


class TestJson:
    """Traversal over JSON documents."""

    def test_write_keeps_order_and_indent(self):
        source = '{\n    "name": "demo",\n    "version": "1.0.0",\n    "private": true\n}\n'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "2.0.0")

        assert parsed.dump() == source.replace("1.0.0", "2.0.0")

    def test_no_trailing_newline_kept(self):
        source = '{\n  "version": "1.0.0"\n}'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "1.0.1")
        assert parsed.dump() == '{\n  "version": "1.0.1"\n}'

    def test_nested_path(self):
        source = json.dumps({"packages": {"": {"version": "1.0.0"}}, "lockfileVersion": 3})
        parsed = parse_document(source, DocumentFormat.JSON)
        assert read(parsed.root, ["packages", "", "version"]) == "1.0.0"

    def test_invalid_json(self):
        with pytest.raises(DocumentFormatError):
            parse_document("{not json", DocumentFormat.JSON)

    def test_compact_separators_kept(self):
        source = '{"name":"demo","version":"1.0.0","files":["a","b"]}'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "1.0.1")
        assert parsed.dump() == source.replace("1.0.0", "1.0.1")

    def test_single_line_default_separators_kept(self):
        source = '{"name": "demo", "version": "1.0.0"}\n'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "1.0.1")
        assert parsed.dump() == source.replace("1.0.0", "1.0.1")

    def test_unicode_escapes_kept(self):
        source = '{\n  "author": "Ren\\u00e9",\n  "version": "1.0.0"\n}\n'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "1.0.1")
        assert parsed.dump() == source.replace("1.0.0", "1.0.1")

    def test_raw_non_ascii_kept(self):
        source = '{\n  "author": "René",\n  "version": "1.0.0"\n}\n'
        parsed = parse_document(source, DocumentFormat.JSON)
        write(parsed.root, ["version"], "1.0.1")
        assert parsed.dump() == source.replace("1.0.0", "1.0.1")
