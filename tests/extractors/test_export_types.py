"""Tests for exported type extraction."""

from __future__ import annotations

from luaudoc.extractors.types import extract_export_types


def test_single_line_type() -> None:
    source = "export type Point = {x: number, y: number}"
    types = extract_export_types(source)
    assert len(types) == 1
    assert types[0].name == "Point"
    assert types[0].signature == source


def test_multi_line_table_type_tracks_braces() -> None:
    source = (
        "local M = {}\n"
        "\n"
        "export type Lease = {\n"
        "    tenantId: number,\n"
        "    terms: {\n"
        "        rent: number,\n"
        "    },\n"
        "}\n"
        "\n"
        "return M\n"
    )
    types = extract_export_types(source)
    assert [t.name for t in types] == ["Lease"]
    assert types[0].signature.startswith("export type Lease = {")
    assert types[0].signature.endswith("}")
    assert "return M" not in types[0].signature


def test_indented_declarations_and_ordering() -> None:
    source = "  export type A = string\nexport type B = {\n  a: A,\n}\n"
    types = extract_export_types(source)
    assert [t.name for t in types] == ["A", "B"]
    assert types[0].signature == "export type A = string"
    assert types[1].signature == "export type B = {\n  a: A,\n}"


def test_assignment_on_following_line() -> None:
    source = "export type Callback\n    = (number) -> ()\nlocal x = 1\n"
    types = extract_export_types(source)
    assert len(types) == 1
    assert types[0].signature == "export type Callback\n    = (number) -> ()"


def test_missing_assignment_runs_to_end_of_file() -> None:
    source = "export type Broken\nlocal y\nreturn nil\n"
    types = extract_export_types(source)
    assert len(types) == 1
    assert types[0].signature == "export type Broken\nlocal y\nreturn nil"


def test_unrecoverable_name_gets_placeholder() -> None:
    source = "export type = {}\nexport type 1Bad = {}\n"
    types = extract_export_types(source)
    assert [t.name for t in types] == ["type_1", "type_2"]


def test_non_exported_types_are_ignored() -> None:
    assert extract_export_types("type Hidden = number\nlocal x = 1\n") == []
