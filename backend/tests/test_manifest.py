"""
Tests for the manifest writer.

Validates:
- Exact header order
- Source order preserved
- Embedded delimiters/newlines survive a CSV round trip
- Exclusive creation
"""
import csv

import pytest

from credential_export.core.exceptions import ManifestWriteError
from credential_export.export.manifest import ManifestWriter, MANIFEST_FILE_NAME
from credential_export.export.modes import CORE_HEADERS, LOGIN_HEADERS


def _row(username, data="pw", **extra):
    row = {
        "username": username,
        "private_type": "Password",
        "private_data": data,
        "realm_key": "",
        "realm_value": "",
    }
    row.update(extra)
    return row


def _read(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_header_line_exact(tmp_path):
    path = ManifestWriter(tmp_path).write_manifest([_row("alice")], CORE_HEADERS)

    with open(path, "r", encoding="utf-8") as f:
        header_line = f.readline().strip()

    assert path == tmp_path / MANIFEST_FILE_NAME
    assert header_line == "username,private_type,private_data,realm_key,realm_value"


def test_rows_keep_source_order(tmp_path):
    rows = [_row("zed"), _row("alice"), _row("mike")]

    path = ManifestWriter(tmp_path).write_manifest(rows, CORE_HEADERS)

    assert [r[0] for r in _read(path)[1:]] == ["zed", "alice", "mike"]


def test_embedded_delimiters_and_newlines(tmp_path):
    tricky = 'line1\nline2, with "quotes"'
    path = ManifestWriter(tmp_path).write_manifest([_row("alice", data=tricky)], CORE_HEADERS)

    lines = _read(path)

    assert len(lines) == 2
    assert lines[1][2] == tricky


def test_login_columns_and_empty_cells(tmp_path):
    row = _row(
        "bob",
        host_address="10.0.0.5",
        service_port="22",
        service_name="",
        service_protocol="tcp",
    )

    path = ManifestWriter(tmp_path).write_manifest([row], LOGIN_HEADERS)

    with open(path, newline="", encoding="utf-8") as f:
        records = list(csv.DictReader(f))
    assert list(records[0].keys()) == list(LOGIN_HEADERS)
    assert records[0]["service_name"] == ""
    assert records[0]["service_port"] == "22"


def test_header_only_when_no_rows(tmp_path):
    path = ManifestWriter(tmp_path).write_manifest([], CORE_HEADERS)

    assert _read(path) == [list(CORE_HEADERS)]


def test_existing_manifest_is_not_overwritten(tmp_path):
    writer = ManifestWriter(tmp_path)
    writer.write_manifest([_row("alice")], CORE_HEADERS)

    with pytest.raises(ManifestWriteError):
        writer.write_manifest([_row("bob")], CORE_HEADERS)

    assert _read(tmp_path / MANIFEST_FILE_NAME)[1][0] == "alice"


def test_missing_directory_raises(tmp_path):
    with pytest.raises(ManifestWriteError):
        ManifestWriter(tmp_path / "missing").write_manifest([_row("alice")], CORE_HEADERS)
