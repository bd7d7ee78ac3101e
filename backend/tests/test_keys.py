"""
Tests for SSH key extraction.
"""
import pytest

from credential_export.core.exceptions import KeyWriteError
from credential_export.export.keys import (
    KeyMaterialExtractor,
    key_filename,
    SSH_KEY_TYPE,
    KEYS_SUBDIRECTORY_NAME,
)
from credential_export.export.projector import line_for_core
from factories import make_core, make_login, SSH_KEY_DATA


def test_key_filename():
    assert key_filename("root", 7) == "root-7"
    assert key_filename("CORP\\admin", 12) == "CORP_admin-12"
    assert key_filename("../etc/passwd", 3) == ".._etc_passwd-3"
    assert key_filename(None, 4) == "-4"


def test_extract_writes_key_and_rewrites_row(tmp_path):
    core = make_core(1, "bob", SSH_KEY_TYPE, SSH_KEY_DATA, private_id=42)
    extractor = KeyMaterialExtractor(tmp_path)

    row = extractor.extract(core, line_for_core(core))

    key_path = tmp_path / KEYS_SUBDIRECTORY_NAME / "bob-42"
    assert row["private_data"] == "bob-42"
    assert key_path.read_bytes() == SSH_KEY_DATA.encode("utf-8")
    assert extractor.written == [key_path]


def test_extract_bytes_payload_verbatim(tmp_path):
    payload = b"\x00\x01binary\r\nkey\xff"
    core = make_core(1, "bob", SSH_KEY_TYPE, payload, private_id=9)

    row = KeyMaterialExtractor(tmp_path).extract(core, line_for_core(core))

    assert (tmp_path / KEYS_SUBDIRECTORY_NAME / row["private_data"]).read_bytes() == payload


def test_extract_uses_login_core(tmp_path):
    core = make_core(1, "svc", SSH_KEY_TYPE, "KEY", private_id=5)
    login = make_login(77, core)

    row = KeyMaterialExtractor(tmp_path).extract(login, line_for_core(core))

    assert row["private_data"] == "svc-5"


def test_non_key_row_untouched(tmp_path):
    core = make_core(1, "alice", "Password", "hunter2")
    extractor = KeyMaterialExtractor(tmp_path)
    line = line_for_core(core)

    row = extractor.extract(core, line)

    assert row == line
    assert row["private_data"] == "hunter2"
    assert not (tmp_path / KEYS_SUBDIRECTORY_NAME).exists()
    assert extractor.written == []


def test_write_failure_raises_key_write_error(tmp_path):
    # A regular file where keys/ should go makes mkdir fail
    (tmp_path / KEYS_SUBDIRECTORY_NAME).write_text("not a directory")
    core = make_core(1, "bob", SSH_KEY_TYPE, "KEY")

    with pytest.raises(KeyWriteError):
        KeyMaterialExtractor(tmp_path).extract(core, line_for_core(core))
