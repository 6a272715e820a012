import pytest

from peerauth.errors import ConfigurationError
from peerauth.model import Peer
from peerauth.store import PeerStore


def test_strings_zip_positionally():
    store = PeerStore.from_strings("bob;alice", "foo;bar", ";")
    assert len(store) == 2
    assert store.lookup("bob") == Peer("bob", "foo")
    assert store.lookup("alice") == Peer("alice", "bar")
    assert list(store) == ["bob", "alice"]


def test_strings_default_delimiter_is_semicolon():
    store = PeerStore.from_strings("bob;alice", "foo;bar")
    assert store.lookup("alice").stored_password == "bar"


def test_strings_custom_delimiter():
    store = PeerStore.from_strings("bob,alice", "f;oo,bar", ",")
    assert store.lookup("bob").stored_password == "f;oo"


def test_strings_length_mismatch_fails():
    with pytest.raises(ConfigurationError, match="differ in length"):
        PeerStore.from_strings("bob;alice", "foo", ";")


def test_strings_empty_delimiter_fails():
    with pytest.raises(ConfigurationError):
        PeerStore.from_strings("bob", "foo", "")


def test_duplicate_usernames_fail():
    with pytest.raises(ConfigurationError, match="duplicate"):
        PeerStore.from_strings("bob;bob", "foo;bar")


def test_empty_username_fails():
    with pytest.raises(ConfigurationError, match="empty username"):
        PeerStore.from_strings("bob;", "foo;bar")


def test_unknown_user_lookup():
    store = PeerStore.from_strings("bob", "foo")
    assert store.lookup("mallory") is None
    assert "mallory" not in store
    assert "bob" in store


def test_file_source(credential_file):
    store = PeerStore.from_file(credential_file)
    assert len(store) == 3
    assert store.lookup("bob") == Peer("bob", "foo")
    assert store.lookup("alice") == Peer("alice", "bar")
    # split on the first colon only
    assert store.lookup("carol").stored_password == "pa:ss"
    assert store.source == str(credential_file)


def test_missing_file_fails(tmp_path):
    with pytest.raises(ConfigurationError, match="Cannot read"):
        PeerStore.from_file(tmp_path / "nope.txt")


def test_malformed_line_reports_line_number(tmp_path):
    path = tmp_path / "bad.txt"
    path.write_text("bob:foo\nalice\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match=r"bad.txt:2"):
        PeerStore.from_file(path)


def test_file_without_peers_fails(tmp_path):
    path = tmp_path / "empty.txt"
    path.write_text("# nobody\n\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="no peers"):
        PeerStore.from_file(path)


def test_duplicate_in_file_fails(tmp_path):
    path = tmp_path / "dup.txt"
    path.write_text("bob:foo\nbob:bar\n", encoding="utf-8")
    with pytest.raises(ConfigurationError, match="duplicate"):
        PeerStore.from_file(path)


def test_strings_strip_whitespace_like_the_file_source():
    store = PeerStore.from_strings("bob; alice ", " foo ;bar")
    assert list(store) == ["bob", "alice"]
    assert store.lookup("bob").stored_password == "foo"
    assert store.lookup("alice").stored_password == "bar"
