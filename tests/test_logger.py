import json
import logging

from peerauth.logger import LOGGER_NAME, AuthLogger


def test_json_lines_file(tmp_path):
    root = logging.getLogger(LOGGER_NAME)
    before = list(root.handlers)
    log = AuthLogger(tmp_path / "auth.log")
    added = [h for h in root.handlers if h not in before]
    try:
        assert len(added) == 1
        AuthLogger(tmp_path / "auth.log")  # same path: no second handler
        assert len(root.handlers) == len(before) + 1

        log.authenticated("bob")
        log.faulted("eve", "corrupt hash")
        for h in added:
            h.flush()

        lines = (tmp_path / "auth.jsonl").read_text(encoding="utf-8").splitlines()
        records = [json.loads(ln) for ln in lines]
        assert [r["event"] for r in records] == ["authenticated", "faulted"]
        assert records[1]["reason"] == "corrupt hash"
        assert records[0]["user"] == "bob"
    finally:
        for h in added:
            root.removeHandler(h)
            h.close()


def test_rejected_without_username(events):
    AuthLogger().rejected("")
    assert events[-1]["user"] == "-"
