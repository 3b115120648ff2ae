"""
Unit Tests for JSON file locking helpers
"""

import json
from unittest.mock import patch

import pytest

from marksheet_toolkit.storage.file_locking import (
    locked_read_json,
    locked_read_modify_write_json,
)


class TestLockedReadJson:

    def test_read_when_missing_then_default(self, tmp_path):
        assert locked_read_json(tmp_path / "none.json", default=lambda: {"x": 1}) == {"x": 1}

    def test_read_when_empty_then_default(self, tmp_path):
        path = tmp_path / "empty.json"
        path.write_text("")
        assert locked_read_json(path) == {}

    def test_read_when_called_then_takes_shared_lock(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"a": 1}')
        with patch("marksheet_toolkit.storage.file_locking.portalocker") as mock_locker:
            assert locked_read_json(path) == {"a": 1}
        lock_call = mock_locker.lock.call_args
        assert lock_call.args[1] is mock_locker.LOCK_SH
        mock_locker.unlock.assert_called_once()


class TestLockedReadModifyWrite:

    def test_write_when_missing_then_creates_from_default(self, tmp_path):
        path = tmp_path / "nested" / "data.json"
        result = locked_read_modify_write_json(
            path,
            lambda d: {**d, "count": d["count"] + 1},
            default=lambda: {"count": 0},
        )
        assert result == {"count": 1}
        assert json.loads(path.read_text()) == {"count": 1}

    def test_write_when_shorter_content_then_truncated(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text(json.dumps({"long": "x" * 200}))
        locked_read_modify_write_json(path, lambda d: {"s": 1})
        assert json.loads(path.read_text()) == {"s": 1}

    def test_write_when_modifier_raises_then_file_untouched(self, tmp_path):
        path = tmp_path / "data.json"
        path.write_text('{"keep": true}')

        def boom(_):
            raise RuntimeError("nope")

        with pytest.raises(RuntimeError):
            locked_read_modify_write_json(path, boom)
        assert json.loads(path.read_text()) == {"keep": True}
