"""
Tests for output file helpers
"""

from catalog_sync.shared.helpers.file_utils import safe_filename, write_json

from tests.helpers import read_json


class TestFileUtils:
    def test_write_json_creates_parents(self, tmp_path):
        target = tmp_path / "nested" / "dir" / "shop.com.json"

        path = write_json(target, {"store": {"display_name": "Café"}})

        assert path == target
        assert read_json(target) == {"store": {"display_name": "Café"}}
        assert "Café" in target.read_text(encoding="utf-8")

    def test_safe_filename(self):
        assert safe_filename("shop.com") == "shop.com"
        assert safe_filename("../etc/passwd") == "etc_passwd"
        assert safe_filename("///") == "output"
