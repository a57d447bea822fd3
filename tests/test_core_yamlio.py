"""Tests for core/yamlio.py YAML helpers."""

import tempfile
import unittest
from pathlib import Path

from core.yamlio import load_config, load_mapping


class TestLoadConfig(unittest.TestCase):
    """Tests for load_config function."""

    def test_load_valid_yaml(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "config.yaml"
            path.write_text("key: value\nnumber: 42\n", encoding="utf-8")
            result = load_config(str(path))
            self.assertEqual(result, {"key": "value", "number": 42})

    def test_load_missing_file_returns_empty(self):
        result = load_config("/nonexistent/path/config.yaml")
        self.assertEqual(result, {})

    def test_load_none_path_returns_empty(self):
        self.assertEqual(load_config(None), {})

    def test_load_whitespace_only_file_returns_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "whitespace.yaml"
            path.write_text("   \n\n  \t  ", encoding="utf-8")
            self.assertEqual(load_config(str(path)), {})

    def test_load_yaml_null_returns_empty(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "null.yaml"
            path.write_text("~\n", encoding="utf-8")  # YAML null
            self.assertEqual(load_config(str(path)), {})

    def test_load_with_unicode(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "unicode.yaml"
            path.write_text("name: Juan Pérez\n", encoding="utf-8")
            self.assertEqual(load_config(path), {"name": "Juan Pérez"})

    def test_non_mapping_root_is_returned_as_is(self):
        # Callers decide whether a list root is an error
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.yaml"
            path.write_text("- a\n- b\n", encoding="utf-8")
            self.assertEqual(load_config(path), ["a", "b"])


class TestLoadMapping(unittest.TestCase):
    """Tests for load_mapping function."""

    def test_missing_file_raises(self):
        with self.assertRaises(FileNotFoundError):
            load_mapping("/nonexistent/data.yaml")

    def test_list_root_raises(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "list.yaml"
            path.write_text("- 1\n- 2\n", encoding="utf-8")
            with self.assertRaises(ValueError):
                load_mapping(path)

    def test_empty_file_is_empty_mapping(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "empty.yaml"
            path.write_text("", encoding="utf-8")
            self.assertEqual(load_mapping(path), {})

    def test_nested_structure(self):
        with tempfile.TemporaryDirectory() as tmp:
            path = Path(tmp) / "nested.yaml"
            path.write_text("sessions:\n  - id: '1'\n    day: Monday\n", encoding="utf-8")
            self.assertEqual(load_mapping(path), {"sessions": [{"id": "1", "day": "Monday"}]})


if __name__ == "__main__":
    unittest.main()
