from __future__ import annotations

import tempfile
import unittest
from pathlib import Path

from gplus_archive.config import config_sha256, load_config
from gplus_archive.errors import ConfigError


_VALID_YAML = """\
input:
  posts_subdir: Google+ Stream/Posts
  pattern: "*.html"
  encoding: utf-8

output:
  extension: .md
  overwrite: false
  copy_images: true

front_matter:
  fallback_title: Google+ Post
  draft: false
  tags:
    - google-plus
    - Google-Plus
  keywords:
    - google-plus
    - archive
"""


class TestConfig(unittest.TestCase):
    def _write(self, td: str, text: str) -> Path:
        path = Path(td) / "config.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    def test_load_config_ok(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            cfg = load_config(self._write(td, _VALID_YAML))
            self.assertFalse(cfg.output.overwrite)
            self.assertTrue(cfg.output.copy_images)
            self.assertEqual(cfg.front_matter.tags, ["google-plus"])

    def test_defaults_without_path_or_with_empty_file(self) -> None:
        default = load_config()
        self.assertEqual(default.input.posts_subdir, "Google+ Stream/Posts")
        self.assertEqual(default.front_matter.keywords, ["google-plus", "archive"])

        with tempfile.TemporaryDirectory() as td:
            self.assertEqual(load_config(self._write(td, "")), default)

    def test_rejects_unknown_keys(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            path = self._write(td, "output:\n  format: html\n")
            with self.assertRaises(ConfigError) as ctx:
                load_config(path)
            self.assertIn("output.format", str(ctx.exception))

    def test_rejects_bad_extension(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(self._write(td, "output:\n  extension: md\n"))

    def test_rejects_non_mapping_and_missing_file(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            with self.assertRaises(ConfigError):
                load_config(self._write(td, "- a\n- b\n"))
            with self.assertRaises(ConfigError):
                load_config(Path(td) / "missing.yaml")

    def test_config_sha256_is_stable(self) -> None:
        with tempfile.TemporaryDirectory() as td:
            a = load_config(self._write(td, _VALID_YAML))
            b = load_config(self._write(td, _VALID_YAML))
        self.assertEqual(config_sha256(a), config_sha256(b))
        self.assertNotEqual(config_sha256(a), config_sha256(load_config()))


if __name__ == "__main__":
    unittest.main()
