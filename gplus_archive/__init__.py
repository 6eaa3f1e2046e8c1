from __future__ import annotations

from .config import config_sha256, load_config
from .config_schema import AppConfig
from .convert import convert_archive, convert_html
from .dom import DocumentTree, parse_html
from .errors import ConfigError, ExportError, InputError
from .extract import extract_post
from .normalize import normalize_filename_stem
from .post import Comment, Link, PostRecord
from .render import render_markdown

__all__ = [
    "AppConfig",
    "Comment",
    "ConfigError",
    "DocumentTree",
    "ExportError",
    "InputError",
    "Link",
    "PostRecord",
    "config_sha256",
    "convert_archive",
    "convert_html",
    "extract_post",
    "load_config",
    "normalize_filename_stem",
    "parse_html",
    "render_markdown",
]
