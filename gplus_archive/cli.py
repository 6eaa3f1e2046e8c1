from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Sequence

from .config import config_sha256, load_config
from .convert import convert_archive, convert_html, read_post
from .errors import ConfigError, ExportError, InputError
from .run_log import RunLogger


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="gplus_archive")

    subparsers = parser.add_subparsers(dest="command", required=True)

    convert = subparsers.add_parser(
        "convert",
        help="Convert every post of a Google+ Takeout archive into Markdown.",
    )
    convert.add_argument(
        "--archive",
        required=True,
        help="Takeout directory that contains 'Google+ Stream/Posts'.",
    )
    convert.add_argument(
        "--out",
        required=True,
        help="Output directory for Markdown files and the run log.",
    )
    convert.add_argument(
        "--config",
        default=None,
        help="Optional path to YAML config file.",
    )
    convert.set_defaults(_handler=_cmd_convert)

    preview = subparsers.add_parser(
        "preview",
        help="Print the Markdown rendering of a single post page.",
    )
    preview.add_argument("file", help="Path to one Takeout post HTML file.")
    preview.add_argument(
        "--config",
        default=None,
        help="Optional path to YAML config file.",
    )
    preview.set_defaults(_handler=_cmd_preview)

    return parser


def _eprint(message: str) -> None:
    print(message, file=sys.stderr)


def _cmd_preview(args: argparse.Namespace) -> int:
    cfg = load_config(args.config)
    path = Path(args.file)
    if not path.is_file():
        raise InputError(f"Post file not found: {path}")

    markup = read_post(path, encoding=cfg.input.encoding)
    post = convert_html(markup, path.stem, front_matter=cfg.front_matter)

    sys.stdout.write(post.markdown)
    return 0


def _cmd_convert(args: argparse.Namespace) -> int:
    out_dir = Path(args.out)
    out_dir.mkdir(parents=True, exist_ok=True)

    log_path = out_dir / "convert.log"
    with RunLogger.open(log_path, overwrite=True) as log:
        log.info(
            "convert_command_started",
            config_path=str(args.config or ""),
            archive_dir=str(args.archive),
            out_dir=str(out_dir),
        )

        try:
            cfg = load_config(args.config)
            log.info(
                "config_loaded",
                config_path=str(args.config or ""),
                config_sha256=config_sha256(cfg),
            )

            result = convert_archive(cfg, args.archive, out_dir, logger=log)

            log.info(
                "convert_command_completed",
                status=result.status,
                found=result.found,
                converted=result.converted,
                skipped=result.skipped,
                failed=result.failed,
                images_copied=result.images_copied,
            )
        except Exception as e:
            log.exception("convert_command_failed", exc=e)
            raise

    print(f"status={result.status}")
    print(f"posts_dir={result.posts_dir}")
    print(f"found={result.found}")
    print(f"converted={result.converted}")
    print(f"skipped={result.skipped}")
    print(f"failed={result.failed}")
    print(f"images_copied={result.images_copied}")
    print(f"run_log={log_path}")

    return 0 if result.failed == 0 else 4


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        handler = getattr(args, "_handler")
        return int(handler(args))
    except ConfigError as e:
        _eprint(str(e))
        return 2
    except (InputError, ExportError) as e:
        _eprint(str(e))
        return 3
    except KeyboardInterrupt:
        _eprint("Interrupted")
        return 130
    except Exception as e:
        _eprint(f"Unexpected error: {e}")
        return 1
