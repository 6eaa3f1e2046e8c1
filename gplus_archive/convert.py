from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

from .config_schema import AppConfig, FrontMatterConfig, InputConfig
from .dom import parse_html
from .errors import ExportError, InputError
from .extract import extract_post
from .normalize import filename_date_prefix, normalize_filename_stem
from .post import PostRecord
from .render import render_markdown, rewrite_image_path
from .run_log import RunLogger


@dataclass(frozen=True)
class ConvertedPost:
    record: PostRecord
    output_stem: str
    date_prefix: str
    markdown: str


@dataclass(frozen=True)
class ConvertResult:
    posts_dir: Path
    out_dir: Path
    found: int
    converted: int
    skipped: int
    failed: int
    images_copied: int = 0

    @property
    def status(self) -> str:
        return "completed" if self.failed == 0 else "completed_with_failures"


def date_prefix_for(stem: str, record: PostRecord) -> str:
    """
    Pick the `YYYY-MM-DD` prefix for a post's images.

    A dated filename wins; otherwise the normalized post date is used.
    """
    prefix = filename_date_prefix(stem)
    if prefix:
        return prefix
    if len(record.date) >= 10 and record.date[4] == "-" and record.date[7] == "-":
        return record.date[:10]
    return ""


def convert_html(
    markup: str,
    stem: str,
    *,
    front_matter: FrontMatterConfig | None = None,
) -> ConvertedPost:
    tree = parse_html(markup)
    record = extract_post(tree)
    prefix = date_prefix_for(stem, record)
    return ConvertedPost(
        record=record,
        output_stem=normalize_filename_stem(stem),
        date_prefix=prefix,
        markdown=render_markdown(record, prefix, front_matter=front_matter),
    )


def posts_dir_for(archive_dir: str | Path, input_cfg: InputConfig) -> Path:
    base = Path(archive_dir)
    if not base.is_dir():
        raise InputError(f"Archive directory not found: {base}")

    posts = base / input_cfg.posts_subdir
    if not posts.is_dir():
        raise InputError(f"Posts directory not found: {posts}")
    return posts


def find_post_files(archive_dir: str | Path, input_cfg: InputConfig) -> list[Path]:
    posts = posts_dir_for(archive_dir, input_cfg)
    return sorted(p for p in posts.glob(input_cfg.pattern) if p.is_file())


def read_post(path: Path, *, encoding: str) -> str:
    try:
        return path.read_text(encoding=encoding)
    except UnicodeDecodeError as e:
        raise InputError(f"Failed to decode {path} as {encoding}: {e}") from e
    except OSError as e:
        raise InputError(f"Failed to read post file: {path}") from e


def write_post(path: Path, markdown: str) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(markdown, encoding="utf-8", newline="\n")
    except OSError as e:
        raise ExportError(f"Failed to write {path}: {e}") from e


def copy_post_images(
    html_path: Path,
    converted: ConvertedPost,
    out_dir: Path,
    *,
    logger: RunLogger | None = None,
) -> int:
    """
    Copy images referenced by a post into `<out_dir>/images`.

    Targets use the same name as the rewritten Markdown path. Images that are
    not next to the HTML file are logged and skipped.
    """
    images_dir = out_dir / "images"
    copied = 0

    for src in converted.record.images:
        source = (html_path.parent / src).resolve()
        if not source.is_file():
            if logger is not None:
                logger.warning("image_missing", source=html_path, image=src)
            continue

        target = images_dir / rewrite_image_path(src, converted.date_prefix).rsplit("/", 1)[-1]
        try:
            images_dir.mkdir(parents=True, exist_ok=True)
            shutil.copyfile(source, target)
        except OSError as e:
            raise ExportError(f"Failed to copy image {source} to {target}: {e}") from e
        copied += 1

    return copied


def convert_archive(
    config: AppConfig,
    archive_dir: str | Path,
    out_dir: str | Path,
    *,
    logger: RunLogger | None = None,
) -> ConvertResult:
    """
    Convert every post page of a Takeout archive into a Markdown file.

    A post that cannot be read or written is logged as `post_failed` and the
    run moves on to the next file.
    """
    out = Path(out_dir)
    posts = posts_dir_for(archive_dir, config.input)
    files = find_post_files(archive_dir, config.input)

    converted = 0
    skipped = 0
    failed = 0
    images_copied = 0

    for html_path in files:
        try:
            markup = read_post(html_path, encoding=config.input.encoding)
            post = convert_html(markup, html_path.stem, front_matter=config.front_matter)

            target = out / f"{post.output_stem}{config.output.extension}"
            if target.exists() and not config.output.overwrite:
                skipped += 1
                if logger is not None:
                    logger.info("post_skipped_exists", source=html_path, target=str(target))
                continue

            # A failed image copy leaves no Markdown file.
            if config.output.copy_images:
                images_copied += copy_post_images(html_path, post, out, logger=logger)
            write_post(target, post.markdown)
        except (InputError, ExportError) as e:
            failed += 1
            if logger is not None:
                logger.exception("post_failed", exc=e, source=html_path)
            continue

        converted += 1
        if logger is not None:
            logger.info(
                "post_converted",
                source=html_path,
                target=str(target),
                date=post.record.date,
                images=len(post.record.images),
                links=len(post.record.links),
                comments=len(post.record.comments),
            )

    return ConvertResult(
        posts_dir=posts,
        out_dir=out,
        found=len(files),
        converted=converted,
        skipped=skipped,
        failed=failed,
        images_copied=images_copied,
    )
