from __future__ import annotations

from typing import Sequence

from .config_schema import FrontMatterConfig
from .normalize import clean_title, escape_metadata
from .post import PostRecord

FRONT_MATTER_FENCE = "+++"
TITLE_EXCERPT_CHARS = 50
DESCRIPTION_EXCERPT_CHARS = 150


def rewrite_image_path(src: str, date_prefix: str) -> str:
    """Map an archived image path onto the site's `/posts/` folder."""
    basename = src.replace("\\", "/").rsplit("/", 1)[-1]
    if not date_prefix:
        return f"/posts/{basename}"
    return f"/posts/{date_prefix}-{basename}"


def _toml_list(values: Sequence[str]) -> str:
    return "[" + ", ".join(f'"{escape_metadata(v)}"' for v in values) + "]"


def _front_matter_title(record: PostRecord, fallback: str) -> str:
    if record.title:
        return clean_title(record.title)
    if record.content:
        return f"{record.content[:TITLE_EXCERPT_CHARS].strip()}..."
    return fallback


def render_front_matter(record: PostRecord, front_matter: FrontMatterConfig) -> str:
    lines: list[str] = [FRONT_MATTER_FENCE]

    title = _front_matter_title(record, front_matter.fallback_title)
    lines.append(f'title = "{escape_metadata(title)}"')
    lines.append(f'date = "{escape_metadata(record.date)}"')
    lines.append(f"draft = {'true' if front_matter.draft else 'false'}")

    description = record.content[:DESCRIPTION_EXCERPT_CHARS].strip()
    lines.append(f'# description = "{escape_metadata(description)}"')

    if record.canonical_url:
        lines.append(f'canonicalURL = "{escape_metadata(record.canonical_url)}"')
        lines.append("ShowCanonicalLink = true")
    else:
        lines.append('canonicalURL = ""')
        lines.append("ShowCanonicalLink = false")

    lines.append('# cover.image = "/posts/"')
    lines.append("cover.hidden = true")

    if record.author:
        lines.append(f'# author = "{escape_metadata(record.author)}"')
    lines.append(f"# keywords = {_toml_list(front_matter.keywords)}")
    lines.append(f"tags = {_toml_list(front_matter.tags)}")

    lines.append("# ShowToc = false")
    lines.append(FRONT_MATTER_FENCE)
    return "\n".join(lines) + "\n\n"


def render_body(record: PostRecord, date_prefix: str) -> str:
    parts: list[str] = []

    if record.location is not None:
        parts.append(f"**Location:** {record.location}\n\n---\n\n")

    if record.content:
        parts.append(f"{record.content}\n\n")

    if record.reshare_author is not None:
        parts.append(f"**Originally shared by {record.reshare_author}**\n\n")
        if record.reshare_content is not None:
            parts.append(f"{record.reshare_content}\n\n")

    if record.images:
        parts.append("## Images\n\n")
        for src in record.images:
            parts.append(f"![Image]({rewrite_image_path(src, date_prefix)})\n\n")

    if record.video_url is not None:
        parts.append(f"## Video\n\n[Watch Video]({record.video_url})\n\n")

    if record.links:
        parts.append("## Links\n\n")
        for link in record.links:
            parts.append(f"- [{link.label or link.url}]({link.url})\n")
        parts.append("\n")

    if record.visibility:
        parts.append(f"**Shared with:** {record.visibility}\n\n")

    if record.plus_ones:
        parts.append(f"**+1'd by:** {', '.join(record.plus_ones)}\n\n")

    if record.comments:
        parts.append("## Comments\n\n")
        for comment in record.comments:
            header = f"**{comment.author}**"
            if comment.date:
                header += f" - {comment.date}"
            parts.append(f"{header}\n\n{comment.content}\n\n---\n\n")

    return "".join(parts)


def render_markdown(
    record: PostRecord,
    date_prefix: str,
    *,
    front_matter: FrontMatterConfig | None = None,
) -> str:
    """
    Render a post as a Hugo Markdown page with TOML front matter.

    The result always ends with exactly one newline.
    """
    fm = front_matter or FrontMatterConfig()
    document = render_front_matter(record, fm) + render_body(record, date_prefix)
    return document.rstrip() + "\n"
