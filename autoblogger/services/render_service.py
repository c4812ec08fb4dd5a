# /autoblogger/services/render_service.py

"""
Everything that turns stored markdown into the HTML pages the blog serves.
Model output is untrusted, so raw HTML inside it is escaped, never rendered.
"""

from pathlib import Path
from typing import List

import markdown
from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown.extensions import Extension

from ..models.article_model import ArticleLink

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

LIST_TITLE = "Blog"
WAIT_TITLE = "Try later"
RATE_LIMITED_MESSAGE = (
    "Only one article can be generated per day. "
    "Please wait {hours} hours before generating a new article."
)
LOCKED_MESSAGE = "Content creation temporary locked"
NO_CONTENT_MESSAGE = "No content found for this article"
LIST_FAILED_MESSAGE = "Failed to fetch articles"

_env = Environment(
    loader=FileSystemLoader(str(TEMPLATES_DIR)),
    autoescape=select_autoescape(["html"]),
)


class EscapeRawHtml(Extension):
    """Treats inline and block HTML as literal text."""

    def extendMarkdown(self, md):
        md.preprocessors.deregister("html_block")
        md.inlinePatterns.deregister("html")


def clean_title(title: str) -> str:
    """Providers like to wrap titles in quotes."""
    return title.strip('"')


def strip_title_heading(body: str) -> str:
    """
    Drops the first line when the body opens with a markdown heading, since
    the page template already shows the title.
    """
    if not body.strip().startswith("#"):
        return body
    lines = body.lstrip().splitlines()
    return "\n".join(lines[1:])


def markdown_to_html(text: str) -> str:
    return markdown.markdown(
        text,
        extensions=[EscapeRawHtml(), "fenced_code", "tables", "codehilite"],
        extension_configs={
            "codehilite": {"guess_lang": False, "noclasses": True, "pygments_style": "monokai"},
        },
    )


def render_page(title: str, content_html: str) -> str:
    """Wraps a rendered fragment in the site layout."""
    template = _env.get_template("layout.html")
    return template.render(title=title, content=content_html.strip()).strip()


def render_article(title: str, body: str) -> str:
    return render_page(clean_title(title), markdown_to_html(strip_title_heading(body)))


def render_article_list(articles: List[ArticleLink]) -> str:
    template = _env.get_template("article_list.html")
    items = [{"slug": a.slug, "title": clean_title(a.title)} for a in articles]
    return render_page(LIST_TITLE, template.render(articles=items))


def render_rate_limited(hours_to_wait: int) -> str:
    return render_page(WAIT_TITLE, RATE_LIMITED_MESSAGE.format(hours=hours_to_wait))


def render_locked() -> str:
    return render_page(WAIT_TITLE, LOCKED_MESSAGE)
