import logging
from typing import Callable, Iterable, Optional

import bleach
import markdown as md
from markdown.extensions import Extension
from markdown.inlinepatterns import SimpleTagInlineProcessor
from markupsafe import Markup, escape

from .errors import RenderFailure
from .logging_config import log_warning

logger = logging.getLogger(__name__)

NO_DESCRIPTION = "No description provided."

ALLOWED_TAGS = frozenset(
    [
        "p",
        "br",
        "strong",
        "em",
        "a",
        "code",
        "pre",
        "ul",
        "ol",
        "li",
        "blockquote",
        "h1",
        "h2",
        "h3",
        "h4",
        "h5",
        "h6",
        "del",
        "hr",
    ]
)
ALLOWED_ATTRIBUTES = frozenset(["href", "title", "rel", "target"])
_ALLOWED_PROTOCOLS = ["http", "https", "mailto"]

Converter = Callable[[str], str]
Sanitizer = Callable[[str, Iterable[str], Iterable[str]], str]

# Exactly two tildes on each side; longer runs stay literal.
_STRIKETHROUGH_RE = r"(?<!~)(~{2})(?!~)(.+?)(?<!~)~{2}(?!~)"


class StrikethroughExtension(Extension):
    """Render GitHub-style ``~~text~~`` as ``<del>text</del>``."""

    def extendMarkdown(self, md_instance):
        md_instance.inlinePatterns.register(
            SimpleTagInlineProcessor(_STRIKETHROUGH_RE, "del"), "strikethrough", 40
        )


# Hard line breaks inside paragraphs, as GitHub renders comments.
GFM_EXTENSIONS = ["fenced_code", "tables", "sane_lists", "nl2br", StrikethroughExtension()]


def gfm_to_html(text: str) -> str:
    # Markdown instances hold parse state; md.markdown builds one per call.
    return md.markdown(text, extensions=GFM_EXTENSIONS, output_format="html")


def bleach_sanitize(html: str, tags: Iterable[str], attributes: Iterable[str]) -> str:
    return bleach.clean(
        html,
        tags=set(tags),
        attributes=list(attributes),
        protocols=_ALLOWED_PROTOCOLS,
        strip=True,
    )


class SafeRenderer:
    """Turn user-supplied Markdown into HTML that is safe to drop into a page.

    ``render`` always returns a string. Blank input yields a placeholder,
    and if conversion or sanitization raises, the failure is logged as a
    warning and the raw input is returned unchanged.
    """

    def __init__(
        self,
        converter: Optional[Converter] = None,
        sanitizer: Optional[Sanitizer] = None,
        log: Optional[logging.Logger] = None,
    ):
        self._converter = converter or gfm_to_html
        self._sanitizer = sanitizer or bleach_sanitize
        self._logger = log or logger

    def render(self, text: Optional[str]) -> str:
        output, _ = self._render_or_fallback(text)
        return output

    def render_markup(self, text: Optional[str]) -> Markup:
        """Like ``render`` but ready for a template: only sanitized HTML is
        marked safe, the placeholder and the raw fallback get escaped."""
        output, sanitized = self._render_or_fallback(text)
        return Markup(output) if sanitized else escape(output)

    def _render_or_fallback(self, text: Optional[str]) -> tuple[str, bool]:
        if text is None or not text.strip():
            return NO_DESCRIPTION, False
        try:
            return self._render(text), True
        except RenderFailure as failure:
            log_warning(
                self._logger,
                f"Markdown render failed: {failure.reason}",
                stage=failure.stage,
                error=failure.reason,
            )
            return text, False

    def _render(self, text: str) -> str:
        try:
            html = self._converter(text)
        except Exception as exc:
            raise RenderFailure("convert", _reason(exc)) from exc
        try:
            return self._sanitizer(html, ALLOWED_TAGS, ALLOWED_ATTRIBUTES)
        except Exception as exc:
            raise RenderFailure("sanitize", _reason(exc)) from exc


def _reason(exc: Exception) -> str:
    return str(exc) or exc.__class__.__name__


_default_renderer = SafeRenderer()


def render_markdown(text: Optional[str]) -> str:
    return _default_renderer.render(text)


def markdown_markup(text: Optional[str]) -> Markup:
    return _default_renderer.render_markup(text)
