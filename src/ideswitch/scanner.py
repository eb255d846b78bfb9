"""Find IDE links in an HTML document.

Walks every ``<a href>`` in a page and keeps the ones the classifier
recognises (protocol links, VSIX downloads, vscode.dev redirects, ...).
This is the offline counterpart of watching a live page for links: save
the page, scan it, and see what each link would turn into.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from html.parser import HTMLParser

from ideswitch.core.classifier import ClassifiedLink, classify

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FoundLink:
    """A recognised link in a scanned document.

    Attributes:
        href: The ``href`` attribute, with HTML entities decoded.
        line: 1-based source line of the ``<a>`` tag.
        text: Visible anchor text, whitespace-collapsed.
        link: Classification of ``href``.
    """

    href: str
    line: int
    text: str
    link: ClassifiedLink


class _AnchorParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.anchors: list[tuple[str, int, list[str]]] = []
        self._open: list[str] | None = None

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag != "a":
            return
        href = next((value for name, value in attrs if name == "href" and value), None)
        if href is None:
            self._open = None
            return
        self._open = []
        self.anchors.append((href.strip(), self.getpos()[0], self._open))

    def handle_endtag(self, tag: str) -> None:
        if tag == "a":
            self._open = None

    def handle_data(self, data: str) -> None:
        if self._open is not None:
            self._open.append(data)


def scan_html(source: str) -> list[FoundLink]:
    """Return the recognised links in *source*, in document order."""
    parser = _AnchorParser()
    parser.feed(source)
    parser.close()

    found: list[FoundLink] = []
    for href, line, text_parts in parser.anchors:
        link = classify(href)
        if not link.is_recognized:
            continue
        text = " ".join("".join(text_parts).split())
        found.append(FoundLink(href=href, line=line, text=text, link=link))
    logger.debug("Found %d IDE links in %d anchors", len(found), len(parser.anchors))
    return found
