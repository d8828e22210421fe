"""
Allow-list HTML sanitizer for user-generated article content.

Content that came out of the editor is parsed with BeautifulSoup and rebuilt
keeping only formatting elements and a small set of attributes. Anything that
can execute or load active content is dropped together with its children.
"""
import re
from typing import Dict, Set
from urllib.parse import urlsplit
from bs4 import BeautifulSoup
from bs4.element import CData, Comment, Declaration, Doctype, ProcessingInstruction

ALLOWED_TAGS: Set[str] = {
    "a", "abbr", "b", "blockquote", "br", "caption", "cite", "code", "col", "colgroup",
    "dd", "del", "dfn", "div", "dl", "dt", "em", "figcaption", "figure",
    "h1", "h2", "h3", "h4", "h5", "h6", "hr", "i", "img", "ins", "kbd", "li",
    "mark", "ol", "p", "pre", "q", "s", "samp", "small", "span", "strike", "strong",
    "sub", "sup", "table", "tbody", "td", "tfoot", "th", "thead", "time", "tr",
    "u", "ul", "var",
}

# removed along with everything inside them
DROPPED_TAGS: Set[str] = {
    "script", "style", "iframe", "frame", "frameset", "object", "embed", "applet",
    "form", "input", "button", "select", "textarea", "noscript", "template",
    "link", "meta", "base", "head", "title", "svg", "math", "audio", "video", "source",
}

GLOBAL_ATTRS: Set[str] = {"class", "title", "lang", "dir"}
TAG_ATTRS: Dict[str, Set[str]] = {
    "a": {"href", "name"},
    "img": {"src", "alt", "width", "height"},
    "ol": {"start", "type"},
    "td": {"colspan", "rowspan", "align"},
    "th": {"colspan", "rowspan", "align", "scope"},
    "blockquote": {"cite"},
    "q": {"cite"},
    "del": {"cite", "datetime"},
    "ins": {"cite", "datetime"},
    "time": {"datetime"},
    "pre": {"spellcheck"},
}
URL_ATTRS: Set[str] = {"href", "src", "cite"}
ALLOWED_SCHEMES: Set[str] = {"http", "https", "mailto"}

# class names the editor stylesheet understands, e.g. ql-align-center
CLASS_RE = re.compile(r"^ql-[a-z0-9-]+$")
_CONTROL_CHARS = re.compile(r"[\x00-\x20\x7f]+")
_MARKUP_STRINGS = (Comment, Doctype, ProcessingInstruction, Declaration, CData)


def _safe_url(value: str) -> bool:
    # browsers read backslashes in URLs as slashes
    cleaned = _CONTROL_CHARS.sub("", value).replace("\\", "/")
    try:
        scheme = urlsplit(cleaned).scheme.lower()
    except ValueError:
        return False
    if not scheme:
        # relative URLs, but no protocol-relative ones pointing off-site
        return not cleaned.startswith("//")
    return scheme in ALLOWED_SCHEMES


def _clean_attrs(tag) -> None:
    allowed = GLOBAL_ATTRS | TAG_ATTRS.get(tag.name, set())
    for attr in list(tag.attrs):
        value = tag.attrs[attr]
        if attr not in allowed:
            del tag.attrs[attr]
            continue
        if attr == "class":
            classes = [c for c in (value if isinstance(value, list) else value.split()) if CLASS_RE.match(c)]
            if classes:
                tag.attrs[attr] = classes
            else:
                del tag.attrs[attr]
            continue
        if attr in URL_ATTRS and not _safe_url(str(value)):
            del tag.attrs[attr]
    if tag.name == "a" and tag.get("href"):
        tag["rel"] = "nofollow noopener"


def sanitize_html(html: str) -> str:
    if not html:
        return ""
    soup = BeautifulSoup(html, "html.parser")

    for node in list(soup.descendants):
        if isinstance(node, _MARKUP_STRINGS):
            node.extract()

    for tag in soup.find_all(True):
        if tag.decomposed:
            continue
        name = (tag.name or "").lower()
        if name in DROPPED_TAGS:
            tag.decompose()
        elif name not in ALLOWED_TAGS:
            tag.unwrap()

    for tag in soup.find_all(True):
        _clean_attrs(tag)

    return str(soup)
