"""
Named heuristics shared by the checkers.

Nodes come from a canvas editor or from scraped head markup, not from a real
DOM, so most "structure" questions are answered by substring matches on the
node name. Each heuristic lives here under its own name so it can later be
replaced by a structural check without touching the checkers.
"""
import re
from typing import Iterable, List, Optional, Sequence
from urllib.parse import SplitResult, urlsplit

from pageaudit.features.analysis.schemas.node import Node

# Schemes that must carry a host to form a valid absolute URL
_HOST_SCHEMES = {"http", "https", "ftp", "ws", "wss"}
_SCHEME_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9+.\-]*$")

RELATIVE_PREFIXES = ("/", "#", "./", "../")
LOCAL_HOST_MARKERS = ("localhost", "127.0.0.1")


def name_has(node: Node, *markers: str) -> bool:
    """Case-insensitive: does the node name contain any of ``markers``?"""
    name = node.lower_name
    return any(marker in name for marker in markers)


def name_has_all(node: Node, *markers: str) -> bool:
    name = node.lower_name
    return all(marker in name for marker in markers)


def find_first(nodes: Iterable[Node], predicate) -> Optional[Node]:
    return next((node for node in nodes if predicate(node)), None)


# ---------------------------------------------------------------------------
# Head / meta tags
# ---------------------------------------------------------------------------

def is_meta_tag(node: Node, key: str) -> bool:
    """``<meta name=key>`` or a node named like ``meta-<key>``."""
    return node.meta("name") == key or name_has_all(node, "meta", key)


def is_title_tag(node: Node) -> bool:
    return node.lower_name == "title" or "title-tag" in node.lower_name


def is_main_heading_tag(node: Node) -> bool:
    return node.lower_name == "h1" or "heading1" in node.lower_name


def is_canonical_link(node: Node) -> bool:
    return node.rel == "canonical" or name_has_all(node, "link", "canonical")


def is_html_lang(node: Node) -> bool:
    return "html-lang" in node.lower_name or name_has_all(node, "html", "lang")


def is_favicon_link(node: Node) -> bool:
    return (
        node.rel in ("icon", "shortcut icon")
        or "favicon" in node.lower_name
        or name_has_all(node, "link", "icon")
    )


# ---------------------------------------------------------------------------
# Headings
# ---------------------------------------------------------------------------

def is_h1_candidate(node: Node) -> bool:
    name = node.lower_name
    return (
        name in ("h1", "heading1")
        or "h1" in name
        or "title" in name
        or node.font_size >= 32
    )


def is_h2_candidate(node: Node) -> bool:
    name = node.lower_name
    return (
        name in ("h2", "heading2")
        or "h2" in name
        or "subtitle" in name
        or 24 <= node.font_size < 32
    )


def is_h3_candidate(node: Node) -> bool:
    name = node.lower_name
    return name in ("h3", "heading3") or "h3" in name or 20 <= node.font_size < 24


def is_heading_name(node: Node, levels: Sequence[str] = ("h1", "h2", "h3")) -> bool:
    return name_has(node, *levels, "heading")


# ---------------------------------------------------------------------------
# Element kinds
# ---------------------------------------------------------------------------

def looks_like_image(node: Node, markers: Sequence[str]) -> bool:
    return node.type == "image" or name_has(node, *markers)


def looks_like_text(node: Node) -> bool:
    return node.type == "text" or name_has(node, "text", "paragraph", "heading")


def is_head_resource(node: Node) -> bool:
    """A head `<link>` (stylesheet, icon, canonical); never an anchor on the page."""
    return node.type == "resource"


def looks_like_link(node: Node) -> bool:
    if is_head_resource(node):
        return False
    return bool(node.href) or name_has(node, "link", "anchor") or node.role == "link"


def looks_like_script(node: Node) -> bool:
    return node.type == "script" or "script" in node.lower_name


def looks_like_stylesheet(node: Node) -> bool:
    return node.type == "style" or name_has(node, "style", ".css")


def looks_like_form(node: Node) -> bool:
    return "form" in node.lower_name or node.role == "form"


def looks_like_input(node: Node) -> bool:
    return (
        name_has(node, "input", "textfield", "textarea", "select")
        or node.role in ("textbox", "searchbox", "combobox")
    )


def looks_interactive(node: Node) -> bool:
    if is_head_resource(node):
        return False
    return node.role in ("button", "link") or name_has(node, "button", "link")


def has_decorative_marker(node: Node) -> bool:
    """Case-sensitive marker check used by the image SEO rules."""
    return "decorative" in node.name or "background" in node.name


def looks_decorative(node: Node) -> bool:
    """Accessibility flavour: empty alt or a case-insensitive name marker."""
    return node.alt == "" or name_has(node, "decorative", "background")


def opens_in_new_tab(node: Node) -> bool:
    return name_has(node, "blank", "newwindow", "external")


def has_focus_style(node: Node) -> bool:
    if "focus" in node.lower_name:
        return True
    return bool(node.style) and any("focus" in key for key in node.style.hint_keys())


# ---------------------------------------------------------------------------
# URLs
# ---------------------------------------------------------------------------

def parse_absolute_url(href: str) -> Optional[SplitResult]:
    """
    Parse ``href`` as an absolute URL, or return None.

    Mirrors what a browser ``URL`` constructor accepts without a base: a
    scheme is required, and web schemes also need a host.
    """
    if not href or ":" not in href:
        return None
    try:
        parts = urlsplit(href.strip())
        # Accessing .port validates it
        parts.port
    except ValueError:
        return None
    if not parts.scheme or not _SCHEME_RE.match(parts.scheme):
        return None
    if parts.scheme.lower() in _HOST_SCHEMES and not parts.hostname:
        return None
    return parts


def is_relative_href(href: str) -> bool:
    return href.startswith(RELATIVE_PREFIXES)


def is_local_hostname(hostname: str) -> bool:
    return any(marker in hostname for marker in LOCAL_HOST_MARKERS)


def is_external_href(href: Optional[str]) -> bool:
    if not href:
        return False
    parts = parse_absolute_url(href)
    if parts is None:
        return False
    hostname = parts.hostname or ""
    return bool(hostname) and not is_local_hostname(hostname)


def is_internal_href(href: Optional[str]) -> bool:
    if not href:
        return False
    parts = parse_absolute_url(href)
    if parts is None:
        return is_relative_href(href)
    hostname = parts.hostname or ""
    return not hostname or is_local_hostname(hostname)


# ---------------------------------------------------------------------------
# Text
# ---------------------------------------------------------------------------

GENERIC_FILENAME_RE = re.compile(
    r"^(image|img|photo|pic|dsc|untitled|screenshot)[0-9]+\.(jpg|jpeg|png|gif|webp|svg)$",
    re.IGNORECASE,
)


def has_generic_filename(node: Node) -> bool:
    filename = node.name.split("/")[-1] or node.name
    return bool(GENERIC_FILENAME_RE.match(filename))


_SAME_TONE_PAIRS = (
    ("light", "light"),
    ("white", "light"),
    ("yellow", "white"),
    ("dark", "dark"),
    ("black", "dark"),
)


def has_same_tone_colors(color: str, background_color: str) -> bool:
    """Keyword stand-in for a contrast ratio: light-on-light or dark-on-dark names."""
    color = color.lower()
    background_color = background_color.lower()
    return any(fg in color and bg in background_color for fg, bg in _SAME_TONE_PAIRS)


def split_on_whitespace(text: str) -> List[str]:
    """Split on whitespace runs, keeping the empty edge tokens that leading or trailing whitespace produces."""
    return re.split(r"\s+", text)
