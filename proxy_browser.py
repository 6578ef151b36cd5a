#!/usr/bin/env python3
import itertools
import json
import logging
import os
import re
import shutil
import sys
import tempfile
import termios
import tty
import webbrowser
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from html import escape
from io import BytesIO
from pathlib import Path
from urllib.parse import urljoin, urlparse

import requests
from bs4 import BeautifulSoup
from PIL import Image

logger = logging.getLogger("proxy_browser")


# ========= CONFIG =========
CONFIG_FILE = os.path.expanduser("~/.proxy_browser_config.json")

DEFAULT_CONFIG = {
    "PROXY_URL": "https://api.codetabs.com/v1/proxy",
    "REQUEST_TIMEOUT": None,
    "USER_AGENT": "Mozilla/5.0",
    "DEFAULT_THEME": "dark",
    "PARAS_PER_PAGE": 2,
    "MAX_CHARS_PER_BLOCK": 2000,
    "LINKS_PER_PAGE": 5,
}


def load_config(path=CONFIG_FILE):
    """Read overrides for DEFAULT_CONFIG from a JSON file.

    Unknown keys are ignored and a missing or unreadable file yields the
    defaults. The browser only ever reads this file.
    """
    if not os.path.exists(path):
        return DEFAULT_CONFIG.copy()

    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("Ignoring unreadable config %s: %s", path, e)
        return DEFAULT_CONFIG.copy()

    cfg = DEFAULT_CONFIG.copy()
    if not isinstance(data, dict):
        logger.warning("Ignoring config %s: expected a JSON object", path)
        return cfg
    for k in DEFAULT_CONFIG:
        if k in data:
            cfg[k] = data[k]
    return cfg


_cfg = load_config()
PROXY_URL = _cfg["PROXY_URL"]
REQUEST_TIMEOUT = _cfg["REQUEST_TIMEOUT"]
USER_AGENT = _cfg["USER_AGENT"]
PARAS_PER_PAGE = _cfg["PARAS_PER_PAGE"]
MAX_CHARS_PER_BLOCK = _cfg["MAX_CHARS_PER_BLOCK"]
LINKS_PER_PAGE = _cfg["LINKS_PER_PAGE"]


# ========= LOGGING =========
def setup_logging(level=logging.WARNING, log_file=None):
    """
    Configures the 'proxy_browser' logger.

    Console output goes to stderr so it never interleaves with the page
    view on stdout.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
    """
    logger.setLevel(level)

    # Avoid duplicate handlers when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")


# ========= ERRORS =========
class BrowserError(Exception):
    """Base class for all browser-layer problems."""


class ValidationError(BrowserError, ValueError):
    """Raised when a user-supplied URL does not pass validation."""


class NetworkError(BrowserError):
    """Raised when the proxy cannot deliver the requested page."""


# ========= THEMES =========
class ThemeMode(Enum):
    DARK = "dark"
    LIGHT = "light"

    def toggled(self):
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK

    @property
    def style_class(self):
        return THEMES[self]["style"]


THEMES = {
    ThemeMode.DARK: {
        "style": "bg-gray-900 text-white",
        "icon": "☀️",
        "reset": "\033[0m",
        "title": "\033[96m",
        "link": "\033[93m",
        "cmd": "\033[92m",
        "log": "\033[38;5;114m",
        "err": "\033[91m",
        "dim": "\033[90m",
        "text": "\033[97m",
    },
    ThemeMode.LIGHT: {
        "style": "bg-white text-black",
        "icon": "🌙",
        "reset": "\033[0m",
        "title": "\033[34m",
        "link": "\033[35m",
        "cmd": "\033[32m",
        "log": "\033[38;5;28m",
        "err": "\033[31m",
        "dim": "\033[38;5;246m",
        "text": "\033[30m",
    },
}

try:
    DEFAULT_THEME = ThemeMode(_cfg["DEFAULT_THEME"])
except ValueError:
    logger.warning("Unknown theme %r, using dark", _cfg["DEFAULT_THEME"])
    DEFAULT_THEME = ThemeMode.DARK


# ========= STATUS LOG =========
INFO = "info"
ERROR = "error"


@dataclass(frozen=True)
class LogEntry:
    id: int
    message: str
    kind: str = INFO
    timestamp: datetime = field(default_factory=datetime.now)


class StatusLog:
    """Ordered status messages shown above the page view."""

    def __init__(self):
        self._entries = []
        # ids keep increasing across clears so every entry stays unique
        self._ids = itertools.count(1)

    def append(self, message, kind=INFO):
        entry = LogEntry(next(self._ids), message, kind)
        self._entries.append(entry)
        return entry

    def info(self, message):
        return self.append(message, INFO)

    def error(self, message):
        return self.append(message, ERROR)

    def clear(self):
        self._entries = []

    @property
    def entries(self):
        return list(self._entries)

    def messages(self):
        return [e.message for e in self._entries]

    def __iter__(self):
        return iter(list(self._entries))

    def __len__(self):
        return len(self._entries)


# ========= FETCH =========
session = requests.Session()
session.headers.update({"User-Agent": USER_AGENT})


def validate_url(url):
    if not url.startswith("http"):
        raise ValidationError("Please enter a valid http(s) URL")
    return url


def proxy_get(target_url, http=None):
    """GET target_url through the CORS proxy and return the response.

    The target is passed as the ``quest`` query parameter. Any transport
    failure or non-OK status from the proxy becomes a NetworkError.
    """
    validate_url(target_url)
    http = http or session
    try:
        r = http.get(PROXY_URL, params={"quest": target_url}, timeout=REQUEST_TIMEOUT)
        r.raise_for_status()
    except requests.RequestException as e:
        raise NetworkError(str(e)) from e
    return r


def fetch(target_url, http=None):
    return proxy_get(target_url, http).text


def fetch_bytes(target_url, http=None):
    return proxy_get(target_url, http).content


@dataclass(frozen=True)
class Loaded:
    html: str


@dataclass(frozen=True)
class Failed:
    message: str


# ========= HISTORY =========
class History:
    """Visited URLs with a cursor, using the usual browser semantics."""

    def __init__(self):
        self._entries = []
        self.cursor = -1

    @property
    def entries(self):
        return list(self._entries)

    def visit(self, url):
        # branching from the middle drops everything ahead of the cursor
        del self._entries[self.cursor + 1:]
        self._entries.append(url)
        self.cursor = len(self._entries) - 1

    def can_go_back(self):
        return self.cursor > 0

    def can_go_forward(self):
        return self.cursor < len(self._entries) - 1

    def back(self):
        if not self.can_go_back():
            return None
        self.cursor -= 1
        return self._entries[self.cursor]

    def forward(self):
        if not self.can_go_forward():
            return None
        self.cursor += 1
        return self._entries[self.cursor]

    def current(self):
        if 0 <= self.cursor < len(self._entries):
            return self._entries[self.cursor]
        return None

    def __len__(self):
        return len(self._entries)


# ========= BOOKMARKS =========
def bookmark_label(url):
    return urlparse(url).hostname or url


class Bookmarks:
    def __init__(self):
        self._urls = []

    def add(self, url):
        if not url or url in self._urls:
            return False
        self._urls.append(url)
        return True

    def labels(self):
        return [bookmark_label(u) for u in self._urls]

    def __contains__(self, url):
        return url in self._urls

    def __getitem__(self, i):
        return self._urls[i]

    def __iter__(self):
        return iter(list(self._urls))

    def __len__(self):
        return len(self._urls)


# ========= APP STATE =========
class ViewState(Enum):
    EMPTY = "empty"
    LOADING = "loading"
    LOADED = "loaded"
    ERROR = "error"


@dataclass
class AppState:
    logs: StatusLog = field(default_factory=StatusLog)
    history: History = field(default_factory=History)
    bookmarks: Bookmarks = field(default_factory=Bookmarks)
    theme: ThemeMode = DEFAULT_THEME
    loading: bool = False
    content: str = ""
    current_url: str = ""
    phase: ViewState = ViewState.EMPTY
    generation: int = 0

    @property
    def palette(self):
        return THEMES[self.theme]

    @property
    def style_class(self):
        return self.theme.style_class


@dataclass(frozen=True)
class NavigationTicket:
    url: str
    generation: int
    record_history: bool = True


def view_state(state):
    if state.loading:
        return ViewState.LOADING
    if state.content:
        return ViewState.LOADED
    if state.phase is ViewState.ERROR:
        return ViewState.ERROR
    return ViewState.EMPTY


# ========= CONTROLLER =========
INVALID_URL_MESSAGE = "❌ Please enter a valid http(s) URL"
FETCHING_MESSAGE = "🔍 Fetching {}"
LOADED_MESSAGE = "✅ Site loaded successfully."
FAILED_MESSAGE = "🚨 Error loading site: {}"
BOOKMARKED_MESSAGE = "🔖 Bookmarked!"


class Controller:
    """Applies user actions to an AppState.

    A navigation is split into begin_navigation() and
    complete_navigation() so that a fetch may finish at any time. Every
    begin bumps state.generation and a completion carrying an older
    generation is dropped, which keeps a slow earlier page from replacing
    a newer one.
    """

    def __init__(self, state=None, fetcher=fetch):
        self.state = state if state is not None else AppState()
        self.fetcher = fetcher
        self._listeners = []

    def subscribe(self, callback):
        self._listeners.append(callback)

    def _emit(self):
        for callback in self._listeners:
            callback(self.state)

    def begin_navigation(self, url, record_history=True):
        s = self.state
        try:
            validate_url(url)
        except ValidationError:
            s.logs.error(INVALID_URL_MESSAGE)
            self._emit()
            return None

        s.logs.clear()
        s.content = ""
        s.loading = True
        s.phase = ViewState.LOADING
        s.generation += 1
        s.logs.info(FETCHING_MESSAGE.format(url))
        logger.info("Navigating to %s (generation %d)", url, s.generation)
        self._emit()
        return NavigationTicket(url, s.generation, record_history)

    def load(self, url):
        try:
            return Loaded(self.fetcher(url))
        except BrowserError as e:
            return Failed(str(e))

    def complete_navigation(self, ticket, result):
        s = self.state
        if ticket.generation != s.generation:
            logger.debug("Dropping stale result for %s (generation %d, current %d)",
                         ticket.url, ticket.generation, s.generation)
            return False

        s.loading = False
        if isinstance(result, Loaded):
            s.content = result.html
            s.current_url = ticket.url
            s.phase = ViewState.LOADED
            s.logs.info(LOADED_MESSAGE)
            if ticket.record_history:
                s.history.visit(ticket.url)
        else:
            s.phase = ViewState.ERROR
            s.logs.error(FAILED_MESSAGE.format(result.message))
            logger.warning("Failed to load %s: %s", ticket.url, result.message)
        self._emit()
        return True

    def navigate(self, url, record_history=True):
        ticket = self.begin_navigation(url, record_history)
        if ticket is None:
            return None
        result = self.load(ticket.url)
        self.complete_navigation(ticket, result)
        return result

    def go_back(self):
        url = self.state.history.back()
        if url is None:
            return None
        return self.navigate(url, record_history=False)

    def go_forward(self):
        url = self.state.history.forward()
        if url is None:
            return None
        return self.navigate(url, record_history=False)

    def bookmark_current(self):
        if not self.state.bookmarks.add(self.state.current_url):
            return False
        self.state.logs.info(BOOKMARKED_MESSAGE)
        self._emit()
        return True

    def open_bookmark(self, index):
        return self.navigate(self.state.bookmarks[index])

    def follow_link(self, href):
        return self.navigate(urljoin(self.state.current_url, href))

    def toggle_theme(self):
        self.state.theme = self.state.theme.toggled()
        self._emit()
        return self.state.theme


# ========= PAGE EXTRACTION =========
@dataclass
class Page:
    title: str = None
    paragraphs: list = field(default_factory=list)
    links: list = field(default_factory=list)
    main_image: str = None


def clean_paragraph(text):
    return re.sub(r"\s+", " ", text).strip()


def wrap(text, width):
    lines = []
    line = ""
    for word in text.split():
        if line and len(line) + 1 + len(word) > width:
            lines.append(line)
            line = word
        else:
            line = f"{line} {word}" if line else word
    if line:
        lines.append(line)
    return lines


def _collect_links(root, base):
    links = []
    for a in root.find_all("a", href=True):
        href = urljoin(base, a["href"])
        if not href.startswith("http"):
            continue
        label = a.get_text(" ", strip=True)
        links.append((label or href, href))
    return links


def extract_page(html, base):
    """Pull the readable parts out of fetched HTML.

    Scripts never run here: script and style elements are dropped and
    only text, links and the lead image survive.
    """
    soup = BeautifulSoup(html, "html.parser")

    title = None
    if soup.title and soup.title.string:
        title = clean_paragraph(soup.title.string)

    main_image = None
    og = soup.find("meta", property="og:image")
    img = soup.find("img", src=True)
    if og and og.get("content"):
        main_image = urljoin(base, og["content"])
    elif img:
        main_image = urljoin(base, img["src"])

    for tag in soup(["script", "style", "noscript", "nav", "footer", "header"]):
        tag.decompose()

    # largest text container wins
    candidates = [(len(tag.get_text(strip=True)), i, tag)
                  for i, tag in enumerate(soup.find_all(["article", "main", "div"]))]
    if candidates:
        main = max(candidates)[2]
    else:
        main = soup.body or soup

    paragraphs = []
    for p in main.find_all(["p", "li", "pre", "h1", "h2", "h3"]):
        text = clean_paragraph(p.get_text(" ", strip=True))
        if text:
            paragraphs.append(text)
    if not paragraphs:
        text = clean_paragraph(main.get_text(" ", strip=True))
        if text:
            paragraphs.append(text)

    return Page(title, paragraphs, _collect_links(main, base), main_image)


def paginate(items, n):
    return [items[i:i + n] for i in range(0, len(items), n)]


def build_text_pages(paragraphs, width, per_page=None, max_chars=None):
    per_page = per_page or PARAS_PER_PAGE
    max_chars = max_chars or MAX_CHARS_PER_BLOCK
    if not paragraphs:
        return [["[No readable text]"]]

    pieces = []
    for para in paragraphs:
        pieces.extend(para[i:i + max_chars] for i in range(0, len(para), max_chars))

    pages = []
    for block in paginate(pieces, per_page):
        lines = []
        for para in block:
            lines.extend(wrap(para, max(10, width)))
            lines.append("")
        pages.append(lines)
    return pages


def shorten_middle(text, max_len):
    if len(text) <= max_len:
        return text
    if max_len < 10:
        return text[:max_len]
    keep = (max_len - 3) // 2
    return text[:keep] + "..." + text[-keep:]


# ========= RENDERING SURFACE =========
FRAME_SANDBOX = "allow-scripts allow-same-origin"


def build_frame_document(html, theme=DEFAULT_THEME, title="Rendered Site"):
    """Host page that shows the fetched HTML in a sandboxed iframe.

    The HTML goes in through srcdoc, so the frame never navigates to the
    original site.
    """
    return (
        "<!DOCTYPE html>\n"
        "<html>\n"
        f"<head><meta charset=\"utf-8\"><title>{escape(title)}</title></head>\n"
        f"<body class=\"{theme.style_class}\" style=\"margin:0\">\n"
        f"<iframe sandbox=\"{FRAME_SANDBOX}\" srcdoc=\"{escape(html, quote=True)}\" "
        f"title=\"Rendered Site\" style=\"width:100%;height:100vh;border:none\"></iframe>\n"
        "</body>\n"
        "</html>\n"
    )


def open_in_system_browser(html, theme=DEFAULT_THEME, title="Rendered Site"):
    fd, path = tempfile.mkstemp(prefix="proxy_browser_", suffix=".html")
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write(build_frame_document(html, theme, title))
    webbrowser.open(Path(path).as_uri())
    logger.info("Opened frame document %s", path)
    return path


# ========= IMAGES =========
def render_image_halfblocks(img, max_width):
    # one character cell covers two pixel rows: fg is the top, bg the bottom
    img = img.convert("RGB")
    width = max(1, min(max_width, img.width))
    rows = max(1, int(img.height / img.width * width * 0.5))
    img = img.resize((width, rows * 2))
    px = img.load()

    lines = []
    for y in range(0, img.height, 2):
        cells = []
        for x in range(img.width):
            top = px[x, y]
            bottom = px[x, y + 1] if y + 1 < img.height else top
            cells.append(f"\033[38;2;{top[0]};{top[1]};{top[2]}m"
                         f"\033[48;2;{bottom[0]};{bottom[1]};{bottom[2]}m▀")
        lines.append("".join(cells) + "\033[0m")
    return lines


def image_preview(url, max_width, http=None):
    try:
        img = Image.open(BytesIO(fetch_bytes(url, http)))
        return render_image_halfblocks(img, max_width)
    except (BrowserError, OSError, Image.DecompressionBombError) as e:
        logger.warning("Image preview failed for %s: %s", url, e)
        return [f"[Image error: {e}]"]


# ========= VIEW =========
LOADING_VIEW = "🔄 Loading site..."
EMPTY_VIEW = "🌐 Enter a URL to browse"


class PageView:
    """Per-page reading position for the LOADED view."""

    def __init__(self):
        self.key = None
        self.width = None
        self.page = None
        self.text_pages = [[]]
        self.link_pages = []
        self.block = 0
        self.mode = "text"

    def sync(self, state, width):
        key = (state.generation, state.loading)
        if key == self.key:
            if width != self.width and self.page is not None:
                # resize: re-wrap in place and keep the reading position
                self.width = width
                self.text_pages = build_text_pages(self.page.paragraphs, width)
                if self.mode == "text":
                    self.block = min(self.block, len(self.text_pages) - 1)
            return
        self.key = key
        self.width = width
        self.block = 0
        self.mode = "text"
        if state.content:
            self.page = extract_page(state.content, state.current_url)
            self.text_pages = build_text_pages(self.page.paragraphs, width)
            self.link_pages = paginate(self.page.links, LINKS_PER_PAGE)
        else:
            self.page = None
            self.text_pages = [[]]
            self.link_pages = []

    def pages(self):
        return self.text_pages if self.mode == "text" else self.link_pages

    def next(self):
        if self.block < len(self.pages()) - 1:
            self.block += 1

    def prev(self):
        if self.block > 0:
            self.block -= 1

    def toggle_mode(self):
        self.mode = "links" if self.mode == "text" else "text"
        self.block = 0

    def link(self, n):
        if self.mode != "links" or not self.link_pages:
            return None
        links = self.link_pages[self.block]
        if 1 <= n <= len(links):
            return links[n - 1][1]
        return None


def view_lines(state, view, width):
    vs = view_state(state)
    if vs is ViewState.LOADING:
        return [LOADING_VIEW]
    if vs is not ViewState.LOADED:
        return [EMPTY_VIEW]

    view.sync(state, width)
    c = state.palette
    if view.mode == "text":
        lines = [f"{c['text']}{line}{c['reset']}" for line in view.text_pages[view.block]]
        lines.append(f"{c['dim']}Block {view.block + 1}/{len(view.text_pages)}{c['reset']}")
        return lines

    if not view.link_pages:
        return ["[No links]"]
    lines = []
    for i, (label, href) in enumerate(view.link_pages[view.block], 1):
        short_label = label[:60] + "…" if len(label) > 60 else label
        short_href = shorten_middle(href, max(20, width - len(short_label) - 10))
        lines.append(f"{c['link']}{i}.{c['reset']} {short_label} {c['dim']}→ {short_href}{c['reset']}")
    lines.append(f"{c['dim']}Links {view.block + 1}/{len(view.link_pages)}{c['reset']}")
    return lines


def clear_screen():
    os.system("clear")


def render(state, view):
    clear_screen()
    c = state.palette
    cols = shutil.get_terminal_size().columns

    back = c["cmd"] if state.history.can_go_back() else c["dim"]
    fwd = c["cmd"] if state.history.can_go_forward() else c["dim"]
    address = shorten_middle(state.current_url or "https://example.com", max(20, cols - 16))
    print(f"{back}◀{c['reset']} {fwd}▶{c['reset']}  {c['title']}{address}{c['reset']}  ★  {c['icon']}")
    print(f"{c['dim']}{'─' * cols}{c['reset']}")

    for entry in state.logs:
        color = c["err"] if entry.kind == ERROR else c["log"]
        print(f"{c['dim']}{entry.timestamp:%H:%M:%S}{c['reset']} {color}{entry.message}{c['reset']}")
    print(f"{c['dim']}{'─' * cols}{c['reset']}")

    if view.page is not None and view.page.title and not state.loading:
        print(f"{c['title']}{view.page.title}{c['reset']}\n")
    for line in view_lines(state, view, cols):
        print(line)

    if len(state.bookmarks):
        print(f"\n{c['title']}🔖 Bookmarks{c['reset']}")
        print("  ".join(f"{c['link']}{i}.{c['reset']} {label}"
                        for i, label in enumerate(state.bookmarks.labels(), 1)))

    print(f"\n{c['cmd']}URL or g <url>=go  bm=bookmarks  ←/b=back  →/f=forward  Space/↓=next  ↑/p=prev  "
          f"m=★  t=theme  l=links  number=open  i=image  o=open  q=quit{c['reset']}")


# ========= INPUT =========
def read_key():
    fd = sys.stdin.fileno()
    old = termios.tcgetattr(fd)
    try:
        tty.setraw(fd)
        ch = sys.stdin.read(1)
        if ch == "\x1b":
            arrows = {"[A": "UP", "[B": "DOWN", "[C": "RIGHT", "[D": "LEFT"}
            return arrows.get(sys.stdin.read(2), ch)
        if ch == "\x7f":
            return "BACKSPACE"
        return ch
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


KEY_COMMANDS = {
    "UP": "p",
    "DOWN": "next",
    "LEFT": "b",
    "RIGHT": "f",
    " ": "next",
    "\r": "next",
    "\n": "next",
}


def read_command():
    print("> ", end="", flush=True)
    if not sys.stdin.isatty():
        return input().strip()

    key = read_key()
    if key in KEY_COMMANDS:
        print()
        return KEY_COMMANDS[key]
    if key == "BACKSPACE":
        print("\b \b", end="", flush=True)
        return input().strip()
    print(key, end="", flush=True)
    return (key + input()).strip()


# ========= MAIN LOOP =========
def handle_command(cmd, controller, view):
    """Apply one typed command. Returns False when the user quits."""
    low = cmd.lower()
    state = controller.state

    if low == "q":
        return False
    if low == "next":
        view.next()
    elif low == "p":
        view.prev()
    elif low == "b":
        controller.go_back()
    elif low == "f":
        controller.go_forward()
    elif low == "m":
        controller.bookmark_current()
    elif low == "t":
        controller.toggle_theme()
    elif low == "l":
        view.toggle_mode()
    elif low == "i":
        show_image(state, view)
    elif low == "g" or low.startswith("g "):
        url = cmd[1:].strip() or input("URL: ").strip()
        controller.navigate(url)
    elif low == "bm" or low.startswith("bm "):
        bookmark_menu(controller, cmd[2:].strip())
    elif low == "o":
        if state.content:
            open_in_system_browser(state.content, state.theme,
                                   view.page.title if view.page and view.page.title else "Rendered Site")
    elif low.isdigit():
        n = int(low)
        if view.mode == "links":
            href = view.link(n)
            if href:
                controller.follow_link(href)
        elif 1 <= n <= len(state.bookmarks):
            controller.open_bookmark(n - 1)
    elif cmd:
        controller.navigate(cmd)
    return True


def bookmark_menu(controller, choice=""):
    """List bookmarks and open the chosen one. Returns True if one was opened."""
    state = controller.state
    c = state.palette
    labels = state.bookmarks.labels()

    if not choice:
        clear_screen()
        print(f"{c['title']}=== BOOKMARKS ==={c['reset']}\n")
        if not labels:
            input("No bookmarks. Enter…")
            return False
        for i, (label, url) in enumerate(zip(labels, state.bookmarks), 1):
            print(f"{c['link']}{i}.{c['reset']} {label}")
            print(f"   {c['dim']}{url}{c['reset']}")
        print(f"\n{c['cmd']}number=open  q=back{c['reset']}")
        choice = input("> ").strip()

    if choice.isdigit() and 1 <= int(choice) <= len(labels):
        controller.open_bookmark(int(choice) - 1)
        return True
    return False


def show_image(state, view):
    c = state.palette
    if view.page is None or not view.page.main_image:
        input(f"{c['err']}No image found.{c['reset']} Enter…")
        return
    clear_screen()
    print(f"{c['title']}=== PAGE IMAGE ==={c['reset']}\n")
    cols = shutil.get_terminal_size().columns
    for line in image_preview(view.page.main_image, max(20, cols - 2)):
        print(line)
    input(f"\n{c['cmd']}Enter=back{c['reset']}")


def main():
    setup_logging()
    controller = Controller()
    view = PageView()

    def show_loading(state):
        if state.loading:
            render(state, view)

    controller.subscribe(show_loading)

    while True:
        cols = shutil.get_terminal_size().columns
        view.sync(controller.state, cols)
        render(controller.state, view)
        try:
            cmd = read_command()
        except (EOFError, KeyboardInterrupt):
            break
        if not handle_command(cmd, controller, view):
            break


if __name__ == "__main__":
    main()
