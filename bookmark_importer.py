#!/usr/bin/env python3
"""
Bookmark Importer - Import browser bookmark exports without duplicating tags

This script imports browser bookmarks by:
- Parsing Netscape bookmark HTML exported by any browser
- Inferring each bookmark's folder as its category
- Reconciling tags and categories against an existing collection
- Writing a JSON import report ready to be persisted
"""

import sys
import os
import re
import json
import uuid
import argparse
import logging
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import (Any, Callable, Dict, Generic, Iterable, List, NamedTuple,
                    Optional, Protocol, Tuple, TypeVar)
from urllib.parse import urlparse

from bs4 import BeautifulSoup
from bs4 import Tag as SoupTag
import pyperclip


# Configuration defaults
DEFAULT_CONFIG = {
    'parser_backend': 'html.parser',  # 'lxml' is faster on huge exports
    'output_dir': 'bookmarks-imported',
    'log_file': 'bookmark_importer.log',
    'milliseconds_threshold': 9999999999,  # larger ADD_DATE values are ms
    'report_indent': 2,
}

# Attribute spellings differ between browsers
ADD_DATE_ATTRIBUTES = ('add_date', 'ADDED', 'added')
TAG_ATTRIBUTES = ('tags', 'TAGS')

FOLDER_HEADING = 'h3'
FOLDER_TERM = 'dt'
FOLDER_LIST = 'dl'

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
LEADING_INT = re.compile(r'\s*[+-]?\d+')


class BookmarkType:
    """Kinds of bookmark the url classifier can report"""
    LINK = 'link'
    VIDEO = 'video'
    IMAGE = 'image'
    DOCUMENT = 'document'
    ARTICLE = 'article'


VIDEO_HOSTS = ('youtube.com', 'youtu.be', 'vimeo.com', 'dailymotion.com',
               'twitch.tv')
VIDEO_EXTENSIONS = ('.mp4', '.webm', '.mov', '.mkv', '.avi')
IMAGE_EXTENSIONS = ('.png', '.jpg', '.jpeg', '.gif', '.webp', '.svg', '.bmp')
DOCUMENT_EXTENSIONS = ('.pdf', '.doc', '.docx', '.ppt', '.pptx', '.xls',
                       '.xlsx', '.odt', '.txt', '.epub')
ARTICLE_HOSTS = ('medium.com', 'substack.com', 'dev.to')


class BookmarkImportError(Exception):
    """Base error for bookmark import problems"""


class MissingURLError(BookmarkImportError):
    """A record reached reconciliation without a url"""


def setup_logging(verbose: bool = False, log_file: Optional[str] = None) -> None:
    """Setup logging configuration with proper encoding"""
    # Clear any existing handlers
    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
        handler.close()

    file_handler = logging.FileHandler(log_file or DEFAULT_CONFIG['log_file'],
                                       encoding='utf-8')
    console_handler = logging.StreamHandler(sys.stdout)

    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')
    file_handler.setFormatter(formatter)
    console_handler.setFormatter(formatter)

    logging.root.setLevel(logging.DEBUG if verbose else logging.INFO)
    logging.root.addHandler(file_handler)
    logging.root.addHandler(console_handler)


def generate_unique_id() -> str:
    """Return a fresh opaque identifier"""
    return uuid.uuid4().hex


def get_bookmark_type_from_url(url: str) -> str:
    """Guess the bookmark type from its url"""
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return BookmarkType.LINK

    host = parsed.netloc.lower()
    if host.startswith('www.'):
        host = host[4:]
    path = parsed.path.lower()

    def on_host(hosts):
        return any(host == h or host.endswith('.' + h) for h in hosts)

    if on_host(VIDEO_HOSTS) or path.endswith(VIDEO_EXTENSIONS):
        return BookmarkType.VIDEO
    if path.endswith(IMAGE_EXTENSIONS):
        return BookmarkType.IMAGE
    if path.endswith(DOCUMENT_EXTENSIONS):
        return BookmarkType.DOCUMENT
    if on_host(ARTICLE_HOSTS):
        return BookmarkType.ARTICLE
    return BookmarkType.LINK


def _isoformat(value: Optional[datetime]) -> Optional[str]:
    return value.isoformat() if value is not None else None


def _drop_none(data: Dict[str, Any]) -> Dict[str, Any]:
    return {key: value for key, value in data.items() if value is not None}


@dataclass(frozen=True, eq=False)
class Tag:
    """A tag; two Tag objects are the same tag only if they are the same object"""
    id: str
    name: str
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({'id': self.id, 'name': self.name, 'color': self.color})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Tag':
        return cls(id=str(data['id']), name=str(data['name']), color=data.get('color'))


@dataclass(frozen=True, eq=False)
class Category:
    """A category; freshly parsed folders use the folder name as their id"""
    id: str
    name: str
    icon: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({'id': self.id, 'name': self.name, 'icon': self.icon})

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Category':
        return cls(id=str(data['id']), name=str(data['name']), icon=data.get('icon'))


@dataclass
class PartialBookmark:
    """Bookmark as produced by the parser; everything but the url is optional"""
    url: str
    id: Optional[str] = None
    title: Optional[str] = None
    type: Optional[str] = None
    date_added: Optional[datetime] = None
    tags: List[Tag] = field(default_factory=list)
    category: Optional[Category] = None
    is_alive: Optional[bool] = None
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_thumbnail_timestamp: Optional[float] = None
    last_visited: Optional[datetime] = None
    last_checked: Optional[datetime] = None
    content_changed: Optional[bool] = None
    favicon: Optional[str] = None


@dataclass(frozen=True)
class Bookmark:
    """A finalized bookmark whose tags and category are resolved instances"""
    id: str
    url: str
    title: str
    type: str
    date_added: datetime
    tags: Tuple[Tag, ...] = ()
    category: Optional[Category] = None
    is_alive: bool = True
    description: Optional[str] = None
    thumbnail_url: Optional[str] = None
    video_thumbnail_timestamp: Optional[float] = None
    last_visited: Optional[datetime] = None
    last_checked: Optional[datetime] = None
    content_changed: Optional[bool] = None
    favicon: Optional[str] = None

    def to_partial(self) -> PartialBookmark:
        """Turn a finalized bookmark back into reconciler input"""
        return PartialBookmark(
            url=self.url,
            id=self.id,
            title=self.title,
            type=self.type,
            date_added=self.date_added,
            tags=list(self.tags),
            category=self.category,
            is_alive=self.is_alive,
            description=self.description,
            thumbnail_url=self.thumbnail_url,
            video_thumbnail_timestamp=self.video_thumbnail_timestamp,
            last_visited=self.last_visited,
            last_checked=self.last_checked,
            content_changed=self.content_changed,
            favicon=self.favicon,
        )

    def to_dict(self) -> Dict[str, Any]:
        return _drop_none({
            'id': self.id,
            'url': self.url,
            'title': self.title,
            'type': self.type,
            'date_added': _isoformat(self.date_added),
            'tags': [tag.to_dict() for tag in self.tags],
            'category': self.category.to_dict() if self.category else None,
            'is_alive': self.is_alive,
            'description': self.description,
            'thumbnail_url': self.thumbnail_url,
            'video_thumbnail_timestamp': self.video_thumbnail_timestamp,
            'last_visited': _isoformat(self.last_visited),
            'last_checked': _isoformat(self.last_checked),
            'content_changed': self.content_changed,
            'favicon': self.favicon,
        })


class ImportResult(NamedTuple):
    """Finalized bookmarks plus the tags and categories the caller must create"""
    bookmarks: List[Bookmark]
    new_tags: List[Tag]
    new_categories: List[Category]

    @property
    def is_empty(self) -> bool:
        return not (self.bookmarks or self.new_tags or self.new_categories)


# --- Parsing -----------------------------------------------------------------

class FolderNode(Protocol):
    """The slice of a document tree that folder inference needs"""
    tag_name: str
    attrs: Dict[str, Any]
    text: str
    parent: Optional['FolderNode']
    previous_sibling: Optional['FolderNode']
    children: List['FolderNode']

    def find(self, name: str) -> Optional['FolderNode']:
        ...


class SoupNode:
    """FolderNode view over a BeautifulSoup element"""

    def __init__(self, element: SoupTag):
        self.element = element

    def __repr__(self):
        return f"<SoupNode {self.tag_name}>"

    def __eq__(self, other):
        return isinstance(other, SoupNode) and other.element is self.element

    def __hash__(self):
        return id(self.element)

    @property
    def tag_name(self) -> str:
        return (self.element.name or '').lower()

    @property
    def attrs(self) -> Dict[str, Any]:
        return dict(self.element.attrs)

    @property
    def text(self) -> str:
        return self.element.get_text()

    @property
    def parent(self) -> Optional['SoupNode']:
        # The BeautifulSoup object itself is the document, not an element
        parent = self.element.parent
        if parent is None or isinstance(parent, BeautifulSoup):
            return None
        return SoupNode(parent)

    @property
    def previous_sibling(self) -> Optional['SoupNode']:
        for sibling in self.element.previous_siblings:
            if isinstance(sibling, SoupTag):
                return SoupNode(sibling)
        return None

    @property
    def children(self) -> List['SoupNode']:
        return [SoupNode(child) for child in self.element.children
                if isinstance(child, SoupTag)]

    def find(self, name: str) -> Optional['SoupNode']:
        found = self.element.find(name)
        return SoupNode(found) if found is not None else None


def _child_heading(node: FolderNode) -> Optional[FolderNode]:
    """First <h3> directly under node, or directly under one of its <dt> children"""
    for child in node.children:
        if child.tag_name == FOLDER_HEADING:
            return child
        if child.tag_name == FOLDER_TERM:
            for grandchild in child.children:
                if grandchild.tag_name == FOLDER_HEADING:
                    return grandchild
    return None


def _closest(node: Optional[FolderNode], name: str) -> Optional[FolderNode]:
    while node is not None:
        if node.tag_name == name:
            return node
        node = node.parent
    return None


def _heading_at(node: FolderNode) -> Optional[str]:
    """Folder name found at one ancestor, '' for an empty heading, None for no heading"""
    heading = _child_heading(node)
    if heading is not None and heading.text:
        return heading.text.strip()

    previous = node.previous_sibling
    if previous is not None:
        if previous.tag_name == FOLDER_HEADING:
            heading = previous
        else:
            heading = previous.find(FOLDER_HEADING)
        if heading is not None:
            return heading.text.strip()

    return None


class FolderCache:
    """Per-document memo so anchors sharing ancestors do not walk them again"""

    def __init__(self):
        self.walks: Dict[FolderNode, Optional[str]] = {}
        self.labels: Dict[FolderNode, str] = {}


def _walk_ancestors(start: Optional[FolderNode], cache: FolderCache) -> Optional[str]:
    # Every node passed on the way up ends with the same answer as the
    # node where the walk stopped
    path = []
    folder = None
    current = start
    while current is not None:
        if current in cache.walks:
            folder = cache.walks[current]
            break
        path.append(current)
        folder = _heading_at(current)
        if folder is not None:
            break
        current = current.parent

    for node in path:
        cache.walks[node] = folder
    return folder


def _list_label(anchor: FolderNode, cache: FolderCache) -> Optional[str]:
    folder_list = _closest(anchor, FOLDER_LIST)
    if folder_list is None:
        return None
    if folder_list not in cache.labels:
        label = folder_list.previous_sibling
        cache.labels[folder_list] = label.text.strip() if label is not None else ''
    return cache.labels[folder_list]


def infer_folder_name(anchor: FolderNode, cache: Optional[FolderCache] = None) -> Optional[str]:
    """Best-effort guess at the folder a bookmark anchor was exported from.

    Browsers disagree on whether a folder is a heading followed by a list or a
    list nested under a heading, so this tries, in order and stopping at the
    first hit:

    1. walking up from the anchor's container, a heading directly inside the
       ancestor (or inside one of its <dt> children);
    2. at the same ancestor, a preceding sibling that is or contains a heading;
    3. whatever element sits right before the nearest enclosing <dl>.

    This is lossy. Nested folders collapse to the nearest one, and (3) can
    pick up an unrelated heading when lists are nested without a heading of
    their own. Pass the same cache for every anchor of one document.
    """
    if cache is None:
        cache = FolderCache()

    folder = _walk_ancestors(anchor.parent, cache)
    if not folder:
        folder = _list_label(anchor, cache)
    return folder or None


def _first_attribute(attrs: Dict[str, Any], names: Iterable[str]) -> Optional[str]:
    for name in names:
        value = attrs.get(name)
        if value:
            return value
    return None


def parse_timestamp(value: Optional[str], now: Optional[datetime] = None) -> datetime:
    """Convert an ADD_DATE style value to an aware UTC datetime.

    Values above DEFAULT_CONFIG['milliseconds_threshold'] are read as
    milliseconds since the epoch, everything else as seconds. Missing or
    unreadable values give the current time.
    """
    if value:
        match = LEADING_INT.match(value)
        if match:
            timestamp = int(match.group())
            if timestamp > DEFAULT_CONFIG['milliseconds_threshold']:
                return EPOCH + timedelta(milliseconds=timestamp)
            return EPOCH + timedelta(seconds=timestamp)
        logging.debug(f"Unreadable creation time {value!r}, using current time")
    return now or datetime.now(timezone.utc)


def split_tag_names(value: Optional[str]) -> List[str]:
    """Split a comma separated tag attribute, keeping order and duplicates"""
    if not value:
        return []
    return [name.strip() for name in value.split(',') if name.strip()]


def bookmark_from_anchor(anchor: FolderNode,
                         id_factory: Callable[[], str] = generate_unique_id,
                         type_classifier: Callable[[str], str] = get_bookmark_type_from_url,
                         cache: Optional[FolderCache] = None) -> Optional[PartialBookmark]:
    """Build a partial bookmark from one anchor, or None when it has no href"""
    attrs = anchor.attrs
    url = attrs.get('href')
    if not url:
        return None

    title = anchor.text.strip() or url
    date_added = parse_timestamp(_first_attribute(attrs, ADD_DATE_ATTRIBUTES))
    tags = [Tag(id=id_factory(), name=name)
            for name in split_tag_names(_first_attribute(attrs, TAG_ATTRIBUTES))]

    folder = infer_folder_name(anchor, cache)
    # Placeholder only: the reconciler swaps it for a real category
    category = Category(id=folder, name=folder) if folder else None

    return PartialBookmark(
        url=url,
        id=id_factory(),
        title=title,
        type=type_classifier(url),
        date_added=date_added,
        tags=tags,
        category=category,
        is_alive=True,
    )


def parse_bookmark_html(html_content: str,
                        id_factory: Callable[[], str] = generate_unique_id,
                        type_classifier: Callable[[str], str] = get_bookmark_type_from_url,
                        parser_backend: Optional[str] = None) -> List[PartialBookmark]:
    """Parse a Chrome/Firefox/Safari bookmark export into partial bookmarks.

    Anchors without an href are skipped, and an anchor that fails to parse is
    logged and skipped without affecting the rest. If the document as a whole
    cannot be parsed an empty list is returned. Nothing is raised.
    """
    bookmarks = []
    try:
        soup = BeautifulSoup(html_content, parser_backend or DEFAULT_CONFIG['parser_backend'])
        anchors = soup.find_all('a')
        cache = FolderCache()

        if not anchors:
            logging.warning("No bookmark elements found in the HTML")

        for anchor in anchors:
            try:
                bookmark = bookmark_from_anchor(SoupNode(anchor), id_factory, type_classifier, cache)
            except Exception as e:
                logging.error(f"Error parsing individual bookmark: {e}")
                continue

            if bookmark is None:
                logging.debug(f"Skipping anchor without href: {anchor.get_text().strip()[:60]!r}")
                continue
            bookmarks.append(bookmark)

        logging.info(f"Extracted {len(bookmarks)} bookmarks from {len(anchors)} anchors")
    except Exception as e:
        logging.error(f"Error parsing bookmarks HTML: {e}")
        return []

    return bookmarks


# --- Reconciliation ----------------------------------------------------------

Named = TypeVar('Named', Tag, Category)


class NameRegistry(Generic[Named]):
    """Case-insensitive lookup of tags or categories for one import.

    Names are looked up among entries created during this import first, then
    among the entries that already exist. Unknown names are created through a
    factory and remembered, so a name is only ever created once.
    """

    def __init__(self, existing: Optional[Iterable[Named]] = None):
        self.existing: Dict[str, Named] = {}
        self.minted: Dict[str, Named] = {}
        self.created: List[Named] = []
        for entry in existing or ():
            self.existing[self.key(entry.name)] = entry

    @staticmethod
    def key(name: str) -> str:
        return name.lower()

    def __contains__(self, name: str) -> bool:
        key = self.key(name)
        return key in self.minted or key in self.existing

    def resolve_or_create(self, name: str, factory: Callable[[], Named]) -> Named:
        key = self.key(name)
        if key in self.minted:
            return self.minted[key]
        if key in self.existing:
            return self.existing[key]

        entry = factory()
        self.minted[key] = entry
        self.created.append(entry)
        return entry


def finalize_bookmark(bookmark: PartialBookmark,
                      tag_registry: NameRegistry,
                      category_registry: NameRegistry,
                      id_factory: Callable[[], str] = generate_unique_id) -> Bookmark:
    """Resolve a partial bookmark's tags and category and fill in defaults"""
    if not bookmark.url:
        raise MissingURLError(f"Bookmark {bookmark.id or '<no id>'} has no url")

    tags = []
    for tag in bookmark.tags or ():
        resolved = tag_registry.resolve_or_create(
            tag.name,
            lambda: Tag(id=id_factory(), name=tag.name, color=tag.color))
        # "work, Work" on one bookmark is one tag
        if resolved not in tags:
            tags.append(resolved)

    category = None
    placeholder = bookmark.category
    if placeholder is not None:
        category = category_registry.resolve_or_create(
            placeholder.name,
            lambda: Category(id=id_factory(), name=placeholder.name, icon=placeholder.icon))

    return Bookmark(
        id=bookmark.id or id_factory(),
        url=bookmark.url,
        title=bookmark.title or bookmark.url,
        type=bookmark.type or BookmarkType.LINK,
        date_added=bookmark.date_added or datetime.now(timezone.utc),
        tags=tuple(tags),
        category=category,
        is_alive=bookmark.is_alive if bookmark.is_alive is not None else True,
        description=bookmark.description,
        thumbnail_url=bookmark.thumbnail_url,
        video_thumbnail_timestamp=bookmark.video_thumbnail_timestamp,
        last_visited=bookmark.last_visited,
        last_checked=bookmark.last_checked,
        content_changed=bookmark.content_changed,
        favicon=bookmark.favicon,
    )


def process_bookmarks_for_import(bookmarks: Iterable[PartialBookmark],
                                 existing_tags: Optional[Iterable[Tag]] = None,
                                 existing_categories: Optional[Iterable[Category]] = None,
                                 id_factory: Callable[[], str] = generate_unique_id) -> ImportResult:
    """Finalize parsed bookmarks, reusing existing tags and categories by name.

    Must run over the whole batch in one call: the registries built here are
    what guarantees one instance per case-insensitive name. On any failure the
    result is empty, which callers should treat as "abort the import".
    """
    try:
        tag_registry = NameRegistry(existing_tags)
        category_registry = NameRegistry(existing_categories)

        finalized = [finalize_bookmark(bookmark, tag_registry, category_registry, id_factory)
                     for bookmark in bookmarks]

        logging.info(f"Finalized {len(finalized)} bookmarks: "
                     f"{len(tag_registry.created)} new tags, "
                     f"{len(category_registry.created)} new categories")
        return ImportResult(finalized, tag_registry.created, category_registry.created)
    except Exception as e:
        logging.error(f"Error processing bookmarks for import: {e}")
        return ImportResult([], [], [])


def import_bookmarks(html_content: str,
                     existing_tags: Optional[Iterable[Tag]] = None,
                     existing_categories: Optional[Iterable[Category]] = None,
                     parser_backend: Optional[str] = None) -> ImportResult:
    """Parse an export and reconcile it in one go"""
    parsed = parse_bookmark_html(html_content, parser_backend=parser_backend)
    result = process_bookmarks_for_import(parsed, existing_tags, existing_categories)
    if parsed and result.is_empty:
        logging.warning(f"Reconciliation of {len(parsed)} bookmarks produced nothing")
    return result


# --- Bookmarklet -------------------------------------------------------------

def generate_bookmarklet(app_url: str) -> str:
    """Create a javascript: bookmark that sends the current page to the app"""
    bookmarklet_code = f"""
    javascript:(function(){{
      var title = document.title;
      var url = window.location.href;
      var description = '';

      var metaDesc = document.querySelector('meta[name="description"]');
      if (metaDesc) description = metaDesc.getAttribute('content');

      var selectedText = window.getSelection().toString();
      if (selectedText) description = selectedText;

      window.open(
        '{app_url}/add?title=' + encodeURIComponent(title) +
        '&url=' + encodeURIComponent(url) +
        '&description=' + encodeURIComponent(description),
        '_blank'
      );
    }})();
    """

    return re.sub(r'\s+', ' ', bookmarklet_code).strip()


# --- Command line ------------------------------------------------------------

def load_existing(path: Optional[str], factory: Callable[[Dict[str, Any]], Any]) -> List[Any]:
    """Load a JSON list of existing tags or categories"""
    if not path:
        return []

    with open(path, 'r', encoding='utf-8') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise BookmarkImportError(f"Invalid JSON in {path}: {e}") from e

    if not isinstance(data, list):
        raise BookmarkImportError(f"Expected a JSON list in {path}")
    try:
        return [factory(entry) for entry in data]
    except (KeyError, TypeError) as e:
        raise BookmarkImportError(f"Invalid entry in {path}: {e}") from e


def build_import_report(result: ImportResult, source: str) -> Dict[str, Any]:
    """JSON-ready report of an import"""
    return {
        "summary": {
            "source": source,
            "generated_at": datetime.now(timezone.utc).isoformat(),
            "total_bookmarks": len(result.bookmarks),
            "new_tags": len(result.new_tags),
            "new_categories": len(result.new_categories),
        },
        "bookmarks": [bookmark.to_dict() for bookmark in result.bookmarks],
        "new_tags": [tag.to_dict() for tag in result.new_tags],
        "new_categories": [category.to_dict() for category in result.new_categories],
    }


def write_import_report(result: ImportResult, source: str, output_dir: str) -> str:
    """Write the import report next to the other outputs and return its path"""
    os.makedirs(output_dir, exist_ok=True)
    output_path = os.path.join(output_dir, f"{Path(source).stem}_import.json")
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(build_import_report(result, source), f,
                  indent=DEFAULT_CONFIG['report_indent'], ensure_ascii=False)
    return output_path


def handle_bookmarklet(app_url: str) -> None:
    """Print the bookmarklet and put it on the clipboard"""
    code = generate_bookmarklet(app_url)
    print(code)
    try:
        pyperclip.copy(code)
        print("Bookmarklet copied to clipboard!")
    except pyperclip.PyperclipException as e:
        logging.warning(f"Clipboard copy failed: {e}")


def read_input(args: argparse.Namespace) -> Tuple[str, str]:
    """Return (source name, markup) from the clipboard or the input file"""
    if args.from_clipboard:
        try:
            return 'clipboard', pyperclip.paste()
        except pyperclip.PyperclipException as e:
            raise BookmarkImportError(f"Could not read clipboard: {e}") from e

    file_path = args.input_file
    if not file_path:
        file_path = input("Enter path to bookmarks HTML file: ").strip()
        # Remove quotes if user wrapped the path in quotes
        if file_path and file_path[0] in ('"', "'") and file_path[-1] in ('"', "'"):
            file_path = file_path[1:-1]
    if not file_path:
        raise BookmarkImportError("No input file specified")

    with open(file_path, 'r', encoding='utf-8', errors='replace') as f:
        return file_path, f.read()


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments"""
    parser = argparse.ArgumentParser(
        description='Import browser bookmarks, reusing existing tags and categories',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog='''
Examples:
  # Basic import
  python bookmark_importer.py bookmarks.html

  # Re-import against what is already stored
  python bookmark_importer.py bookmarks.html --existing-tags tags.json --existing-categories categories.json

  # Import what is on the clipboard
  python bookmark_importer.py --from-clipboard

  # Generate a bookmarklet for the app
  python bookmark_importer.py --bookmarklet https://bookmarks.example.com
        '''
    )

    parser.add_argument('input_file', nargs='?',
                        help='Path to bookmarks HTML file')
    parser.add_argument('--output-dir', default=DEFAULT_CONFIG['output_dir'],
                        help=f'Output directory (default: {DEFAULT_CONFIG["output_dir"]})')
    parser.add_argument('--existing-tags',
                        help='JSON list of tags that already exist')
    parser.add_argument('--existing-categories',
                        help='JSON list of categories that already exist')
    parser.add_argument('--parser', choices=['html.parser', 'lxml'],
                        default=DEFAULT_CONFIG['parser_backend'],
                        help=f'HTML parser backend (default: {DEFAULT_CONFIG["parser_backend"]})')
    parser.add_argument('--from-clipboard', action='store_true',
                        help='Read the bookmark HTML from the clipboard')
    parser.add_argument('--bookmarklet', metavar='APP_URL',
                        help='Print a bookmarklet for the app at APP_URL and exit')

    parser.add_argument('--verbose', '-v', action='store_true',
                        help='Enable verbose logging')
    parser.add_argument('--log-file', default=DEFAULT_CONFIG['log_file'],
                        help=f'Log file (default: {DEFAULT_CONFIG["log_file"]})')

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Main function with error handling and argument parsing"""
    try:
        args = parse_arguments(argv)
        setup_logging(args.verbose, args.log_file)

        if args.bookmarklet:
            handle_bookmarklet(args.bookmarklet)
            return 0

        source, content = read_input(args)
        logging.info(f"Importing bookmarks from: {source}")

        existing_tags = load_existing(args.existing_tags, Tag.from_dict)
        existing_categories = load_existing(args.existing_categories, Category.from_dict)

        parsed = parse_bookmark_html(content, parser_backend=args.parser)
        if not parsed:
            print("ERROR: No bookmarks found in input")
            return 1

        result = process_bookmarks_for_import(parsed, existing_tags, existing_categories)
        if result.is_empty:
            print("ERROR: Import failed while reconciling tags and categories, nothing written")
            return 1

        output_path = write_import_report(result, source, args.output_dir)

        print(f"Imported {len(result.bookmarks)} bookmarks")
        print(f"  New tags:       {len(result.new_tags)}")
        print(f"  New categories: {len(result.new_categories)}")
        print(f"  Report:         {output_path}")
        return 0

    except KeyboardInterrupt:
        print("\nERROR: Operation cancelled by user")
        return 1
    except FileNotFoundError as e:
        print(f"ERROR: File not found - {e}")
        return 1
    except BookmarkImportError as e:
        logging.error(str(e))
        print(f"ERROR: {e}")
        return 1
    except Exception as e:
        logging.error(f"Unexpected error: {e}")
        print("ERROR: Unexpected error occurred. Check the log file for details.")
        return 1


if __name__ == "__main__":
    sys.exit(main())
