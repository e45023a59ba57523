#!/usr/bin/env python3
"""
Wiki Mirror - Offline Copies of Hierarchical MediaWiki Sites

This script reads a YAML description of a wiki's section hierarchy, fetches
every configured page, downloads the images and file attachments they
reference, rewrites links so they point at the mirror, strips the wiki skin's
navigation chrome and writes the result into a matching directory tree.

Usage:
    python wiki_mirror.py site.yaml output/
"""

import sys
import argparse
import copy
import html
import logging
import posixpath
import random
import re
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from urllib.parse import parse_qs, unquote, urljoin, urlparse, urlunparse

# Third-party imports (need to be installed)
try:
    import requests
    import yaml
    from bs4 import BeautifulSoup, Comment
    from tqdm import tqdm
    import html2text
except ImportError as e:
    print(f"Missing required package: {e}")
    print("Install required packages with:")
    print("pip install requests pyyaml beautifulsoup4 tqdm html2text")
    sys.exit(1)

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


ROUTER_PATH = '/index.php'
FILE_MARKER = 'File:'
DEFAULT_SITE_TITLE = 'MediaWiki Archive'
OUTPUT_FORMATS = ('html', 'markdown')

SCHEME_RE = re.compile(r'^[A-Za-z][A-Za-z0-9+.\-]*://')
OPAQUE_SCHEME_RE = re.compile(r'^(mailto|javascript|data|tel|news|irc|ftp):', re.IGNORECASE)
TITLE_QUERY_RE = re.compile(r'^\?title=([^&]*)&?(.*)$')
# Optional scheme and host, optional script directories, then the router
ROUTER_RE = re.compile(r'^(?:(?:[A-Za-z][A-Za-z0-9+.\-]*:)?//([^/?#]+))?(?:/[^/?#]+)*/index\.php(?=[/?#]|$)')
HTML_EXTENSION_RE = re.compile(r'\.((html?)|(txt))$')

# Skin chrome removed from every page (MonoBook markup)
CHROME_DIV_IDS = ('column-one', 'footer', 'catlinks', 'contentSub', 'jump-to-nav')
CHROME_DIV_CLASSES = ('printfooter', 'visualClear')

HTML_TEMPLATE = (
    '<!DOCTYPE html>\n'
    '<html>\n'
    '<head>\n'
    '<meta http-equiv="Content-Type" content="text/html; charset=UTF-8">\n'
    '<meta http-equiv="Content-Language" content="en-us">\n'
    '<title>{title}</title>\n'
    '</head>\n'
    '<body>\n'
    '<p><b>This is an archived MediaWiki page.</b><br />{last_modified}<br />{view_count}</p>\n'
    '{content}\n'
    '</body>\n'
    '</html>'
)


class ConfigurationError(ValueError):
    """Raised when the mirror configuration is missing or malformed."""


# -------------------- Data model --------------------


@dataclass(frozen=True)
class MirrorTarget:
    """Where the mirrored site lives and where its resources are stored."""

    base_url: str
    image_dir: str = 'images'
    file_dir: str = 'files'

    def resource_url(self, subdir: str, name: str) -> str:
        """Public URL of a downloaded resource on the mirror."""
        return f"{self.base_url.rstrip('/')}/{subdir.strip('/')}/{name}"


@dataclass(frozen=True)
class SectionNode:
    """One section of the configured hierarchy."""

    name: str
    root: Optional[str] = None
    children: List[str] = field(default_factory=list)
    sections: List['SectionNode'] = field(default_factory=list)

    @property
    def kind(self) -> str:
        return 'section_with_root' if self.root else 'container_only'

    @classmethod
    def from_dict(cls, data) -> 'SectionNode':
        if not isinstance(data, dict):
            raise ConfigurationError(f"Section must be a mapping, got: {data!r}")
        name = data.get('name')
        if not name:
            raise ConfigurationError(f"Section is missing a name: {data!r}")
        return cls(
            name=str(name),
            root=data.get('root') or None,
            children=_url_list(data.get('children'), f"section {name!r} children"),
            sections=[cls.from_dict(s) for s in _section_list(data.get('sections'), name)],
        )

    def page_count(self) -> int:
        """Number of pages this section and its descendants will mirror."""
        count = (1 if self.root else 0) + len(self.children)
        return count + sum(section.page_count() for section in self.sections)


@dataclass
class SiteConfig:
    """A complete mirror run: target, page hierarchy and run options."""

    target: MirrorTarget
    index: str
    children: List[str] = field(default_factory=list)
    sections: List[SectionNode] = field(default_factory=list)
    origin: Optional[str] = None
    site_title: str = DEFAULT_SITE_TITLE
    delay: float = 0.5
    timeout: float = 10.0
    output_format: str = 'html'
    download_files: bool = True
    verbose: bool = False

    @classmethod
    def from_dict(cls, data) -> 'SiteConfig':
        if not isinstance(data, dict):
            raise ConfigurationError("Configuration must be a mapping")
        for key in ('base_url', 'index'):
            if not data.get(key):
                raise ConfigurationError(f"Configuration is missing required key '{key}'")

        output_format = str(data.get('output_format', 'html')).lower()
        if output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Unsupported output_format '{output_format}' (expected one of {', '.join(OUTPUT_FORMATS)})"
            )

        try:
            delay = float(data.get('delay', 0.5))
            timeout = float(data.get('timeout', 10.0))
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid numeric option: {e}") from e

        origin = data.get('origin')
        return cls(
            target=MirrorTarget(
                base_url=str(data['base_url']).rstrip('/'),
                image_dir=str(data.get('image_dir') or 'images'),
                file_dir=str(data.get('file_dir') or 'files'),
            ),
            index=str(data['index']),
            children=_url_list(data.get('children'), 'children'),
            sections=[SectionNode.from_dict(s) for s in _section_list(data.get('sections'), 'top level')],
            origin=str(origin).rstrip('/') if origin else None,
            site_title=str(data.get('site_title') or DEFAULT_SITE_TITLE),
            delay=delay,
            timeout=timeout,
            output_format=output_format,
            download_files=bool(data.get('download_files', True)),
            verbose=bool(data.get('verbose', False)),
        )

    def page_count(self) -> int:
        return 1 + len(self.children) + sum(section.page_count() for section in self.sections)


def _url_list(value, context: str) -> List[str]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"Expected a list of URLs for {context}, got: {value!r}")
    return [str(url) for url in value]


def _section_list(value, context) -> list:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigurationError(f"Expected a list of sections in {context}, got: {value!r}")
    return value


def load_config(path) -> SiteConfig:
    """Load the YAML site description."""
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigurationError(f"Cannot read configuration {path}: {e}") from e
    return SiteConfig.from_dict(data)


@dataclass
class NormalizedHref:
    """Outcome of normalizing one href.

    ``kind`` is one of ``router``, ``short``, ``file``, ``absolute``, ``relative``,
    ``fragment`` or ``passthrough``. ``passthrough`` means the href had no
    recognised shape and was returned unchanged.
    """

    url: str
    kind: str

    @property
    def changed(self) -> bool:
        return self.kind in ('router', 'short', 'relative')


@dataclass
class PageDocument:
    """One fetched page while it moves through the mirror pipeline."""

    source_url: str
    tree: BeautifulSoup
    is_main_page: bool = False
    image_elements: list = field(default_factory=list)
    discovered_links: Dict[str, str] = field(default_factory=dict)
    last_modified: Optional[str] = None
    view_count: Optional[str] = None


@dataclass
class SanitizedContent:
    """A chrome-free copy of a page plus the metadata read from it."""

    tree: BeautifulSoup
    last_modified: Optional[str] = None
    view_count: Optional[str] = None


@dataclass
class MirrorSummary:
    pages_written: int = 0
    pages_skipped: int = 0
    fetch_failures: int = 0


# -------------------- URL normalization --------------------


def origin_of(url: str) -> str:
    """Return ``scheme://host`` of a URL, or an empty string."""
    parsed = urlparse(url)
    if parsed.scheme and parsed.netloc:
        return f"{parsed.scheme}://{parsed.netloc}"
    return ''


def resolve_relative(href: str, source_url: str) -> str:
    """Join a relative href onto the directory of the document's URL."""
    parsed = urlparse(source_url)
    if not parsed.path:
        base = source_url
    else:
        stripped = urlunparse(parsed._replace(query='', fragment=''))
        base = stripped.rsplit('/', 1)[0]
    return f"{base.rstrip('/')}/{href.lstrip('/')}"


def _canonical_router_path(remainder: str) -> str:
    """Rewrite '?title=Foo&action=raw' as '/Foo?action=raw'."""
    remainder, hash_mark, fragment = remainder.partition('#')
    match = TITLE_QUERY_RE.match(remainder)
    if match:
        title, rest = match.groups()
        remainder = '/' + title.lstrip('/')
        if rest:
            remainder += '?' + rest
    return remainder + hash_mark + fragment


def _bare_host(netloc: str) -> str:
    host = netloc.lower().rsplit('@', 1)[-1]
    return host[4:] if host.startswith('www.') else host


def is_wiki_host(netloc: str, target: MirrorTarget, origin: str = '') -> bool:
    """True if ``netloc`` names the wiki or the mirror, ignoring scheme and ``www.``."""
    known = {_bare_host(urlparse(url).netloc) for url in (origin, target.base_url) if url}
    return _bare_host(netloc) in known


def normalize_href(href: str, source_url: str, target: MirrorTarget, origin: str = '') -> NormalizedHref:
    """Canonicalize a wiki href.

    Router-style URLs (``/index.php?title=X``, ``/index.php/X`` and their
    absolute forms on the wiki's or the mirror's host) and short-form
    page paths (``/X``) are reduced to the page title and, unless they
    point at a ``File:`` page, re-rooted on the mirror's ``base_url``.
    Page-relative references are joined onto the directory of
    ``source_url``. Anything else is returned unchanged.
    """
    try:
        match = ROUTER_RE.match(href)
        if match and (match.group(1) is None or is_wiki_host(match.group(1), target, origin)):
            remainder = _canonical_router_path(href[match.end():])
            if FILE_MARKER in remainder:
                return NormalizedHref(remainder, 'file')
            return NormalizedHref(target.base_url + remainder, 'router')

        if FILE_MARKER in href:
            return NormalizedHref(href, 'file')
        if SCHEME_RE.match(href) or href.startswith('//'):
            return NormalizedHref(href, 'absolute')
        if href.startswith('#'):
            return NormalizedHref(href, 'fragment')
        if not href.strip() or OPAQUE_SCHEME_RE.match(href):
            return NormalizedHref(href, 'passthrough')
        if href.startswith('/'):
            return NormalizedHref(target.base_url + href, 'short')
        return NormalizedHref(resolve_relative(href, source_url), 'relative')
    except (TypeError, ValueError) as e:
        logger.debug(f"Leaving href unchanged {href!r}: {e}")
        return NormalizedHref(href, 'passthrough')


def resource_basename(url: str) -> str:
    """Basename of a URL's path, ignoring query string and fragment."""
    return posixpath.basename(urlparse(url).path)


def file_page_name(href: str) -> str:
    """Name of the file described by a ``File:`` page href."""
    title = href.split(FILE_MARKER, 1)[1]
    title = re.split(r'[?#&]', title, maxsplit=1)[0]
    return posixpath.basename(title)


# -------------------- Fetching --------------------


class WikiFetcher:
    """Fetch pages and resources from the wiki, one request at a time."""

    REDIRECT_CODES = (301, 302, 307)

    def __init__(self, timeout: float = 10, max_delay: float = 0.5, session=None):
        """Initialize the fetcher."""
        self.timeout = timeout
        self.max_delay = max_delay
        if session is None:
            session = requests.Session()
            session.headers.update({
                'User-Agent': 'Mozilla/5.0 (compatible; WikiMirror/1.0)'
            })
        self.session = session
        self.failures: List[Tuple[str, str]] = []

    def delay(self):
        """Sleep for a short random time to go easy on the wiki."""
        if self.max_delay > 0:
            time.sleep(random.uniform(0, self.max_delay))

    def _get(self, url: str):
        self.delay()
        return self.session.get(url, timeout=self.timeout, allow_redirects=False)

    def _report(self, status, url: str):
        print(f"[{status}] {url}", file=sys.stderr)
        self.failures.append((str(status), url))

    def fetch(self, url: str) -> Optional[bytes]:
        """GET a URL, following a single redirect.

        Returns the response body, or None when the request failed.
        """
        try:
            response = self._get(url)
            if response.status_code in self.REDIRECT_CODES:
                location = response.headers.get('Location')
                if not location:
                    self._report(response.status_code, url)
                    return None
                url = urljoin(url, location)
                logger.debug(f"Redirected to {url}")
                response = self._get(url)

            if response.status_code >= 400:
                self._report(response.status_code, url)
                return None
            return response.content

        except requests.RequestException as e:
            logger.warning(f"Error fetching {url}: {e}")
            self._report('error', url)
            return None

    def download(self, url: str, path: Path) -> bool:
        """Download a resource to ``path``. Returns True if it was written."""
        data = self.fetch(url)
        if data is None:
            return False
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug(f"Downloaded {url} -> {path}")
        return True


# -------------------- Extraction --------------------


class ResourceExtractor:
    """Download a page's images and attachments and rewrite its links."""

    def __init__(self, fetcher: WikiFetcher, target: MirrorTarget, output_root: Path,
                 origin: str, download_files: bool = True):
        self.fetcher = fetcher
        self.target = target
        self.output_root = Path(output_root)
        self.origin = origin.rstrip('/')
        self.download_files = download_files

    def extract(self, document: PageDocument) -> PageDocument:
        """Rewrite a copy of the document's tree and record what was found."""
        tree = copy.copy(document.tree)
        document.image_elements = self.process_images(tree)
        document.discovered_links = self.process_links(tree, document.source_url)
        document.tree = tree
        return document

    def process_images(self, tree: BeautifulSoup) -> list:
        """Download every image and point its src at the mirror."""
        images = tree.find_all('img', src=True)
        downloaded = set()

        for img in images:
            src = img['src']
            if src.startswith('data:'):
                continue
            name = resource_basename(src)
            if not name:
                logger.debug(f"Image without a file name left as is: {src}")
                continue

            if name not in downloaded:
                downloaded.add(name)
                self.fetcher.download(
                    urljoin(self.origin + '/', src),
                    self.output_root / self.target.image_dir / name,
                )
            img['src'] = self.target.resource_url(self.target.image_dir, name)

        return images

    def process_links(self, tree: BeautifulSoup, source_url: str) -> Dict[str, str]:
        """Rewrite anchors and map each final href to its first title."""
        links: Dict[str, str] = {}

        for tag in tree.find_all('a', href=True):
            normalized = normalize_href(tag['href'], source_url, self.target, self.origin)
            if normalized.kind == 'passthrough':
                logger.debug(f"Unrecognised href kept as is: {tag['href']!r}")
            href = normalized.url

            if FILE_MARKER in href:
                child = tag.find(True, recursive=False)
                if child is None or not child.get('src'):
                    href = self._mirror_attachment(href)
                else:
                    href = self.target.resource_url(self.target.image_dir, resource_basename(child['src']))
                    child['src'] = href

            tag['href'] = href
            if href not in links:
                links[href] = tag.get('title', '')

        return links

    def _mirror_attachment(self, href: str) -> str:
        """Download the file behind a File: page and return its mirror URL."""
        name = file_page_name(href)
        if self.download_files and name:
            if SCHEME_RE.match(href):
                page_url = href
            else:
                page_url = f"{self.origin}{ROUTER_PATH}/{href.lstrip('/')}"
            source = self.fetcher.fetch(page_url)
            if source is not None:
                description = BeautifulSoup(source, 'html.parser')
                internal = description.find('a', class_='internal', href=True)
                if internal:
                    self.fetcher.download(
                        urljoin(self.origin + '/', internal['href']),
                        self.output_root / self.target.file_dir / name,
                    )
                else:
                    logger.warning(f"No download link found on {page_url}")
        return self.target.resource_url(self.target.file_dir, name)


# -------------------- Sanitizing --------------------


def _list_item_text(tree: BeautifulSoup, item_id: str) -> Optional[str]:
    item = tree.find('li', id=item_id)
    if item is None:
        return None
    return item.get_text().strip()


def sanitize(soup: BeautifulSoup) -> SanitizedContent:
    """Return a copy of the page without the wiki skin's chrome."""
    tree = copy.copy(soup)
    last_modified = _list_item_text(tree, 'lastmod')
    view_count = _list_item_text(tree, 'viewcount')

    for name in ('base', 'head', 'link', 'script'):
        for tag in tree.find_all(name):
            tag.decompose()

    for comment in tree.find_all(string=lambda text: isinstance(text, Comment)):
        comment.extract()

    for tag in tree.find_all('meta', attrs={'name': 'generator'}):
        tag.decompose()

    for tag in tree.find_all('h3', id='siteSub'):
        tag.decompose()

    for div in tree.find_all('div'):
        # Nested chrome goes with its parent
        if div.decomposed:
            continue
        classes = div.get('class') or []
        if div.get('id') in CHROME_DIV_IDS or any(c in CHROME_DIV_CLASSES for c in classes):
            div.decompose()

    return SanitizedContent(tree=tree, last_modified=last_modified, view_count=view_count)


# -------------------- Page output --------------------


def clean_markdown(markdown: str) -> str:
    """Clean up markdown content."""
    # Remove HTML comments first so we don't reintroduce extra blank lines later
    markdown = re.sub(r'<!--.*?-->', '', markdown, flags=re.DOTALL)

    # Remove trailing whitespace per line
    lines = [line.rstrip() for line in markdown.split('\n')]
    markdown = '\n'.join(lines)

    # Collapse excessive blank lines (allow at most a single blank line between blocks)
    markdown = re.sub(r'\n{3,}', '\n\n', markdown)

    return markdown.strip()


def page_basename(url: str) -> str:
    """File name part of a page URL, using the title of router-style URLs."""
    parsed = urlparse(url)
    name = posixpath.basename(parsed.path)
    if name == 'index.php' and parsed.query:
        titles = parse_qs(parsed.query).get('title')
        if titles:
            name = posixpath.basename(titles[0])
    return unquote(name) or 'index'


def body_content_html(tree: BeautifulSoup) -> str:
    body = tree.find('div', id='bodyContent')
    return str(body) if body else ''


def compose_html(title: str, document: PageDocument) -> str:
    """Wrap the page's body content in the archive's HTML shell."""
    return HTML_TEMPLATE.format(
        title=html.escape(title),
        last_modified=html.escape(document.last_modified or ''),
        view_count=html.escape(document.view_count or ''),
        content=body_content_html(document.tree),
    )


def compose_markdown(title: str, document: PageDocument) -> str:
    """Render the page's body content as a Jekyll Markdown page."""
    h2t = html2text.HTML2Text()
    h2t.ignore_links = False
    h2t.ignore_images = False
    h2t.ignore_emphasis = False
    h2t.body_width = 0  # Don't wrap lines

    front_matter = ['---', 'layout: page', f'title: {title}']
    if document.last_modified:
        front_matter.append(f'last_modified: {document.last_modified}')
    if document.view_count:
        front_matter.append(f'view_count: {document.view_count}')
    front_matter.append('---')

    body = clean_markdown(h2t.handle(body_content_html(document.tree)))
    return '\n'.join(front_matter) + '\n\n' + body + '\n'


class PageMirror:
    """Fetch one page, rewrite it and write it to disk."""

    def __init__(self, fetcher: WikiFetcher, target: MirrorTarget, output_root: Path,
                 site_title: str = DEFAULT_SITE_TITLE, output_format: str = 'html',
                 download_files: bool = True, origin: Optional[str] = None):
        """Initialize the page mirror."""
        self.fetcher = fetcher
        self.target = target
        self.output_root = Path(output_root)
        self.site_title = site_title
        self.output_format = output_format
        self.download_files = download_files
        self.origin = origin

    def output_filename(self, page_url: str, is_main_page: bool = False) -> Tuple[str, str]:
        """Return (filename, title) for a page."""
        if is_main_page:
            filename = 'index'
            title = self.site_title
        else:
            filename = page_basename(page_url)
            title = filename.replace('_', ' ')

        if self.output_format == 'markdown':
            if not filename.endswith('.md'):
                filename += '.md'
        elif not HTML_EXTENSION_RE.search(filename):
            filename += '.html'
        return filename, title

    def process(self, page_url: str, source: bytes, is_main_page: bool = False) -> PageDocument:
        """Extract resources from fetched page source and strip its chrome."""
        document = PageDocument(
            source_url=page_url,
            tree=BeautifulSoup(source, 'html.parser'),
            is_main_page=is_main_page,
        )
        extractor = ResourceExtractor(
            self.fetcher,
            self.target,
            self.output_root,
            self.origin or origin_of(page_url),
            download_files=self.download_files,
        )
        extractor.extract(document)

        content = sanitize(document.tree)
        document.tree = content.tree
        document.last_modified = content.last_modified
        document.view_count = content.view_count
        # Elements of the written tree, not the pre-sanitize copy
        document.image_elements = document.tree.find_all('img', src=True)
        return document

    def mirror(self, page_url: str, output_dir, is_main_page: bool = False) -> Optional[Path]:
        """Mirror a page into ``output_dir``. Returns the written path."""
        source = self.fetcher.fetch(page_url)
        if source is None:
            logger.warning(f"Skipping {page_url}: page could not be fetched")
            return None

        document = self.process(page_url, source, is_main_page=is_main_page)
        filename, title = self.output_filename(page_url, is_main_page)
        if self.output_format == 'markdown':
            text = compose_markdown(title, document)
        else:
            text = compose_html(title, document)

        output_dir = Path(output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)
        save_path = output_dir / filename
        save_path.write_text(text, encoding='utf-8')
        logger.debug(f"Saved: {save_path}")
        return save_path


# -------------------- Hierarchy --------------------


class SiteMirror:
    """Mirror the main page, its children and every configured section."""

    def __init__(self, config: SiteConfig, output_root, fetcher: Optional[WikiFetcher] = None):
        """Initialize the site mirror."""
        self.config = config
        self.output_root = Path(output_root)
        self.fetcher = fetcher or WikiFetcher(timeout=config.timeout, max_delay=config.delay)
        self.page_mirror = PageMirror(
            self.fetcher,
            config.target,
            self.output_root,
            site_title=config.site_title,
            output_format=config.output_format,
            download_files=config.download_files,
            origin=config.origin,
        )
        self.summary = MirrorSummary()
        self._progress = None

    def _announce(self, label: str):
        tqdm.write(f"processing {label}")

    def _mirror(self, url: str, directory: Path, is_main_page: bool = False):
        self._announce(url)
        try:
            written = self.page_mirror.mirror(url, directory, is_main_page=is_main_page)
        except Exception as e:
            logger.warning(f"Failed to mirror {url}, output may be missing or incomplete: {e}")
            written = None

        if written:
            self.summary.pages_written += 1
        else:
            self.summary.pages_skipped += 1
        if self._progress is not None:
            self._progress.update(1)

    def walk(self, node: SectionNode, directory):
        """Mirror a section and its descendants below ``directory``.

        A section's root page becomes the index of ``directory`` itself;
        children and nested sections go into ``directory/<name>``.
        """
        directory = Path(directory)
        section_dir = directory / node.name

        if node.kind == 'section_with_root':
            self._mirror(node.root, directory)
        else:
            self._announce(node.name)
            section_dir.mkdir(parents=True, exist_ok=True)

        for url in node.children:
            self._mirror(url, section_dir)

        for section in node.sections:
            self.walk(section, section_dir)

    def run(self) -> MirrorSummary:
        """Mirror the whole configured site."""
        logger.info(f"Mirroring {self.config.index} into {self.output_root}")
        self.output_root.mkdir(parents=True, exist_ok=True)

        with tqdm(total=self.config.page_count(), desc="Mirroring pages") as pbar:
            self._progress = pbar
            try:
                self._mirror(self.config.index, self.output_root, is_main_page=True)
                for url in self.config.children:
                    self._mirror(url, self.output_root)
                for section in self.config.sections:
                    self.walk(section, self.output_root)
            finally:
                self._progress = None

        self.summary.fetch_failures = len(self.fetcher.failures)
        logger.info(
            f"Mirror complete: {self.summary.pages_written} pages written, "
            f"{self.summary.pages_skipped} skipped, {self.summary.fetch_failures} failed requests"
        )
        return self.summary


# -------------------- CLI --------------------


class UsageArgumentParser(argparse.ArgumentParser):
    """Argument parser that exits with status 1 on usage errors."""

    def error(self, message):
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def build_arg_parser() -> argparse.ArgumentParser:
    parser = UsageArgumentParser(
        description='Mirror a hierarchical MediaWiki site to a local directory for offline browsing'
    )
    parser.add_argument('config', help='YAML file describing the site hierarchy')
    parser.add_argument('output', help='Output directory path')
    return parser


def main(argv: Optional[List[str]] = None):
    """Main execution function."""
    args = build_arg_parser().parse_args(argv)

    try:
        config = load_config(args.config)
    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        sys.exit(1)

    if config.verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        summary = SiteMirror(config, args.output).run()
    except KeyboardInterrupt:
        print("\n⚠️ Mirroring interrupted by user")
        sys.exit(1)

    print(f"\n✅ Mirror complete!")
    print(f"📊 Summary:")
    print(f"   - Pages written: {summary.pages_written}")
    print(f"   - Pages skipped: {summary.pages_skipped}")
    print(f"   - Failed requests: {summary.fetch_failures}")
    print(f"📁 Output saved to: {args.output}")


if __name__ == '__main__':
    main()
