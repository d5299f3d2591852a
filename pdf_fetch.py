"""
Fetch schedule PDFs and turn them into text.

Fetched text is cached by URL for PDF_CACHE_TTL_SECONDS (a week). A cache hit
skips the download entirely. The cache lives in memory and can optionally be
mirrored to a JSON file so it survives restarts.
"""

import json
import os
import threading
import time

import pypdfium2 as pdfium
import pypdfium2.raw as pdfium_c
import requests
from bs4 import BeautifulSoup

from constants import PDF_CACHE_FILE, PDF_CACHE_TTL_SECONDS, REQUEST_TIMEOUT
from errors import FetchError
from log_setup import get_logger

logger = get_logger(__name__)

DOCUMENT_CENTER_PATH = '/DocumentCenter/View/'

# Special abbreviations and partial name mappings used in document names
POOL_NAME_VARIANTS = {
    'martin luther king jr': ['mlk'],
    'mission community': ['mission'],
}


def load_cache(cache_file):
    """Load the PDF text cache from disk."""
    try:
        if cache_file and os.path.exists(cache_file):
            with open(cache_file, 'r') as f:
                return json.load(f)
    except (OSError, ValueError) as e:
        logger.warning("pdf_cache_load_failed", cache_file=cache_file, error=str(e))
    return {}


def save_cache(cache, cache_file):
    """Save the PDF text cache to disk."""
    try:
        with open(cache_file, 'w') as f:
            json.dump(cache, f, indent=2)
    except OSError as e:
        logger.warning("pdf_cache_save_failed", cache_file=cache_file, error=str(e))


class PdfTextCache:
    """Read-through cache of extracted PDF text, keyed by URL, with a fixed expiry."""

    def __init__(self, ttl_seconds=PDF_CACHE_TTL_SECONDS, cache_file=PDF_CACHE_FILE, clock=time.time):
        self.ttl_seconds = ttl_seconds
        self.cache_file = cache_file or None
        self.clock = clock
        self._lock = threading.Lock()
        entries = load_cache(self.cache_file) if self.cache_file else {}
        self._entries = entries if isinstance(entries, dict) else {}

    def __len__(self):
        return len(self._entries)

    def get(self, url):
        """Return the cached result for url, or None if missing, expired or malformed."""
        with self._lock:
            entry = self._entries.get(url)
            if entry is None:
                return None
            if not is_valid_entry(entry):
                logger.warning("pdf_cache_entry_malformed", url=url)
                del self._entries[url]
                return None
            if self.clock() - entry['fetched_at'] >= self.ttl_seconds:
                del self._entries[url]
                return None
            return entry['result']

    def set(self, url, result):
        with self._lock:
            self._entries[url] = {'fetched_at': self.clock(), 'result': result}
            if self.cache_file:
                save_cache(self._entries, self.cache_file)

    def clear(self):
        with self._lock:
            self._entries = {}


def is_valid_entry(entry):
    """A cache entry is {'fetched_at': <number>, 'result': {'text': <str>, ...}}."""
    if not isinstance(entry, dict):
        return False
    fetched_at = entry.get('fetched_at')
    result = entry.get('result')
    if isinstance(fetched_at, bool) or not isinstance(fetched_at, (int, float)):
        return False
    return isinstance(result, dict) and isinstance(result.get('text'), str)


def download_pdf(pdf_url, timeout=REQUEST_TIMEOUT):
    """Download a PDF and return its bytes. Raises FetchError on failure."""
    try:
        response = requests.get(pdf_url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Error downloading PDF: {e}", url=pdf_url) from e
    return response.content


def page_chars(textpage):
    """Return (char, left, bottom, right, top) for every visible character on a page."""
    chars = []
    for index in range(textpage.count_chars()):
        char = chr(pdfium_c.FPDFText_GetUnicode(textpage.raw, index))
        if not char.isprintable() or char.isspace():
            continue
        left, bottom, right, top = textpage.get_charbox(index, loose=True)
        chars.append((char, left, bottom, right, top))
    return chars


def rows_from_chars(chars, space_gap=0.15, column_gap=1.0):
    """
    Rebuild table rows from positioned characters.

    Characters whose vertical centres sit within half a line height of each
    other form one row, read left to right. A horizontal gap wider than
    column_gap line heights starts a new cell (joined with a tab); a gap
    wider than space_gap line heights is a space inside the cell.
    Rows are returned top to bottom.
    """
    rows = []
    for char in sorted(chars, key=lambda c: -(c[2] + c[4]) / 2):
        centre = (char[2] + char[4]) / 2
        height = max(char[4] - char[2], 1.0)
        if rows and abs(rows[-1]['centre'] - centre) <= rows[-1]['height'] / 2:
            rows[-1]['chars'].append(char)
        else:
            rows.append({'centre': centre, 'height': height, 'chars': [char]})

    lines = []
    for row in rows:
        height = row['height']
        line = ''
        previous_right = None
        for char, left, _, right, _ in sorted(row['chars'], key=lambda c: c[1]):
            if previous_right is not None:
                gap = left - previous_right
                if gap > column_gap * height:
                    line += '\t'
                elif gap > space_gap * height:
                    line += ' '
            line += char
            previous_right = right
        lines.append(line)
    return lines


def pdf_to_text(pdf_bytes, pdf_url=None):
    """
    Extract the text of every page of a PDF, one table row per line.

    Cells that sit apart on the page are separated by tabs, which is the only
    column information the schedule parser gets. Returns a dict with the text
    (pages joined by newlines) and the page count.
    Raises FetchError if the bytes are not a readable PDF.
    """
    try:
        pdf = pdfium.PdfDocument(pdf_bytes)
    except (pdfium.PdfiumError, ValueError) as e:
        raise FetchError(f"Could not read PDF: {e}", url=pdf_url) from e

    try:
        pages = []
        for page in pdf:
            textpage = page.get_textpage()
            pages.append('\n'.join(rows_from_chars(page_chars(textpage))))
            textpage.close()
            page.close()
        num_pages = len(pdf)
    finally:
        pdf.close()

    return {'text': '\n'.join(pages), 'num_pages': num_pages}


def fetch_and_parse_pdf(url, cache=None):
    """Fetch a PDF and return {'text', 'num_pages'}, using the cache when possible."""
    if cache is not None:
        cached = cache.get(url)
        if cached is not None:
            logger.info("pdf_cache_hit", url=url)
            return cached

    logger.info("fetching_pdf", url=url)
    result = pdf_to_text(download_pdf(url), pdf_url=url)

    if cache is not None:
        cache.set(url, result)
    return result


def make_text_fetcher(cache=None):
    """Return a fetch_text(url) -> str callable backed by the given cache."""
    if cache is None:
        cache = PdfTextCache()

    def fetch_text(url):
        return fetch_and_parse_pdf(url, cache=cache)['text']

    return fetch_text


def get_facility_documents(facility_url, timeout=REQUEST_TIMEOUT):
    """Scrape a facility page and return its document links as [{'name', 'url'}]."""
    try:
        response = requests.get(facility_url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise FetchError(f"Error fetching facility page: {e}", url=facility_url) from e

    soup = BeautifulSoup(response.content, 'html.parser')
    documents = []
    doc_links = soup.find_all('a', href=lambda href: href and DOCUMENT_CENTER_PATH in href)

    for link in doc_links:
        doc_name = link.get_text(strip=True)
        doc_url = link.get('href')
        if doc_url.startswith('/'):
            scheme, _, rest = facility_url.partition('://')
            doc_url = f"{scheme}://{rest.split('/', 1)[0]}{doc_url}"
        documents.append({'name': doc_name, 'url': doc_url})

    return documents


def pool_search_terms(pool_name):
    """Lowercase name fragments that identify a pool in a document name."""
    pool_name_lower = pool_name.lower()
    search_terms = [pool_name_lower, pool_name_lower.replace(' pool', '')]
    for key, variants in POOL_NAME_VARIANTS.items():
        if key in pool_name_lower:
            search_terms.extend(variants)
    return search_terms


def select_schedule_document(documents, pool_name, pool_names=()):
    """
    Pick the first document whose name matches this pool and no other pool.
    Returns the document dict or None.
    """
    pool_name_lower = pool_name.lower()
    search_terms = pool_search_terms(pool_name)
    other_pools = [p.lower() for p in pool_names if p.lower() != pool_name_lower]

    for doc in documents:
        doc_name_lower = doc['name'].lower()
        if not any(term in doc_name_lower for term in search_terms):
            continue
        if any(other_pool in doc_name_lower for other_pool in other_pools):
            logger.debug("document_rejected", document=doc['name'], reason="matches another pool")
            continue
        return doc
    return None


def get_schedule_url(pool, discover=False, pool_names=()):
    """
    Return the schedule PDF URL for a pool.

    A configured schedule_url always wins. With discover=True a pool without
    one has its facility page scraped for a matching schedule document.
    """
    if pool.get('schedule_url'):
        return pool['schedule_url']
    if not discover or not pool.get('details_url'):
        return None

    documents = get_facility_documents(pool['details_url'])
    selected = select_schedule_document(documents, pool['name'], pool_names)
    if selected is None:
        logger.info("no_schedule_document", pool=pool['name'], documents=len(documents))
        return None
    logger.info("schedule_document_selected", pool=pool['name'], document=selected['name'])
    return selected['url']
