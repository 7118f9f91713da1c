"""
AutoEq link scraper

Fetches GitHub pages of the AutoEq repository and turns their links into a
catalog (lower-cased link text -> href) for DirectoryResolver, then fetches
the raw ParametricEQ.txt for a chosen headphone.
"""

import html
import logging
from typing import Dict

import requests
from bs4 import BeautifulSoup

from .directory import DirectoryResolver, Exact
from .eq_parser import EqTextParser
from .errors import DirectoryNotFoundError, FetchError
from .models import CorrectionFilterSet
from .settings import Settings

logger = logging.getLogger(__name__)

PARAMETRIC_EQ_FRAGMENT = "parametriceq.txt"
MAX_LINK_TEXT_LENGTH = 100


def extract_links(page_html: str) -> Dict[str, str]:
    """Collect plain-text links from a page; later duplicates win"""
    soup = BeautifulSoup(page_html, 'html.parser')
    links = {}

    for a in soup.find_all('a', href=True):
        inner = a.decode_contents()
        # Links wrapping markup (icons, avatars) are navigation, not entries
        if '<' in inner or '>' in inner:
            continue
        text = html.unescape(inner).lower().strip()
        href = a['href'].strip()
        if not text or len(text) > MAX_LINK_TEXT_LENGTH or href == '#':
            continue
        links[text] = href

    return links


class LinkScraper:
    """Fetches AutoEq pages and correction data"""

    def __init__(self, settings: Settings = None):
        self.settings = settings or Settings()
        self.session = requests.Session()
        self.session.headers.update({'User-Agent': self.settings.user_agent})

    def fetch_text(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = self.session.get(url, timeout=self.settings.timeout)
            response.raise_for_status()
        except requests.RequestException as e:
            raise FetchError(url, e) from e
        return response.text

    def scrape_links(self, url: str) -> Dict[str, str]:
        links = extract_links(self.fetch_text(url))
        logger.debug("Found %d links on %s", len(links), url)
        return links

    def fetch_catalog(self) -> Dict[str, str]:
        """Headphone name -> link for the whole results overview"""
        return self.scrape_links(self.settings.repo_url())

    def fetch_correction(self, headphone_path: str) -> CorrectionFilterSet:
        """Locate, download and parse the ParametricEQ.txt of one headphone"""
        page_links = self.scrape_links(self.settings.headphone_url(headphone_path))
        result = DirectoryResolver.pick(page_links, PARAMETRIC_EQ_FRAGMENT)
        if not isinstance(result, Exact):
            raise DirectoryNotFoundError(PARAMETRIC_EQ_FRAGMENT)

        raw_text = self.fetch_text(self.settings.raw_url(result.link))
        return EqTextParser.parse(raw_text)
