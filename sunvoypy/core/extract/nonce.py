"""
Login nonce extraction.

The login page carries a hidden ``<input name="nonce" value="...">``.
Extractors share one protocol so the session layer does not care whether
the markup is scanned with patterns or parsed into a tree.
"""
import re
from typing import Optional, Protocol, runtime_checkable

from bs4 import BeautifulSoup


@runtime_checkable
class NonceExtractor(Protocol):
    """Pulls the nonce value out of login page markup."""

    def extract(self, html: str) -> Optional[str]:
        """Return the nonce, or None when the page has none."""
        ...


class RegexNonceExtractor:
    """
    Pattern-based extractor working on raw markup.

    Scans ``<input>`` tags in document order and returns the value of the
    first one named ``nonce``. Attribute order and quote style do not
    matter; an empty value counts as missing.
    """

    INPUT_TAG = re.compile(r'<input\b[^>]*>', re.IGNORECASE)
    ATTRIBUTE = re.compile(r'([\w:-]+)\s*=\s*(["\'])(.*?)\2', re.DOTALL)

    def __init__(self, field_name: str = 'nonce'):
        self.field_name = field_name

    def extract(self, html: str) -> Optional[str]:
        for tag in self.INPUT_TAG.finditer(html or ''):
            attributes = {
                name.lower(): value
                for name, _, value in self.ATTRIBUTE.findall(tag.group(0))
            }
            if attributes.get('name') == self.field_name:
                return attributes.get('value') or None
        return None


class SoupNonceExtractor:
    """Structural extractor backed by BeautifulSoup."""

    def __init__(self, field_name: str = 'nonce', parser: str = 'html.parser'):
        self.field_name = field_name
        self.parser = parser

    def extract(self, html: str) -> Optional[str]:
        soup = BeautifulSoup(html or '', self.parser)
        element = soup.find('input', attrs={'name': self.field_name})
        if element is None:
            return None
        return element.get('value') or None


def extract_nonce(html: str) -> Optional[str]:
    """Extract the login nonce with the default (pattern-based) extractor."""
    return RegexNonceExtractor().extract(html)
