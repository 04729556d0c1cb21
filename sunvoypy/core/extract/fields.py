"""
Settings page field extraction.

Reads the current user's profile/token values out of the form controls of
the settings page. A control that is missing yields an empty string; a
missing field never aborts the extraction.
"""
from typing import Dict, Optional

from bs4 import BeautifulSoup
from bs4.element import Tag

from ..exceptions import SunvoyFormatError
from .models import CurrentUser


class CurrentUserExtractor:
    """
    Builds a CurrentUser from the settings page markup.

    Example:
        >>> CurrentUserExtractor().extract('<input id="userId" value="42">').user_id
        '42'
    """

    # control id -> CurrentUser attribute
    FIELDS: Dict[str, str] = {
        'access_token': 'access_token',
        'openId': 'open_id',
        'userId': 'user_id',
        'apiuser': 'api_user',
        'operateId': 'operate_id',
        'language': 'language',
    }

    def __init__(self, parser: str = 'html.parser'):
        self.parser = parser

    def extract(self, html: str) -> CurrentUser:
        """
        Extract all fields.

        Raises:
            SunvoyFormatError: If the page body is empty
        """
        if not html or not html.strip():
            raise SunvoyFormatError("Empty token settings response")

        soup = BeautifulSoup(html, self.parser)
        values = {
            attribute: self._control_value(soup.find(id=control_id))
            for control_id, attribute in self.FIELDS.items()
        }
        return CurrentUser(id=values['user_id'], **values)

    @staticmethod
    def _control_value(element: Optional[Tag]) -> str:
        """Current value of a form control, the way a browser would report it."""
        if element is None:
            return ''

        if element.name == 'textarea':
            return element.get_text()

        if element.name == 'select':
            option = element.find('option', selected=True) or element.find('option')
            if option is None:
                return ''
            value = option.get('value')
            return value if value is not None else option.get_text(strip=True)

        value = element.get('value')
        return value if isinstance(value, str) else ''
