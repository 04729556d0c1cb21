"""User listing extraction."""
import json
from typing import Any, List, Mapping

from ..exceptions import SunvoyFormatError
from .models import User


class UserListExtractor:
    """
    Turns the listing endpoint's JSON array into User records.

    Only the first ``limit`` entries are kept, in server order, whatever
    count the server reports.
    """

    DEFAULT_LIMIT = 10

    def __init__(self, limit: int = DEFAULT_LIMIT):
        if limit < 0:
            raise ValueError("limit must not be negative")
        self.limit = limit

    def extract(self, payload: Any) -> List[User]:
        """
        Extract users from an already decoded payload.

        Args:
            payload: Decoded JSON body

        Returns:
            At most ``limit`` users

        Raises:
            SunvoyFormatError: If payload is not an array of objects
        """
        if not isinstance(payload, list):
            raise SunvoyFormatError("Invalid users data format")

        users = []
        for index, item in enumerate(payload[:self.limit]):
            if not isinstance(item, Mapping):
                raise SunvoyFormatError(
                    f"Invalid users data format: entry {index} is not an object"
                )
            users.append(User.from_dict(item))
        return users

    def extract_text(self, body: str) -> List[User]:
        """
        Decode a raw response body and extract users from it.

        Raises:
            SunvoyFormatError: If the body is not JSON or not an array
        """
        try:
            payload = json.loads(body)
        except (TypeError, ValueError) as e:
            raise SunvoyFormatError(f"Invalid users data format: {e}") from e
        return self.extract(payload)
