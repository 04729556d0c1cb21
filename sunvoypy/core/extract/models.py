"""
Extracted record models.

Contains the records produced from the listing endpoint and the settings
page, plus the bundle written at the end of a run.
"""
from dataclasses import dataclass, field
from typing import Any, List, Mapping
import json


def _text(value: Any) -> str:
    """Coerce a scalar from JSON or markup to a string ('' for None)."""
    if value is None:
        return ''
    return str(value)


@dataclass(frozen=True)
class User:
    """
    One entry of the user listing.

    Attributes:
        id: User identifier
        name: Display name
        email: Email address
        role: Role label
        status: Account status label
    """
    id: str = ''
    name: str = ''
    email: str = ''
    role: str = ''
    status: str = ''

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'User':
        """
        Create from a listing entry; missing keys become empty strings.

        Args:
            data: One object of the JSON array

        Returns:
            User instance
        """
        return cls(
            id=_text(data.get('id')),
            name=_text(data.get('name')),
            email=_text(data.get('email')),
            role=_text(data.get('role')),
            status=_text(data.get('status')),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'name': self.name,
            'email': self.email,
            'role': self.role,
            'status': self.status,
        }


@dataclass(frozen=True)
class CurrentUser:
    """Profile and token fields of the logged-in user, read from the settings page."""
    id: str = ''
    access_token: str = ''
    open_id: str = ''
    user_id: str = ''
    api_user: str = ''
    operate_id: str = ''
    language: str = ''

    def to_dict(self) -> dict:
        """Serialize with the camelCase keys used in the output file."""
        return {
            'id': self.id,
            'accessToken': self.access_token,
            'openId': self.open_id,
            'userId': self.user_id,
            'apiUser': self.api_user,
            'operateId': self.operate_id,
            'language': self.language,
        }

    def is_complete(self) -> bool:
        """True when every field carries a value."""
        return all(self.to_dict().values())


@dataclass
class ResultBundle:
    """Everything a run produces; written once, as a whole."""
    users: List[User] = field(default_factory=list)
    current_user: CurrentUser = field(default_factory=CurrentUser)

    def to_dict(self) -> dict:
        return {
            'users': [user.to_dict() for user in self.users],
            'currentUser': self.current_user.to_dict(),
        }

    def to_json(self) -> str:
        """
        Serialize to the JSON document stored in the output file.

        Returns:
            JSON string (indent 2)
        """
        return json.dumps(self.to_dict(), indent=2)
