"""Extraction of nonces, user listings and settings fields from responses."""
from .models import User, CurrentUser, ResultBundle
from .nonce import NonceExtractor, RegexNonceExtractor, SoupNonceExtractor, extract_nonce
from .users import UserListExtractor
from .fields import CurrentUserExtractor

__all__ = [
    'User',
    'CurrentUser',
    'ResultBundle',
    'NonceExtractor',
    'RegexNonceExtractor',
    'SoupNonceExtractor',
    'extract_nonce',
    'UserListExtractor',
    'CurrentUserExtractor',
]
