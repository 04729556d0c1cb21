"""Tests for nonce, user listing and settings field extraction."""
import json

import pytest

from sunvoypy.core.exceptions import SunvoyFormatError
from sunvoypy.core.extract import (
    CurrentUser,
    CurrentUserExtractor,
    NonceExtractor,
    RegexNonceExtractor,
    ResultBundle,
    SoupNonceExtractor,
    User,
    UserListExtractor,
    extract_nonce,
)

from conftest import SETTINGS_HTML, login_page, make_users


NONCE_EXTRACTORS = [RegexNonceExtractor(), SoupNonceExtractor()]


class TestNonceExtraction:
    """Both nonce extractors must agree."""

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_extracts_nonce(self, extractor):
        assert extractor.extract(login_page('abc123')) == 'abc123'

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_attribute_order_and_quotes(self, extractor):
        html = "<form><input value='n-9f' type='hidden' name='nonce'/></form>"

        assert extractor.extract(html) == 'n-9f'

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_missing_nonce(self, extractor):
        assert extractor.extract(login_page()) is None

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_empty_value_counts_as_missing(self, extractor):
        assert extractor.extract('<input name="nonce" value="">') is None

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_ignores_similarly_named_fields(self, extractor):
        html = (
            '<input name="nonce_hint" value="wrong">'
            '<input name="nonce" value="right">'
        )

        assert extractor.extract(html) == 'right'

    @pytest.mark.parametrize("extractor", NONCE_EXTRACTORS)
    def test_empty_page(self, extractor):
        assert extractor.extract('') is None

    def test_protocol(self):
        for extractor in NONCE_EXTRACTORS:
            assert isinstance(extractor, NonceExtractor)

    def test_module_helper(self):
        assert extract_nonce(login_page('xyz')) == 'xyz'


class TestUserListExtractor:
    """Tests for UserListExtractor."""

    def test_truncates_to_ten(self):
        users = UserListExtractor().extract(make_users(12))

        assert len(users) == 10
        assert [user.id for user in users] == [str(i) for i in range(1, 11)]

    def test_short_list_kept_whole(self):
        users = UserListExtractor().extract(make_users(4))

        assert len(users) == 4
        assert users[0] == User('1', 'User 1', 'user1@example.org', 'member', 'active')

    def test_empty_list(self):
        assert UserListExtractor().extract([]) == []

    def test_custom_limit(self):
        assert len(UserListExtractor(limit=3).extract(make_users(5))) == 3

    def test_negative_limit(self):
        with pytest.raises(ValueError):
            UserListExtractor(limit=-1)

    @pytest.mark.parametrize("payload", [{'users': []}, 'users', 42, None])
    def test_non_array_rejected(self, payload):
        with pytest.raises(SunvoyFormatError, match="Invalid users data format"):
            UserListExtractor().extract(payload)

    def test_non_object_entry_rejected(self):
        with pytest.raises(SunvoyFormatError):
            UserListExtractor().extract([{'id': 1}, 'oops'])

    def test_entries_past_limit_not_validated(self):
        payload = make_users(10) + ['not an object']

        assert len(UserListExtractor().extract(payload)) == 10

    def test_missing_keys_become_empty(self):
        user = UserListExtractor().extract([{'id': 7}])[0]

        assert user.id == '7'
        assert user.email == ''

    def test_extract_text(self):
        users = UserListExtractor().extract_text(json.dumps(make_users(2)))

        assert [user.name for user in users] == ['User 1', 'User 2']

    def test_extract_text_invalid_json(self):
        with pytest.raises(SunvoyFormatError) as exc_info:
            UserListExtractor().extract_text('<html>login</html>')

        assert isinstance(exc_info.value.__cause__, ValueError)


class TestCurrentUserExtractor:
    """Tests for CurrentUserExtractor."""

    def test_all_fields(self):
        user = CurrentUserExtractor().extract(SETTINGS_HTML)

        assert user == CurrentUser(
            id='42',
            access_token='tok-xyz',
            open_id='openid-1',
            user_id='42',
            api_user='demo_api',
            operate_id='op-7',
            language='en_US',
        )
        assert user.is_complete()

    def test_missing_fields_are_empty(self):
        html = '<form><input id="userId" value="42"><input id="language" value="de"></form>'

        user = CurrentUserExtractor().extract(html)

        assert user.user_id == '42'
        assert user.language == 'de'
        assert user.access_token == ''
        assert user.open_id == ''
        assert user.api_user == ''
        assert user.operate_id == ''
        assert not user.is_complete()

    def test_page_without_controls(self):
        user = CurrentUserExtractor().extract('<html><body>Settings</body></html>')

        assert user == CurrentUser()

    @pytest.mark.parametrize("body", ['', '   \n'])
    def test_empty_body(self, body):
        with pytest.raises(SunvoyFormatError, match="Empty token settings response"):
            CurrentUserExtractor().extract(body)

    def test_select_and_textarea_controls(self):
        html = (
            '<select id="language">'
            '<option value="en_US">English</option>'
            '<option value="fr_FR" selected>French</option>'
            '</select>'
            '<textarea id="access_token">tok-long</textarea>'
        )

        user = CurrentUserExtractor().extract(html)

        assert user.language == 'fr_FR'
        assert user.access_token == 'tok-long'

    def test_input_without_value(self):
        user = CurrentUserExtractor().extract('<input id="openId">')

        assert user.open_id == ''


class TestResultBundle:
    """Tests for the output document."""

    def test_to_dict_shape(self):
        bundle = ResultBundle(
            users=[User.from_dict(item) for item in make_users(2)],
            current_user=CurrentUserExtractor().extract(SETTINGS_HTML)
        )

        data = json.loads(bundle.to_json())

        assert list(data) == ['users', 'currentUser']
        assert len(data['users']) == 2
        assert data['currentUser']['accessToken'] == 'tok-xyz'
        assert data['currentUser']['id'] == '42'
