"""Pytest fixtures for sunvoypy tests."""
import json
from collections import Counter

import pytest
import pytest_asyncio
from aiohttp import web
from aiohttp.test_utils import TestServer

from sunvoypy import APIConfig, Credentials, RetryConfig


USERNAME = 'demo@example.org'
PASSWORD = 'test'
SESSION_COOKIE = 'JSESSIONID'


def login_page(nonce=None):
    """Login page markup, with or without the hidden nonce field."""
    nonce_field = f'<input type="hidden" name="nonce" value="{nonce}">' if nonce else ''
    return (
        '<html><body><form method="post" action="/login">'
        f'{nonce_field}'
        '<input type="text" name="username"><input type="password" name="password">'
        '<button type="submit">Sign in</button>'
        '</form></body></html>'
    )


SETTINGS_HTML = """
<html><body><form>
  <input id="access_token" type="text" value="tok-xyz" readonly>
  <input id="openId" type="text" value="openid-1">
  <input id="userId" type="text" value="42">
  <input id="apiuser" type="text" value="demo_api">
  <input id="operateId" type="text" value="op-7">
  <input id="language" type="text" value="en_US">
</form></body></html>
"""


def make_users(count):
    return [
        {
            'id': str(index),
            'name': f'User {index}',
            'email': f'user{index}@example.org',
            'role': 'member',
            'status': 'active',
        }
        for index in range(1, count + 1)
    ]


class FakeSunvoy:
    """In-process stand-in for the target application."""

    def __init__(self):
        self.nonce = 'abc123'
        self.serve_nonce = True
        self.login_status = 302
        self.login_failures = 0
        self.users_payload = make_users(12)
        self.settings_html = SETTINGS_HTML
        self.valid_tokens = set()
        self.calls = Counter()
        self.login_forms = []
        self.login_headers = []
        self.base_url = ''

    def make_app(self) -> web.Application:
        app = web.Application()
        app.router.add_get('/login', self.get_login)
        app.router.add_post('/login', self.post_login)
        app.router.add_get('/list', self.get_list)
        app.router.add_get('/js/list.abc123.js', self.get_list_script)
        app.router.add_post('/api/users', self.post_users)
        app.router.add_get('/settings/tokens', self.get_settings)
        return app

    def authorized(self, request) -> bool:
        return request.cookies.get(SESSION_COOKIE) in self.valid_tokens

    async def get_login(self, request):
        self.calls['GET /login'] += 1
        return web.Response(
            text=login_page(self.nonce if self.serve_nonce else None),
            content_type='text/html'
        )

    async def post_login(self, request):
        self.calls['POST /login'] += 1
        form = await request.post()
        self.login_forms.append(dict(form))
        self.login_headers.append(dict(request.headers))

        if self.login_failures > 0:
            self.login_failures -= 1
            return web.Response(status=500, text='try again')

        if (form.get('username'), form.get('password'), form.get('nonce')) != (USERNAME, PASSWORD, self.nonce):
            return web.Response(status=403, text='bad credentials')

        token = f"token-{len(self.valid_tokens) + 1}"
        self.valid_tokens.add(token)
        if self.login_status == 302:
            response = web.Response(status=302, headers={'Location': '/list'})
        else:
            response = web.Response(status=self.login_status, text='welcome')
        response.set_cookie(SESSION_COOKIE, token, path='/')
        return response

    async def get_list(self, request):
        self.calls['GET /list'] += 1
        if not self.authorized(request):
            raise web.HTTPFound('/login')
        return web.Response(
            text='<html><body><div id="app"></div><script src="/js/list.abc123.js"></script></body></html>',
            content_type='text/html'
        )

    async def get_list_script(self, request):
        self.calls['GET /js/list.abc123.js'] += 1
        return web.Response(text='fetch("/api/users", {method: "POST"})', content_type='application/javascript')

    async def post_users(self, request):
        self.calls['POST /api/users'] += 1
        if not self.authorized(request):
            return web.Response(status=401, text='unauthorized')
        return web.Response(text=json.dumps(self.users_payload), content_type='application/json')

    async def get_settings(self, request):
        self.calls['GET /settings/tokens'] += 1
        if not self.authorized(request):
            raise web.HTTPFound('/login')
        return web.Response(text=self.settings_html, content_type='text/html')


@pytest_asyncio.fixture
async def sunvoy_server():
    """Running FakeSunvoy; base_url points at it."""
    fake = FakeSunvoy()
    server = TestServer(fake.make_app())
    await server.start_server()
    fake.base_url = f"http://{server.host}:{server.port}"
    yield fake
    await server.close()


@pytest.fixture
def credentials():
    return Credentials(USERNAME, PASSWORD)


@pytest.fixture
def make_config():
    """Builds an APIConfig for a base URL with instant retries."""
    def factory(base_url: str, max_attempts: int = 3) -> APIConfig:
        return APIConfig(
            base_url=base_url,
            retry=RetryConfig(max_attempts=max_attempts, base_delay=0.0)
        )
    return factory
