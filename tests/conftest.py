"""
Shared fixtures for the reserva-session tests.
HTTP calls are served by mocked aiohttp sessions or a local aiohttp test server, nothing leaves the machine.
"""

from http.cookies import SimpleCookie
from unittest.mock import MagicMock

import aiohttp
import pytest
from multidict import CIMultiDict


def make_response(status=200, headers=None, set_cookies=None):
    """Build a fake aiohttp response with the given status, headers and Set-Cookie values"""
    response = MagicMock()
    response.status = status
    response.headers = CIMultiDict(headers or {})
    cookies = SimpleCookie()
    for name, value in (set_cookies or []):
        cookies[name] = value
    response.cookies = cookies
    return response


def make_session(method, response=None, error=None):
    """Build a fake ClientSession whose `method` call yields `response` or raises `error`"""
    request_cm = MagicMock()
    if error is not None:
        request_cm.__aenter__.side_effect = error
    else:
        request_cm.__aenter__.return_value = response
    request_cm.__aexit__.return_value = False

    session = MagicMock()
    session.cookie_jar = MagicMock(spec=aiohttp.DummyCookieJar)
    getattr(session, method).return_value = request_cm
    session.__aenter__.return_value = session
    session.__aexit__.return_value = False
    return session


@pytest.fixture
def response_factory():
    return make_response


@pytest.fixture
def session_factory():
    return make_session


@pytest.fixture
def clean_env(monkeypatch):
    """Remove every environment variable the config loader reads"""
    for name in ['RESERVA_CONFIG_PATH', 'RESERVA_AIKOTOBA', 'RESERVA_EMAIL',
                 'RESERVA_PASSWORD', 'RESERVA_COOKIE', 'LOG_LEVEL']:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch
