import asyncio
from typing import Dict, Optional

import aiohttp
import structlog

from ..constants import AIKOTOBA_LOGIN_URL, USER_AGENT, USER_LOGIN_URL

logger = structlog.get_logger()


class LoginError(Exception):
    """Raised when reserva.be rejects a login attempt."""

    def __init__(self, reason: str, status: Optional[int] = None):
        super().__init__(f"{reason} (status={status})" if status is not None else reason)
        self.reason = reason
        self.status = status


def open_client_session(timeout_seconds: Optional[int] = None, **kwargs) -> aiohttp.ClientSession:
    """Open a ClientSession, keeping the aiohttp default timeout unless one is given."""
    if timeout_seconds is not None:
        kwargs['timeout'] = aiohttp.ClientTimeout(total=timeout_seconds)
    return aiohttp.ClientSession(**kwargs)


async def fetch_aikotoba_cookie(
    aikotoba: str,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    login_url: str = AIKOTOBA_LOGIN_URL,
    timeout_seconds: Optional[int] = None,
) -> str:
    """Log in with the shared passphrase and return the session cookie."""
    return await _login(login_url, {"aikotoba": aikotoba}, session, timeout_seconds, flow="aikotoba")


async def fetch_user_cookie(
    email: str,
    password: str,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    login_url: str = USER_LOGIN_URL,
    timeout_seconds: Optional[int] = None,
) -> str:
    """Log in with a member email/password and return the session cookie."""
    return await _login(login_url, {"email": email, "password": password}, session, timeout_seconds, flow="user")


def build_cookie_header(response: aiohttp.ClientResponse) -> str:
    """
    Join every Set-Cookie of a response into a single Cookie header value.

    Values are sent back in the encoded form the server issued them in,
    quotes included. Cookies keep the order the server set them in. A name
    set twice keeps its last value.
    """
    cookies: Dict[str, str] = {}
    for morsel in response.cookies.values():
        cookies[morsel.key] = morsel.coded_value
    return "; ".join(f"{name}={value}" for name, value in cookies.items())


async def _login(
    login_url: str,
    form: Dict[str, str],
    session: Optional[aiohttp.ClientSession],
    timeout_seconds: Optional[int],
    flow: str,
) -> str:
    log = logger.bind(component="login_fetcher", flow=flow)

    if session is None:
        async with open_client_session(timeout_seconds) as own_session:
            return await _post_login(own_session, login_url, form, log)
    return await _post_login(session, login_url, form, log)


async def _post_login(session, login_url: str, form: Dict[str, str], log) -> str:
    try:
        async with session.post(
            login_url,
            data=form,
            headers={'User-Agent': USER_AGENT},
            allow_redirects=False,
        ) as response:
            if response.status >= 400:
                log.warning("Login endpoint returned error", status_code=response.status)
                raise LoginError("login endpoint returned an error", status=response.status)

            location = response.headers.get('Location')
            if location and '/login' in location:
                log.warning("Login rejected", status_code=response.status)
                raise LoginError("credentials rejected", status=response.status)

            cookie = build_cookie_header(response)
            if not cookie:
                log.warning("Login response carried no cookies", status_code=response.status)
                raise LoginError("no session cookie issued", status=response.status)

            log.info("Login succeeded", status_code=response.status, cookie_count=len(response.cookies))
            return cookie

    except aiohttp.ClientError as e:
        log.error("HTTP client error", error=str(e))
        raise
    except asyncio.TimeoutError:
        log.error("Login request timed out")
        raise
