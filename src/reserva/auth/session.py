import asyncio
from typing import Optional
import aiohttp
import structlog

from ..constants import RESERVE_HISTORY_URL, USER_AGENT
from .fetchers import fetch_aikotoba_cookie, fetch_user_cookie, open_client_session

logger = structlog.get_logger()


class CredentialAcquirer:
    """Obtains reserva.be session cookies from a passphrase or a member login."""

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout_seconds: Optional[int] = None):
        self.session = session
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(component="credential_acquirer")

    async def acquire_by_passphrase(self, passphrase: str) -> str:
        """
        Log in with the shared passphrase (aikotoba).

        Args:
            passphrase: The aikotoba shared with the reservation page

        Returns:
            str: The session cookie exactly as the login flow produced it
        """
        self.logger.info("Acquiring cookie", flow="aikotoba")
        try:
            cookie = await fetch_aikotoba_cookie(
                passphrase, session=self.session, timeout_seconds=self.timeout_seconds
            )
        except Exception as e:
            self.logger.error("Cookie acquisition failed", flow="aikotoba", error_type=type(e).__name__)
            raise
        self.logger.info("Cookie acquired", flow="aikotoba")
        return cookie

    async def acquire_by_user_credentials(self, email: str, password: str) -> str:
        """
        Log in with a member email/password pair.

        Args:
            email: Member account email
            password: Member account password

        Returns:
            str: The session cookie exactly as the login flow produced it
        """
        self.logger.info("Acquiring cookie", flow="user")
        try:
            cookie = await fetch_user_cookie(
                email, password, session=self.session, timeout_seconds=self.timeout_seconds
            )
        except Exception as e:
            self.logger.error("Cookie acquisition failed", flow="user", error_type=type(e).__name__)
            raise
        self.logger.info("Cookie acquired", flow="user")
        return cookie


class SessionValidator:
    """
    Checks whether a session cookie is still accepted by reserva.be.

    The probe must carry only the cookie it is given. aiohttp merges the
    cookies stored in a session's jar into every request, so an injected
    session has to be created with ``cookie_jar=aiohttp.DummyCookieJar()``.
    """

    PROBE_URL = RESERVE_HISTORY_URL

    def __init__(self, session: Optional[aiohttp.ClientSession] = None, timeout_seconds: Optional[int] = None):
        if session is not None and not isinstance(session.cookie_jar, aiohttp.DummyCookieJar):
            raise ValueError("SessionValidator needs a session created with cookie_jar=aiohttp.DummyCookieJar()")
        self.session = session
        self.timeout_seconds = timeout_seconds
        self.logger = logger.bind(component="session_validator")

    async def is_session_valid(self, cookie: str) -> bool:
        """
        Probe the reservation history page with the cookie.

        The page is only served to logged-in members. Any redirect is taken
        to mean the session was rejected, whatever its target.

        Returns:
            bool: True when the page was served without a Location header
        """
        if self.session is not None:
            return await self._probe(self.session, cookie)

        async with open_client_session(self.timeout_seconds, cookie_jar=aiohttp.DummyCookieJar()) as session:
            return await self._probe(session, cookie)

    async def _probe(self, session: aiohttp.ClientSession, cookie: str) -> bool:
        try:
            async with session.head(
                self.PROBE_URL,
                headers={
                    'Cookie': cookie,
                    'User-Agent': USER_AGENT
                },
                allow_redirects=False
            ) as response:
                location = response.headers.get('Location')
                if location:
                    self.logger.debug("Probe was redirected", status_code=response.status, location=location)
                self.logger.info("Session probe completed", status_code=response.status, valid=not location)
                return not location

        except aiohttp.ClientError as e:
            self.logger.error("HTTP client error", error=str(e))
            raise
        except asyncio.TimeoutError:
            self.logger.error("Session probe timed out")
            raise


async def acquire_by_passphrase(passphrase: str) -> str:
    return await CredentialAcquirer().acquire_by_passphrase(passphrase)


async def acquire_by_user_credentials(email: str, password: str) -> str:
    return await CredentialAcquirer().acquire_by_user_credentials(email, password)


async def is_session_valid(cookie: str) -> bool:
    return await SessionValidator().is_session_valid(cookie)
