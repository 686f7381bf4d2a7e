from .fetchers import LoginError, fetch_aikotoba_cookie, fetch_user_cookie
from .session import (
    CredentialAcquirer,
    SessionValidator,
    acquire_by_passphrase,
    acquire_by_user_credentials,
    is_session_valid,
)

__all__ = [
    'CredentialAcquirer',
    'SessionValidator',
    'LoginError',
    'acquire_by_passphrase',
    'acquire_by_user_credentials',
    'is_session_valid',
    'fetch_aikotoba_cookie',
    'fetch_user_cookie',
]
