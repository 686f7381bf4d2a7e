from .auth import (
    CredentialAcquirer,
    LoginError,
    SessionValidator,
    acquire_by_passphrase,
    acquire_by_user_credentials,
    is_session_valid,
)

__version__ = "0.1.0"

__all__ = [
    'CredentialAcquirer',
    'SessionValidator',
    'LoginError',
    'acquire_by_passphrase',
    'acquire_by_user_credentials',
    'is_session_valid',
]
