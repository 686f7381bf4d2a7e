import asyncio
import logging
import sys

import aiohttp

from .auth import CredentialAcquirer, LoginError, SessionValidator
from .config import ReservaConfig, load_config

EXIT_VALID = 0
EXIT_INVALID = 1
EXIT_FAILED = 2


async def single_run(config: ReservaConfig) -> int:
    """Check the configured cookie, or log in and check the fresh one"""
    logger = logging.getLogger(__name__)

    validator = SessionValidator(timeout_seconds=config.timeout_seconds)
    acquirer = CredentialAcquirer(timeout_seconds=config.timeout_seconds)

    try:
        if config.cookie:
            cookie = config.cookie
            print("Checking configured cookie")
        else:
            mode = config.credential_mode()
            if mode is None:
                logger.error("No cookie and no credentials configured")
                print("Nothing to check: configure a cookie, an aikotoba or an email/password pair")
                return EXIT_INVALID
            if mode == "aikotoba":
                cookie = await acquirer.acquire_by_passphrase(config.aikotoba)
            else:
                cookie = await acquirer.acquire_by_user_credentials(config.email, config.password)
            print(f"Logged in with {mode} credentials")

        valid = await validator.is_session_valid(cookie)

    except LoginError as e:
        logger.error(f"Login failed: {e}")
        print(f"Login failed: {e.reason}")
        return EXIT_FAILED
    except (aiohttp.ClientError, asyncio.TimeoutError) as e:
        logger.error(f"Request to reserva.be failed: {e!r}")
        print("Could not reach reserva.be")
        return EXIT_FAILED

    print(f"Session valid: {valid}")
    if valid and not config.cookie:
        print(f"Cookie: {cookie}")
    return EXIT_VALID if valid else EXIT_INVALID


def run():
    """Entry point for the application"""
    try:
        config = load_config()
    except (FileNotFoundError, ValueError) as e:
        logging.basicConfig(level=logging.INFO)
        logging.getLogger(__name__).error(f"Failed to load configuration: {e}")
        sys.exit(EXIT_FAILED)

    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    sys.exit(asyncio.run(single_run(config)))


if __name__ == "__main__":
    run()
