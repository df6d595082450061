"""
Credential checks for the dashboard login and the settings area.

Secrets are configured as SHA-256 hex digests in the environment; the
plain values never appear in code.
"""

import hashlib
import hmac
import logging

from .config import DASHBOARD_PASSWORD_SHA256, DASHBOARD_USERNAME, SETTINGS_PASSWORD_SHA256

logger = logging.getLogger(__name__)


def hash_secret(secret: str) -> str:
    return hashlib.sha256((secret or "").encode("utf-8")).hexdigest()


class CredentialVerifier:
    """Capability check against one configured username/secret pair.

    Leave `username` empty for a secret-only gate (the settings area).
    A verifier without a configured digest rejects every attempt.
    """

    def __init__(self, secret_sha256: str, username: str = "", name: str = "login"):
        self.username = username
        self.secret_sha256 = (secret_sha256 or "").lower()
        self.name = name

    @property
    def is_configured(self) -> bool:
        return bool(self.secret_sha256)

    def verify(self, secret: str, username: str = "") -> bool:
        if not self.is_configured:
            logger.warning("%s gate has no configured secret; rejecting", self.name)
            return False

        user_ok = hmac.compare_digest(username or "", self.username)
        secret_ok = hmac.compare_digest(hash_secret(secret), self.secret_sha256)
        if not (user_ok and secret_ok):
            logger.info("%s attempt rejected", self.name)
            return False
        return True


def login_verifier() -> CredentialVerifier:
    return CredentialVerifier(DASHBOARD_PASSWORD_SHA256, username=DASHBOARD_USERNAME, name="login")


def settings_verifier() -> CredentialVerifier:
    return CredentialVerifier(SETTINGS_PASSWORD_SHA256, name="settings")
