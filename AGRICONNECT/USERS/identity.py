# file: AGRICONNECT/USERS/identity.py
import logging

from firebase_admin import auth

from AGRICONNECT.core.firebase import init_firebase

logger = logging.getLogger("users.identity")


class EmailAlreadyInUseError(Exception):
    """The identity provider already has an account for this email."""


class IdentityAdapter:
    """Creates Firebase Auth accounts."""

    def __init__(self, app=None):
        self.app = app

    def create_account(self, email: str, password: str, display_name: str) -> str:
        """Create the account and return the issued uid."""
        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=display_name,
                app=self.app,
            )
        except auth.EmailAlreadyExistsError as e:
            logger.info("create_account: email already exists: %s", email)
            raise EmailAlreadyInUseError(email) from e
        logger.info("create_account: created uid=%s for %s", record.uid, email)
        return record.uid


def get_identity() -> IdentityAdapter:
    return IdentityAdapter(init_firebase())
