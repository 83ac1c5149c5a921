import asyncio
import hashlib

import structlog

from tasknest.core.modules.auth.models import AuthResult
from tasknest.core.modules.user.models import User
from tasknest.core.modules.user.validators import validate_credentials
from tasknest.core.observable import Observable
from tasknest.core.service import Service
from tasknest.core.storage import Storage

logger = structlog.get_logger(__name__)

EMAIL_TAKEN = "Email is already registered"
INVALID_CREDENTIALS = "Invalid email or password"


def hash_password(password: str) -> str:
    """Hex SHA-256 of the UTF-8 password.

    Unsalted and single-pass, kept so hashes stay comparable with existing
    stored users.
    """
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


class AuthService(Service):
    """Registration, login and the current-user stream."""

    def __init__(self, storage: Storage) -> None:
        self._storage = storage
        self.current_user: Observable[User | None] = Observable(None)
        self._restore_session()

    def _restore_session(self) -> None:
        session = self._storage.get_session()
        if session is None:
            return
        user = self._find_user_by_id(session.user_id)
        if user is None:
            logger.info("dangling_session_cleared", user_id=session.user_id)
            self._storage.clear_session()
            return
        self.current_user.publish(user)
        logger.debug("session_restored", user_id=user.id)

    def _find_user_by_id(self, user_id: str) -> User | None:
        return next((u for u in self._storage.get_users() if u.id == user_id), None)

    def _find_user_by_email(self, email: str) -> User | None:
        email = email.strip().lower()
        return next((u for u in self._storage.get_users() if u.email.lower() == email), None)

    def has_email(self, email: str) -> bool:
        """Check if an account already uses this email, ignoring case."""
        return self._find_user_by_email(email) is not None

    def create_user(self, name: str, email: str, password_hash: str) -> User | None:
        """Store a new user without logging in. Returns None when the email is taken."""
        if self.has_email(email):
            return None
        user = User(name=name, email=email.strip().lower(), password_hash=password_hash)
        self._storage.save_user(user)
        logger.info("user_created", user_id=user.id)
        return user

    async def register(self, name: str, email: str, password: str) -> AuthResult:
        """Create an account and log it in."""
        problem = validate_credentials(email, password)
        if problem is not None:
            return AuthResult(success=False, message=problem)

        if self.has_email(email):
            return AuthResult(success=False, message=EMAIL_TAKEN)

        password_hash = await asyncio.to_thread(hash_password, password)

        user = self.create_user(name, email, password_hash)
        if user is None:
            # Another registration for this email finished while hashing
            return AuthResult(success=False, message=EMAIL_TAKEN)

        self._storage.save_session(user.id)
        self.current_user.publish(user)
        return AuthResult(success=True, message="Registration successful")

    async def login(self, email: str, password: str) -> AuthResult:
        """Log in by email and password. Never reveals which one was wrong."""
        user = self._find_user_by_email(email)
        if user is None:
            logger.debug("login_failed", reason="unknown_email")
            return AuthResult(success=False, message=INVALID_CREDENTIALS)

        password_hash = await asyncio.to_thread(hash_password, password)
        if password_hash != user.password_hash:
            logger.debug("login_failed", reason="bad_password", user_id=user.id)
            return AuthResult(success=False, message=INVALID_CREDENTIALS)

        self._storage.save_session(user.id)
        self.current_user.publish(user)
        logger.info("user_logged_in", user_id=user.id)
        return AuthResult(success=True, message="Login successful")

    def logout(self) -> None:
        self._storage.clear_session()
        self.current_user.publish(None)

    def get_current_user(self) -> User | None:
        return self.current_user.value

    def is_authenticated(self) -> bool:
        return self.current_user.value is not None
