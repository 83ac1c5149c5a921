from tasknest.core.modules.access.models import AccessDecision
from tasknest.core.modules.auth.service import AuthService
from tasknest.core.modules.user.models import User
from tasknest.core.service import Service
from tasknest.core.storage import Storage
from tasknest.errors import AuthenticationError


class AccessService(Service):
    def __init__(self, storage: Storage, auth: AuthService) -> None:
        self._storage = storage
        self._auth = auth

    def has_users(self) -> bool:
        return len(self._storage.get_users()) > 0

    def resolve_access(self) -> AccessDecision:
        """Decide whether a protected page may be shown, or where to redirect."""
        if self._auth.is_authenticated():
            return AccessDecision.ALLOW
        if not self.has_users():
            return AccessDecision.REGISTER
        return AccessDecision.LOGIN

    def ensure_authenticated(self) -> User:
        """Return the current user, raise AuthenticationError if nobody is logged in."""
        user = self._auth.get_current_user()
        if user is None:
            raise AuthenticationError
        return user
