import secrets

from docseq.core.core import Service
from docseq.core.modules.access.models import AuthToken
from docseq.errors import AuthenticationError


class AccessService(Service):
    """Checks the static API token. Sessions and users live in the calling applications."""

    def is_auth_token_valid(self, auth_token: AuthToken | None) -> bool:
        expected = self.core.config.api_token
        if expected is None:
            return True
        if auth_token is None:
            return False
        return secrets.compare_digest(auth_token.encode(), expected.encode())

    def ensure_authenticated(self, auth_token: AuthToken | None) -> None:
        """Raise AuthenticationError unless the token matches the configured one."""
        if not self.is_auth_token_valid(auth_token):
            raise AuthenticationError("Invalid or missing API token")
