from __future__ import annotations

import jwt

from ..common.validators import require_non_empty
from ..core.exceptions import AuthenticationError, ValidationError
from .model import Identity


class AuthService:
    """Use case: turn identity-provider output into an :class:`Identity`.

    Token validation belongs to the provider; the credential is only decoded
    to read its ``sub`` and ``name`` claims.
    """

    def identity_from_profile(self, user_id: str | None, display_name: str | None) -> Identity:
        try:
            uid = require_non_empty(user_id, "User id")
        except ValidationError as e:
            raise AuthenticationError(str(e)) from None
        name = (display_name or "").strip() or uid
        return Identity(user_id=uid, display_name=name)

    def identity_from_credential(self, credential: str | None) -> Identity:
        if not credential:
            raise AuthenticationError("Missing credential")

        try:
            claims = jwt.decode(credential, options={"verify_signature": False})
        except jwt.PyJWTError as e:
            raise AuthenticationError(f"Unreadable credential: {e}") from None

        sub = claims.get("sub")
        if sub is None:
            raise AuthenticationError("Credential has no subject")
        return self.identity_from_profile(str(sub), claims.get("name") or claims.get("email"))
