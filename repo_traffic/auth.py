#!/usr/bin/env python3
"""
Verification of the signed tokens handed to users after GitHub login.
"""

from typing import Dict, Sequence

from jose import JWTError, jwt

from .errors import BadTokenError, TokenMismatchError


class TokenVerifier:
    """Decodes JWTs signed with the application secret."""

    def __init__(self, secret: str, algorithms: Sequence[str] = ("HS256",)):
        """
        Initialize the verifier.

        Args:
            secret: Signing secret shared with the login service
            algorithms: Accepted signing algorithms
        """
        if not secret:
            raise ValueError("Token signing secret not configured.")
        self.secret = secret
        self.algorithms = list(algorithms)

    def decode(self, token: str) -> Dict:
        """
        Decode a token and return its claims.

        Raises:
            BadTokenError: If the token is malformed, badly signed, expired
                or carries no username
        """
        if not isinstance(token, str) or not token:
            raise BadTokenError("bad token")
        try:
            claims = jwt.decode(token, self.secret, algorithms=self.algorithms)
        except JWTError as e:
            raise BadTokenError("bad token") from e

        if not isinstance(claims.get("username"), str):
            raise BadTokenError("bad token")
        return claims

    def verify_user(self, token: str, username: str) -> Dict:
        """Decode a token and check that it was issued to ``username``."""
        claims = self.decode(token)
        if claims["username"] != username:
            raise TokenMismatchError("token user mismatch")
        return claims
