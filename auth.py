from datetime import timedelta
from typing import Annotated, Any

from authx import AuthX, AuthXConfig
from fastapi import Depends, Request
from jwt import decode
from jwt.exceptions import ExpiredSignatureError, PyJWTError

from config import settings
from exceptions import InvalidTokenError, TokenExpiredError, UnauthorizedError


class Authentication:
    """Issues bearer tokens carrying the user record and verifies them on each request."""

    def __init__(
        self,
        secret: str | None = settings.access_token_secret,
        expire_minutes: int = settings.access_token_expire_minutes,
    ) -> None:
        if not secret:
            raise ValueError("Access token secret not found")

        config = AuthXConfig()
        config.JWT_SECRET_KEY = secret
        config.JWT_TOKEN_LOCATION = ["headers"]
        config.JWT_HEADER_NAME = "Authorization"
        config.JWT_HEADER_TYPE = "Bearer"
        config.JWT_ALGORITHM = "HS256"
        config.JWT_ACCESS_TOKEN_EXPIRES = timedelta(minutes=expire_minutes)

        self.config = config
        self.auth = AuthX(config)

    def create_access_token(self, user: dict[str, Any]) -> str:
        """Sign a token whose ``user`` claim is the user record as issued."""
        return self.auth.create_access_token(uid=str(user["id"]), data={"user": user})

    def decode_token(self, token: str) -> dict[str, Any]:
        config = self.config

        try:
            payload: dict = decode(
                token,
                key=config.JWT_SECRET_KEY,
                algorithms=[config.JWT_ALGORITHM],
                options={"verify_aud": False},
            )
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token is expired") from e
        except PyJWTError as e:
            raise InvalidTokenError(f"Token decode error: {e}") from e

        user = payload.get("user")
        if payload.get("type", "access") != "access":
            raise InvalidTokenError("Token is not an access token")
        if not isinstance(user, dict) or not user.get("id"):
            raise InvalidTokenError("Token has no user claim")

        return user

    async def access_token_required(self, request: Request) -> dict[str, Any]:
        """Dependency guarding protected routes, returns the identity embedded in the token."""
        header = request.headers.get(self.config.JWT_HEADER_NAME)
        if not header:
            raise UnauthorizedError("Missing bearer token")

        scheme, _, token = header.partition(" ")
        token = token.strip()
        if scheme.lower() != self.config.JWT_HEADER_TYPE.lower() or not token:
            raise UnauthorizedError("Malformed authorization header")

        return self.decode_token(token)


authentication = Authentication()
identityDep = Annotated[dict[str, Any], Depends(authentication.access_token_required)]
