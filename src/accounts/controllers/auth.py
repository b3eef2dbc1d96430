"""This module contains the controllers for the authentication app."""

import typing as t

import structlog
from ninja_extra import api_controller, route
from ninja_jwt.controller import TokenObtainPairController
from ninja_jwt.schema import TokenObtainPairInputSchema, TokenObtainPairOutputSchema

from common.throttling import AuthThrottle

logger = structlog.get_logger(__name__)


@api_controller("/auth", tags=["Auth"], throttle=AuthThrottle())
class AuthController(TokenObtainPairController):
    @route.post("/token/pair", response=TokenObtainPairOutputSchema, url_name="token_obtain_pair")
    def obtain_token(self, user_token: TokenObtainPairInputSchema) -> TokenObtainPairOutputSchema:
        """Authenticate with username and password to obtain JWT access/refresh tokens.

        Use the access token as a Bearer token on every admin and check-in endpoint.
        Refresh it via POST /auth/refresh before it expires.
        """
        logger.info("admin_user_logged_in", user_id=str(user_token._user.pk))
        return t.cast(TokenObtainPairOutputSchema, user_token.to_response_schema())  # type: ignore[no-untyped-call]
