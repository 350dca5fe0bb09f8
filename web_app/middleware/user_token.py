"""User identity cookie middleware."""

import logging
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

from shortener.tokens import UserTokenCodec

USER_TOKEN_COOKIE = "user_token"


class UserTokenMiddleware(BaseHTTPMiddleware):
    """Resolve the caller's user id from a signed cookie.
    
    A missing or forged token is replaced by a freshly minted one. The
    cookie is set on every response.
    """
    
    def __init__(self, app, codec: UserTokenCodec, logger: logging.Logger = None):
        super().__init__(app)
        self.codec = codec
        self.logger = logger or logging.getLogger("shortener.web")
    
    async def dispatch(self, request: Request, call_next: Callable):
        token = request.cookies.get(USER_TOKEN_COOKIE)
        user_id = self.codec.verify(token)
        
        if user_id is None:
            user_id, token = self.codec.mint()
            self.logger.debug(f"Minted identity for new user {user_id}")
        
        request.state.user_id = user_id
        
        response = await call_next(request)
        response.set_cookie(USER_TOKEN_COOKIE, token, httponly=True)
        return response
