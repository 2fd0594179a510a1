"""SlowAPI limiter shared by main (app.state.limiter) and the search routes.

Search is keyed per bearer token so staff behind one office NAT do not share
a budget; unauthenticated requests fall back to the client address.
"""

import hashlib

from slowapi import Limiter
from slowapi.util import get_remote_address
from starlette.requests import Request

from leaddesk.core.config import get_settings


def caller_key(request: Request) -> str:
    authorization = request.headers.get("authorization", "")
    if authorization.lower().startswith("bearer "):
        return "token:" + hashlib.sha256(authorization[7:].encode()).hexdigest()[:32]
    return get_remote_address(request)


limiter = Limiter(key_func=caller_key)


def _search_limit() -> str:
    return get_settings().search_rate_limit


limit_search = limiter.limit(_search_limit)
