"""Anonymous listener identity derived from the request's apparent origin.

There is no login or cookie: a listener is whoever arrives from a given
address. The forwarded-for header is trusted as-is, so the identity is only
as good as the reverse proxy in front of the service. It collapses one
browser's repeated votes into one row and is not an authentication primitive.
"""

from __future__ import annotations

import hashlib
from typing import Final

from fastapi import Request

from radio_ratings.core.settings import Settings

DEFAULT_FORWARDED_FOR_HEADER: Final[str] = "x-forwarded-for"
UNKNOWN_CLIENT_ADDRESS: Final[str] = "0.0.0.0"
USER_ID_HEX_LENGTH: Final[int] = 16


def resolve_client_address(
    request: Request,
    header_name: str = DEFAULT_FORWARDED_FOR_HEADER,
    fallback: str = UNKNOWN_CLIENT_ADDRESS,
) -> str:
    """Return the address a request appears to come from.

    The forwarded-for header wins and is used verbatim, proxy chain included.
    Otherwise the transport peer address is used, then ``fallback``.
    """
    forwarded = request.headers.get(header_name)
    if forwarded:
        return forwarded
    if request.client is not None and request.client.host:
        return request.client.host
    return fallback


def derive_user_id(address: str) -> str:
    """Map an address to a 16-character lowercase hex listener id."""
    return hashlib.sha256(address.encode("utf-8")).hexdigest()[:USER_ID_HEX_LENGTH]


def client_user_id(request: Request, settings: Settings) -> str:
    """Derive the listener id for ``request`` using configured header and fallback."""
    address = resolve_client_address(
        request,
        header_name=settings.forwarded_for_header,
        fallback=settings.fallback_client_address,
    )
    return derive_user_id(address)
