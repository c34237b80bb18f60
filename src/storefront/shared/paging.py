"""Opaque page tokens for list endpoints.

A token encodes the offset of the next page. Clients treat it as an opaque
string and hand it back unchanged to fetch the following page.
"""

import base64
import binascii
from dataclasses import dataclass, field
from typing import Any

from storefront.shared.errors import MalformedInput

_PREFIX = "offset:"


def encode_token(offset: int) -> str:
    raw = f"{_PREFIX}{offset}".encode()
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode_token(token: str | None) -> int:
    if not token:
        return 0
    try:
        raw = base64.urlsafe_b64decode(token.encode("ascii")).decode()
    except (binascii.Error, UnicodeError, ValueError):
        raise MalformedInput({"next_token": ["Next token must be a token returned by a previous page."]}) from None

    if not raw.startswith(_PREFIX) or not raw[len(_PREFIX) :].isdigit():
        raise MalformedInput({"next_token": ["Next token must be a token returned by a previous page."]})
    return int(raw[len(_PREFIX) :])


@dataclass
class Page:
    results: list[Any] = field(default_factory=list)
    next_token: str | None = None


def paginate(query, page_size: int, next_token: str | None = None) -> Page:
    """Run ``query`` for one page.

    ``query`` is a Protean QuerySet; ordering must already be applied so pages
    are stable.
    """
    if page_size <= 0:
        raise MalformedInput({"page_size": ["Page size must be a positive integer or be omitted."]})

    offset = decode_token(next_token)
    result = query.limit(page_size).offset(offset).all()
    items = list(result.items)

    following = offset + len(items)
    token = encode_token(following) if items and following < result.total else None
    return Page(results=items, next_token=token)
