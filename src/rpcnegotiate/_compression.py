from __future__ import annotations

import functools
from typing import TYPE_CHECKING

import grpc

from .compression import Compression
from .compression.deflate import DeflateCompression
from .compression.gzip import GzipCompression

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

IDENTITY = "identity"


class IdentityCompression(Compression):
    def name(self) -> str:
        return IDENTITY

    def grpc_algorithm(self) -> grpc.Compression:
        """Leave responses uncompressed."""
        return grpc.Compression.NoCompression


_identity = IdentityCompression()

_gzip = GzipCompression()
_deflate = DeflateCompression()
_default_compressions: dict[str, Compression] = {
    "gzip": _gzip,
    "deflate": _deflate,
    IDENTITY: _identity,
}


def get_accept_encoding() -> str:
    return ",".join(name for name in _default_compressions if name != IDENTITY)


def resolve_compression(
    name: str, compressions: Mapping[str, Compression] | None = None
) -> Compression:
    if compressions is None:
        compressions = _default_compressions
    compression = compressions.get(name)
    if compression is None:
        msg = (
            f"Unsupported compression method: {name}. "
            f"Available methods: {', '.join(sorted(compressions))}"
        )
        raise ValueError(msg)
    return compression


def resolve_compressions(
    compressions: Sequence[Compression] | None,
) -> dict[str, Compression]:
    if compressions is None:
        return dict(_default_compressions)
    res = {comp.name(): comp for comp in compressions}
    # identity is always supported
    res[IDENTITY] = _identity
    return res


@functools.lru_cache(maxsize=256)
def parse_accept_encoding(accept_encoding: str) -> tuple[str, ...]:
    # Empty and repeated tokens are kept, they simply never match a compression.
    return tuple(token.strip() for token in accept_encoding.split(","))


def negotiate_compression(
    server_compressions: Sequence[Compression] | None, accept_encoding: str | None
) -> Compression:
    """Selects the compression for a response.

    Only a compression the server offers and the client explicitly lists is ever
    selected. When several are offered, the server's order decides, the order of
    the client's list does not. Anything else, including a malformed header,
    results in identity.

    Args:
        server_compressions: The compressions the server is configured with, in
            preference order.
        accept_encoding: The raw grpc-accept-encoding value sent by the client.

    Returns:
        The compression to apply, IdentityCompression for none.
    """
    offered = [
        comp
        for comp in server_compressions or ()
        if comp.name() and comp.name() != IDENTITY
    ]
    if not offered:
        return _identity

    if not accept_encoding:
        return _identity

    accepted = parse_accept_encoding(accept_encoding)
    if accepted == (IDENTITY,):
        return _identity

    for compression in offered:
        if compression.name() in accepted:
            return compression
    return _identity
