from __future__ import annotations

from typing import TYPE_CHECKING

from ._compression import get_accept_encoding

if TYPE_CHECKING:
    from collections.abc import Iterable

    from .compression import Compression
    from .negotiator import CompressionNegotiator

    Metadata = Iterable[tuple[str, str | bytes]]

GRPC_HEADER_ACCEPT_COMPRESSION = "grpc-accept-encoding"
# grpc-core consumes grpc-accept-encoding itself and never hands it to the
# application, so grpcio servers read the declaration from this key instead.
GRPCIO_HEADER_ACCEPT_COMPRESSION = "x-grpc-accept-encoding"


def get_metadata_value(metadata: Metadata | None, key: str) -> str | None:
    """Returns the last ASCII value of key in metadata, matching the key
    case-insensitively. Binary values are never returned.
    """
    if not metadata:
        return None
    key = key.lower()
    value = None
    for k, v in metadata:
        if isinstance(v, str) and k.lower() == key:
            value = v
    return value


def negotiate_response_compression(
    negotiator: CompressionNegotiator,
    metadata: Metadata | None,
    key: str = GRPC_HEADER_ACCEPT_COMPRESSION,
) -> Compression:
    accept_compression = get_metadata_value(metadata, key)
    return negotiator.negotiate(accept_compression)


def accept_encoding_metadata(
    accept_compression: Iterable[str] | None = None,
    *,
    key: str = GRPC_HEADER_ACCEPT_COMPRESSION,
) -> tuple[str, str]:
    """Returns the metadata pair declaring the compressions a client can decode.
    If accept_compression is None, all built-in compressions are declared.

    Args:
        accept_compression: The names of the compressions the client accepts.
        key: The metadata key the server reads the declaration from. grpcio
            clients can't send grpc-accept-encoding themselves and must use
            GRPCIO_HEADER_ACCEPT_COMPRESSION.
    """
    if accept_compression is not None:
        return (key, ",".join(accept_compression))
    return (key, get_accept_encoding())
