from __future__ import annotations

__all__ = [
    "GRPCIO_HEADER_ACCEPT_COMPRESSION",
    "GRPC_HEADER_ACCEPT_COMPRESSION",
    "accept_encoding_metadata",
]

from ._protocol_grpc import (
    GRPC_HEADER_ACCEPT_COMPRESSION,
    GRPCIO_HEADER_ACCEPT_COMPRESSION,
    accept_encoding_metadata,
)
