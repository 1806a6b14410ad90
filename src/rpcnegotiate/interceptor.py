from __future__ import annotations

__all__ = [
    "GRPCIO_HEADER_ACCEPT_COMPRESSION",
    "GRPC_HEADER_ACCEPT_COMPRESSION",
    "AsyncCompressionInterceptor",
    "AsyncLoggingInterceptor",
    "CompressionInterceptor",
    "LoggingInterceptor",
]

from ._interceptor_async import AsyncCompressionInterceptor, AsyncLoggingInterceptor
from ._interceptor_sync import CompressionInterceptor, LoggingInterceptor
from ._protocol_grpc import (
    GRPC_HEADER_ACCEPT_COMPRESSION,
    GRPCIO_HEADER_ACCEPT_COMPRESSION,
)
