from __future__ import annotations

__all__ = ["DeflateCompression"]

import grpc

from . import Compression


class DeflateCompression(Compression):
    """Compression implementation using Deflate."""

    def name(self) -> str:
        return "deflate"

    def grpc_algorithm(self) -> grpc.Compression:
        return grpc.Compression.Deflate
