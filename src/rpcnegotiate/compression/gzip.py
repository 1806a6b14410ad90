from __future__ import annotations

import grpc

from . import Compression


class GzipCompression(Compression):
    """Compression implementation using GZip."""

    def name(self) -> str:
        return "gzip"

    def grpc_algorithm(self) -> grpc.Compression:
        return grpc.Compression.Gzip
