from __future__ import annotations

__all__ = ["Compression"]


from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    import grpc


class Compression(Protocol):
    """Protocol for compression methods a server can negotiate.

    Compression itself is performed by the gRPC transport, so an implementation
    only describes the method: the token exchanged in ``grpc-accept-encoding``
    and ``grpc-encoding`` headers, and the grpcio algorithm it maps to. We
    provide standard implementations for

    - gzip (rpcnegotiate.compression.gzip.GzipCompression)
    - deflate (rpcnegotiate.compression.deflate.DeflateCompression)
    """

    def name(self) -> str:
        """Returns the name of the compression method. This value is used in gRPC
        headers to indicate accepted and used compression.
        """
        ...

    def grpc_algorithm(self) -> grpc.Compression:
        """Returns the grpcio algorithm to apply to a call's responses."""
        ...
