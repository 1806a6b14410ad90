from __future__ import annotations

__all__ = ["CompressionNegotiator"]

from typing import TYPE_CHECKING

from ._compression import negotiate_compression

if TYPE_CHECKING:
    from .compression import Compression
    from .config import ServerCompressionConfig


class CompressionNegotiator:
    """Chooses the compression of each call's responses for a server.

    A negotiator holds no per-call state and is safe to share between any number
    of threads or tasks.
    """

    def __init__(self, config: ServerCompressionConfig) -> None:
        """Creates a new CompressionNegotiator.

        Args:
            config: The server's compression configuration.
        """
        self._config = config

    @property
    def config(self) -> ServerCompressionConfig:
        return self._config

    def negotiate(self, accept_encoding: str | None) -> Compression:
        """Returns the compression to use given a client's grpc-accept-encoding
        value, IdentityCompression when the response must not be compressed.
        Never raises.
        """
        return negotiate_compression(self._config.compressions, accept_encoding)
