from __future__ import annotations

from typing import TYPE_CHECKING, Any

import grpc

from ._interceptor_shared import log_call, rebuild_handler, select_call_compression
from ._protocol_grpc import GRPC_HEADER_ACCEPT_COMPRESSION
from .negotiator import CompressionNegotiator

if TYPE_CHECKING:
    from collections.abc import Callable

    from .config import ServerCompressionConfig


class CompressionInterceptor(grpc.ServerInterceptor):
    """A server interceptor that negotiates the compression of each call's
    responses from the client's accept-encoding metadata.

    Responses are only compressed when the client explicitly declares support for
    a compression the server is configured with.
    """

    def __init__(
        self,
        config: ServerCompressionConfig,
        *,
        metadata_key: str = GRPC_HEADER_ACCEPT_COMPRESSION,
        explicit_identity: bool = False,
    ) -> None:
        """Creates a new CompressionInterceptor.

        Args:
            config: The server's compression configuration.
            metadata_key: The metadata key the client declares the compressions it
                accepts under. grpc-core consumes grpc-accept-encoding before
                interceptors run, so grpcio servers must use a key clients can
                send, such as GRPCIO_HEADER_ACCEPT_COMPRESSION.
            explicit_identity: Whether to explicitly disable compression on calls
                that negotiate none. Only needed when the server is created with a
                default compression, which would otherwise apply to those calls.
        """
        self._negotiator = CompressionNegotiator(config)
        self._metadata_key = metadata_key
        self._explicit_identity = explicit_identity

    def intercept_service(
        self,
        continuation: Callable[
            [grpc.HandlerCallDetails], grpc.RpcMethodHandler | None
        ],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler | None:
        algorithm = select_call_compression(
            self._negotiator,
            handler_call_details,
            metadata_key=self._metadata_key,
            explicit_identity=self._explicit_identity,
        )
        handler = continuation(handler_call_details)
        if handler is None or algorithm is None:
            return handler
        return rebuild_handler(
            handler, lambda behavior: _with_compression(behavior, algorithm)
        )


def _with_compression(
    behavior: Callable[[Any, grpc.ServicerContext], Any], algorithm: grpc.Compression
) -> Callable[[Any, grpc.ServicerContext], Any]:
    def behavior_with_compression(
        request_or_iterator: Any, context: grpc.ServicerContext
    ) -> Any:
        context.set_compression(algorithm)
        return behavior(request_or_iterator, context)

    return behavior_with_compression


class LoggingInterceptor(grpc.ServerInterceptor):
    """A server interceptor that logs the method and metadata of each call."""

    def intercept_service(
        self,
        continuation: Callable[
            [grpc.HandlerCallDetails], grpc.RpcMethodHandler | None
        ],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler | None:
        log_call(handler_call_details)
        return continuation(handler_call_details)
