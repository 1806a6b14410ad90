from __future__ import annotations

import inspect
from typing import TYPE_CHECKING, Any

import grpc
from grpc import aio

from ._interceptor_shared import log_call, rebuild_handler, select_call_compression
from ._protocol_grpc import GRPC_HEADER_ACCEPT_COMPRESSION
from .negotiator import CompressionNegotiator

if TYPE_CHECKING:
    from collections.abc import AsyncIterator, Awaitable, Callable

    from .config import ServerCompressionConfig


class AsyncCompressionInterceptor(aio.ServerInterceptor):
    """An asyncio server interceptor that negotiates the compression of each call's
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
        """Creates a new AsyncCompressionInterceptor.

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

    async def intercept_service(
        self,
        continuation: Callable[
            [grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler | None]
        ],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler | None:
        algorithm = select_call_compression(
            self._negotiator,
            handler_call_details,
            metadata_key=self._metadata_key,
            explicit_identity=self._explicit_identity,
        )
        handler = await continuation(handler_call_details)
        if handler is None or algorithm is None:
            return handler
        return rebuild_handler(
            handler, lambda behavior: _with_compression(behavior, algorithm)
        )


def _with_compression(
    behavior: Callable[..., Any], algorithm: grpc.Compression
) -> Callable[..., Any]:
    # grpc.aio dispatches on the kind of behavior, so the wrapper must be the same
    # kind: async generator, coroutine, or plain function run in the executor.
    if inspect.isasyncgenfunction(behavior):

        async def stream_with_compression(
            request_or_iterator: Any, context: aio.ServicerContext
        ) -> AsyncIterator[Any]:
            context.set_compression(algorithm)
            async for response in behavior(request_or_iterator, context):
                yield response

        return stream_with_compression

    if inspect.iscoroutinefunction(behavior):

        async def call_with_compression(
            request_or_iterator: Any, context: aio.ServicerContext
        ) -> Any:
            context.set_compression(algorithm)
            return await behavior(request_or_iterator, context)

        return call_with_compression

    def behavior_with_compression(
        request_or_iterator: Any, context: aio.ServicerContext
    ) -> Any:
        context.set_compression(algorithm)
        return behavior(request_or_iterator, context)

    return behavior_with_compression


class AsyncLoggingInterceptor(aio.ServerInterceptor):
    """An asyncio server interceptor that logs the method and metadata of each
    call.
    """

    async def intercept_service(
        self,
        continuation: Callable[
            [grpc.HandlerCallDetails], Awaitable[grpc.RpcMethodHandler | None]
        ],
        handler_call_details: grpc.HandlerCallDetails,
    ) -> grpc.RpcMethodHandler | None:
        log_call(handler_call_details)
        return await continuation(handler_call_details)
