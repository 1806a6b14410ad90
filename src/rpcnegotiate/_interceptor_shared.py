from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import grpc

from ._compression import IDENTITY
from ._protocol_grpc import get_metadata_value, negotiate_response_compression

if TYPE_CHECKING:
    from collections.abc import Callable

    from .negotiator import CompressionNegotiator

# Shared by the sync and async interceptors so both can be configured with one name.
logger = logging.getLogger("rpcnegotiate.interceptor")


def select_call_compression(
    negotiator: CompressionNegotiator,
    handler_call_details: grpc.HandlerCallDetails,
    *,
    metadata_key: str,
    explicit_identity: bool,
) -> grpc.Compression | None:
    """Negotiates the compression of one call. Returns the algorithm to set on the
    call's context, or None if the context must be left alone.
    """
    compression = negotiate_response_compression(
        negotiator, handler_call_details.invocation_metadata, metadata_key
    )
    if logger.isEnabledFor(logging.DEBUG):
        logger.debug(
            "Negotiated compression '%s' for %s (%s: %r)",
            compression.name(),
            handler_call_details.method,
            metadata_key,
            get_metadata_value(handler_call_details.invocation_metadata, metadata_key),
        )
    if compression.name() != IDENTITY:
        return compression.grpc_algorithm()
    if explicit_identity:
        return grpc.Compression.NoCompression
    return None


def log_call(handler_call_details: grpc.HandlerCallDetails) -> None:
    logger.info("Intercepting %s", handler_call_details.method)
    logger.info("Metadata(%s)", format_metadata(handler_call_details))


def format_metadata(handler_call_details: grpc.HandlerCallDetails) -> str:
    return ", ".join(
        f"{key}={value!r}"
        for key, value in handler_call_details.invocation_metadata or ()
    )


def rebuild_handler(
    handler: grpc.RpcMethodHandler, wrap: Callable[[Callable], Callable]
) -> grpc.RpcMethodHandler:
    """Returns a copy of handler with its behavior replaced by wrap(behavior)."""
    match handler.request_streaming, handler.response_streaming:
        case False, False:
            return grpc.unary_unary_rpc_method_handler(
                wrap(handler.unary_unary),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        case False, True:
            return grpc.unary_stream_rpc_method_handler(
                wrap(handler.unary_stream),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        case True, False:
            return grpc.stream_unary_rpc_method_handler(
                wrap(handler.stream_unary),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
        case _:
            return grpc.stream_stream_rpc_method_handler(
                wrap(handler.stream_stream),
                request_deserializer=handler.request_deserializer,
                response_serializer=handler.response_serializer,
            )
