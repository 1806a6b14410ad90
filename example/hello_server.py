from __future__ import annotations

import argparse
import logging
from concurrent import futures
from typing import TYPE_CHECKING

import grpc
from google.protobuf.wrappers_pb2 import StringValue

from rpcnegotiate.config import ServerCompressionConfig
from rpcnegotiate.interceptor import (
    GRPCIO_HEADER_ACCEPT_COMPRESSION,
    CompressionInterceptor,
    LoggingInterceptor,
)

if TYPE_CHECKING:
    from collections.abc import Sequence

SERVICE_NAME = "hello.HelloGrpc"
SAY_HELLO_METHOD = f"/{SERVICE_NAME}/SayHello"

logger = logging.getLogger(__name__)


def say_hello(request: StringValue, context: grpc.ServicerContext) -> StringValue:
    return StringValue(value=f"Hello {request.value}!")


def hello_handler() -> grpc.GenericRpcHandler:
    return grpc.method_handlers_generic_handler(
        SERVICE_NAME,
        {
            "SayHello": grpc.unary_unary_rpc_method_handler(
                say_hello,
                request_deserializer=StringValue.FromString,
                response_serializer=StringValue.SerializeToString,
            )
        },
    )


def create_server(
    config: ServerCompressionConfig,
    *,
    address: str = "localhost:0",
    metadata_key: str = GRPCIO_HEADER_ACCEPT_COMPRESSION,
    explicit_identity: bool = False,
    interceptors: Sequence[grpc.ServerInterceptor] = (),
) -> tuple[grpc.Server, int]:
    """Creates the hello server, not yet started, and returns it with its port.

    Args:
        config: The server's compression configuration.
        address: The address to listen on.
        metadata_key: The metadata key clients declare accepted compressions under.
        explicit_identity: Whether calls negotiating no compression explicitly
            disable it.
        interceptors: Additional interceptors, run before the built-in ones.
    """
    server = grpc.server(
        futures.ThreadPoolExecutor(max_workers=4),
        interceptors=[
            *interceptors,
            LoggingInterceptor(),
            CompressionInterceptor(
                config,
                metadata_key=metadata_key,
                explicit_identity=explicit_identity,
            ),
        ],
    )
    server.add_generic_rpc_handlers((hello_handler(),))
    port = server.add_insecure_port(address)
    if not config.enabled:
        logger.warning("No response compression configured")
    return server, port


class Args(argparse.Namespace):
    address: str
    compression: str | None
    metadata_key: str
    explicit_identity: bool


def main(argv: Sequence[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Hello server")
    parser.add_argument("--address", default="localhost:9000")
    parser.add_argument(
        "--compression",
        help="Comma-separated response compressions, defaults to the "
        "RPCNEGOTIATE_SERVER_COMPRESSION environment variable",
    )
    parser.add_argument(
        "--metadata-key",
        default=GRPCIO_HEADER_ACCEPT_COMPRESSION,
        help="Metadata key clients declare accepted compressions under",
    )
    parser.add_argument("--explicit-identity", action="store_true")
    args = parser.parse_args(argv, namespace=Args())

    logging.basicConfig(level=logging.INFO)
    if args.compression is not None:
        config = ServerCompressionConfig.from_setting(args.compression)
    else:
        config = ServerCompressionConfig.from_environ()

    server, port = create_server(
        config,
        address=args.address,
        metadata_key=args.metadata_key,
        explicit_identity=args.explicit_identity,
    )
    server.start()
    names = ", ".join(config.names()) or "none"
    print(f"Listening on port {port}, response compressions: {names}")  # noqa: T201
    server.wait_for_termination()


if __name__ == "__main__":
    main()
