from __future__ import annotations

import dataclasses

import pytest

from rpcnegotiate.config import ENV_SERVER_COMPRESSION, ServerCompressionConfig
from rpcnegotiate.negotiator import CompressionNegotiator

from ._util import XGzipCompression


@pytest.mark.parametrize(
    ("setting", "names"),
    [
        pytest.param(None, (), id="unset"),
        pytest.param("", (), id="empty"),
        pytest.param("identity", (), id="identity"),
        pytest.param("gzip", ("gzip",), id="gzip"),
        pytest.param(" gzip , deflate ", ("gzip", "deflate"), id="list"),
        pytest.param("identity,deflate", ("deflate",), id="identity dropped"),
    ],
)
def test_from_setting(setting: str | None, names: tuple[str, ...]) -> None:
    config = ServerCompressionConfig.from_setting(setting)
    assert config.names() == names
    assert config.enabled == bool(names)


@pytest.mark.parametrize("setting", ["br", "gzip,zstd", "GZIP"])
def test_from_setting_unsupported(setting: str) -> None:
    with pytest.raises(ValueError, match=r"Unsupported compression method: .*") as e:
        ServerCompressionConfig.from_setting(setting)
    assert str(e.value).endswith("Available methods: deflate, gzip, identity")


def test_from_environ() -> None:
    config = ServerCompressionConfig.from_environ({ENV_SERVER_COMPRESSION: "gzip"})
    assert config.names() == ("gzip",)
    assert not ServerCompressionConfig.from_environ({}).enabled


def test_from_environ_defaults_to_os_environ(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(ENV_SERVER_COMPRESSION, "deflate")
    assert ServerCompressionConfig.from_environ().names() == ("deflate",)
    monkeypatch.delenv(ENV_SERVER_COMPRESSION)
    assert ServerCompressionConfig.from_environ().names() == ()


def test_config_is_immutable() -> None:
    config = ServerCompressionConfig.from_setting("gzip")
    with pytest.raises(dataclasses.FrozenInstanceError):
        config.compressions = ()  # pyright:ignore[reportAttributeAccessIssue]


@pytest.mark.parametrize(
    ("accept_encoding", "name"),
    [
        pytest.param(None, "identity", id="absent"),
        pytest.param("", "identity", id="empty"),
        pytest.param("identity", "identity", id="identity"),
        pytest.param("gzip", "gzip", id="gzip"),
        pytest.param("identity,gzip,deflate", "gzip", id="gzip among others"),
        pytest.param("identity,deflate,snappy", "identity", id="unsupported"),
        pytest.param(" gzip , identity ", "gzip", id="whitespace"),
    ],
)
def test_negotiator(accept_encoding: str | None, name: str) -> None:
    negotiator = CompressionNegotiator(ServerCompressionConfig.from_setting("gzip"))
    assert negotiator.negotiate(accept_encoding).name() == name


def test_negotiator_unset_config() -> None:
    negotiator = CompressionNegotiator(ServerCompressionConfig())
    assert negotiator.negotiate("gzip").name() == "identity"


def test_negotiator_custom_compression() -> None:
    config = ServerCompressionConfig(compressions=(XGzipCompression(),))
    negotiator = CompressionNegotiator(config)
    assert negotiator.config is config
    assert negotiator.negotiate("gzip, x-gzip").name() == "x-gzip"


def test_from_setting_custom_compressions() -> None:
    config = ServerCompressionConfig.from_setting(
        "x-gzip, identity", [XGzipCompression()]
    )
    assert config.names() == ("x-gzip",)
    with pytest.raises(ValueError, match=r"Unsupported compression method: gzip"):
        ServerCompressionConfig.from_setting("gzip", [XGzipCompression()])
