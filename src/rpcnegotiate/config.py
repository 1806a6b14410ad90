from __future__ import annotations

__all__ = ["ENV_SERVER_COMPRESSION", "ServerCompressionConfig"]

import os
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ._compression import IDENTITY, resolve_compression, resolve_compressions

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .compression import Compression

ENV_SERVER_COMPRESSION = "RPCNEGOTIATE_SERVER_COMPRESSION"


@dataclass(frozen=True, slots=True)
class ServerCompressionConfig:
    """
    The compressions a server is willing to apply to its responses.

    Built once when the server starts and shared by every call.

    Attributes:
        compressions: Compressions in server preference order. Empty means the
            server never compresses responses.
    """

    compressions: tuple[Compression, ...] = ()

    @classmethod
    def from_setting(
        cls,
        setting: str | None,
        compressions: Sequence[Compression] | None = None,
    ) -> ServerCompressionConfig:
        """Creates a config from a comma-separated list of compression names such
        as ``"gzip"`` or ``"gzip,deflate"``. An unset or empty setting, or one
        naming only identity, disables compression.

        Args:
            setting: The compression names in server preference order.
            compressions: The compressions the names may refer to. Defaults to
                the built-in gzip and deflate.

        Raises:
            ValueError: If the setting names an unsupported compression.
        """
        if not setting:
            return cls()
        available = resolve_compressions(compressions)
        names = [name.strip() for name in setting.split(",")]
        return cls(
            compressions=tuple(
                resolve_compression(name, available)
                for name in names
                if name and name != IDENTITY
            )
        )

    @classmethod
    def from_environ(
        cls, environ: Mapping[str, str] | None = None
    ) -> ServerCompressionConfig:
        """Creates a config from the RPCNEGOTIATE_SERVER_COMPRESSION variable."""
        if environ is None:
            environ = os.environ
        return cls.from_setting(environ.get(ENV_SERVER_COMPRESSION))

    def names(self) -> tuple[str, ...]:
        return tuple(comp.name() for comp in self.compressions)

    @property
    def enabled(self) -> bool:
        return any(name not in ("", IDENTITY) for name in self.names())
