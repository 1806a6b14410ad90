from __future__ import annotations

__all__ = ["__version__"]

from ._version import __version__
