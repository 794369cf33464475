"""Core interfaces.

Protocols implemented by concrete adapters; the core depends on
abstractions only.
"""

from core.interfaces.providers import HostingProvider, SourceControlProvider

__all__ = ["HostingProvider", "SourceControlProvider"]
