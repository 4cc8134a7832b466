"""Registry of recognised template file extensions.

Discovery asks the registry whether a file's last extension belongs to a
template handler. The registry is read fresh on every discovery pass, so
registering an extension affects every component compiled afterwards.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator


class ExtensionRegistry:
    """Set-like collection of template extensions (without the leading dot).

    Supports:
        - registry.register("mako")
        - registry.unregister("mak")
        - "mako" in registry
        - sorted(registry)

    All mutations use copy-on-write for thread-safety: readers always see a
    complete frozenset, never one being modified.
    """

    __slots__ = ("_extensions",)

    def __init__(self, extensions: Iterable[str] = ()):
        self._extensions: frozenset[str] = frozenset(_normalize(e) for e in extensions)

    def register(self, *extensions: str) -> None:
        self._extensions = self._extensions | {_normalize(e) for e in extensions}

    def unregister(self, *extensions: str) -> None:
        self._extensions = self._extensions - {_normalize(e) for e in extensions}

    def snapshot(self) -> frozenset[str]:
        """Return the current extensions as an immutable set."""
        return self._extensions

    def __contains__(self, extension: object) -> bool:
        return extension in self._extensions

    def __iter__(self) -> Iterator[str]:
        return iter(self._extensions)

    def __len__(self) -> int:
        return len(self._extensions)

    def __repr__(self) -> str:
        return f"ExtensionRegistry({sorted(self._extensions)!r})"


def _normalize(extension: str) -> str:
    return extension.lstrip(".")


TEMPLATE_EXTENSIONS = ExtensionRegistry({"mako"})
