"""Registry of active ticket providers."""

import logging
from collections.abc import Iterable, Iterator

from django.utils.module_loading import import_string

from tickets.domain.errors import DuplicateProviderError, UnknownProviderError
from tickets.providers.interfaces import TicketProvider

logger = logging.getLogger(__name__)


class ProviderRegistry:
    """Maps provider keys to their single instance, in registration order."""

    def __init__(self) -> None:
        self._providers: dict[str, TicketProvider] = {}

    def register(self, key: str, provider: TicketProvider, *, replace: bool = False) -> None:
        """Register ``provider`` under ``key``.

        Raises:
            DuplicateProviderError: If the key is taken and ``replace`` is false.
        """
        if key in self._providers and not replace:
            raise DuplicateProviderError(key)
        if key in self._providers:
            logger.info("Replacing ticket provider %s", key)
        else:
            logger.debug("Registered ticket provider %s", key)
        # dict assignment keeps the original position on replace
        self._providers[key] = provider

    def resolve(self, key: str) -> TicketProvider:
        """Return the provider registered under ``key``.

        Raises:
            UnknownProviderError: If no provider has that key.
        """
        try:
            return self._providers[key]
        except KeyError:
            raise UnknownProviderError(key) from None

    def is_valid(self, key: str) -> bool:
        return key in self._providers

    def keys(self) -> list[str]:
        return list(self._providers)

    def all(self) -> list[tuple[str, TicketProvider]]:
        """Return a snapshot of (key, provider) pairs in registration order."""
        return list(self._providers.items())

    def __contains__(self, key: object) -> bool:
        return key in self._providers

    def __iter__(self) -> Iterator[TicketProvider]:
        return iter(list(self._providers.values()))

    def __len__(self) -> int:
        return len(self._providers)


def build_registry(provider_paths: Iterable[str]) -> ProviderRegistry:
    """Instantiate each provider class once and register it under its key."""
    registry = ProviderRegistry()
    for path in provider_paths:
        provider_class = import_string(path)
        provider = provider_class()
        registry.register(provider.key or path, provider)
    return registry
