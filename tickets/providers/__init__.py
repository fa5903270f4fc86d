from tickets.providers.interfaces import TicketProvider
from tickets.providers.registry import ProviderRegistry, build_registry

__all__ = [
    "ProviderRegistry",
    "TicketProvider",
    "build_registry",
]
