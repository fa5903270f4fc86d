from tickets.stores.interfaces import EventStore

__all__ = ["EventStore"]
