"""Pluggable record storage for community registrations."""

from jive_sdk.persistence.file import FilePersistence
from jive_sdk.persistence.memory import MemoryPersistence
from jive_sdk.persistence.protocol import PersistenceProtocol

__all__ = ["FilePersistence", "MemoryPersistence", "PersistenceProtocol"]
