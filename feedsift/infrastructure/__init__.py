"""Infrastructure layer components.

Adapters for state that lives outside the pipeline, such as the persisted
source catalog.
"""

from feedsift.infrastructure.source_store import (
    FileSourceConfigStore,
    InMemorySourceConfigStore,
    SourceConfigStore,
    StoreTransaction,
)

__all__ = [
    "SourceConfigStore",
    "StoreTransaction",
    "InMemorySourceConfigStore",
    "FileSourceConfigStore",
]
