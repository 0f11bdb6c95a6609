"""Source configuration store.

The store owns the persisted SourceCatalog. Callers borrow it through
`read()`, `write()` or a `transaction()` read-modify-write. All three share
one re-entrant lock per store, so concurrent rebalances cannot interleave.
"""

import json
import threading
from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from feedsift.config.sources import SourceCatalog
from feedsift.core.config_loader import load_yaml_file
from feedsift.core.exceptions import ConfigNotFoundError, SourceConfigError
from feedsift.core.logging import get_logger

logger = get_logger(__name__)


def parse_catalog(document: Any, location: str | None = None) -> SourceCatalog:
    """Validate a raw document into a SourceCatalog.

    Args:
        document: Parsed YAML/JSON content
        location: Where the document came from, for error context

    Returns:
        Validated catalog

    Raises:
        SourceConfigError: If the document has the wrong shape
    """
    try:
        return SourceCatalog.model_validate(document)
    except ValidationError as e:
        errors = [
            f"{'.'.join(str(p) for p in err['loc']) or '<root>'}: {err['msg']}"
            for err in e.errors()
        ]
        logger.error("Source catalog invalid", location=location, errors=errors[:5])
        raise SourceConfigError(errors, config_path=location) from e


class StoreTransaction:
    """Handle yielded by `SourceConfigStore.transaction()`.

    Attributes:
        catalog: Catalog read at the start of the transaction
        updated: Catalog to persist on exit (None leaves the store untouched)
    """

    def __init__(self, catalog: SourceCatalog):
        self.catalog = catalog
        self.updated: SourceCatalog | None = None

    def commit(self, catalog: SourceCatalog) -> None:
        """Stage `catalog` to be written when the transaction closes."""
        self.updated = catalog


class SourceConfigStore(ABC):
    """Abstract single-writer store for the source catalog."""

    def __init__(self) -> None:
        self._lock = threading.RLock()

    @abstractmethod
    def _load(self) -> SourceCatalog:
        """Read and validate the stored document."""

    @abstractmethod
    def _save(self, catalog: SourceCatalog) -> None:
        """Persist the catalog."""

    def read(self) -> SourceCatalog:
        """Read the current catalog."""
        with self._lock:
            return self._load()

    def write(self, catalog: SourceCatalog) -> None:
        """Replace the stored catalog."""
        with self._lock:
            self._save(catalog)

    @contextmanager
    def transaction(self) -> Iterator[StoreTransaction]:
        """Serialized read-modify-write.

        The staged catalog is written only if the block exits cleanly.

        Example:
            >>> with store.transaction() as txn:
            ...     txn.commit(update(txn.catalog))
        """
        with self._lock:
            txn = StoreTransaction(self._load())
            yield txn
            if txn.updated is not None:
                self._save(txn.updated)


class InMemorySourceConfigStore(SourceConfigStore):
    """Store backed by an in-process document (tests, dry runs)."""

    def __init__(self, document: dict[str, Any] | SourceCatalog | None = None):
        super().__init__()
        if isinstance(document, SourceCatalog):
            document = document.to_document()
        self._document: Any = document if document is not None else {"sources": []}
        self.write_count = 0

    def _load(self) -> SourceCatalog:
        return parse_catalog(self._document, location="memory")

    def _save(self, catalog: SourceCatalog) -> None:
        self._document = catalog.to_document()
        self.write_count += 1


class FileSourceConfigStore(SourceConfigStore):
    """Store backed by a YAML or JSON file.

    The format is chosen by suffix: `.json` is written as JSON, anything
    else as YAML. Writes go to a temporary sibling that replaces the
    original.
    """

    def __init__(self, path: Path | str):
        super().__init__()
        self.path = Path(path)

    def _load(self) -> SourceCatalog:
        if not self.path.exists():
            logger.error("Source store not found", path=str(self.path))
            raise ConfigNotFoundError("sources", config_path=str(self.path))
        document = load_yaml_file(self.path, "sources")
        return parse_catalog(document, location=str(self.path))

    def _save(self, catalog: SourceCatalog) -> None:
        document = catalog.to_document()
        if self.path.suffix.lower() == ".json":
            text = json.dumps(document, indent=2, ensure_ascii=False) + "\n"
        else:
            text = yaml.safe_dump(document, sort_keys=False, allow_unicode=True)

        tmp_path = self.path.with_name(self.path.name + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(self.path)
        logger.info("Source catalog saved", path=str(self.path), sources=len(catalog.sources))


__all__ = [
    "parse_catalog",
    "StoreTransaction",
    "SourceConfigStore",
    "InMemorySourceConfigStore",
    "FileSourceConfigStore",
]
