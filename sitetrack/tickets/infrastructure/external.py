"""
Ticket Infrastructure
=====================

Loading of the origin table:
- YAML file parsing into OriginTableConfig
- Optional hot reload via watchdog
"""

import threading
from pathlib import Path
from typing import Optional

import yaml
from pydantic import ValidationError as PydanticValidationError
from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from sitetrack.core.exceptions import ConfigurationException
from sitetrack.shared.infrastructure.logging import get_logger
from sitetrack.tickets.application.services import IOriginTableProvider
from sitetrack.tickets.domain.value_objects import OriginTable, OriginTableConfig

logger = get_logger(__name__)


class OriginTableFileHandler(FileSystemEventHandler):
    """Watchdog event handler for origin table file changes."""

    def __init__(self, manager: "OriginTableManager", path: Path):
        self.manager = manager
        self.path = path
        super().__init__()

    def on_modified(self, event):
        """Handle file modification event."""
        if event.is_directory:
            return
        if Path(event.src_path).resolve() == self.path.resolve():
            logger.info("Origin table changed", extra={"path": str(event.src_path)})
            self.manager.reload()


class OriginTableManager(IOriginTableProvider):
    """
    Thread-safe origin table holder with hot-reload support.

    Serves as the ticket service's table provider, so a reload reaches
    the next ticket opened without rebuilding the service.

    Every load builds a new immutable OriginTable; tables already handed
    out to services are never modified.
    """

    def __init__(self):
        self._table: Optional[OriginTable] = None
        self._lock = threading.Lock()
        self._path: Optional[Path] = None
        self._observer = None

    def load(self, path: Path) -> OriginTable:
        """
        Initial table load.

        Raises:
            ConfigurationException: If the file exists but is invalid
        """
        self._path = Path(path)
        table = self._load_from_file(self._path)
        with self._lock:
            self._table = table
        return table

    def _load_from_file(self, path: Path) -> OriginTable:
        """Load and parse the YAML table."""
        if not path.exists():
            logger.warning("Origin table not found, using defaults", extra={"path": str(path)})
            return OriginTable.default()

        with open(path, "r", encoding="utf-8") as f:
            try:
                data = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise ConfigurationException(f"Invalid YAML in {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationException(f"Origin table {path} must be a mapping")

        try:
            return OriginTableConfig(**data).freeze()
        except PydanticValidationError as e:
            raise ConfigurationException(
                f"Invalid origin table {path}",
                {"errors": e.errors(include_url=False)}
            ) from e

    def reload(self) -> bool:
        """Reload the table from file, keeping the previous one on failure."""
        if self._path is None:
            return False

        try:
            new_table = self._load_from_file(self._path)
        except ConfigurationException as e:
            logger.error("Failed to reload origin table", extra={"error": e.message})
            return False

        with self._lock:
            self._table = new_table
        logger.info("Origin table reloaded successfully")
        return True

    def start_watching(self) -> None:
        """
        Start watching the table file for changes.

        Skipped when the file does not exist or inotify is unavailable.
        """
        if self._path is None:
            raise RuntimeError("Origin table not loaded. Call load() first.")

        if not self._path.exists():
            logger.info(
                "Origin table file doesn't exist, skipping file watch",
                extra={"path": str(self._path)}
            )
            return

        try:
            self._observer = Observer()
            handler = OriginTableFileHandler(self, self._path)
            self._observer.schedule(handler, str(self._path.parent), recursive=False)
            self._observer.start()
            logger.info("Started watching origin table", extra={"path": str(self._path)})
        except OSError as e:
            logger.warning("File watching not available, using static table", extra={"error": str(e)})
            self._observer = None

    def stop_watching(self) -> None:
        """Stop watching (safe to call even if not watching)."""
        if self._observer is not None:
            self._observer.stop()
            self._observer.join(timeout=5)
            self._observer = None

    def get_table(self) -> OriginTable:
        """Get the current table."""
        return self.table

    @property
    def table(self) -> OriginTable:
        """Get the current table."""
        with self._lock:
            if self._table is None:
                raise RuntimeError("Origin table not loaded")
            return self._table
