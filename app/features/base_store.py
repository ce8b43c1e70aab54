"""
Shared cache handling for entity stores.

A store keeps the last fetched list of one entity plus a loading flag.
Mutations reach the cache only after the remote call has succeeded; a
failed call leaves the cache untouched and there is no rollback or resync.
"""
import logging
import threading
from typing import Any, Callable, Dict, Generic, List, Optional, Type, TypeVar
from pydantic import BaseModel, ValidationError as SchemaError
from app.core.exceptions import DataServiceError
from app.core.results import ErrorKind, OperationResult
from app.infrastructure.dataservice import DataServiceClient

M = TypeVar("M", bound=BaseModel)

UNEXPECTED_RESPONSE = "Unexpected response from data service"


class BaseStore(Generic[M]):
    """Cached list of one entity backed by a remote table."""

    table: str = ""
    model: Type[M]

    def __init__(self, client: DataServiceClient):
        """
        Initialize store.

        Args:
            client: Data service client used for every remote call
        """
        self.client = client
        self.items: List[M] = []
        self.loading = False
        self._lock = threading.RLock()
        self.logger = logging.getLogger(self.__class__.__module__)

    # Cache helpers. Remote calls never happen while the lock is held.

    def _set_items(self, items: List[M]) -> None:
        with self._lock:
            self.items = list(items)

    def _append(self, item: M) -> None:
        with self._lock:
            self.items = [*self.items, item]

    def _prepend(self, item: M) -> None:
        with self._lock:
            self.items = [item, *self.items]

    def _merge(self, record_id: str, changes: Dict[str, Any]) -> Optional[M]:
        """Apply changes to the cached record with record_id, if present."""
        merged = None
        with self._lock:
            updated = []
            for item in self.items:
                if getattr(item, "id") == record_id:
                    item = item.model_copy(update=changes)
                    merged = item
                updated.append(item)
            self.items = updated
        return merged

    def _remove(self, record_id: str) -> None:
        with self._lock:
            self.items = [item for item in self.items if getattr(item, "id") != record_id]

    def _find(self, record_id: str) -> Optional[M]:
        return next((item for item in self.items if getattr(item, "id") == record_id), None)

    def _filter(self, predicate: Callable[[M], bool]) -> List[M]:
        return [item for item in self.items if predicate(item)]

    def _fetch(self, operation: str, load: Callable[[], List[M]]) -> OperationResult[List[M]]:
        """
        Run a full reload with the loading flag set around it.

        A response that arrives after a newer one still overwrites the cache.
        """
        self.loading = True
        try:
            items = load()
        except DataServiceError as e:
            return self._remote_failure(operation, e)
        except SchemaError as e:
            return self._unexpected_row(operation, e)
        finally:
            self.loading = False

        self._set_items(items)
        self.logger.info(f"{operation}: {len(items)} records loaded")
        return OperationResult.ok(items)

    def _from_row(self, row: Dict[str, Any]) -> M:
        """Build the cached record from a remote row."""
        return self.model.model_validate(row)

    def _remote_failure(self, operation: str, exc: DataServiceError) -> OperationResult:
        self.logger.error(f"Error in {operation}: {exc.message}")
        return OperationResult.fail(ErrorKind.REMOTE_FAILURE, detail=exc.message)

    def _unexpected_row(self, operation: str, exc: SchemaError) -> OperationResult:
        """The remote call succeeded but its row does not fit the model."""
        self.logger.error(f"Error in {operation}: unexpected row shape: {str(exc)}")
        return OperationResult.fail(ErrorKind.REMOTE_FAILURE, detail=UNEXPECTED_RESPONSE)
