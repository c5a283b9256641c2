import logging
import threading
from typing import Any, Dict, Generic, Iterable, List, Optional, Type, TypeVar, Union

from pydantic import BaseModel, ValidationError

from common.errors import ErrorKind, ServiceError, invalid

T = TypeVar("T", bound=BaseModel)

Fields = Union[Dict[str, Any], BaseModel]


class InMemoryRepository(Generic[T]):
    """
    Ordered in-memory collection keyed by ``id``.

    Subclasses set ``model``, ``entity`` (the error-code prefix, e.g. PRODUCT),
    ``label`` (used in messages) and ``logger_name``, and override
    ``check_fields`` to validate and normalise incoming values. Records are
    stored and handed out as copies, and every read-modify-write runs under
    one lock.
    """

    model: Type[T]
    entity = "RECORD"
    label = "Record"
    logger_name = "repository"

    def __init__(self, seed: Iterable[T] = ()):
        self._seed: List[T] = [record.model_copy() for record in seed]
        self._records: List[T] = []
        self._lock = threading.Lock()
        self._logger = logging.getLogger(self.logger_name)
        self.reset()

    # -- hooks -------------------------------------------------------------

    def check_fields(self, fields: Dict[str, Any]) -> Dict[str, Any]:
        return dict(fields)

    # -- errors ------------------------------------------------------------

    def not_found(self, record_id: str) -> ServiceError:
        return ServiceError(
            ErrorKind.NOT_FOUND,
            f"{self.entity}_NOT_FOUND",
            f"{self.label} with id '{record_id}' not found",
        )

    def already_exists(self, record_id: str) -> ServiceError:
        return ServiceError(
            ErrorKind.ALREADY_EXISTS,
            f"{self.entity}_ALREADY_EXISTS",
            f"{self.label} with id '{record_id}' already exists",
        )

    # -- operations ----------------------------------------------------------

    def reset(self, records: Optional[Iterable[T]] = None):
        """Restore the seed records, or replace the contents with ``records``."""
        source = self._seed if records is None else list(records)
        with self._lock:
            self._records = [record.model_copy() for record in source]

    def list(self) -> List[T]:
        with self._lock:
            return [record.model_copy() for record in self._records]

    def find_by_id(self, record_id: str) -> Optional[T]:
        with self._lock:
            idx = self._index_of(record_id)
            if idx is None:
                return None
            return self._records[idx].model_copy()

    def create(self, fields: Fields) -> T:
        data = _as_dict(fields)
        record_id = data.get("id")
        with self._lock:
            if record_id is not None and self._index_of(str(record_id)) is not None:
                raise self.already_exists(str(record_id))
            record = self._build(self.check_fields(data))
            self._records.append(record)
        self._logger.info(f"Created {self.label.lower()} {record.id}")
        return record.model_copy()

    def update(self, record_id: str, fields: Fields) -> T:
        changes = _as_dict(fields)
        changes.pop("id", None)
        with self._lock:
            idx = self._index_of(record_id)
            if idx is None:
                raise self.not_found(record_id)
            current = self._records[idx]
            updated = self._build({**current.model_dump(), **self.check_fields(changes)})
            self._records[idx] = updated
        self._logger.info(f"Updated {self.label.lower()} {record_id}: {sorted(changes)}")
        return updated.model_copy()

    def delete(self, record_id: str):
        with self._lock:
            idx = self._index_of(record_id)
            if idx is None:
                raise self.not_found(record_id)
            del self._records[idx]
        self._logger.info(f"Deleted {self.label.lower()} {record_id}")

    # -- internals -----------------------------------------------------------

    def _index_of(self, record_id: str) -> Optional[int]:
        for idx, record in enumerate(self._records):
            if record.id == record_id:
                return idx
        return None

    def _build(self, data: Dict[str, Any]) -> T:
        try:
            return self.model.model_validate(data)
        except ValidationError as exc:
            fields = ", ".join(str(err["loc"][0]) for err in exc.errors() if err["loc"])
            raise invalid("INVALID_PAYLOAD", f"Invalid or missing fields: {fields}") from exc


def _as_dict(fields: Fields) -> Dict[str, Any]:
    if isinstance(fields, BaseModel):
        return fields.model_dump(exclude_none=True)
    return {key: value for key, value in fields.items() if value is not None}
