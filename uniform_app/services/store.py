import logging
import threading
import uuid
from abc import ABC, abstractmethod
from typing import Dict, List, Optional, Tuple

from uniform_app import config
from uniform_app.errors import DuplicateItem, InvalidState, ItemNotFound, StudentNotFound
from uniform_app.models.inventory import InventoryItem, InventoryItemCreate
from uniform_app.models.issuance import IssuanceRecord
from uniform_app.models.student import Student, StudentCreate, StudentUpdate, UniformStatus

logger = logging.getLogger(__name__)


class InventoryStore(ABC):
    """
    Repository for uniform stock, the student registry and the issuance log.

    Items are unique per (school_id, item_type, size). Quantity changes go
    through adjust_quantity, which must apply its check and write atomically
    per item so concurrent issuances can never drive stock below zero.
    """

    # --- Inventory ---
    @abstractmethod
    def find_item(self, school_id: str, item_type: str, size: str) -> Optional[InventoryItem]:
        ...

    @abstractmethod
    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        ...

    @abstractmethod
    def list_items(self, school_id: Optional[str] = None) -> List[InventoryItem]:
        ...

    @abstractmethod
    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        ...

    @abstractmethod
    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItem:
        ...

    # --- Students ---
    @abstractmethod
    def create_student(self, data: StudentCreate) -> Student:
        ...

    @abstractmethod
    def get_student(self, student_id: str) -> Optional[Student]:
        ...

    @abstractmethod
    def list_students(self, school_id: str) -> List[Student]:
        ...

    @abstractmethod
    def update_student(self, student_id: str, data: StudentUpdate) -> Student:
        ...

    @abstractmethod
    def set_uniform_status(self, student_id: str, status: UniformStatus) -> Student:
        ...

    # --- Issuance log (append-only) ---
    @abstractmethod
    def add_issuance(self, record: IssuanceRecord) -> IssuanceRecord:
        ...

    @abstractmethod
    def list_issuances(
        self, student_id: Optional[str] = None, school_id: Optional[str] = None
    ) -> List[IssuanceRecord]:
        ...


def new_id() -> str:
    return str(uuid.uuid4())


class MemoryStore(InventoryStore):
    """Process-local store. Each item has its own lock for quantity changes."""

    def __init__(self):
        self._items: Dict[str, InventoryItem] = {}
        self._item_keys: Dict[Tuple[str, str, str], str] = {}
        self._item_locks: Dict[str, threading.Lock] = {}
        self._registry_lock = threading.Lock()

        self._students: Dict[str, Student] = {}
        self._students_lock = threading.Lock()

        self._issuances: List[IssuanceRecord] = []
        self._issuances_lock = threading.Lock()

    def _lock_for(self, item_id: str) -> threading.Lock:
        with self._registry_lock:
            if item_id not in self._items:
                raise ItemNotFound()
            return self._item_locks[item_id]

    def find_item(self, school_id: str, item_type: str, size: str) -> Optional[InventoryItem]:
        item_id = self._item_keys.get((school_id, item_type, size))
        if item_id is None:
            return None
        return self.get_item(item_id)

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        item = self._items.get(item_id)
        return item.model_copy() if item else None

    def list_items(self, school_id: Optional[str] = None) -> List[InventoryItem]:
        items = list(self._items.values())
        if school_id is not None:
            items = [item for item in items if item.school_id == school_id]
        return [item.model_copy() for item in items]

    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        key = (data.school_id, data.item_type, data.size)
        with self._registry_lock:
            if key in self._item_keys:
                raise DuplicateItem()
            item = InventoryItem(id=new_id(), **data.model_dump())
            self._items[item.id] = item
            self._item_keys[key] = item.id
            self._item_locks[item.id] = threading.Lock()
        return item.model_copy()

    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItem:
        with self._lock_for(item_id):
            item = self._items[item_id]
            new_quantity = item.quantity + delta
            if new_quantity < 0:
                raise InvalidState(
                    f"Cannot adjust {item.item_type} ({item.size}) by {delta}: only {item.quantity} on hand."
                )
            updated = item.model_copy(update={"quantity": new_quantity})
            self._items[item_id] = updated
        return updated.model_copy()

    def create_student(self, data: StudentCreate) -> Student:
        student = Student(id=new_id(), **data.model_dump())
        with self._students_lock:
            self._students[student.id] = student
        return student.model_copy()

    def get_student(self, student_id: str) -> Optional[Student]:
        student = self._students.get(student_id)
        return student.model_copy() if student else None

    def list_students(self, school_id: str) -> List[Student]:
        return [s.model_copy() for s in self._students.values() if s.school_id == school_id]

    def update_student(self, student_id: str, data: StudentUpdate) -> Student:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        with self._students_lock:
            student = self._students.get(student_id)
            if student is None:
                raise StudentNotFound()
            updated = student.model_copy(update=changes)
            self._students[student_id] = updated
        return updated.model_copy()

    def set_uniform_status(self, student_id: str, status: UniformStatus) -> Student:
        with self._students_lock:
            student = self._students.get(student_id)
            if student is None:
                raise StudentNotFound()
            updated = student.model_copy(update={"uniform_status": status})
            self._students[student_id] = updated
        return updated.model_copy()

    def add_issuance(self, record: IssuanceRecord) -> IssuanceRecord:
        with self._issuances_lock:
            self._issuances.append(record.model_copy())
        return record

    def list_issuances(
        self, student_id: Optional[str] = None, school_id: Optional[str] = None
    ) -> List[IssuanceRecord]:
        with self._issuances_lock:
            records = list(self._issuances)
        if student_id:
            records = [r for r in records if r.student_id == student_id]
        if school_id:
            records = [r for r in records if r.school_id == school_id]
        return [r.model_copy() for r in records]


_store: Optional[InventoryStore] = None
_store_lock = threading.Lock()


def build_store(backend: str = config.STORE_BACKEND) -> InventoryStore:
    if backend == "memory":
        return MemoryStore()
    if backend == "firestore":
        from uniform_app.services.firebase_service import FirestoreStore, get_client

        return FirestoreStore(get_client())
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}, expected 'memory' or 'firestore'.")


def get_store() -> InventoryStore:
    """FastAPI dependency returning the process-wide store."""
    global _store
    with _store_lock:
        if _store is None:
            _store = build_store()
            logger.info("Using %s inventory store", type(_store).__name__)
        return _store
