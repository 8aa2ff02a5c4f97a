import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

import firebase_admin
from firebase_admin import credentials
from firebase_admin import firestore as firebase_firestore
from google.api_core.exceptions import AlreadyExists, NotFound
from google.cloud import firestore
from google.cloud.firestore_v1.base_query import FieldFilter

from uniform_app import config
from uniform_app.errors import DuplicateItem, InvalidState, ItemNotFound, StudentNotFound
from uniform_app.models.inventory import InventoryItem, InventoryItemCreate
from uniform_app.models.issuance import IssuanceRecord
from uniform_app.models.student import Student, StudentCreate, StudentUpdate, UniformStatus
from uniform_app.services.store import InventoryStore

logger = logging.getLogger(__name__)


def get_client():
    """Initialise the Firebase Admin SDK once and return a Firestore client."""
    if not firebase_admin._apps:
        cred_path = config.FIREBASE_SERVICE_ACCOUNT_KEY_PATH
        if not cred_path:
            raise RuntimeError("FIREBASE_SERVICE_ACCOUNT_KEY_PATH must be set for the firestore backend.")
        cred = credentials.Certificate(cred_path)
        firebase_admin.initialize_app(cred)
        logger.info("Firebase Admin SDK initialised from %s", cred_path)
    return firebase_firestore.client()


def item_document_id(school_id: str, item_type: str, size: str) -> str:
    """Inventory documents are keyed by their identity tuple, so a tuple maps to exactly one document."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"{school_id}|{item_type}|{size}"))


def _doc_to_dict(doc) -> Dict[str, Any]:
    data = doc.to_dict() or {}
    data["id"] = doc.id
    return data


def _quantity_delta(transaction, doc_ref, delta: int) -> Dict[str, Any]:
    """Read, check and write an item quantity inside `transaction`."""
    snapshot = doc_ref.get(transaction=transaction)
    if not snapshot.exists:
        raise ItemNotFound()

    data = _doc_to_dict(snapshot)
    current = int(data.get("quantity", 0))
    new_quantity = current + delta
    if new_quantity < 0:
        raise InvalidState(
            f"Cannot adjust {data.get('item_type')} ({data.get('size')}) by {delta}: only {current} on hand."
        )

    now = datetime.now(timezone.utc)
    transaction.update(doc_ref, {"quantity": new_quantity, "updated_at": now})
    data["quantity"] = new_quantity
    data["updated_at"] = now
    return data


_apply_quantity_delta = firestore.transactional(_quantity_delta)


class FirestoreStore(InventoryStore):
    """Cloud Firestore backed store. Quantity changes run inside a transaction."""

    def __init__(self, db):
        self.db = db

    # --- Inventory ---
    def find_item(self, school_id: str, item_type: str, size: str) -> Optional[InventoryItem]:
        return self.get_item(item_document_id(school_id, item_type, size))

    def get_item(self, item_id: str) -> Optional[InventoryItem]:
        doc = self.db.collection(config.INVENTORY_COLLECTION).document(item_id).get()
        if not doc.exists:
            return None
        return InventoryItem(**_doc_to_dict(doc))

    def list_items(self, school_id: Optional[str] = None) -> List[InventoryItem]:
        query = self.db.collection(config.INVENTORY_COLLECTION)
        if school_id is not None:
            query = query.where(filter=FieldFilter("school_id", "==", school_id))
        return [InventoryItem(**_doc_to_dict(doc)) for doc in query.stream()]

    def create_item(self, data: InventoryItemCreate) -> InventoryItem:
        item_id = item_document_id(data.school_id, data.item_type, data.size)
        now = datetime.now(timezone.utc)
        record = data.model_dump()
        record["created_at"] = now
        record["updated_at"] = now
        try:
            self.db.collection(config.INVENTORY_COLLECTION).document(item_id).create(record)
        except AlreadyExists:
            raise DuplicateItem()
        return InventoryItem(id=item_id, **data.model_dump())

    def adjust_quantity(self, item_id: str, delta: int) -> InventoryItem:
        doc_ref = self.db.collection(config.INVENTORY_COLLECTION).document(item_id)
        data = _apply_quantity_delta(self.db.transaction(), doc_ref, delta)
        return InventoryItem(**data)

    # --- Students ---
    def create_student(self, data: StudentCreate) -> Student:
        doc_ref = self.db.collection(config.STUDENTS_COLLECTION).document()
        doc_ref.set(data.model_dump(mode="json"))
        return Student(id=doc_ref.id, **data.model_dump())

    def get_student(self, student_id: str) -> Optional[Student]:
        doc = self.db.collection(config.STUDENTS_COLLECTION).document(student_id).get()
        if not doc.exists:
            return None
        return Student(**_doc_to_dict(doc))

    def list_students(self, school_id: str) -> List[Student]:
        docs = self.db.collection(config.STUDENTS_COLLECTION).where(
            filter=FieldFilter("school_id", "==", school_id)
        ).stream()
        return [Student(**_doc_to_dict(doc)) for doc in docs]

    def _update_student_fields(self, student_id: str, changes: Dict[str, Any]) -> Student:
        doc_ref = self.db.collection(config.STUDENTS_COLLECTION).document(student_id)
        try:
            if changes:
                doc_ref.update(changes)
        except NotFound:
            raise StudentNotFound()
        doc = doc_ref.get()
        if not doc.exists:
            raise StudentNotFound()
        return Student(**_doc_to_dict(doc))

    def update_student(self, student_id: str, data: StudentUpdate) -> Student:
        return self._update_student_fields(
            student_id, data.model_dump(mode="json", exclude_unset=True, exclude_none=True)
        )

    def set_uniform_status(self, student_id: str, status: UniformStatus) -> Student:
        return self._update_student_fields(student_id, {"uniform_status": status.value})

    # --- Issuance log ---
    def add_issuance(self, record: IssuanceRecord) -> IssuanceRecord:
        payload = record.model_dump()
        del payload["id"]
        self.db.collection(config.ISSUANCES_COLLECTION).document(record.id).create(payload)
        return record

    def list_issuances(
        self, student_id: Optional[str] = None, school_id: Optional[str] = None
    ) -> List[IssuanceRecord]:
        query = self.db.collection(config.ISSUANCES_COLLECTION)
        if student_id:
            query = query.where(filter=FieldFilter("student_id", "==", student_id))
        if school_id:
            query = query.where(filter=FieldFilter("school_id", "==", school_id))
        return [IssuanceRecord(**_doc_to_dict(doc)) for doc in query.stream()]
