import logging
from datetime import datetime, timezone
from typing import Optional

from uniform_app.errors import InsufficientStock, InvalidInput, InvalidState, ItemNotFound, StudentNotFound
from uniform_app.models.issuance import IssuanceRecord
from uniform_app.models.student import Student, UniformStatus
from uniform_app.services.store import InventoryStore, new_id

logger = logging.getLogger(__name__)


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise InvalidInput("Quantity must be a positive whole number.")
    return quantity


def mark_uniform_issued(store: InventoryStore, student_id: str) -> Optional[Student]:
    """
    Move a student's uniform status to "issued" after a successful issuance.
    Any status other than "issued" is overwritten; "issued" is left alone.
    Returns None when the student is unknown.
    """
    student = store.get_student(student_id)
    if student is None:
        logger.warning("Student %s not found, uniform status not updated", student_id)
        return None
    if student.uniform_status == UniformStatus.ISSUED:
        return student
    try:
        return store.set_uniform_status(student_id, UniformStatus.ISSUED)
    except StudentNotFound:
        logger.warning("Student %s disappeared before status update", student_id)
        return None


def issue_uniform(
    store: InventoryStore,
    student_id: str,
    school_id: str,
    item_type: str,
    size: str,
    quantity: int,
    issued_by: str,
) -> IssuanceRecord:
    """
    Hand out `quantity` units of (school_id, item_type, size) to a student.

    Stock is decremented atomically, an immutable issuance record is written
    and the student's uniform status becomes "issued". Raises InvalidInput,
    ItemNotFound or InsufficientStock; a missing student does not fail the call.
    """
    quantity = _validate_quantity(quantity)

    item = store.find_item(school_id, item_type, size)
    if item is None:
        logger.info("Issue rejected: no %s (%s) stocked at %s", item_type, size, school_id)
        raise ItemNotFound()

    if item.quantity < quantity:
        logger.info(
            "Issue rejected: %s %s (%s) requested, %s on hand at %s",
            quantity, item_type, size, item.quantity, school_id,
        )
        raise InsufficientStock()

    try:
        updated = store.adjust_quantity(item.id, -quantity)
    except InvalidState:
        # another issuance took the stock between the check and the decrement
        logger.info("Issue rejected: stock for %s changed concurrently", item.id)
        raise InsufficientStock()

    record = IssuanceRecord(
        id=new_id(),
        student_id=student_id,
        school_id=school_id,
        item_type=item_type,
        size=size,
        quantity=quantity,
        issued_date=datetime.now(timezone.utc),
        issued_by=issued_by,
    )
    try:
        record = store.add_issuance(record)
    except Exception:
        logger.exception("Recording issuance failed, restoring %s units to %s", quantity, item.id)
        try:
            store.adjust_quantity(item.id, quantity)
        except Exception:
            logger.exception("Restoring %s units to %s failed", quantity, item.id)
        raise

    logger.info(
        "Issued %s %s (%s) to student %s by %s, %s left",
        quantity, item_type, size, student_id, issued_by, updated.quantity,
    )
    mark_uniform_issued(store, student_id)
    return record
