from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from uniform_app.models.student import Student, StudentCreate, StudentUpdate
from uniform_app.services.store import InventoryStore, get_store

router = APIRouter(
    tags=["Students"]
)


@router.post("/students", response_model=Student, status_code=status.HTTP_201_CREATED)
def create_student(payload: StudentCreate, store: InventoryStore = Depends(get_store)):
    return store.create_student(payload)


@router.get("/students/{school_id}", response_model=List[Student])
def read_students(school_id: str, store: InventoryStore = Depends(get_store)):
    return store.list_students(school_id)


@router.get("/student/{student_id}", response_model=Student)
def read_student(student_id: str, store: InventoryStore = Depends(get_store)):
    student = store.get_student(student_id)
    if not student:
        raise HTTPException(status_code=404, detail="Student not found")
    return student


@router.patch("/student/{student_id}", response_model=Student)
def update_student(student_id: str, payload: StudentUpdate, store: InventoryStore = Depends(get_store)):
    """Change student details, e.g. set `uniformStatus` to `needs-repair` after an inspection."""
    return store.update_student(student_id, payload)
