from typing import List

from fastapi import APIRouter, Depends, status

from uniform_app.models.issuance import IssuanceRecord, IssueUniformRequest
from uniform_app.services.issuance import issue_uniform
from uniform_app.services.store import InventoryStore, get_store

router = APIRouter(
    tags=["Uniform Issuance"]
)


@router.post("/issue-uniform", response_model=IssuanceRecord, status_code=status.HTTP_200_OK)
def issue_uniform_to_student(request: IssueUniformRequest, store: InventoryStore = Depends(get_store)):
    """
    Deduct stock for one item/size and record the issuance against the student.
    - **404**: no stock row for the school, item type and size.
    - **400**: requested quantity exceeds what is on hand, or the payload is invalid.
    """
    return issue_uniform(
        store,
        student_id=request.student_id,
        school_id=request.school_id,
        item_type=request.item_type,
        size=request.size,
        quantity=request.quantity,
        issued_by=request.issued_by,
    )


@router.get("/uniform-issuances/school/{school_id}", response_model=List[IssuanceRecord])
def read_school_issuances(school_id: str, store: InventoryStore = Depends(get_store)):
    return store.list_issuances(school_id=school_id)


@router.get("/uniform-issuances/{student_id}", response_model=List[IssuanceRecord])
def read_student_issuances(student_id: str, store: InventoryStore = Depends(get_store)):
    return store.list_issuances(student_id=student_id)
