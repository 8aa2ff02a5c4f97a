from enum import Enum
from typing import Optional

from pydantic import Field

from uniform_app.models.base import CamelModel


class UniformStatus(str, Enum):
    PENDING = "pending"
    ISSUED = "issued"
    GOOD = "good"
    NEEDS_REPAIR = "needs-repair"
    NEEDS_REPLACEMENT = "needs-replacement"


class StudentCreate(CamelModel):
    school_id: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    admission_number: str = Field(..., min_length=1)
    grade: Optional[str] = None
    uniform_status: UniformStatus = UniformStatus.PENDING
    payment_status: str = "pending"
    amount_paid: int = Field(0, ge=0)
    total_amount: int = Field(0, ge=0)


class Student(StudentCreate):
    id: str


class StudentUpdate(CamelModel):
    """Partial update; only the fields sent are changed."""

    name: Optional[str] = Field(None, min_length=1)
    admission_number: Optional[str] = Field(None, min_length=1)
    grade: Optional[str] = None
    uniform_status: Optional[UniformStatus] = None
    payment_status: Optional[str] = None
    amount_paid: Optional[int] = Field(None, ge=0)
    total_amount: Optional[int] = Field(None, ge=0)
