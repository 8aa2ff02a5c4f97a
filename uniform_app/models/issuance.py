from datetime import datetime

from pydantic import Field, field_validator

from uniform_app.models.base import CamelModel


class IssueUniformRequest(CamelModel):
    student_id: str = Field(..., min_length=1, description="Student receiving the items.")
    school_id: str = Field(..., min_length=1, description="School whose stock is drawn from.")
    item_type: str = Field(..., min_length=1)
    size: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0, strict=True, description="Units to issue, at least 1.")
    issued_by: str = Field(..., min_length=1, description="Staff member handing out the items.")

    @field_validator("student_id", "school_id", "item_type", "size", "issued_by")
    @classmethod
    def strip_text(cls, v: str) -> str:
        normalized = v.strip()
        if not normalized:
            raise ValueError("must not be blank")
        return normalized


class IssuanceRecord(CamelModel):
    id: str
    student_id: str
    school_id: str
    item_type: str
    size: str
    quantity: int
    issued_date: datetime
    issued_by: str
