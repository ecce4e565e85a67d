# This file defines the student entity and the JSON shapes exchanged with clients.
# StudentPayload is the decoded but not yet validated request body.
# Student is the stored record, always carrying a gateway-assigned id.
# Strict field types make a wrong JSON type a decoding failure rather than a silent coercion.

from __future__ import annotations

from typing import Annotated, Final

from pydantic import BaseModel, ConfigDict, Field, StrictInt, StrictStr

# ids and ages are stored as signed 64-bit integers
MIN_INT64: Final[int] = -(2**63)
MAX_INT64: Final[int] = 2**63 - 1

Int64 = Annotated[StrictInt, Field(ge=MIN_INT64, le=MAX_INT64)]


class StudentPayload(BaseModel):
    """Candidate record decoded from a create or update body.

    Missing keys and JSON null are kept as None so the validator can report them per field.
    """

    model_config = ConfigDict(extra="ignore")

    name: StrictStr | None = None
    email: StrictStr | None = None
    age: Int64 | None = None


class Student(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int = Field(gt=0)
    name: str
    email: str
    age: int


class StudentCreatedResponse(BaseModel):
    id: int


class StudentDeletedResponse(BaseModel):
    deleted_id: int
