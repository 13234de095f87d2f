from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .findings import InputType, ScanDepth


class ScanRequest(BaseModel):
    target: str = Field(..., min_length=1, max_length=320)
    input_type: Optional[InputType] = None
    depth: ScanDepth = ScanDepth.STANDARD

    @field_validator('target')
    @classmethod
    def normalize(cls, v: str) -> str:
        return v.strip()
