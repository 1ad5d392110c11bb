# changup/schemas/mail.py

from typing import List, Optional

from pydantic import Field

from changup.schemas.analysis import CamelModel


class ReportEmailRequest(CamelModel):
    to: Optional[str] = None
    biz_name: Optional[str] = None
    area_name: Optional[str] = None
    score: Optional[float] = None
    grade: Optional[str] = None
    risks: List[str] = Field(default_factory=list)


class ReportEmailResult(CamelModel):
    success: bool = True
    id: str
