from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.schemas.section import Section


class SectionsImportIn(BaseModel):
    sections: List[Section] = Field(..., min_length=1)


class CourseParamIn(BaseModel):
    id: Optional[str] = None      # omitted -> new parameter
    code: str = Field(..., min_length=1)
    name: str = Field(..., min_length=1)
    section: str = ""
    instructor: str = ""


class CourseParamOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    code: str
    name: str
    section: str = ""
    instructor: str = ""
