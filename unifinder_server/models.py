from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ErrorOut(BaseModel):
    error: str


class UniversityRecord(BaseModel):
    # Upstream shape, documented only: the proxy relays the body unmodified.
    model_config = ConfigDict(extra="allow", populate_by_name=True)

    name: Optional[str] = None
    alpha_two_code: Optional[str] = None
    country: Optional[str] = None
    state_province: Optional[str] = Field(default=None, alias="state-province")
    domains: List[str] = []
    web_pages: List[str] = []
