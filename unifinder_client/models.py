from typing import Optional

from pydantic import BaseModel, ConfigDict


class TopUniversity(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    city: Optional[str] = None
    state: Optional[str] = None  # State or province
    website: Optional[str] = None  # Bare domain, shown as http://<website>
