from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serializes snake_case fields as camelCase (shortUrl, lastClicked)"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class LinkCreate(BaseModel):
    """Request body for POST /api/links

    Both fields are checked by the service, not here, so that a bad url or
    code is reported as 400 with a specific message.
    """
    url: Optional[Any] = Field(None, description="The long URL to shorten")
    code: Optional[Any] = Field(None, description="Desired code, 6-8 letters or digits")


class LinkCreated(CamelModel):
    code: str
    url: str
    short_url: str


class LinkRecord(CamelModel):
    code: str
    url: str
    short_url: str
    clicks: int
    last_clicked: Optional[datetime] = None
    created_at: Optional[datetime] = None


class OkResponse(BaseModel):
    ok: bool = True
