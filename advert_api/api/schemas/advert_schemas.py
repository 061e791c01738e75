from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field

from advert_api.domain.enums.advert_status import AdvertStatus


class CreateAdvertRequest(BaseModel):
    # Any id or status sent by the client is dropped: they are not fields here.
    title: str
    description: str = ""
    price: Decimal = Field(default=Decimal("0"))
    user_name: str | None = None


class CreateAdvertResponse(BaseModel):
    id: str


class ConfirmAdvertRequest(BaseModel):
    id: str
    status: AdvertStatus
    file_path: str | None = None


class ConfirmAdvertResponse(BaseModel):
    id: str
    status: AdvertStatus
    notified: bool


class AdvertResponse(BaseModel):
    id: str
    title: str
    description: str
    price: Decimal
    user_name: str | None = None
    status: AdvertStatus
    creation_date_time: datetime
    file_path: str | None = None

    model_config = {"from_attributes": True}


class HealthResponse(BaseModel):
    status: str
    document_store: str
    message_sink: str
