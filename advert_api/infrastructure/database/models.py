"""
SQLAlchemy ORM models.

Domain entities are mapped to/from these rows inside the document store
implementation.
"""
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum as SAEnum, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from advert_api.domain.enums.advert_status import AdvertStatus
from advert_api.domain.validation import (
    MAX_TITLE_LENGTH,
    MAX_USER_NAME_LENGTH,
    PRICE_PRECISION,
    PRICE_SCALE,
)
from advert_api.infrastructure.database.connection import Base

_advert_status_enum = SAEnum(
    AdvertStatus,
    name="advert_status",
    values_callable=lambda obj: [e.value for e in obj],
)


class AdvertModel(Base):
    __tablename__ = "adverts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)

    title: Mapped[str] = mapped_column(String(MAX_TITLE_LENGTH), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    price: Mapped[Decimal] = mapped_column(
        Numeric(PRICE_PRECISION, PRICE_SCALE), nullable=False, default=Decimal("0")
    )
    user_name: Mapped[str | None] = mapped_column(String(MAX_USER_NAME_LENGTH), nullable=True)

    status: Mapped[AdvertStatus] = mapped_column(_advert_status_enum, nullable=False)
    creation_date_time: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    file_path: Mapped[str | None] = mapped_column(String(2048), nullable=True)
