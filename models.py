from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import Boolean, Float, Integer, String, Text
from database import Base


class CollectionEvent(Base):
    __tablename__ = "collection_events"
    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    batch_id: Mapped[str] = mapped_column(String(32), unique=True, index=True)
    farmer_name: Mapped[str] = mapped_column(String(100), index=True)
    herb_name: Mapped[str] = mapped_column(String(50), index=True)
    quantity: Mapped[float] = mapped_column(Float)
    latitude: Mapped[float] = mapped_column(Float)
    longitude: Mapped[float] = mapped_column(Float)
    image_url: Mapped[str] = mapped_column(Text)
    timestamp: Mapped[str] = mapped_column(String(32), index=True)  # ISO-8601 UTC, ms precision
    ai_confidence: Mapped[int] = mapped_column(Integer)
    ai_verified_herb: Mapped[str] = mapped_column(String(50))
    geo_country: Mapped[str] = mapped_column(String(32))
    geo_state: Mapped[str] = mapped_column(String(64), index=True)
    geo_within_india: Mapped[bool] = mapped_column(Boolean, default=False, index=True)
