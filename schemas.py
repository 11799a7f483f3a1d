from pydantic import BaseModel
from typing import Optional, Any, List, Union

import models


class CollectionEventSubmission(BaseModel):
    # loose types on purpose: the validator reports missing and non-numeric fields itself
    farmerName: Optional[str] = None
    herbName: Optional[str] = None
    quantity: Optional[Union[float, str]] = None
    latitude: Optional[Union[float, str]] = None
    longitude: Optional[Union[float, str]] = None
    imageUrl: Optional[str] = None


class Location(BaseModel):
    latitude: float
    longitude: float


class AIVerification(BaseModel):
    confidence: int
    verifiedHerb: str


class GeoVerification(BaseModel):
    country: str
    state: str
    isWithinIndia: bool


class CollectionEventOut(BaseModel):
    batchId: str
    farmerName: str
    herbName: str
    quantity: float
    location: Location
    imageUrl: str
    timestamp: str
    aiVerification: AIVerification
    geoVerification: GeoVerification

    @classmethod
    def from_model(cls, ev: models.CollectionEvent) -> "CollectionEventOut":
        return cls(
            batchId=ev.batch_id,
            farmerName=ev.farmer_name,
            herbName=ev.herb_name,
            quantity=ev.quantity,
            location=Location(latitude=ev.latitude, longitude=ev.longitude),
            imageUrl=ev.image_url,
            timestamp=ev.timestamp,
            aiVerification=AIVerification(confidence=ev.ai_confidence, verifiedHerb=ev.ai_verified_herb),
            geoVerification=GeoVerification(
                country=ev.geo_country,
                state=ev.geo_state,
                isWithinIndia=ev.geo_within_india,
            ),
        )


class Pagination(BaseModel):
    currentPage: int
    totalPages: int
    totalEvents: int
    pageSize: int
    hasNext: bool
    hasPrev: bool


class Overview(BaseModel):
    totalEvents: int
    eventsWithinIndia: int
    eventsOutsideIndia: int
    verificationRate: float


class HerbBucket(BaseModel):
    herbName: str
    count: int
    totalQuantity: float
    avgConfidence: float


class StateBucket(BaseModel):
    state: str
    count: int
    totalQuantity: float
    avgConfidence: float


class Stats(BaseModel):
    overview: Overview
    herbDistribution: List[HerbBucket]
    stateDistribution: List[StateBucket]


# ---------- Response envelopes ----------
class Envelope(BaseModel):
    success: bool = True
    message: str
    data: Optional[Any] = None


class EventResponse(Envelope):
    data: CollectionEventOut


class EventListResponse(Envelope):
    data: List[CollectionEventOut]
    pagination: Pagination


class StatsResponse(Envelope):
    data: Stats


class ErrorResponse(BaseModel):
    success: bool = False
    message: str
    errors: Optional[List[str]] = None
