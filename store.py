"""
Collection event lifecycle: create, fetch by batch id, filtered listing and
aggregate statistics over the `collection_events` table.
"""
import asyncio
import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Callable, Iterator, List, Optional

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from errors import (
    DuplicateBatchIdError,
    NotFoundError,
    PersistenceError,
    VerificationFailedError,
    VerificationTimeoutError,
)
from geo import GeoClassification, classify
from models import CollectionEvent
from utils import BatchIdGenerator, batch_id_for, escape_like, iso_from_ms, percentage
from validation import ValidatedSubmission
from verification import VerificationResult, Verifier

logger = logging.getLogger(__name__)


@dataclass
class EventFilter:
    farmer_name: Optional[str] = None
    herb_name: Optional[str] = None
    state: Optional[str] = None


@dataclass
class EventPage:
    items: List[CollectionEvent] = field(default_factory=list)
    total_count: int = 0


class CollectionEventStore:
    def __init__(
        self,
        session_factory: sessionmaker,
        verifier: Verifier,
        classifier: Callable[[float, float], GeoClassification] = classify,
        batch_ids: Optional[BatchIdGenerator] = None,
        verification_timeout: float = 10.0,
        max_attempts: int = 3,
    ):
        self.session_factory = session_factory
        self.verifier = verifier
        self.classifier = classifier
        self.batch_ids = batch_ids or BatchIdGenerator()
        self.verification_timeout = verification_timeout
        self.max_attempts = max_attempts

    @contextmanager
    def _session(self) -> Iterator[Session]:
        try:
            with self.session_factory() as db:
                yield db
        except SQLAlchemyError as e:
            logger.exception("database error")
            raise PersistenceError() from e

    # ---------- Write path ----------
    async def _verify(self, sub: ValidatedSubmission) -> VerificationResult:
        try:
            result = await asyncio.wait_for(
                self.verifier.verify(sub.herb_name, sub.image_url),
                timeout=self.verification_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning("verification of %s timed out after %.1fs", sub.herb_name, self.verification_timeout)
            raise VerificationTimeoutError(self.verification_timeout)
        except Exception as e:
            logger.exception("verification of %s failed", sub.herb_name)
            raise VerificationFailedError() from e

        if not 0 <= result.confidence_score <= 100:
            logger.error("verifier returned confidence %r out of range", result.confidence_score)
            raise VerificationFailedError()
        return result

    async def create(self, sub: ValidatedSubmission) -> CollectionEvent:
        geo = self.classifier(sub.latitude, sub.longitude)
        logger.info("geo-check (%s, %s): %s / %s", sub.latitude, sub.longitude, geo.country, geo.region_label)

        ai = await self._verify(sub)
        logger.info("verification of %s: %s @ %d%%", sub.herb_name, ai.verified_label, ai.confidence_score)

        # session work blocks; keep it off the event loop
        return await asyncio.to_thread(self._insert, sub, geo, ai)

    def _insert(self, sub: ValidatedSubmission, geo: GeoClassification, ai: VerificationResult) -> CollectionEvent:
        batch_id = None
        for attempt in range(1, self.max_attempts + 1):
            ms = self.batch_ids.next_ms()
            batch_id = batch_id_for(ms)
            ev = CollectionEvent(
                batch_id=batch_id,
                farmer_name=sub.farmer_name,
                herb_name=sub.herb_name,
                quantity=sub.quantity,
                latitude=sub.latitude,
                longitude=sub.longitude,
                image_url=sub.image_url,
                timestamp=iso_from_ms(ms),
                ai_confidence=ai.confidence_score,
                ai_verified_herb=ai.verified_label,
                geo_country=geo.country,
                geo_state=geo.region_label,
                geo_within_india=geo.is_within_region,
            )
            with self._session() as db:
                db.add(ev)
                try:
                    db.commit()
                except IntegrityError:
                    db.rollback()
                    logger.warning("batch id %s already taken (attempt %d/%d)", batch_id, attempt, self.max_attempts)
                    continue
            logger.info("stored collection event %s", batch_id)
            return ev

        raise DuplicateBatchIdError(batch_id)

    # ---------- Read paths ----------
    def get_by_batch_id(self, batch_id: str) -> CollectionEvent:
        with self._session() as db:
            ev = db.scalar(select(CollectionEvent).where(CollectionEvent.batch_id == batch_id))
        if ev is None:
            raise NotFoundError(batch_id)
        return ev

    def list(self, filters: Optional[EventFilter] = None, page: int = 1, page_size: int = 10) -> EventPage:
        filters = filters or EventFilter()
        page = max(page, 1)
        page_size = max(page_size, 1)

        base = select(CollectionEvent)
        for column, term in (
            (CollectionEvent.farmer_name, filters.farmer_name),
            (CollectionEvent.herb_name, filters.herb_name),
            (CollectionEvent.geo_state, filters.state),
        ):
            if term and term.strip():
                base = base.where(column.ilike(f"%{escape_like(term.strip())}%", escape="\\"))

        with self._session() as db:
            total = db.scalar(select(func.count()).select_from(base.subquery()))
            rows = db.scalars(
                base.order_by(CollectionEvent.timestamp.desc(), CollectionEvent.id.desc())
                    .offset((page - 1) * page_size)
                    .limit(page_size)
            ).all()
        return EventPage(items=list(rows), total_count=total or 0)

    def stats(self) -> dict:
        count = func.count(CollectionEvent.id).label("count")
        total_qty = func.sum(CollectionEvent.quantity).label("total_quantity")
        avg_conf = func.avg(CollectionEvent.ai_confidence).label("avg_confidence")
        within = CollectionEvent.geo_within_india.is_(True)

        with self._session() as db:
            total = db.scalar(select(func.count(CollectionEvent.id))) or 0
            in_india = db.scalar(select(func.count(CollectionEvent.id)).where(within)) or 0
            herb_rows = db.execute(
                select(CollectionEvent.herb_name, count, total_qty, avg_conf)
                .group_by(CollectionEvent.herb_name)
                .order_by(count.desc(), CollectionEvent.herb_name.asc())
            ).all()
            state_rows = db.execute(
                select(CollectionEvent.geo_state, count, total_qty, avg_conf)
                .where(within)
                .group_by(CollectionEvent.geo_state)
                .order_by(count.desc(), CollectionEvent.geo_state.asc())
            ).all()

        return {
            "overview": {
                "totalEvents": total,
                "eventsWithinIndia": in_india,
                "eventsOutsideIndia": total - in_india,
                "verificationRate": percentage(in_india, total),
            },
            "herbDistribution": [
                {
                    "herbName": name,
                    "count": n,
                    "totalQuantity": float(qty or 0),
                    "avgConfidence": round(float(conf or 0), 2),
                }
                for name, n, qty, conf in herb_rows
            ],
            "stateDistribution": [
                {
                    "state": name,
                    "count": n,
                    "totalQuantity": float(qty or 0),
                    "avgConfidence": round(float(conf or 0), 2),
                }
                for name, n, qty, conf in state_rows
            ],
        }
