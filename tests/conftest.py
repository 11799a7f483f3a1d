import asyncio
import random

import pytest

from database import create_db_engine, init_db, make_session_factory
from store import CollectionEventStore
from utils import BatchIdGenerator
from verification import VerificationResult, VerificationStub

BASE_MS = 1694567890123


class FixedVerifier:
    """Always confirms the submitted herb with the same confidence."""

    def __init__(self, confidence=95):
        self.confidence = confidence
        self.calls = []

    async def verify(self, herb_label, image_ref):
        self.calls.append((herb_label, image_ref))
        return VerificationResult(confidence_score=self.confidence, verified_label=herb_label)


class SameMillisecond:
    """Batch id source that keeps handing out one millisecond."""

    def next_ms(self):
        return BASE_MS


class SlowVerifier:
    async def verify(self, herb_label, image_ref):
        await asyncio.sleep(1)
        return VerificationResult(95, herb_label)


class BrokenVerifier:
    async def verify(self, herb_label, image_ref):
        raise RuntimeError("model server unreachable")


def run(coro):
    return asyncio.run(coro)


def submission(**overrides):
    body = {
        "farmerName": "Ramesh",
        "herbName": "Tulsi",
        "quantity": 2.5,
        "latitude": 19.0,
        "longitude": 75.0,
        "imageUrl": "http://x/img.png",
    }
    body.update(overrides)
    return body


@pytest.fixture
def engine(tmp_path):
    engine = create_db_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return make_session_factory(engine)


@pytest.fixture
def verifier():
    return FixedVerifier()


@pytest.fixture
def store(session_factory, verifier):
    # constant clock: ids and timestamps advance by exactly 1 ms per create
    return CollectionEventStore(
        session_factory,
        verifier,
        batch_ids=BatchIdGenerator(clock=lambda: BASE_MS),
    )


@pytest.fixture
def stub():
    return VerificationStub(delay=0, rng=random.Random(42))
