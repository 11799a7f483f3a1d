"""
Herb verification capability.

`Verifier` is the seam a real image classifier plugs into. The only
implementation shipped here is `VerificationStub`, which waits a fixed
latency and returns a random confidence score.
"""
import asyncio
import logging
import random
from dataclasses import dataclass
from typing import Optional, Protocol, Sequence

logger = logging.getLogger(__name__)

AYURVEDIC_HERBS = (
    "Ashwagandha", "Turmeric", "Tulsi", "Brahmi", "Neem",
    "Amla", "Giloy", "Shatavari", "Arjuna", "Triphala",
    "Gokshura", "Manjistha", "Guduchi", "Bala", "Vidanga",
)

CONFIDENCE_MIN = 90
CONFIDENCE_MAX = 98
MISMATCH_PROBABILITY = 0.15


@dataclass(frozen=True)
class VerificationResult:
    confidence_score: int
    verified_label: str


class Verifier(Protocol):
    async def verify(self, herb_label: str, image_ref: str) -> VerificationResult:
        ...


class VerificationStub:
    def __init__(
        self,
        delay: float = 2.0,
        rng: Optional[random.Random] = None,
        reference_herbs: Sequence[str] = AYURVEDIC_HERBS,
    ):
        self.delay = delay
        self.rng = rng or random.Random()
        self.reference_herbs = tuple(reference_herbs)

    async def verify(self, herb_label: str, image_ref: str) -> VerificationResult:
        if self.delay > 0:
            await asyncio.sleep(self.delay)

        confidence = self.rng.randint(CONFIDENCE_MIN, CONFIDENCE_MAX)
        verified = herb_label
        if self.rng.random() < MISMATCH_PROBABILITY:
            verified = self.rng.choice(self.reference_herbs)

        logger.debug("stub verification of %s (%s): %s @ %d%%", herb_label, image_ref, verified, confidence)
        return VerificationResult(confidence_score=confidence, verified_label=verified)
