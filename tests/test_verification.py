import random

from conftest import run
from verification import AYURVEDIC_HERBS, VerificationStub


class ScriptedRandom(random.Random):
    """Random source whose `random()` always returns the same value."""

    def __init__(self, roll):
        super().__init__(0)
        self.roll = roll

    def random(self):
        return self.roll


def test_confidence_range(stub):
    scores = {run(stub.verify("Tulsi", "img")).confidence_score for _ in range(200)}
    assert scores <= set(range(90, 99))
    assert min(scores) == 90 and max(scores) == 98


def test_label_kept_on_high_roll():
    stub = VerificationStub(delay=0, rng=ScriptedRandom(0.5))
    assert run(stub.verify("Tulsi", "img")).verified_label == "Tulsi"


def test_label_replaced_on_low_roll():
    stub = VerificationStub(delay=0, rng=ScriptedRandom(0.1), reference_herbs=["Neem"])
    assert run(stub.verify("Tulsi", "img")).verified_label == "Neem"


def test_mismatch_is_rare(stub):
    labels = [run(stub.verify("Mystery Root", "img")).verified_label for _ in range(1000)]
    replaced = [label for label in labels if label != "Mystery Root"]
    assert set(replaced) <= set(AYURVEDIC_HERBS)
    assert 80 <= len(replaced) <= 230


def test_delay_is_awaited():
    import time

    stub = VerificationStub(delay=0.05)
    start = time.monotonic()
    run(stub.verify("Tulsi", "img"))
    assert time.monotonic() - start >= 0.04
