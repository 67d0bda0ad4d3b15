# tests/conftest.py - shared fixtures

import logging

import pytest

from ngram_autocompleter.core.autocompleter import Autocompleter
from ngram_autocompleter.utils.config_manager import EngineConfig

SAMPLE = (
    "The cat sat on the mat. The cat ran to the door. "
    "A cat ate the fish! The dog sat on the rug; the dog ran away."
)


@pytest.fixture
def sample_text():
    return SAMPLE


@pytest.fixture
def trained():
    """Trigram engine trained once on SAMPLE."""
    ac = Autocompleter(EngineConfig(max_order=3))
    ac.train(SAMPLE)
    return ac


@pytest.fixture
def exact():
    """Trigram engine with the exclusion early cutoff switched off."""
    ac = Autocompleter(EngineConfig(max_order=3, escape_cutoff=0.0))
    ac.train(SAMPLE)
    return ac


@pytest.fixture(autouse=True)
def _reset_package_logger():
    yield
    logger = logging.getLogger("ngram_autocompleter")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.setLevel(logging.NOTSET)
