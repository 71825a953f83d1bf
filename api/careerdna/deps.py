from functools import lru_cache

from .config import SCORING_CONFIG, ScoringConfig
from .library import CareerLibrary
from .library import get_library as _cached_library
from .services.llm import ProseGenerator


def get_library() -> CareerLibrary:
    return _cached_library()


def get_scoring_config() -> ScoringConfig:
    return SCORING_CONFIG


@lru_cache(maxsize=1)
def get_prose_generator() -> ProseGenerator:
    return ProseGenerator()
