"""Source connectors, one per external job board."""

from .adzuna import AdzunaSource
from .arbeitnow import ArbeitnowSource
from .arbeitsagentur import ArbeitsagenturSource
from .base import BaseSource, RawRecord
from .germantechjobs import GermanTechJobsSource
from .jobicy import JobicySource
from .jooble import JoobleSource

__all__ = [
    "AdzunaSource",
    "ArbeitnowSource",
    "ArbeitsagenturSource",
    "BaseSource",
    "GermanTechJobsSource",
    "JobicySource",
    "JoobleSource",
    "RawRecord",
]
