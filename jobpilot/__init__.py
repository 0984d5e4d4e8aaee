"""JobPilot aggregation engine.

The package is laid out along the fetch pipeline:
- `models.py` defines the canonical schema every source is mapped into.
- `sources/` contains one connector per external job board.
- `normalize.py` maps raw records into `Job` and applies the locale filter.
- `aggregate.py` and `cache.py` run the sources and keep the weekly snapshot.
- `stats.py` and `ranking.py` derive statistics and sort orders from it.
"""

__version__ = "0.3.0"
