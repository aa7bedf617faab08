"""Building blocks for replicated key-value stores: ids, ballots, a database, protocol messages and a REST client."""

__version__ = "0.1.0"