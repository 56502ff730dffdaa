"""
One-shot liveness probe for the indexer: reads the published state from Redis
and fails when it is older than the configured limit.
"""

__version__ = "0.1.0"
