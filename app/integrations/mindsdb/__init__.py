"""
MindsDB Integration Module

Provides the MindsDB API client used for ingestion and agent queries.
"""

from app.integrations.mindsdb.client import MindsDBClient, MindsDBAPIError

__all__ = [
    "MindsDBClient",
    "MindsDBAPIError",
]
