"""
AI Core Module - What the MindsDB agent is told.

Key responsibilities:
- Agent prompt template listing the queryable repository resources
"""
