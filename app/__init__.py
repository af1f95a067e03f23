"""Askora backend: FastAPI proxy that provisions and queries MindsDB agents."""
