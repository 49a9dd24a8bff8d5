"""Pydantic schemas for API payloads and embedded component records."""
