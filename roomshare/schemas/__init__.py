"""Pydantic request and response schemas for the roomshare API."""
