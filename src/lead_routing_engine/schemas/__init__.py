"""Pydantic models for incoming lead records."""

from .lead import BehavioralData, LeadSubmission

__all__ = ["BehavioralData", "LeadSubmission"]
