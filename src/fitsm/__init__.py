"""
fitsm: reference service for the FitSM IT-service-management vocabulary.

Publishes the ~80 terms of FitSM-0 chapter 6 (definitions, notes and
broader/narrower/related links) through an in-memory term repository, a
transport-agnostic operations layer, a FastAPI REST API and a Typer CLI.
"""

__version__ = "1.0.0"
