"""Enumeration types for quotation data models."""

from enum import Enum


class QuoteStatus(str, Enum):
    """Review status of a submitted quote."""

    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    EXPIRED = "EXPIRED"
