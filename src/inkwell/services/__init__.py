# src/inkwell/services/__init__.py
"""Business logic services for the Inkwell application."""

from .events import EventBroker, get_event_broker
from .rate_limit import RateLimitService, get_rate_limit_service
from .voting import VoteOutcome, VoteService, get_vote_service

__all__ = [
    "EventBroker", "get_event_broker",
    "RateLimitService", "get_rate_limit_service",
    "VoteOutcome", "VoteService", "get_vote_service",
]
