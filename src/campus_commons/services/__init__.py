# src/campus_commons/services/__init__.py
"""Business logic services for the Campus Commons application."""

from .moderation import ModerationService
from .moderation_queue import ModerationQueue
from .notifications import NotificationDispatcher
from .report_ledger import ReportLedger

__all__ = [
    "ModerationService",
    "ModerationQueue",
    "NotificationDispatcher",
    "ReportLedger",
]
