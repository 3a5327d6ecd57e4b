"""Scheduling workflows on top of the in-memory store."""

from .scheduling import ScheduleService

__all__ = ["ScheduleService"]
