"""Shared helpers: logging, validation, datetime arithmetic, exceptions."""
