"""Data models."""

from .reply import Reply
