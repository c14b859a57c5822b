"""Base abstract models shared by the service modules.

Provides ``BaseModel``: ``created_at`` / ``updated_at`` bookkeeping on top of
Django's auto-incrementing primary key.  The primary key is the surrogate
identifier handed out by the database on first insert and never reassigned.
"""

from __future__ import annotations

from django.db import models


class BaseModel(models.Model):
    """Abstract base with timestamp bookkeeping."""

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        abstract = True
