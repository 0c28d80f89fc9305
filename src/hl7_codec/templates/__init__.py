# src/hl7_codec/templates/__init__.py
"""
Template package initializer.

Automatically imports all message template modules so their
@register(...) decorators run and populate the registry.
"""

from __future__ import annotations

from .messages import load_all as _load_messages

# Idempotent; safe if tests/CLI import this multiple times.
_load_messages()
