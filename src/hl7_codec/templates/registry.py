# src/hl7_codec/templates/registry.py
"""
Registry for message templates.

Provides:
- a @register(message_type) decorator to bind message type codes to
  template classes,
- lookup by message type,
- listing of available message types and their events.
"""

from __future__ import annotations

from typing import Dict, List, Optional, Tuple, Type

from .base import MessageTemplate

# Map message type code (e.g., "ADT") to a template class.
_REGISTRY: Dict[str, Type[MessageTemplate]] = {}


def register(message_type: str):
    """
    Decorator to register a template class for a message type.

    Parameters
    ----------
    message_type : str
        HL7 message type code, e.g., "ADT".

    Raises
    ------
    ValueError
        If the message type is already registered.
    TypeError
        If the decorated object is not a class implementing the
        MessageTemplate protocol.

    Returns
    -------
    callable
        A class decorator that registers the template.
    """

    def _wrap(cls: Type[MessageTemplate]) -> Type[MessageTemplate]:
        if message_type in _REGISTRY:
            raise ValueError(
                f"Template already registered for message type {message_type!r}"
            )
        if not isinstance(cls, type):
            raise TypeError(
                f"Only classes can be registered as templates, got {type(cls)}"
            )
        if not callable(getattr(cls, "builders", None)) or not callable(
            getattr(cls, "render", None)
        ):
            raise TypeError(
                f"Class {cls.__name__} does not implement MessageTemplate protocol"
            )
        if not getattr(cls, "events", None):
            raise TypeError(f"Class {cls.__name__} declares no events")

        _REGISTRY[message_type] = cls
        return cls

    return _wrap


def available_message_types() -> List[str]:
    """
    List all registered message type codes, sorted.
    """
    return sorted(_REGISTRY.keys())


def available_events() -> Dict[str, Tuple[str, ...]]:
    """
    Map each registered message type to its events (default first).
    """
    return {code: tuple(_REGISTRY[code].events) for code in available_message_types()}


def get_template(message_type: Optional[str]) -> Optional[MessageTemplate]:
    """
    Look up and instantiate the template for ``message_type``.

    Matching ignores case and surrounding whitespace. Returns None when no
    template is registered.
    """
    if message_type is None:
        return None
    cls = _REGISTRY.get(str(message_type).strip().upper())
    return cls() if cls else None
