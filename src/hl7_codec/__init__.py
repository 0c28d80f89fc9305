# src/hl7_codec/__init__.py
"""
hl7_codec: synthetic HL7 v2 message generation and ER7 parsing.

This package provides:
- A generator that renders eight message types (ADT, ORM, ORU, SIU, RDE,
  MDM, DFT, VXU) from explicit input, bucket data and synthetic defaults.
- A tokenizer/validator that labels and checks arbitrary pipe-delimited
  messages against a shared segment catalog.
- A CLI wrapping both directions.
"""

from __future__ import annotations

__version__ = "0.1.0"
__all__ = [
    "__version__",
]
