# src/hl7_codec/templates/messages/__init__.py
"""
Auto-discovery for message templates.

Any module under this package that defines a template and uses
@register("...") will be imported automatically by load_all().
"""

from __future__ import annotations

import importlib
import pkgutil
from typing import Iterable, Set

_DISCOVERED: Set[str] = set()


def _iter_modules(pkg_name: str) -> Iterable[str]:
    """
    Yield fully-qualified module names under the given package.
    """
    pkg = importlib.import_module(pkg_name)
    pkg_path = getattr(pkg, "__path__", None)
    if not pkg_path:
        return
    for _, name, _ in pkgutil.walk_packages(pkg_path, prefix=pkg_name + "."):
        yield name


def load_all() -> None:
    """
    Import all template modules under hl7_codec.templates.messages.

    Idempotent: safe to call multiple times.
    """
    base = __name__  # "hl7_codec.templates.messages"
    for modname in _iter_modules(base):
        if modname in _DISCOVERED:
            continue
        short = modname.rsplit(".", 1)[-1]
        if short.startswith("_"):
            continue
        importlib.import_module(modname)
        _DISCOVERED.add(modname)


__all__ = ["load_all"]
