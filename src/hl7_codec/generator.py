# src/hl7_codec/generator.py
"""
Generation flow.

message type -> template -> event substitution -> field resolution ->
segment rendering -> assembly -> GenerateResult. Writing the file is left to
the caller (see ``write_message``); nothing is written when resolution
fails.
"""

from __future__ import annotations

import logging
import os
import re
from pathlib import Path
from typing import Mapping, Optional

from .config import AppConfig
from .er7 import assemble_message
from .exceptions import InputError
from .fields import BucketLookup, FieldOption, resolve_fields
from .models import GenerateResult
from .synthetic import SyntheticDataGenerator
from .templates import registry
from .templates.base import RenderContext

LOG = logging.getLogger(__name__)

# Control id characters replaced with "_" in file names
_UNSAFE_FILE_CHARS = re.compile(r"[^A-Za-z0-9._-]")


def message_file_name(
    message_type: str, event_type: str, control_id: str, extension: str = "hl7"
) -> str:
    """
    ``hl7-<MessageType>-<EventType>-<ControlId>.<ext>``

    Path separators and other characters outside ``A-Za-z0-9._-`` in the
    control id are replaced with ``_`` so the name never leaves the output
    directory.
    """
    safe_id = _UNSAFE_FILE_CHARS.sub("_", control_id)
    return f"hl7-{message_type}-{event_type}-{safe_id}.{extension.lstrip('.')}"


def generate_message(
    message_type: str,
    event_type: Optional[str] = None,
    explicit: Optional[Mapping[str, FieldOption]] = None,
    bucket_lookup: Optional[BucketLookup] = None,
    *,
    config: Optional[AppConfig] = None,
    synthetic: Optional[SyntheticDataGenerator] = None,
) -> GenerateResult:
    """
    Generate one message.

    Parameters
    ----------
    message_type : str
        One of the registered message types (case-insensitive).
    event_type : str, optional
        Event code; invalid or missing events fall back to the type's
        default event.
    explicit : mapping of str to FieldOption, optional
        Caller-supplied field values.
    bucket_lookup : callable, optional
        ``name -> value`` lookup into bucket data.
    config : AppConfig, optional
        Version, processing id, header defaults and file extension.
    synthetic : SyntheticDataGenerator, optional
        Provider for missing values; built from ``config`` when omitted.

    Returns
    -------
    GenerateResult

    Raises
    ------
    InputError
        If the message type is unknown or explicit input names an unknown
        field.
    FieldFormatError
        If any supplied value violates a format rule.
    """
    cfg = config or AppConfig()
    template = registry.get_template(message_type)
    if template is None:
        raise InputError(
            f"Unknown message type: {message_type!r} "
            f"(expected one of {', '.join(registry.available_message_types())})"
        )
    event = template.resolve_event(event_type)
    LOG.info("Resolving fields for %s^%s", template.message_type, event)

    gen = synthetic or SyntheticDataGenerator.from_config(cfg)
    fields = resolve_fields(
        template.field_names, gen, explicit=explicit, bucket_lookup=bucket_lookup
    )

    LOG.info("Rendering %s^%s", template.message_type, event)
    ctx = RenderContext(
        message_type=template.message_type,
        event_type=event,
        version=cfg.version,
        processing_id=cfg.processing_id,
        pools=gen.pools,
    )
    segments = template.render(fields, ctx)
    control_id = fields["controlId"]

    return GenerateResult(
        message_type=template.message_type,
        event_type=event,
        version=cfg.version,
        control_id=control_id,
        segments=segments,
        file_name=message_file_name(
            template.message_type, event, control_id, cfg.file_extension
        ),
        message=assemble_message(segments),
        field_sources={name: src.value for name, src in fields.sources.items()},
    )


def write_message(result: GenerateResult, out_dir: Path) -> Path:
    """
    Write ``result.message`` to ``out_dir / result.file_name``.

    The directory is created if needed. Text is written without newline
    translation so segment terminators stay CR.

    Raises
    ------
    InputError
        If the directory cannot be created or the write fails.
    """
    try:
        out_dir.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise InputError(f"Cannot create output directory: {out_dir} ({e})") from e
    if not os.access(out_dir, os.W_OK):
        raise InputError(f"Output directory not writable: {out_dir}")

    out_path = out_dir / result.file_name
    try:
        with out_path.open("w", encoding="utf-8", newline="") as fh:
            fh.write(result.message)
    except OSError as e:
        raise InputError(f"Failed to write {out_path}: {e}") from e
    LOG.info("Wrote %s", out_path)
    return out_path
