# src/hl7_codec/config.py
"""
Configuration utilities for hl7_codec.

Provides a frozen dataclass configuration object and a loader that reads
YAML configuration files when present. Header defaults (sending/receiving
application and facility, version, processing id) live here and feed the
synthetic data generator.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml


@dataclass(frozen=True)
class AppConfig:
    """
    Immutable application configuration.

    Attributes
    ----------
    default_output_dir : Path
        Directory where generated message files are written.
    file_extension : str
        Extension (without dot) for generated message files.
    version : str
        HL7 version emitted in MSH-12.
    processing_id : str
        Processing id emitted in MSH-11 (P, T or D).
    sending_application, sending_facility : str
        Synthetic defaults for MSH-3 and MSH-4.
    receiving_application, receiving_facility : str
        Synthetic defaults for MSH-5 and MSH-6.
    """

    default_output_dir: Path = Path("outputs")
    file_extension: str = "hl7"
    version: str = "2.5.1"
    processing_id: str = "P"
    sending_application: str = "HL7CODEC"
    sending_facility: str = "GENERAL_HOSPITAL"
    receiving_application: str = "RECEIVER"
    receiving_facility: str = "RECEIVING_FACILITY"


def load_config(path: Optional[Path]) -> AppConfig:
    """
    Load application configuration from a YAML file.

    Parameters
    ----------
    path : Path or None
        Path to a YAML config file. If None, defaults are used.

    Returns
    -------
    AppConfig
        The loaded configuration. Unknown keys are ignored.

    Raises
    ------
    TypeError
        If the YAML file does not parse to a mapping at the top level.
    yaml.YAMLError
        If the file is not valid YAML.
    """
    if path is None:
        return AppConfig()

    data: Any = yaml.safe_load(path.read_text())

    if data is None:
        return AppConfig()

    if not isinstance(data, Mapping):
        raise TypeError(
            f"Config file must contain a mapping at top level, "
            f"got {type(data).__name__}. "
            f"Config file: {path}"
        )

    known = {f.name for f in fields(AppConfig)}
    kwargs: Dict[str, Any] = {}
    for key, value in data.items():
        if key not in known or value is None:
            continue
        if key == "default_output_dir":
            kwargs[key] = Path(value)
        elif key == "file_extension":
            kwargs[key] = str(value).lstrip(".")
        else:
            kwargs[key] = str(value)
    return AppConfig(**kwargs)
