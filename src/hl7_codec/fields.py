# src/hl7_codec/fields.py
"""
Logical fields and the field resolver.

Every generated message is rendered from a ``ResolvedFieldSet``: one string
per logical field name (``patientId``, ``diagnosisCode``, ...). Values are
resolved with a fixed precedence:

1. explicit input (non-empty after trimming),
2. bucket value (non-empty after trimming),
3. synthetic default.

``ForceRandom`` skips steps 1 and 2. Format rules (date of birth,
admit/discharge timestamps) run over every explicit or bucket value before
any synthesis happens; all violations are reported together.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType
from typing import (
    Any,
    Callable,
    Dict,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Mapping,
    Optional,
    Protocol,
    Tuple,
    Union,
)

from .exceptions import FieldFormatError, InputError

LOG = logging.getLogger(__name__)

# ------------------------------------------------------------------------------
# field names
# ------------------------------------------------------------------------------

HEADER_FIELDS: Tuple[str, ...] = (
    "sendingApplication",
    "sendingFacility",
    "receivingApplication",
    "receivingFacility",
    "controlId",
    "messageDateTime",
)

PATIENT_FIELDS: Tuple[str, ...] = (
    "patientId",
    "firstName",
    "lastName",
    "dateOfBirth",
    "gender",
    "race",
    "maritalStatus",
    "streetAddress",
    "city",
    "state",
    "postalCode",
    "phoneNumber",
)

VISIT_FIELDS: Tuple[str, ...] = (
    "patientClass",
    "assignedLocation",
    "attendingDoctorId",
    "attendingDoctorLastName",
    "attendingDoctorFirstName",
    "visitNumber",
    "admitDateTime",
    "dischargeDateTime",
)

DIAGNOSIS_FIELDS: Tuple[str, ...] = (
    "diagnosisCode",
    "diagnosisDescription",
    "diagnosisCodingSystem",
)

ORDER_FIELDS: Tuple[str, ...] = (
    "placerOrderNumber",
    "fillerOrderNumber",
)

LAB_FIELDS: Tuple[str, ...] = (
    "labTestCode",
    "labTestName",
    "labCodingSystem",
    "labValue",
    "labUnits",
    "referenceRange",
    "abnormalFlag",
)

MEDICATION_FIELDS: Tuple[str, ...] = (
    "medicationCode",
    "medicationName",
    "medicationCodingSystem",
    "medicationDose",
    "medicationUnits",
    "medicationForm",
    "routeCode",
    "routeName",
    "dispenseAmount",
    "refills",
)

VACCINE_FIELDS: Tuple[str, ...] = (
    "vaccineCode",
    "vaccineName",
    "vaccineCodingSystem",
    "lotNumber",
    "manufacturerCode",
    "manufacturerName",
    "vaccineDoseAmount",
    "administrationDateTime",
)

APPOINTMENT_FIELDS: Tuple[str, ...] = (
    "appointmentId",
    "fillerAppointmentId",
    "appointmentTypeCode",
    "appointmentTypeName",
    "appointmentTypeCodingSystem",
    "appointmentDateTime",
    "appointmentDuration",
    "appointmentLocation",
)

DOCUMENT_FIELDS: Tuple[str, ...] = (
    "documentId",
    "documentTypeCode",
    "documentTypeName",
    "documentTypeCodingSystem",
    "documentDateTime",
    "documentText",
)

FINANCIAL_FIELDS: Tuple[str, ...] = (
    "transactionId",
    "transactionTypeCode",
    "transactionTypeName",
    "transactionTypeCodingSystem",
    "procedureCode",
    "procedureName",
    "procedureCodingSystem",
    "transactionQuantity",
    "transactionAmount",
    "transactionDateTime",
)

FIELD_ORDER: Tuple[str, ...] = (
    HEADER_FIELDS
    + PATIENT_FIELDS
    + VISIT_FIELDS
    + DIAGNOSIS_FIELDS
    + ORDER_FIELDS
    + LAB_FIELDS
    + MEDICATION_FIELDS
    + VACCINE_FIELDS
    + APPOINTMENT_FIELDS
    + DOCUMENT_FIELDS
    + FINANCIAL_FIELDS
)

ALL_FIELDS: FrozenSet[str] = frozenset(FIELD_ORDER)

# Computed after resolution; never accepted as input.
DERIVED_FIELDS: FrozenSet[str] = frozenset({"abnormalFlag"})

INPUT_FIELDS: FrozenSet[str] = ALL_FIELDS - DERIVED_FIELDS

# Enumerable-choice fields that honor the "random" sentinel.
CHOICE_FIELDS: FrozenSet[str] = frozenset(
    {"gender", "race", "maritalStatus", "patientClass"}
)

RANDOM_SENTINEL = "random"

# name -> (pattern, human readable format)
FORMAT_RULES: Mapping[str, Tuple["re.Pattern[str]", str]] = MappingProxyType(
    {
        "dateOfBirth": (re.compile(r"^\d{8}$"), "YYYYMMDD"),
        "admitDateTime": (re.compile(r"^\d{12}$"), "YYYYMMDDHHmm"),
        "dischargeDateTime": (re.compile(r"^\d{12}$"), "YYYYMMDDHHmm"),
    }
)

_RANGE_RE = re.compile(r"^\s*(-?\d+(?:\.\d+)?)\s*-\s*(-?\d+(?:\.\d+)?)\s*$")


# ------------------------------------------------------------------------------
# tri-state input option
# ------------------------------------------------------------------------------


@dataclass(frozen=True)
class Explicit:
    """A caller-supplied value."""

    value: str


@dataclass(frozen=True)
class ForceRandom:
    """Synthesize this field even if input or bucket data exists."""


@dataclass(frozen=True)
class Unset:
    """No caller input for this field."""


FORCE_RANDOM = ForceRandom()
UNSET = Unset()

FieldOption = Union[Explicit, ForceRandom, Unset]


def option_from_raw(name: str, raw: Optional[str]) -> FieldOption:
    """
    Convert a raw host parameter into a FieldOption.

    Blank or missing values become ``UNSET``. The ``"random"`` sentinel
    (case-insensitive) becomes ``FORCE_RANDOM`` only for enumerable-choice
    fields; elsewhere it is kept as a literal value.
    """
    if raw is None:
        return UNSET
    text = str(raw).strip()
    if not text:
        return UNSET
    if name in CHOICE_FIELDS and text.lower() == RANDOM_SENTINEL:
        return FORCE_RANDOM
    return Explicit(text)


def options_from_mapping(raw: Mapping[str, Optional[str]]) -> Dict[str, FieldOption]:
    """Apply ``option_from_raw`` to every entry of a name -> raw mapping."""
    return {name: option_from_raw(name, value) for name, value in raw.items()}


# ------------------------------------------------------------------------------
# resolved set
# ------------------------------------------------------------------------------


class FieldSource(str, Enum):
    """Where a resolved value came from."""

    EXPLICIT = "explicit"
    BUCKET = "bucket"
    SYNTHETIC = "synthetic"
    DERIVED = "derived"


class ResolvedFieldSet(Mapping[str, str]):
    """
    Read-only mapping of logical field name to resolved value.

    Looking up a name outside the set raises KeyError, so a builder that
    asks for a field its template never declared fails loudly.
    """

    def __init__(
        self, values: Mapping[str, str], sources: Mapping[str, FieldSource]
    ) -> None:
        self._values = MappingProxyType(dict(values))
        self._sources = MappingProxyType(dict(sources))

    def __getitem__(self, name: str) -> str:
        return self._values[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __len__(self) -> int:
        return len(self._values)

    def __repr__(self) -> str:
        return f"ResolvedFieldSet({dict(self._values)!r})"

    def source(self, name: str) -> FieldSource:
        """Return the provenance of ``name``."""
        return self._sources[name]

    def supplied(self, name: str) -> bool:
        """True when ``name`` came from explicit input or bucket data."""
        return self._sources.get(name) in (FieldSource.EXPLICIT, FieldSource.BUCKET)

    @property
    def sources(self) -> Mapping[str, FieldSource]:
        return self._sources


class SyntheticSource(Protocol):
    """Anything able to fill in missing fields (see synthetic.py)."""

    def generate(
        self, needed: Iterable[str], resolved: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]: ...


BucketLookup = Callable[[str], Any]


# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------


def parse_range(text: Optional[str]) -> Optional[Tuple[float, float]]:
    """Parse a ``low-high`` reference range; None when not numeric."""
    if not text:
        return None
    m = _RANGE_RE.match(text)
    if not m:
        return None
    return float(m.group(1)), float(m.group(2))


def classify_abnormal(value: Optional[str], reference_range: Optional[str]) -> str:
    """
    Return the abnormal flag for ``value`` against ``reference_range``.

    ``H`` above the range, ``L`` below it, ``N`` inside it (bounds
    inclusive). Non-numeric values or ranges give an empty flag.
    """
    bounds = parse_range(reference_range)
    if bounds is None or value is None:
        return ""
    try:
        number = float(value)
    except ValueError:
        return ""
    low, high = bounds
    if number > high:
        return "H"
    if number < low:
        return "L"
    return "N"


def validate_formats(values: Mapping[str, str]) -> List[str]:
    """
    Check every value with a format rule; return all violations in field
    order (empty list when everything passes).
    """
    violations: List[str] = []
    for name, (pattern, fmt) in FORMAT_RULES.items():
        value = values.get(name)
        if value is None:
            continue
        if not pattern.match(value):
            violations.append(f"{name} must match {fmt} (got {value!r})")
    return violations


def _bucket_value(lookup: Optional[BucketLookup], name: str) -> Optional[str]:
    if lookup is None:
        return None
    value = lookup(name)
    # bool is an int subclass; a flag is never a field value
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        if value is not None:
            LOG.debug("Ignoring non-scalar bucket value for %s", name)
        return None
    text = str(value).strip()
    return text or None


# ------------------------------------------------------------------------------
# resolver
# ------------------------------------------------------------------------------


def resolve_fields(
    field_names: Iterable[str],
    synthetic: SyntheticSource,
    explicit: Optional[Mapping[str, FieldOption]] = None,
    bucket_lookup: Optional[BucketLookup] = None,
) -> ResolvedFieldSet:
    """
    Resolve one value per logical field.

    Parameters
    ----------
    field_names : iterable of str
        The enumerated key set of the message being generated.
    synthetic : SyntheticSource
        Provider for values neither explicit nor bucket data supply.
    explicit : mapping of str to FieldOption, optional
        Caller input. Names outside the global field set are rejected;
        names outside ``field_names`` are ignored.
    bucket_lookup : callable, optional
        ``name -> value`` lookup into external bucket data.

    Returns
    -------
    ResolvedFieldSet
        Values in canonical field order, with provenance.

    Raises
    ------
    InputError
        If explicit input names an unknown field.
    FieldFormatError
        If any explicit or bucket value violates a format rule. No value is
        synthesized in that case.
    TypeError
        If an explicit entry is not a FieldOption.
    """
    explicit = explicit or {}
    wanted_set = set(field_names)
    unknown_wanted = wanted_set - ALL_FIELDS
    if unknown_wanted:
        raise ValueError(f"Unknown field names in key set: {sorted(unknown_wanted)}")

    unknown = sorted(set(explicit) - INPUT_FIELDS)
    if unknown:
        raise InputError(f"Unknown field name(s): {', '.join(unknown)}")

    ignored = sorted(set(explicit) - wanted_set)
    if ignored:
        LOG.debug("Ignoring fields not used by this message: %s", ", ".join(ignored))

    wanted = [n for n in FIELD_ORDER if n in wanted_set and n not in DERIVED_FIELDS]

    values: Dict[str, str] = {}
    sources: Dict[str, FieldSource] = {}
    needed: List[str] = []

    for name in wanted:
        option = explicit.get(name, UNSET)
        if not isinstance(option, (Explicit, ForceRandom, Unset)):
            raise TypeError(
                f"explicit[{name!r}] must be a FieldOption, got {type(option).__name__}"
            )
        if isinstance(option, ForceRandom):
            needed.append(name)
            continue
        if isinstance(option, Explicit) and option.value.strip():
            values[name] = option.value.strip()
            sources[name] = FieldSource.EXPLICIT
            continue
        from_bucket = _bucket_value(bucket_lookup, name)
        if from_bucket is not None:
            values[name] = from_bucket
            sources[name] = FieldSource.BUCKET
            continue
        needed.append(name)

    violations = validate_formats(values)
    if violations:
        raise FieldFormatError(violations)

    if needed:
        generated = synthetic.generate(needed, values)
        for name in needed:
            values[name] = generated[name]
            sources[name] = FieldSource.SYNTHETIC

    if "abnormalFlag" in wanted_set:
        values["abnormalFlag"] = classify_abnormal(
            values.get("labValue"), values.get("referenceRange")
        )
        sources["abnormalFlag"] = FieldSource.DERIVED

    LOG.debug(
        "Resolved %d fields (%d synthesized)", len(values), len(needed)
    )
    ordered = {n: values[n] for n in FIELD_ORDER if n in values}
    return ResolvedFieldSet(ordered, sources)
