# src/hl7_codec/synthetic.py
"""
Synthetic data generator.

Produces plausible values for any subset of logical fields while keeping
related fields consistent:

- first names come from the pool matching the (resolved or drawn) gender,
- coded values (diagnosis, lab test, medication, vaccine, appointment type,
  document type, transaction type, procedure) are drawn as one table entry,
- lab values land within, above or below the reference range with equal
  probability.

Randomness comes from an injectable ``random.Random`` and time from an
injectable clock, so runs are reproducible under a seed.
"""

from __future__ import annotations

import logging
import random
import string
from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Callable, Dict, Iterable, Mapping, Optional, Any

from .config import AppConfig
from .fields import INPUT_FIELDS, parse_range
from .pools import DEFAULT_POOLS, SyntheticPools

LOG = logging.getLogger(__name__)

Clock = Callable[[], datetime]

ID_ALPHABET = string.ascii_uppercase + string.digits

# Fixed identifier lengths per field
ID_LENGTHS: Mapping[str, int] = {
    "controlId": 20,
    "patientId": 8,
    "visitNumber": 10,
    "attendingDoctorId": 6,
    "placerOrderNumber": 10,
    "fillerOrderNumber": 10,
    "appointmentId": 10,
    "fillerAppointmentId": 10,
    "documentId": 12,
    "transactionId": 10,
    "lotNumber": 6,
}

_HEADER_DEFAULTS = {
    "sendingApplication": AppConfig.sending_application,
    "sendingFacility": AppConfig.sending_facility,
    "receivingApplication": AppConfig.receiving_application,
    "receivingFacility": AppConfig.receiving_facility,
}


def local_now() -> datetime:
    """Current local time, timezone-aware."""
    return datetime.now().astimezone()


def format_timestamp(dt: datetime) -> str:
    """
    HL7 TS with a UTC offset suffix: YYYYMMDDHHMMSS+ZZZZ.

    Naive datetimes are interpreted as local time.
    """
    if dt.tzinfo is None:
        dt = dt.astimezone()
    return dt.strftime("%Y%m%d%H%M%S%z")


class SyntheticDataGenerator:
    """
    Fill in logical fields with plausible values.

    Parameters
    ----------
    pools : SyntheticPools
        Enumeration tables to draw from.
    rng : random.Random, optional
        Source of randomness; a fresh unseeded instance by default.
    clock : callable, optional
        Returns the base "now"; defaults to the local clock.
    header_defaults : mapping, optional
        Values for sendingApplication/sendingFacility/receivingApplication/
        receivingFacility.
    """

    def __init__(
        self,
        pools: SyntheticPools = DEFAULT_POOLS,
        rng: Optional[random.Random] = None,
        clock: Optional[Clock] = None,
        header_defaults: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.pools = pools
        self.rng = rng if rng is not None else random.Random()
        self.clock = clock if clock is not None else local_now
        self.header_defaults: Dict[str, str] = dict(_HEADER_DEFAULTS)
        self.header_defaults.update(header_defaults or {})

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        *,
        seed: Optional[int] = None,
        clock: Optional[Clock] = None,
        pools: SyntheticPools = DEFAULT_POOLS,
    ) -> "SyntheticDataGenerator":
        """Build a generator whose header defaults come from ``config``."""
        return cls(
            pools=pools,
            rng=random.Random(seed),
            clock=clock,
            header_defaults={
                "sendingApplication": config.sending_application,
                "sendingFacility": config.sending_facility,
                "receivingApplication": config.receiving_application,
                "receivingFacility": config.receiving_facility,
            },
        )

    def random_id(self, length: int) -> str:
        """Uppercase alphanumeric identifier of exactly ``length`` characters."""
        return "".join(self.rng.choice(ID_ALPHABET) for _ in range(length))

    def generate(
        self, needed: Iterable[str], resolved: Optional[Mapping[str, str]] = None
    ) -> Dict[str, str]:
        """
        Return a value for every name in ``needed``.

        ``resolved`` holds values already fixed by other sources; they are
        used for cross-field consistency (e.g. gender -> first name) and are
        never overwritten.

        Raises
        ------
        ValueError
            If ``needed`` names an unknown or derived field.
        """
        names = list(needed)
        unknown = sorted(set(names) - INPUT_FIELDS)
        if unknown:
            raise ValueError(f"Cannot synthesize unknown fields: {unknown}")
        draw = _Draw(self, self.clock(), resolved or {})
        return {name: draw.synthesize(name) for name in names}


class _Draw:
    """One generation's worth of draws; bundles are drawn at most once."""

    def __init__(
        self, gen: SyntheticDataGenerator, now: datetime, resolved: Mapping[str, str]
    ) -> None:
        self.gen = gen
        self.rng = gen.rng
        self.pools = gen.pools
        self.now = now
        self.resolved = resolved
        self._cache: Dict[str, str] = {}
        self._entries: Dict[str, Any] = {}
        self._producers: Dict[str, Callable[[], Dict[str, str]]] = {}
        for names, producer in (
            (tuple(_HEADER_DEFAULTS), self._header),
            (("messageDateTime",), lambda: {"messageDateTime": self._ts()}),
            (("gender",), lambda: {"gender": self.rng.choice(self.pools.genders)}),
            (("firstName",), self._first_name),
            (("lastName",), lambda: {"lastName": self.rng.choice(self.pools.last_names)}),
            (("dateOfBirth",), self._date_of_birth),
            (("race",), lambda: {"race": self.rng.choice(self.pools.races).code}),
            (
                ("maritalStatus",),
                lambda: {"maritalStatus": self.rng.choice(self.pools.marital_statuses)},
            ),
            (("streetAddress", "city", "state", "postalCode"), self._address),
            (("phoneNumber",), self._phone),
            (
                ("patientClass",),
                lambda: {"patientClass": self.rng.choice(self.pools.patient_classes)},
            ),
            (("assignedLocation",), self._location),
            (
                ("attendingDoctorLastName", "attendingDoctorFirstName"),
                self._doctor_name,
            ),
            (("admitDateTime",), lambda: {"admitDateTime": self._ts()}),
            (("dischargeDateTime",), self._discharge),
            (
                ("diagnosisCode", "diagnosisDescription", "diagnosisCodingSystem"),
                self._diagnosis,
            ),
            (
                ("labTestCode", "labTestName", "labCodingSystem", "labUnits", "referenceRange"),
                self._lab_test,
            ),
            (("labValue",), self._lab_value),
            (
                (
                    "medicationCode",
                    "medicationName",
                    "medicationCodingSystem",
                    "medicationDose",
                    "medicationUnits",
                    "medicationForm",
                    "routeCode",
                    "routeName",
                ),
                self._medication,
            ),
            (("dispenseAmount",), lambda: {"dispenseAmount": str(self.rng.randint(10, 90))}),
            (("refills",), lambda: {"refills": str(self.rng.randint(0, 5))}),
            (
                (
                    "vaccineCode",
                    "vaccineName",
                    "vaccineCodingSystem",
                    "manufacturerCode",
                    "manufacturerName",
                    "vaccineDoseAmount",
                ),
                self._vaccine,
            ),
            (("administrationDateTime",), lambda: {"administrationDateTime": self._ts()}),
            (
                ("appointmentTypeCode", "appointmentTypeName", "appointmentTypeCodingSystem"),
                self._appointment_type,
            ),
            (("appointmentDateTime",), self._appointment_time),
            (
                ("appointmentDuration",),
                lambda: {
                    "appointmentDuration": str(
                        self.rng.choice(self.pools.appointment_durations)
                    )
                },
            ),
            (("appointmentLocation",), self._appointment_location),
            (
                ("documentTypeCode", "documentTypeName", "documentTypeCodingSystem"),
                self._document_type,
            ),
            (("documentDateTime",), lambda: {"documentDateTime": self._ts()}),
            (("documentText",), self._document_text),
            (
                ("transactionTypeCode", "transactionTypeName", "transactionTypeCodingSystem"),
                self._transaction_type,
            ),
            (("procedureCode", "procedureName", "procedureCodingSystem"), self._procedure),
            (
                ("transactionQuantity",),
                lambda: {"transactionQuantity": str(self.rng.randint(1, 3))},
            ),
            (("transactionAmount",), self._transaction_amount),
            (("transactionDateTime",), lambda: {"transactionDateTime": self._ts()}),
        ):
            for name in names:
                self._producers[name] = producer
        for name, length in ID_LENGTHS.items():
            self._producers[name] = self._identifier(name, length)

    # -- access ----------------------------------------------------------------

    def synthesize(self, name: str) -> str:
        if name not in self._cache:
            self._cache.update(self._producers[name]())
        return self._cache[name]

    def get(self, name: str) -> str:
        """Value for a dependency: already-resolved input wins over a draw."""
        if name in self.resolved:
            return self.resolved[name]
        return self.synthesize(name)

    def _entry(self, key: str, table: tuple) -> Any:
        if key not in self._entries:
            self._entries[key] = self.rng.choice(table)
        return self._entries[key]

    def _ts(self, delta: timedelta = timedelta(0)) -> str:
        return format_timestamp(self.now + delta)

    def _identifier(self, name: str, length: int) -> Callable[[], Dict[str, str]]:
        return lambda: {name: self.gen.random_id(length)}

    # -- producers -------------------------------------------------------------

    def _header(self) -> Dict[str, str]:
        return dict(self.gen.header_defaults)

    def _first_name(self) -> Dict[str, str]:
        pool = self.pools.first_names_for(self.get("gender"))
        return {"firstName": self.rng.choice(pool)}

    def _date_of_birth(self) -> Dict[str, str]:
        year = self.rng.randint(1930, 2015)
        month = self.rng.randint(1, 12)
        day = self.rng.randint(1, 28)
        return {"dateOfBirth": f"{year:04d}{month:02d}{day:02d}"}

    def _address(self) -> Dict[str, str]:
        city, state, zip_prefix = self.rng.choice(self.pools.localities)
        return {
            "streetAddress": f"{self.rng.randint(1, 9999)} {self.rng.choice(self.pools.streets)}",
            "city": city,
            "state": state,
            "postalCode": f"{zip_prefix}{self.rng.randint(0, 99):02d}",
        }

    def _phone(self) -> Dict[str, str]:
        return {
            "phoneNumber": (
                f"({self.rng.randint(200, 999)})"
                f"{self.rng.randint(200, 999)}-"
                f"{self.rng.randint(0, 9999):04d}"
            )
        }

    def _location(self) -> Dict[str, str]:
        ward = self.rng.choice(self.pools.wards)
        room = self.rng.randint(100, 499)
        bed = self.rng.choice("AB")
        return {"assignedLocation": f"{ward}^{room}^{bed}"}

    def _doctor_name(self) -> Dict[str, str]:
        first = self.pools.male_first_names + self.pools.female_first_names
        return {
            "attendingDoctorLastName": self.rng.choice(self.pools.last_names),
            "attendingDoctorFirstName": self.rng.choice(first),
        }

    def _discharge(self) -> Dict[str, str]:
        return {"dischargeDateTime": self._ts(timedelta(days=self.rng.randint(1, 5)))}

    def _diagnosis(self) -> Dict[str, str]:
        entry = self._entry("diagnosis", self.pools.diagnoses)
        return {
            "diagnosisCode": entry.code,
            "diagnosisDescription": entry.display,
            "diagnosisCodingSystem": entry.system,
        }

    def _lab_test(self) -> Dict[str, str]:
        test = self._entry("lab", self.pools.lab_tests)
        p = test.precision
        return {
            "labTestCode": test.code,
            "labTestName": test.display,
            "labCodingSystem": test.system,
            "labUnits": test.units,
            "referenceRange": f"{test.low:.{p}f}-{test.high:.{p}f}",
        }

    def _lab_value(self) -> Dict[str, str]:
        test = self._entry("lab", self.pools.lab_tests)
        bounds = parse_range(self.get("referenceRange")) or (test.low, test.high)
        low, high = min(bounds), max(bounds)
        precision = test.precision
        step = 10 ** -precision
        span = (high - low) or max(abs(high), 1.0)

        band = self.rng.choice(("within", "above", "below"))
        if band == "within":
            value = self.rng.uniform(low, high)
        elif band == "above":
            value = self.rng.uniform(high + step, high + step + span / 2)
        else:
            upper = low - step
            lower = low - max(span / 2, step)
            # Values stay non-negative unless the range leaves no room above 0
            if lower < 0 <= upper:
                lower = 0.0
            value = self.rng.uniform(lower, upper)
        text = f"{value:.{precision}f}"
        # Rounding must not carry a below-range draw back into the range
        while band == "below" and float(text) >= low:
            value -= step
            text = f"{value:.{precision}f}"
        LOG.debug("Lab value band %s for range %s-%s", band, low, high)
        return {"labValue": text}

    def _medication(self) -> Dict[str, str]:
        med = self._entry("medication", self.pools.medications)
        return {
            "medicationCode": med.code,
            "medicationName": med.display,
            "medicationCodingSystem": med.system,
            "medicationDose": med.dose,
            "medicationUnits": med.units,
            "medicationForm": med.form,
            "routeCode": med.route_code,
            "routeName": med.route_display,
        }

    def _vaccine(self) -> Dict[str, str]:
        vax = self._entry("vaccine", self.pools.vaccines)
        return {
            "vaccineCode": vax.code,
            "vaccineName": vax.display,
            "vaccineCodingSystem": vax.system,
            "manufacturerCode": vax.manufacturer_code,
            "manufacturerName": vax.manufacturer_name,
            "vaccineDoseAmount": vax.dose,
        }

    def _appointment_type(self) -> Dict[str, str]:
        entry = self._entry("appointment", self.pools.appointment_types)
        return {
            "appointmentTypeCode": entry.code,
            "appointmentTypeName": entry.display,
            "appointmentTypeCodingSystem": entry.system,
        }

    def _appointment_time(self) -> Dict[str, str]:
        return {"appointmentDateTime": self._ts(timedelta(days=self.rng.randint(1, 30)))}

    def _appointment_location(self) -> Dict[str, str]:
        clinic = self.rng.choice(self.pools.clinics)
        return {"appointmentLocation": f"{clinic}^{self.rng.randint(1, 20)}"}

    def _document_type(self) -> Dict[str, str]:
        entry = self._entry("document", self.pools.document_types)
        return {
            "documentTypeCode": entry.code,
            "documentTypeName": entry.display,
            "documentTypeCodingSystem": entry.system,
        }

    def _document_text(self) -> Dict[str, str]:
        count = min(3, len(self.pools.document_sentences))
        return {
            "documentText": " ".join(self.rng.sample(self.pools.document_sentences, count))
        }

    def _transaction_type(self) -> Dict[str, str]:
        entry = self._entry("transaction", self.pools.transaction_types)
        return {
            "transactionTypeCode": entry.code,
            "transactionTypeName": entry.display,
            "transactionTypeCodingSystem": entry.system,
        }

    def _procedure(self) -> Dict[str, str]:
        entry = self._entry("procedure", self.pools.procedures)
        return {
            "procedureCode": entry.code,
            "procedureName": entry.display,
            "procedureCodingSystem": entry.system,
        }

    def _transaction_amount(self) -> Dict[str, str]:
        entry = self._entry("procedure", self.pools.procedures)
        try:
            quantity = Decimal(self.get("transactionQuantity"))
        except InvalidOperation:
            quantity = Decimal(1)
        amount = (Decimal(entry.unit_price) * quantity).quantize(Decimal("0.01"))
        return {"transactionAmount": str(amount)}
