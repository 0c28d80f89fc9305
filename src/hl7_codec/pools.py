# src/hl7_codec/pools.py
"""
Enumeration pools used by the synthetic data generator.

Everything here is immutable and built once at import time. Coded entries
keep code, display text and coding system together so a draw can never mix
members of different entries.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import NamedTuple, Optional, Tuple

__all__ = [
    "CodedValue",
    "LabTest",
    "Medication",
    "Vaccine",
    "Procedure",
    "SyntheticPools",
    "DEFAULT_POOLS",
]


class CodedValue(NamedTuple):
    code: str
    display: str
    system: str


class LabTest(NamedTuple):
    code: str
    display: str
    system: str
    units: str
    low: float
    high: float
    precision: int


class Medication(NamedTuple):
    code: str
    display: str
    system: str
    dose: str
    units: str
    form: str
    route_code: str
    route_display: str


class Vaccine(NamedTuple):
    code: str
    display: str
    system: str
    manufacturer_code: str
    manufacturer_name: str
    dose: str


class Procedure(NamedTuple):
    code: str
    display: str
    system: str
    unit_price: str


MALE_FIRST_NAMES = (
    "John",
    "Michael",
    "David",
    "James",
    "Robert",
    "Daniel",
    "Thomas",
    "Samuel",
    "Patrick",
    "Kevin",
    "Carlos",
    "Ahmed",
)

FEMALE_FIRST_NAMES = (
    "Jane",
    "Mary",
    "Sarah",
    "Emily",
    "Laura",
    "Hannah",
    "Grace",
    "Olivia",
    "Maria",
    "Aisha",
    "Chloe",
    "Nora",
)

LAST_NAMES = (
    "Doe",
    "Smith",
    "Johnson",
    "Lee",
    "Brown",
    "Davis",
    "Miller-Thompson",
    "Wilson",
    "Moore",
    "Taylor",
    "Anderson",
    "Garcia",
    "Martinez",
    "Tran",
    "O'Brien",
)

STREETS = (
    "Main St",
    "Oak St",
    "Pine Ave",
    "Maple Rd",
    "Cedar Blvd",
    "Elm St",
    "Birch Ln",
)

# (city, state, postal code prefix)
LOCALITIES = (
    ("Cincinnati", "OH", "452"),
    ("Boston", "MA", "021"),
    ("Denver", "CO", "802"),
    ("Austin", "TX", "787"),
    ("Seattle", "WA", "981"),
    ("Chicago", "IL", "606"),
    ("Atlanta", "GA", "303"),
    ("Raleigh", "NC", "276"),
)

# HL7 table 0001
GENDERS = ("M", "F")

# CDC race and ethnicity code set
RACES = (
    CodedValue("2106-3", "White", "CDCREC"),
    CodedValue("2054-5", "Black or African American", "CDCREC"),
    CodedValue("2028-9", "Asian", "CDCREC"),
    CodedValue("1002-5", "American Indian or Alaska Native", "CDCREC"),
    CodedValue("2076-8", "Native Hawaiian or Other Pacific Islander", "CDCREC"),
    CodedValue("2131-1", "Other Race", "CDCREC"),
)

# HL7 table 0002
MARITAL_STATUSES = ("S", "M", "D", "W", "A", "P")

# HL7 table 0004
PATIENT_CLASSES = ("I", "O", "E")

WARDS = ("MED", "SURG", "ICU", "CARD", "ONC", "PEDS")

CLINICS = ("CLINIC-A", "CLINIC-B", "RADIOLOGY", "CARDIO-OP", "DERM-OP")

DIAGNOSES = (
    CodedValue("I10", "Essential (primary) hypertension", "I10"),
    CodedValue("E11.9", "Type 2 diabetes mellitus without complications", "I10"),
    CodedValue("J18.9", "Pneumonia, unspecified organism", "I10"),
    CodedValue("R07.9", "Chest pain, unspecified", "I10"),
    CodedValue("N39.0", "Urinary tract infection, site not specified", "I10"),
    CodedValue("J44.1", "Chronic obstructive pulmonary disease with exacerbation", "I10"),
    CodedValue("I48.91", "Unspecified atrial fibrillation", "I10"),
    CodedValue("M54.5", "Low back pain", "I10"),
)

LAB_TESTS = (
    LabTest("2951-2", "Sodium [Moles/volume] in Serum or Plasma", "LN", "mmol/L", 135.0, 145.0, 0),
    LabTest("2823-3", "Potassium [Moles/volume] in Serum or Plasma", "LN", "mmol/L", 3.5, 5.1, 1),
    LabTest("2345-7", "Glucose [Mass/volume] in Serum or Plasma", "LN", "mg/dL", 70.0, 99.0, 0),
    LabTest("718-7", "Hemoglobin [Mass/volume] in Blood", "LN", "g/dL", 12.0, 17.5, 1),
    LabTest("2160-0", "Creatinine [Mass/volume] in Serum or Plasma", "LN", "mg/dL", 0.6, 1.3, 2),
    LabTest("6690-2", "Leukocytes [#/volume] in Blood by Automated count", "LN", "10*3/uL", 4.5, 11.0, 1),
    LabTest("4548-4", "Hemoglobin A1c/Hemoglobin.total in Blood", "LN", "%", 4.0, 5.6, 1),
    LabTest("3016-3", "Thyrotropin [Units/volume] in Serum or Plasma", "LN", "mIU/L", 0.4, 4.0, 2),
)

MEDICATIONS = (
    Medication("197361", "Amlodipine 5 MG Oral Tablet", "RXNORM", "5", "mg", "TAB", "PO", "Oral"),
    Medication("860975", "Metformin 500 MG Oral Tablet", "RXNORM", "500", "mg", "TAB", "PO", "Oral"),
    Medication("314076", "Lisinopril 10 MG Oral Tablet", "RXNORM", "10", "mg", "TAB", "PO", "Oral"),
    Medication("308182", "Amoxicillin 500 MG Oral Capsule", "RXNORM", "500", "mg", "CAP", "PO", "Oral"),
    Medication("1659149", "Ceftriaxone 1000 MG Injection", "RXNORM", "1000", "mg", "INJ", "IV", "Intravenous"),
    Medication("1807632", "Enoxaparin 40 MG/0.4ML Prefilled Syringe", "RXNORM", "40", "mg", "INJ", "SC", "Subcutaneous"),
)

VACCINES = (
    Vaccine("141", "Influenza, seasonal, injectable", "CVX", "SKB", "GlaxoSmithKline", "0.5"),
    Vaccine("208", "COVID-19, mRNA, LNP-S, PF, 30 mcg/0.3 mL dose", "CVX", "PFR", "Pfizer, Inc", "0.3"),
    Vaccine("115", "Tdap", "CVX", "SKB", "GlaxoSmithKline", "0.5"),
    Vaccine("133", "Pneumococcal conjugate PCV 13", "CVX", "PFR", "Pfizer, Inc", "0.5"),
    Vaccine("03", "MMR", "CVX", "MSD", "Merck and Co., Inc.", "0.5"),
    Vaccine("21", "Varicella", "CVX", "MSD", "Merck and Co., Inc.", "0.5"),
)

# HL7 table 0276
APPOINTMENT_TYPES = (
    CodedValue("ROUTINE", "Routine appointment - default if not valued", "HL70276"),
    CodedValue("CHECKUP", "A routine check-up, such as an annual physical", "HL70276"),
    CodedValue("FOLLOWUP", "A follow up visit from a previous appointment", "HL70276"),
    CodedValue("EMERGENCY", "Emergency appointment", "HL70276"),
    CodedValue("WALKIN", "A previously unscheduled walk-in visit", "HL70276"),
)

# HL7 table 0270
DOCUMENT_TYPES = (
    CodedValue("DS", "Discharge Summary", "HL70270"),
    CodedValue("HP", "History and Physical Examination", "HL70270"),
    CodedValue("CN", "Consultation", "HL70270"),
    CodedValue("OP", "Operative Report", "HL70270"),
    CodedValue("PN", "Procedure Note", "HL70270"),
    CodedValue("SP", "Surgical Pathology", "HL70270"),
)

DOCUMENT_SENTENCES = (
    "Patient seen and examined.",
    "Vital signs stable throughout the encounter.",
    "No acute distress noted.",
    "Plan discussed with the patient, who agrees.",
    "Follow up in two weeks or sooner if symptoms worsen.",
    "Medications reconciled and reviewed.",
    "Labs reviewed and within expected limits.",
)

# HL7 table 0017
TRANSACTION_TYPES = (
    CodedValue("CG", "Charge", "HL70017"),
    CodedValue("CD", "Credit", "HL70017"),
    CodedValue("PY", "Payment", "HL70017"),
    CodedValue("AJ", "Adjustment", "HL70017"),
)

PROCEDURES = (
    Procedure("99213", "Office or other outpatient visit, established patient", "CPT", "110.00"),
    Procedure("99214", "Office or other outpatient visit, established patient, moderate", "CPT", "165.00"),
    Procedure("80048", "Basic metabolic panel", "CPT", "35.50"),
    Procedure("85025", "Complete blood count with differential", "CPT", "28.75"),
    Procedure("71046", "Radiologic examination, chest; 2 views", "CPT", "96.00"),
    Procedure("93000", "Electrocardiogram, routine ECG with interpretation", "CPT", "42.25"),
)


@dataclass(frozen=True)
class SyntheticPools:
    """
    Bundle of all pools; construct a custom one to steer synthetic output.
    """

    male_first_names: Tuple[str, ...] = MALE_FIRST_NAMES
    female_first_names: Tuple[str, ...] = FEMALE_FIRST_NAMES
    last_names: Tuple[str, ...] = LAST_NAMES
    streets: Tuple[str, ...] = STREETS
    localities: Tuple[Tuple[str, str, str], ...] = LOCALITIES
    genders: Tuple[str, ...] = GENDERS
    races: Tuple[CodedValue, ...] = RACES
    marital_statuses: Tuple[str, ...] = MARITAL_STATUSES
    patient_classes: Tuple[str, ...] = PATIENT_CLASSES
    wards: Tuple[str, ...] = WARDS
    clinics: Tuple[str, ...] = CLINICS
    diagnoses: Tuple[CodedValue, ...] = DIAGNOSES
    lab_tests: Tuple[LabTest, ...] = LAB_TESTS
    medications: Tuple[Medication, ...] = MEDICATIONS
    vaccines: Tuple[Vaccine, ...] = VACCINES
    appointment_types: Tuple[CodedValue, ...] = APPOINTMENT_TYPES
    document_types: Tuple[CodedValue, ...] = DOCUMENT_TYPES
    document_sentences: Tuple[str, ...] = DOCUMENT_SENTENCES
    transaction_types: Tuple[CodedValue, ...] = TRANSACTION_TYPES
    procedures: Tuple[Procedure, ...] = PROCEDURES
    appointment_durations: Tuple[int, ...] = field(default=(15, 20, 30, 45, 60))

    def first_names_for(self, gender: str) -> Tuple[str, ...]:
        """Return the first-name pool matching an HL7 administrative sex code."""
        code = (gender or "").strip().upper()
        if code == "M":
            return self.male_first_names
        if code == "F":
            return self.female_first_names
        return self.male_first_names + self.female_first_names

    def race(self, code: str) -> Optional[CodedValue]:
        """Look up a race entry by code."""
        for entry in self.races:
            if entry.code == code:
                return entry
        return None


DEFAULT_POOLS = SyntheticPools()
