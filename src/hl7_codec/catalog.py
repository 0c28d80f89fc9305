# src/hl7_codec/catalog.py
"""
Segment catalog: segment id -> display name, required flag and ordered
field names.

The same table drives both directions of the codec:
- segment builders address fields by name and `er7.render_segment` turns
  names into positions,
- the tokenizer labels parsed fields by position.

Field names follow HL7 v2.5.1 numbering. For MSH the first entry is the
field separator itself (MSH-1) and the second the encoding characters
(MSH-2), so ``fields[n - 1]`` is always the name of field ``n``.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, Mapping, Optional, Tuple

__all__ = [
    "SegmentDefinition",
    "SEGMENT_CATALOG",
    "HEADER_SEGMENT",
    "get_definition",
    "field_label",
    "required_segments",
]

HEADER_SEGMENT = "MSH"


@dataclass(frozen=True)
class SegmentDefinition:
    """
    Static description of one segment type.

    Attributes
    ----------
    segment_id : str
        Three-letter segment code, e.g. "PID".
    name : str
        Human display name, e.g. "Patient Identification".
    required : bool
        True when every message is expected to carry this segment.
    fields : tuple of str
        Field names in position order; ``fields[0]`` is field 1.
    """

    segment_id: str
    name: str
    required: bool
    fields: Tuple[str, ...]

    def field_name(self, index: int) -> Optional[str]:
        """Return the name of 1-based field ``index`` or None when undefined."""
        if 1 <= index <= len(self.fields):
            return self.fields[index - 1]
        return None

    def position(self, field_name: str) -> int:
        """
        Return the 1-based position of ``field_name``.

        Raises
        ------
        KeyError
            If the segment defines no field with that name.
        """
        try:
            return self.fields.index(field_name) + 1
        except ValueError:
            raise KeyError(
                f"{self.segment_id} has no field named {field_name!r}"
            ) from None


def _define(
    segment_id: str, name: str, field_names: Iterable[str], required: bool = False
) -> SegmentDefinition:
    names = tuple(field_names)
    if len(set(names)) != len(names):
        raise ValueError(f"duplicate field names in {segment_id} definition")
    return SegmentDefinition(segment_id, name, required, names)


_DEFINITIONS = (
    _define(
        "MSH",
        "Message Header",
        [
            "Field Separator",
            "Encoding Characters",
            "Sending Application",
            "Sending Facility",
            "Receiving Application",
            "Receiving Facility",
            "Date/Time Of Message",
            "Security",
            "Message Type",
            "Message Control ID",
            "Processing ID",
            "Version ID",
            "Sequence Number",
            "Continuation Pointer",
            "Accept Acknowledgment Type",
            "Application Acknowledgment Type",
            "Country Code",
            "Character Set",
            "Principal Language Of Message",
        ],
        required=True,
    ),
    _define(
        "EVN",
        "Event Type",
        [
            "Event Type Code",
            "Recorded Date/Time",
            "Date/Time Planned Event",
            "Event Reason Code",
            "Operator ID",
            "Event Occurred",
            "Event Facility",
        ],
    ),
    _define(
        "PID",
        "Patient Identification",
        [
            "Set ID - PID",
            "Patient ID",
            "Patient Identifier List",
            "Alternate Patient ID - PID",
            "Patient Name",
            "Mother's Maiden Name",
            "Date/Time of Birth",
            "Administrative Sex",
            "Patient Alias",
            "Race",
            "Patient Address",
            "County Code",
            "Phone Number - Home",
            "Phone Number - Business",
            "Primary Language",
            "Marital Status",
            "Religion",
            "Patient Account Number",
            "SSN Number - Patient",
            "Driver's License Number - Patient",
            "Mother's Identifier",
            "Ethnic Group",
            "Birth Place",
            "Multiple Birth Indicator",
            "Birth Order",
            "Citizenship",
            "Veterans Military Status",
            "Nationality",
            "Patient Death Date and Time",
            "Patient Death Indicator",
        ],
        required=True,
    ),
    _define(
        "PV1",
        "Patient Visit",
        [
            "Set ID - PV1",
            "Patient Class",
            "Assigned Patient Location",
            "Admission Type",
            "Preadmit Number",
            "Prior Patient Location",
            "Attending Doctor",
            "Referring Doctor",
            "Consulting Doctor",
            "Hospital Service",
            "Temporary Location",
            "Preadmit Test Indicator",
            "Re-admission Indicator",
            "Admit Source",
            "Ambulatory Status",
            "VIP Indicator",
            "Admitting Doctor",
            "Patient Type",
            "Visit Number",
            "Financial Class",
            "Charge Price Indicator",
            "Courtesy Code",
            "Credit Rating",
            "Contract Code",
            "Contract Effective Date",
            "Contract Amount",
            "Contract Period",
            "Interest Code",
            "Transfer to Bad Debt Code",
            "Transfer to Bad Debt Date",
            "Bad Debt Agency Code",
            "Bad Debt Transfer Amount",
            "Bad Debt Recovery Amount",
            "Delete Account Indicator",
            "Delete Account Date",
            "Discharge Disposition",
            "Discharged to Location",
            "Diet Type",
            "Servicing Facility",
            "Bed Status",
            "Account Status",
            "Pending Location",
            "Prior Temporary Location",
            "Admit Date/Time",
            "Discharge Date/Time",
            "Current Patient Balance",
            "Total Charges",
            "Total Adjustments",
            "Total Payments",
            "Alternate Visit ID",
            "Visit Indicator",
            "Other Healthcare Provider",
        ],
    ),
    _define(
        "PV2",
        "Patient Visit - Additional Information",
        [
            "Prior Pending Location",
            "Accommodation Code",
            "Admit Reason",
            "Transfer Reason",
            "Patient Valuables",
            "Patient Valuables Location",
            "Visit User Code",
            "Expected Admit Date/Time",
            "Expected Discharge Date/Time",
            "Estimated Length of Inpatient Stay",
            "Actual Length of Inpatient Stay",
            "Visit Description",
        ],
    ),
    _define(
        "DG1",
        "Diagnosis",
        [
            "Set ID - DG1",
            "Diagnosis Coding Method",
            "Diagnosis Code - DG1",
            "Diagnosis Description",
            "Diagnosis Date/Time",
            "Diagnosis Type",
            "Major Diagnostic Category",
            "Diagnostic Related Group",
            "DRG Approval Indicator",
            "DRG Grouper Review Code",
            "Outlier Type",
            "Outlier Days",
            "Outlier Cost",
            "Grouper Version And Type",
            "Diagnosis Priority",
            "Diagnosing Clinician",
        ],
    ),
    _define(
        "ORC",
        "Common Order",
        [
            "Order Control",
            "Placer Order Number",
            "Filler Order Number",
            "Placer Group Number",
            "Order Status",
            "Response Flag",
            "Quantity/Timing",
            "Parent",
            "Date/Time of Transaction",
            "Entered By",
            "Verified By",
            "Ordering Provider",
            "Enterer's Location",
            "Call Back Phone Number",
            "Order Effective Date/Time",
            "Order Control Code Reason",
            "Entering Organization",
            "Entering Device",
            "Action By",
            "Advanced Beneficiary Notice Code",
            "Ordering Facility Name",
        ],
    ),
    _define(
        "OBR",
        "Observation Request",
        [
            "Set ID - OBR",
            "Placer Order Number",
            "Filler Order Number",
            "Universal Service Identifier",
            "Priority - OBR",
            "Requested Date/Time",
            "Observation Date/Time",
            "Observation End Date/Time",
            "Collection Volume",
            "Collector Identifier",
            "Specimen Action Code",
            "Danger Code",
            "Relevant Clinical Information",
            "Specimen Received Date/Time",
            "Specimen Source",
            "Ordering Provider",
            "Order Callback Phone Number",
            "Placer Field 1",
            "Placer Field 2",
            "Filler Field 1",
            "Filler Field 2",
            "Results Rpt/Status Chng - Date/Time",
            "Charge to Practice",
            "Diagnostic Serv Sect ID",
            "Result Status",
        ],
    ),
    _define(
        "OBX",
        "Observation/Result",
        [
            "Set ID - OBX",
            "Value Type",
            "Observation Identifier",
            "Observation Sub-ID",
            "Observation Value",
            "Units",
            "References Range",
            "Abnormal Flags",
            "Probability",
            "Nature of Abnormal Test",
            "Observation Result Status",
            "Effective Date of Reference Range",
            "User Defined Access Checks",
            "Date/Time of the Observation",
            "Producer's ID",
            "Responsible Observer",
            "Observation Method",
        ],
    ),
    _define(
        "SCH",
        "Scheduling Activity Information",
        [
            "Placer Appointment ID",
            "Filler Appointment ID",
            "Occurrence Number",
            "Placer Group Number",
            "Schedule ID",
            "Event Reason",
            "Appointment Reason",
            "Appointment Type",
            "Appointment Duration",
            "Appointment Duration Units",
            "Appointment Timing Quantity",
            "Placer Contact Person",
            "Placer Contact Phone Number",
            "Placer Contact Address",
            "Placer Contact Location",
            "Filler Contact Person",
            "Filler Contact Phone Number",
            "Filler Contact Address",
            "Filler Contact Location",
            "Entered By Person",
            "Entered By Phone Number",
            "Entered By Location",
            "Parent Placer Appointment ID",
            "Parent Filler Appointment ID",
            "Filler Status Code",
        ],
    ),
    _define(
        "AIS",
        "Appointment Information - Service",
        [
            "Set ID - AIS",
            "Segment Action Code",
            "Universal Service Identifier",
            "Start Date/Time",
            "Start Date/Time Offset",
            "Start Date/Time Offset Units",
            "Duration",
            "Duration Units",
            "Allow Substitution Code",
            "Filler Status Code",
        ],
    ),
    _define(
        "AIL",
        "Appointment Information - Location Resource",
        [
            "Set ID - AIL",
            "Segment Action Code",
            "Location Resource ID",
            "Location Type-AIL",
            "Location Group",
            "Start Date/Time",
            "Start Date/Time Offset",
            "Start Date/Time Offset Units",
            "Duration",
            "Duration Units",
            "Allow Substitution Code",
            "Filler Status Code",
        ],
    ),
    _define(
        "AIP",
        "Appointment Information - Personnel Resource",
        [
            "Set ID - AIP",
            "Segment Action Code",
            "Personnel Resource ID",
            "Resource Type",
            "Resource Group",
            "Start Date/Time",
            "Start Date/Time Offset",
            "Start Date/Time Offset Units",
            "Duration",
            "Duration Units",
            "Allow Substitution Code",
            "Filler Status Code",
        ],
    ),
    _define(
        "RXE",
        "Pharmacy/Treatment Encoded Order",
        [
            "Quantity/Timing",
            "Give Code",
            "Give Amount - Minimum",
            "Give Amount - Maximum",
            "Give Units",
            "Give Dosage Form",
            "Provider's Administration Instructions",
            "Deliver-To Location",
            "Substitution Status",
            "Dispense Amount",
            "Dispense Units",
            "Number Of Refills",
            "Ordering Provider's DEA Number",
            "Pharmacist/Treatment Supplier's Verifier ID",
            "Prescription Number",
            "Number of Refills Remaining",
            "Number of Refills/Doses Dispensed",
            "D/T of Most Recent Refill or Dose Dispensed",
            "Total Daily Dose",
            "Needs Human Review",
            "Pharmacy/Treatment Supplier's Special Dispensing Instructions",
            "Give Per (Time Unit)",
            "Give Rate Amount",
            "Give Rate Units",
            "Give Strength",
            "Give Strength Units",
        ],
    ),
    _define(
        "RXR",
        "Pharmacy/Treatment Route",
        [
            "Route",
            "Administration Site",
            "Administration Device",
            "Administration Method",
            "Routing Instruction",
            "Administration Site Modifier",
        ],
    ),
    _define(
        "RXA",
        "Pharmacy/Treatment Administration",
        [
            "Give Sub-ID Counter",
            "Administration Sub-ID Counter",
            "Date/Time Start of Administration",
            "Date/Time End of Administration",
            "Administered Code",
            "Administered Amount",
            "Administered Units",
            "Administered Dosage Form",
            "Administration Notes",
            "Administering Provider",
            "Administered-at Location",
            "Administered Per (Time Unit)",
            "Administered Strength",
            "Administered Strength Units",
            "Substance Lot Number",
            "Substance Expiration Date",
            "Substance Manufacturer Name",
            "Substance/Treatment Refusal Reason",
            "Indication",
            "Completion Status",
            "Action Code - RXA",
            "System Entry Date/Time",
        ],
    ),
    _define(
        "TXA",
        "Transcription Document Header",
        [
            "Set ID - TXA",
            "Document Type",
            "Document Content Presentation",
            "Activity Date/Time",
            "Primary Activity Provider Code/Name",
            "Origination Date/Time",
            "Transcription Date/Time",
            "Edit Date/Time",
            "Originator Code/Name",
            "Assigned Document Authenticator",
            "Transcriptionist Code/Name",
            "Unique Document Number",
            "Parent Document Number",
            "Placer Order Number",
            "Filler Order Number",
            "Unique Document File Name",
            "Document Completion Status",
            "Document Confidentiality Status",
            "Document Availability Status",
            "Document Storage Status",
            "Document Change Reason",
            "Authentication Person, Time Stamp",
            "Distributed Copies",
        ],
    ),
    _define(
        "FT1",
        "Financial Transaction",
        [
            "Set ID - FT1",
            "Transaction ID",
            "Transaction Batch ID",
            "Transaction Date",
            "Transaction Posting Date",
            "Transaction Type",
            "Transaction Code",
            "Transaction Description",
            "Transaction Description - Alt",
            "Transaction Quantity",
            "Transaction Amount - Extended",
            "Transaction Amount - Unit",
            "Department Code",
            "Insurance Plan ID",
            "Insurance Amount",
            "Assigned Patient Location",
            "Fee Schedule",
            "Patient Type",
            "Diagnosis Code - FT1",
            "Performed By Code",
            "Ordered By Code",
            "Unit Cost",
            "Filler Order Number",
            "Entered By Code",
            "Procedure Code",
        ],
    ),
    # Not emitted by the generator; present so parsed messages get labels.
    _define(
        "NK1",
        "Next of Kin / Associated Parties",
        [
            "Set ID - NK1",
            "Name",
            "Relationship",
            "Address",
            "Phone Number",
            "Business Phone Number",
            "Contact Role",
        ],
    ),
    _define(
        "AL1",
        "Patient Allergy Information",
        [
            "Set ID - AL1",
            "Allergen Type Code",
            "Allergen Code/Mnemonic/Description",
            "Allergy Severity Code",
            "Allergy Reaction Code",
            "Identification Date",
        ],
    ),
    _define(
        "NTE",
        "Notes and Comments",
        [
            "Set ID - NTE",
            "Source of Comment",
            "Comment",
            "Comment Type",
        ],
    ),
    _define(
        "MSA",
        "Message Acknowledgment",
        [
            "Acknowledgment Code",
            "Message Control ID",
            "Text Message",
            "Expected Sequence Number",
            "Delayed Acknowledgment Type",
            "Error Condition",
        ],
    ),
    _define(
        "MRG",
        "Merge Patient Information",
        [
            "Prior Patient Identifier List",
            "Prior Alternate Patient ID",
            "Prior Patient Account Number",
            "Prior Patient ID",
            "Prior Visit Number",
            "Prior Alternate Visit ID",
            "Prior Patient Name",
        ],
    ),
)

SEGMENT_CATALOG: Mapping[str, SegmentDefinition] = MappingProxyType(
    {d.segment_id: d for d in _DEFINITIONS}
)


def get_definition(
    segment_id: str, catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG
) -> Optional[SegmentDefinition]:
    """Return the catalog entry for ``segment_id`` or None when unknown."""
    return catalog.get(segment_id)


def field_label(
    segment_id: str,
    index: int,
    catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG,
) -> str:
    """
    Return the display label for field ``index`` of ``segment_id``.

    Positions outside the catalog's range (or unknown segments) get a
    generic positional label such as ``"ZPI-3"``.
    """
    definition = catalog.get(segment_id)
    name = definition.field_name(index) if definition is not None else None
    return name if name is not None else f"{segment_id}-{index}"


def required_segments(
    catalog: Mapping[str, SegmentDefinition] = SEGMENT_CATALOG,
) -> Dict[str, SegmentDefinition]:
    """Return the catalog entries flagged as required, keyed by segment id."""
    return {sid: d for sid, d in catalog.items() if d.required}
