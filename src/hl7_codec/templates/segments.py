# src/hl7_codec/templates/segments.py
"""
Segment builders shared by the message templates.

Each builder reads logical fields from a ResolvedFieldSet and hands a
catalog-name -> value mapping to ``er7.render_segment``, which owns the
positions. Standard-table codes (coding systems, status codes) are fixed
constants here, never derived from input.
"""

from __future__ import annotations

from typing import Optional

from ..er7 import components, render_segment
from ..fields import ResolvedFieldSet
from .base import RenderContext

# ------------------------------------------------------------------------------
# standard-table constants
# ------------------------------------------------------------------------------

IDENTIFIER_TYPE_MRN = "MR"  # HL7 0203
ROUTE_TABLE = "HL70162"
DISCHARGE_DISPOSITION_HOME = "01"  # HL7 0112
ORDER_CONTROL_NEW = "NW"  # HL7 0119
ORDER_CONTROL_RESULT = "RE"
ORDER_STATUS_IN_PROCESS = "IP"  # HL7 0038
RESULT_STATUS_FINAL = "F"  # HL7 0085 / 0123
APPOINTMENT_TYPE_NORMAL = "Normal^Routine schedule request^HL70277"
DURATION_UNITS_MINUTES = "MIN"
RESOURCE_TYPE_ATTENDING = "ATTENDING"
DOCUMENT_PRESENTATION_TEXT = "TX"  # HL7 0191
DOCUMENT_STATUS_AUTHENTICATED = "AU"  # HL7 0271
DOCUMENT_AVAILABLE = "AV"  # HL7 0273
COMPLETION_STATUS_COMPLETE = "CP"  # HL7 0322
ACTION_CODE_ADD = "A"  # HL7 0323
VACCINE_UNITS = "mL^milliliters^UCUM"
MANUFACTURER_TABLE = "MVX"
VACCINE_ROUTE = "C28161^Intramuscular^NCIT"
VACCINE_SITE = "LD^Left Deltoid^HL70163"
VFC_OBSERVATION = "64994-7^Vaccine funding program eligibility category^LN"
VFC_NOT_ELIGIBLE = "V01^Not VFC eligible^HL70064"
VFC_METHOD = "VXC40^Eligibility captured at the immunization level^CDCPHINVS"


# ------------------------------------------------------------------------------
# helpers
# ------------------------------------------------------------------------------


def _doctor(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return components(
        f["attendingDoctorId"],
        f["attendingDoctorLastName"],
        f["attendingDoctorFirstName"],
        separators=ctx.separators,
    )


def _coded(ctx: RenderContext, code: str, display: str, system: str) -> str:
    return components(code, display, system, separators=ctx.separators)


def _race(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    code = f["race"]
    entry = ctx.pools.race(code)
    if entry is None:
        return code
    return _coded(ctx, entry.code, entry.display, entry.system)


def _is_number(value: str) -> bool:
    try:
        float(value)
    except ValueError:
        return False
    return True


# ------------------------------------------------------------------------------
# patient administration
# ------------------------------------------------------------------------------


def msh(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "MSH",
        {
            "Sending Application": f["sendingApplication"],
            "Sending Facility": f["sendingFacility"],
            "Receiving Application": f["receivingApplication"],
            "Receiving Facility": f["receivingFacility"],
            "Date/Time Of Message": f["messageDateTime"],
            "Message Type": components(
                ctx.message_type, ctx.event_type, separators=ctx.separators
            ),
            "Message Control ID": f["controlId"],
            "Processing ID": ctx.processing_id,
            "Version ID": ctx.version,
        },
        separators=ctx.separators,
    )


def evn(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "EVN",
        {
            "Event Type Code": ctx.event_type,
            "Recorded Date/Time": f["messageDateTime"],
            "Event Occurred": f["messageDateTime"],
        },
        separators=ctx.separators,
    )


def pid(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    sep = ctx.separators
    return render_segment(
        "PID",
        {
            "Set ID - PID": "1",
            "Patient Identifier List": components(
                f["patientId"],
                "",
                "",
                f["sendingFacility"],
                IDENTIFIER_TYPE_MRN,
                separators=sep,
            ),
            "Patient Name": components(f["lastName"], f["firstName"], separators=sep),
            "Date/Time of Birth": f["dateOfBirth"],
            "Administrative Sex": f["gender"],
            "Race": _race(f, ctx),
            "Patient Address": components(
                f["streetAddress"],
                "",
                f["city"],
                f["state"],
                f["postalCode"],
                separators=sep,
            ),
            "Phone Number - Home": f["phoneNumber"],
            "Marital Status": f["maritalStatus"],
        },
        separators=sep,
    )


def pv1(
    f: ResolvedFieldSet,
    ctx: RenderContext,
    *,
    patient_class: Optional[str] = None,
    discharge: bool = False,
) -> str:
    values = {
        "Set ID - PV1": "1",
        "Patient Class": patient_class or f["patientClass"],
        "Assigned Patient Location": f["assignedLocation"],
        "Attending Doctor": _doctor(f, ctx),
        "Visit Number": f["visitNumber"],
        "Admit Date/Time": f["admitDateTime"],
    }
    if discharge:
        values["Discharge Disposition"] = DISCHARGE_DISPOSITION_HOME
        values["Discharge Date/Time"] = f["dischargeDateTime"]
    return render_segment("PV1", values, separators=ctx.separators)


def pv2(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "PV2",
        {
            "Admit Reason": _coded(
                ctx,
                f["diagnosisCode"],
                f["diagnosisDescription"],
                f["diagnosisCodingSystem"],
            ),
            "Expected Discharge Date/Time": f["dischargeDateTime"],
        },
        separators=ctx.separators,
    )


def dg1(f: ResolvedFieldSet, ctx: RenderContext, *, diagnosis_type: str) -> str:
    return render_segment(
        "DG1",
        {
            "Set ID - DG1": "1",
            "Diagnosis Code - DG1": _coded(
                ctx,
                f["diagnosisCode"],
                f["diagnosisDescription"],
                f["diagnosisCodingSystem"],
            ),
            "Diagnosis Description": f["diagnosisDescription"],
            "Diagnosis Date/Time": f["admitDateTime"],
            "Diagnosis Type": diagnosis_type,
        },
        separators=ctx.separators,
    )


# ------------------------------------------------------------------------------
# orders and results
# ------------------------------------------------------------------------------


def orc(
    f: ResolvedFieldSet,
    ctx: RenderContext,
    *,
    order_control: str = ORDER_CONTROL_NEW,
    with_provider: bool = True,
) -> str:
    values = {
        "Order Control": order_control,
        "Placer Order Number": f["placerOrderNumber"],
        "Filler Order Number": f["fillerOrderNumber"],
    }
    if order_control == ORDER_CONTROL_NEW:
        values["Order Status"] = ORDER_STATUS_IN_PROCESS
    values["Date/Time of Transaction"] = f["messageDateTime"]
    if with_provider:
        values["Ordering Provider"] = _doctor(f, ctx)
    return render_segment("ORC", values, separators=ctx.separators)


def obr(f: ResolvedFieldSet, ctx: RenderContext, *, resulted: bool = False) -> str:
    values = {
        "Set ID - OBR": "1",
        "Placer Order Number": f["placerOrderNumber"],
        "Filler Order Number": f["fillerOrderNumber"],
        "Universal Service Identifier": _coded(
            ctx, f["labTestCode"], f["labTestName"], f["labCodingSystem"]
        ),
        "Observation Date/Time": f["messageDateTime"],
        "Ordering Provider": _doctor(f, ctx),
    }
    if resulted:
        values["Results Rpt/Status Chng - Date/Time"] = f["messageDateTime"]
        values["Result Status"] = RESULT_STATUS_FINAL
    return render_segment("OBR", values, separators=ctx.separators)


def obx_lab(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    value = f["labValue"]
    return render_segment(
        "OBX",
        {
            "Set ID - OBX": "1",
            "Value Type": "NM" if _is_number(value) else "ST",
            "Observation Identifier": _coded(
                ctx, f["labTestCode"], f["labTestName"], f["labCodingSystem"]
            ),
            "Observation Value": value,
            "Units": f["labUnits"],
            "References Range": f["referenceRange"],
            "Abnormal Flags": f["abnormalFlag"],
            "Observation Result Status": RESULT_STATUS_FINAL,
            "Date/Time of the Observation": f["messageDateTime"],
        },
        separators=ctx.separators,
    )


# ------------------------------------------------------------------------------
# scheduling
# ------------------------------------------------------------------------------


def sch(f: ResolvedFieldSet, ctx: RenderContext, *, filler_status: str) -> str:
    sep = ctx.separators
    return render_segment(
        "SCH",
        {
            "Placer Appointment ID": f["appointmentId"],
            "Filler Appointment ID": f["fillerAppointmentId"],
            "Appointment Reason": _coded(
                ctx,
                f["appointmentTypeCode"],
                f["appointmentTypeName"],
                f["appointmentTypeCodingSystem"],
            ),
            "Appointment Type": APPOINTMENT_TYPE_NORMAL,
            "Appointment Duration": f["appointmentDuration"],
            "Appointment Duration Units": DURATION_UNITS_MINUTES,
            "Appointment Timing Quantity": components(
                "", "", f["appointmentDuration"], f["appointmentDateTime"], separators=sep
            ),
            "Filler Contact Person": _doctor(f, ctx),
            "Filler Status Code": filler_status,
        },
        separators=sep,
    )


def ais(
    f: ResolvedFieldSet, ctx: RenderContext, *, action: str, filler_status: str
) -> str:
    return render_segment(
        "AIS",
        {
            "Set ID - AIS": "1",
            "Segment Action Code": action,
            "Universal Service Identifier": _coded(
                ctx,
                f["appointmentTypeCode"],
                f["appointmentTypeName"],
                f["appointmentTypeCodingSystem"],
            ),
            "Start Date/Time": f["appointmentDateTime"],
            "Duration": f["appointmentDuration"],
            "Duration Units": DURATION_UNITS_MINUTES,
            "Filler Status Code": filler_status,
        },
        separators=ctx.separators,
    )


def ail(
    f: ResolvedFieldSet, ctx: RenderContext, *, action: str, filler_status: str
) -> str:
    return render_segment(
        "AIL",
        {
            "Set ID - AIL": "1",
            "Segment Action Code": action,
            "Location Resource ID": f["appointmentLocation"],
            "Start Date/Time": f["appointmentDateTime"],
            "Duration": f["appointmentDuration"],
            "Duration Units": DURATION_UNITS_MINUTES,
            "Filler Status Code": filler_status,
        },
        separators=ctx.separators,
    )


def aip(
    f: ResolvedFieldSet, ctx: RenderContext, *, action: str, filler_status: str
) -> str:
    return render_segment(
        "AIP",
        {
            "Set ID - AIP": "1",
            "Segment Action Code": action,
            "Personnel Resource ID": _doctor(f, ctx),
            "Resource Type": RESOURCE_TYPE_ATTENDING,
            "Start Date/Time": f["appointmentDateTime"],
            "Duration": f["appointmentDuration"],
            "Duration Units": DURATION_UNITS_MINUTES,
            "Filler Status Code": filler_status,
        },
        separators=ctx.separators,
    )


# ------------------------------------------------------------------------------
# pharmacy and immunization
# ------------------------------------------------------------------------------


def rxe(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "RXE",
        {
            "Quantity/Timing": components("1", "QD", separators=ctx.separators),
            "Give Code": _coded(
                ctx,
                f["medicationCode"],
                f["medicationName"],
                f["medicationCodingSystem"],
            ),
            "Give Amount - Minimum": f["medicationDose"],
            "Give Units": f["medicationUnits"],
            "Give Dosage Form": f["medicationForm"],
            "Dispense Amount": f["dispenseAmount"],
            "Dispense Units": f["medicationForm"],
            "Number Of Refills": f["refills"],
            "Prescription Number": f["placerOrderNumber"],
        },
        separators=ctx.separators,
    )


def rxr_medication(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "RXR",
        {"Route": _coded(ctx, f["routeCode"], f["routeName"], ROUTE_TABLE)},
        separators=ctx.separators,
    )


def rxr_vaccine(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "RXR",
        {"Route": VACCINE_ROUTE, "Administration Site": VACCINE_SITE},
        separators=ctx.separators,
    )


def rxa(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "RXA",
        {
            "Give Sub-ID Counter": "0",
            "Administration Sub-ID Counter": "1",
            "Date/Time Start of Administration": f["administrationDateTime"],
            "Date/Time End of Administration": f["administrationDateTime"],
            "Administered Code": _coded(
                ctx, f["vaccineCode"], f["vaccineName"], f["vaccineCodingSystem"]
            ),
            "Administered Amount": f["vaccineDoseAmount"],
            "Administered Units": VACCINE_UNITS,
            "Substance Lot Number": f["lotNumber"],
            "Substance Manufacturer Name": _coded(
                ctx, f["manufacturerCode"], f["manufacturerName"], MANUFACTURER_TABLE
            ),
            "Completion Status": COMPLETION_STATUS_COMPLETE,
            "Action Code - RXA": ACTION_CODE_ADD,
        },
        separators=ctx.separators,
    )


def obx_vaccine(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "OBX",
        {
            "Set ID - OBX": "1",
            "Value Type": "CE",
            "Observation Identifier": VFC_OBSERVATION,
            "Observation Sub-ID": "1",
            "Observation Value": VFC_NOT_ELIGIBLE,
            "Observation Result Status": RESULT_STATUS_FINAL,
            "Date/Time of the Observation": f["administrationDateTime"],
            "Observation Method": VFC_METHOD,
        },
        separators=ctx.separators,
    )


# ------------------------------------------------------------------------------
# documents and financials
# ------------------------------------------------------------------------------


def txa(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    author = _doctor(f, ctx)
    return render_segment(
        "TXA",
        {
            "Set ID - TXA": "1",
            "Document Type": f["documentTypeCode"],
            "Document Content Presentation": DOCUMENT_PRESENTATION_TEXT,
            "Activity Date/Time": f["documentDateTime"],
            "Primary Activity Provider Code/Name": author,
            "Origination Date/Time": f["documentDateTime"],
            "Originator Code/Name": author,
            "Unique Document Number": f["documentId"],
            "Document Completion Status": DOCUMENT_STATUS_AUTHENTICATED,
            "Document Availability Status": DOCUMENT_AVAILABLE,
        },
        separators=ctx.separators,
    )


def obx_document(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    return render_segment(
        "OBX",
        {
            "Set ID - OBX": "1",
            "Value Type": DOCUMENT_PRESENTATION_TEXT,
            "Observation Identifier": _coded(
                ctx,
                f["documentTypeCode"],
                f["documentTypeName"],
                f["documentTypeCodingSystem"],
            ),
            "Observation Value": f["documentText"],
            "Observation Result Status": RESULT_STATUS_FINAL,
            "Date/Time of the Observation": f["documentDateTime"],
        },
        separators=ctx.separators,
    )


def ft1(f: ResolvedFieldSet, ctx: RenderContext) -> str:
    procedure = _coded(
        ctx, f["procedureCode"], f["procedureName"], f["procedureCodingSystem"]
    )
    return render_segment(
        "FT1",
        {
            "Set ID - FT1": "1",
            "Transaction ID": f["transactionId"],
            "Transaction Date": f["transactionDateTime"],
            "Transaction Posting Date": f["transactionDateTime"],
            "Transaction Type": _coded(
                ctx,
                f["transactionTypeCode"],
                f["transactionTypeName"],
                f["transactionTypeCodingSystem"],
            ),
            "Transaction Code": procedure,
            "Transaction Description": f["procedureName"],
            "Transaction Quantity": f["transactionQuantity"],
            "Transaction Amount - Extended": f["transactionAmount"],
            "Assigned Patient Location": f["assignedLocation"],
            "Diagnosis Code - FT1": _coded(
                ctx,
                f["diagnosisCode"],
                f["diagnosisDescription"],
                f["diagnosisCodingSystem"],
            ),
            "Performed By Code": _doctor(f, ctx),
            "Ordered By Code": _doctor(f, ctx),
            "Procedure Code": procedure,
        },
        separators=ctx.separators,
    )
