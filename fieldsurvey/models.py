"""
Design (models.py)
- Purpose: Define simple, typed data structures for domain entities (BeneficiaryRecord, Stats).
- Inputs: Field values (str, float, int).
- Outputs: Dataclass instances; plain dicts for JSON persistence.
- Side effects: None.
- Naming: Python attributes are snake_case; persisted JSON keys keep the camelCase used
          by saved snapshots (see _JSON_KEYS).
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Any


class ValidationStatus(str, Enum):
    ELIGIBLE = "Eligible"
    INELIGIBLE = "Ineligible"


@dataclass(frozen=True)
class BeneficiaryRecord:
    """
    Design (BeneficiaryRecord)
    - Purpose: One verification event. Frozen: records are never edited after creation.
    - Fields:
        id: opaque unique token, assigned once by the store.
        serial_number: caller supplied, zero-padded by convention, not unique.
        block_name / gp_name / village: location, coarsest to finest.
        latitude / longitude: optional coordinates (None when not supplied).
        beneficiary_id / beneficiary_name: the person being re-verified.
        status: Eligible or Ineligible.
        remarks: free text, expected when Ineligible.
        superior_name / superior_designation / superior_id_srh: approving officer.
        image_url: reserved; no flow populates it.
        timestamp: epoch milliseconds, assigned once by the store.
    """
    id: str
    serial_number: str
    block_name: str
    gp_name: str
    village: str
    beneficiary_id: str
    beneficiary_name: str
    status: ValidationStatus
    remarks: str
    superior_name: str
    superior_designation: str
    superior_id_srh: str
    timestamp: int
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """JSON-ready dict; optional fields that are absent are omitted."""
        data: dict[str, Any] = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if value is None:
                continue
            if isinstance(value, ValidationStatus):
                value = value.value
            data[_JSON_KEYS[f.name]] = value
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "BeneficiaryRecord":
        """
        Build a record from a persisted dict.
        Raises KeyError / ValueError / TypeError on malformed input (caller decides recovery).
        """
        kwargs: dict[str, Any] = {}
        for f in fields(cls):
            key = _JSON_KEYS[f.name]
            if key not in data:
                if f.name in _OPTIONAL:
                    continue
                raise KeyError(key)
            kwargs[f.name] = data[key]

        kwargs["status"] = ValidationStatus(kwargs["status"])
        kwargs["timestamp"] = int(kwargs["timestamp"])
        for name in ("latitude", "longitude"):
            if kwargs.get(name) is not None:
                kwargs[name] = float(kwargs[name])
        for name in _TEXT:
            if not isinstance(kwargs[name], str):
                raise TypeError(f"{_JSON_KEYS[name]} must be a string")
        return cls(**kwargs)


@dataclass(frozen=True)
class RecordDraft:
    """A record as entered on the form: everything except id and timestamp."""
    serial_number: str
    block_name: str
    gp_name: str
    village: str
    beneficiary_id: str
    beneficiary_name: str
    status: ValidationStatus
    remarks: str
    superior_name: str
    superior_designation: str
    superior_id_srh: str
    latitude: float | None = None
    longitude: float | None = None
    image_url: str | None = None

    def to_record(self, record_id: str, timestamp: int) -> BeneficiaryRecord:
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        return BeneficiaryRecord(id=record_id, timestamp=timestamp, **values)


@dataclass(frozen=True)
class Stats:
    total: int = 0
    eligible: int = 0
    ineligible: int = 0


_JSON_KEYS = {
    "id": "id",
    "serial_number": "serialNumber",
    "block_name": "blockName",
    "gp_name": "gpName",
    "village": "village",
    "latitude": "latitude",
    "longitude": "longitude",
    "beneficiary_id": "beneficiaryId",
    "beneficiary_name": "beneficiaryName",
    "status": "status",
    "remarks": "remarks",
    "superior_name": "superiorName",
    "superior_designation": "superiorDesignation",
    "superior_id_srh": "superiorIdSrh",
    "image_url": "imageUrl",
    "timestamp": "timestamp",
}

_OPTIONAL = {"latitude", "longitude", "image_url"}

_TEXT = (
    "id",
    "serial_number",
    "block_name",
    "gp_name",
    "village",
    "beneficiary_id",
    "beneficiary_name",
    "remarks",
    "superior_name",
    "superior_designation",
    "superior_id_srh",
)
