"""
Design (form.py)
- Purpose: Entry form logic, independent of any widget toolkit: serial number suggestion,
           presence validation, submit and cancel.
- Inputs: FormFields (raw text as typed by the user), the RecordStore and the ViewRouter.
- Outputs: SubmitResult describing success (with the new record) or the failing fields.
- Side effects: A successful submit appends to the store and returns to the dashboard.
"""

from dataclasses import dataclass, field, fields
from typing import List, Optional

from .config import SERIAL_WIDTH
from .logs import get_logger
from .models import BeneficiaryRecord, RecordDraft, ValidationStatus
from .repository import RecordStore
from .router import ViewRouter
from .utils import parse_coordinate

log = get_logger(__name__)

# Required text fields, in form order
REQUIRED_FIELDS = (
    "serial_number",
    "block_name",
    "gp_name",
    "village",
    "beneficiary_id",
    "beneficiary_name",
    "superior_name",
    "superior_designation",
    "superior_id_srh",
)

FIELD_LABELS = {
    "serial_number": "Serial Number",
    "block_name": "Block",
    "gp_name": "GP",
    "village": "Village",
    "latitude": "Latitude",
    "longitude": "Longitude",
    "beneficiary_id": "Beneficiary ID",
    "beneficiary_name": "Beneficiary Name",
    "status": "Status",
    "remarks": "Remarks",
    "superior_name": "Superior Name",
    "superior_designation": "Designation",
    "superior_id_srh": "Superior ID (SRH)",
}


def compute_next_serial_number(collection_size: int) -> str:
    """Advisory serial for the next record: size + 1, zero-padded to 3 digits, never truncated."""
    return str(collection_size + 1).zfill(SERIAL_WIDTH)


@dataclass
class FormFields:
    """Editable form state; every value is the raw text from its input widget."""
    serial_number: str = ""
    block_name: str = ""
    gp_name: str = ""
    village: str = ""
    latitude: str = ""
    longitude: str = ""
    beneficiary_id: str = ""
    beneficiary_name: str = ""
    status: str = ValidationStatus.ELIGIBLE.value
    remarks: str = ""
    superior_name: str = ""
    superior_designation: str = ""
    superior_id_srh: str = ""


@dataclass
class SubmitResult:
    ok: bool
    record: Optional[BeneficiaryRecord] = None
    missing: List[str] = field(default_factory=list)

    def describe(self) -> str:
        """Human-readable list of failing fields, e.g. 'Block, Village'."""
        return ", ".join(FIELD_LABELS.get(name, name) for name in self.missing)


class EntryForm:
    """
    Design (EntryForm)
    - Purpose: Controller behind the entry screen.
    - Public methods:
        new_fields(): blank form with the serial number prefilled
        validate(fields): names of failing fields (empty list = valid)
        submit(fields): validate, append, return to dashboard
        cancel(): discard input, return to dashboard
    """

    def __init__(self, store: RecordStore, router: ViewRouter) -> None:
        self.store = store
        self.router = router

    def new_fields(self) -> FormFields:
        return FormFields(serial_number=compute_next_serial_number(len(self.store)))

    def validate(self, form: FormFields) -> List[str]:
        missing = [name for name in REQUIRED_FIELDS if not getattr(form, name).strip()]
        if form.status not in {s.value for s in ValidationStatus}:
            missing.append("status")
        for name in ("latitude", "longitude"):
            try:
                parse_coordinate(getattr(form, name))
            except ValueError:
                missing.append(name)
        return missing

    def submit(self, form: FormFields) -> SubmitResult:
        missing = self.validate(form)
        if missing:
            log.info("Entry rejected; missing or invalid: %s", ", ".join(missing))
            return SubmitResult(ok=False, missing=missing)

        text = {f.name: getattr(form, f.name).strip() for f in fields(form)}
        draft = RecordDraft(
            serial_number=text["serial_number"],
            block_name=text["block_name"],
            gp_name=text["gp_name"],
            village=text["village"],
            beneficiary_id=text["beneficiary_id"],
            beneficiary_name=text["beneficiary_name"],
            status=ValidationStatus(text["status"]),
            remarks=text["remarks"],
            superior_name=text["superior_name"],
            superior_designation=text["superior_designation"],
            superior_id_srh=text["superior_id_srh"],
            latitude=parse_coordinate(text["latitude"]),
            longitude=parse_coordinate(text["longitude"]),
        )
        record = self.store.append(draft)
        self.router.show_dashboard()
        return SubmitResult(ok=True, record=record)

    def cancel(self) -> None:
        log.debug("Entry cancelled")
        self.router.show_dashboard()
