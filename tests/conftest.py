"""
Pytest configuration for the FieldSurvey Re-Checker.

Provides fixtures for:
- A temporary storage file
- A RecordStore with deterministic ids and clock
- Router / entry form wiring
- Valid form input
"""

from __future__ import annotations

import itertools
from pathlib import Path

import pytest

from fieldsurvey.form import EntryForm, FormFields
from fieldsurvey.models import BeneficiaryRecord, ValidationStatus
from fieldsurvey.repository import RecordStore
from fieldsurvey.router import ViewRouter

BASE_TS = 1_760_000_000_000


@pytest.fixture
def storage_path(tmp_path: Path) -> Path:
    return tmp_path / "fieldsurvey_storage.json"


@pytest.fixture
def clock():
    """Epoch-ms clock advancing one second per call."""
    ticks = itertools.count(BASE_TS, 1000)
    return lambda: next(ticks)


@pytest.fixture
def id_factory():
    ids = (f"id{n:05d}" for n in itertools.count(1))
    return lambda: next(ids)


@pytest.fixture
def store(storage_path: Path, id_factory, clock) -> RecordStore:
    s = RecordStore(storage_path, id_factory=id_factory, clock=clock)
    s.load()
    return s


@pytest.fixture
def router() -> ViewRouter:
    return ViewRouter()


@pytest.fixture
def entry_form(store: RecordStore, router: ViewRouter) -> EntryForm:
    return EntryForm(store, router)


@pytest.fixture
def filled_fields() -> FormFields:
    return FormFields(
        serial_number="002",
        block_name="PANDUA",
        gp_name="Tinna",
        village="Boinchi",
        latitude="22.5724",
        longitude="88.3639",
        beneficiary_id="WB-204060",
        beneficiary_name="Rina Das",
        status="Eligible",
        remarks="",
        superior_name="Sourav Ghosh",
        superior_designation="Joint BDO",
        superior_id_srh="SRH-1122",
    )


def make_record(**overrides) -> BeneficiaryRecord:
    values = dict(
        id="abc1234",
        serial_number="001",
        block_name="BALAGARH",
        gp_name="Haripur",
        village="Gokulnagar",
        beneficiary_id="WB-102030",
        beneficiary_name="Subhash Mondal",
        status=ValidationStatus.ELIGIBLE,
        remarks="",
        superior_name="Amit Roy",
        superior_designation="BDO",
        superior_id_srh="SRH-9988",
        timestamp=BASE_TS,
    )
    values.update(overrides)
    return BeneficiaryRecord(**values)


@pytest.fixture
def record_factory():
    return make_record
