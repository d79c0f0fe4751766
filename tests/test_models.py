import dataclasses

import pytest

from fieldsurvey.models import BeneficiaryRecord, RecordDraft, ValidationStatus


def test_to_dict_uses_camel_case_keys_and_omits_absent_optionals(record_factory):
    data = record_factory().to_dict()

    assert data["serialNumber"] == "001"
    assert data["superiorIdSrh"] == "SRH-9988"
    assert data["status"] == "Eligible"
    assert "latitude" not in data
    assert "longitude" not in data
    assert "imageUrl" not in data


def test_from_dict_restores_equal_record(record_factory):
    record = record_factory(latitude=22.57, longitude=88.36, remarks="ok")
    assert BeneficiaryRecord.from_dict(record.to_dict()) == record


def test_from_dict_accepts_integral_coordinates_as_float(record_factory):
    data = record_factory().to_dict()
    data["latitude"] = 22
    record = BeneficiaryRecord.from_dict(data)
    assert record.latitude == 22.0
    assert isinstance(record.latitude, float)


@pytest.mark.parametrize(
    "mutate",
    [
        lambda d: d.pop("beneficiaryId"),
        lambda d: d.update(status="Maybe"),
        lambda d: d.update(timestamp="yesterday"),
        lambda d: d.update(village=None),
    ],
)
def test_from_dict_rejects_malformed(record_factory, mutate):
    data = record_factory().to_dict()
    mutate(data)
    with pytest.raises((KeyError, ValueError, TypeError)):
        BeneficiaryRecord.from_dict(data)


def test_records_are_frozen(record_factory):
    record = record_factory()
    with pytest.raises(dataclasses.FrozenInstanceError):
        record.status = ValidationStatus.INELIGIBLE


def test_draft_to_record_assigns_id_and_timestamp():
    draft = RecordDraft(
        serial_number="005",
        block_name="B",
        gp_name="G",
        village="V",
        beneficiary_id="X-1",
        beneficiary_name="N",
        status=ValidationStatus.INELIGIBLE,
        remarks="moved",
        superior_name="S",
        superior_designation="BDO",
        superior_id_srh="SRH-1",
    )
    record = draft.to_record(record_id="zz", timestamp=42)
    assert record.id == "zz"
    assert record.timestamp == 42
    assert record.remarks == "moved"
    assert record.image_url is None
