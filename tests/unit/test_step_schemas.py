from __future__ import annotations

from typing import Any

import pytest

from patient_intake.domain.constants import SectionKey, StepId
from patient_intake.domain.rules.field_rules import Invalid, Valid
from patient_intake.domain.rules.step_schemas import (
    FORM_ERROR_KEY,
    Accepted,
    Rejected,
    build_step_registry,
    consent_schema,
    emergency_contacts_schema,
    insurance_schema,
    medical_history_schema,
    personal_info_schema,
)


def test_registry_declares_six_ordered_steps() -> None:
    registry = build_step_registry()
    assert len(registry) == 6
    assert [step.step_id for step in registry] == [
        StepId.PERSONAL,
        StepId.INSURANCE,
        StepId.MEDICAL,
        StepId.EMERGENCY,
        StepId.CONSENT,
        StepId.COMPLETE,
    ]
    assert [step.section_key for step in registry] == [
        SectionKey.PERSONAL_INFO,
        SectionKey.INSURANCE,
        SectionKey.MEDICAL_HISTORY,
        SectionKey.EMERGENCY_CONTACTS,
        SectionKey.CONSENT,
        None,
    ]
    assert registry.step(5).is_terminal
    assert registry.step(0).navigable_backward is False


def test_personal_info_accepts_valid_data(personal_info_data: dict[str, Any]) -> None:
    result = personal_info_schema().validate(personal_info_data)
    assert isinstance(result, Accepted)
    assert result.data == personal_info_data


def test_personal_info_normalizes_whitespace_and_drops_unknown_keys(
    personal_info_data: dict[str, Any],
) -> None:
    payload = {**personal_info_data, "firstName": "  Jane  ", "favouriteColour": "blue"}
    result = personal_info_schema().validate(payload)
    assert isinstance(result, Accepted)
    assert result.data["firstName"] == "Jane"
    assert "favouriteColour" not in result.data


def test_personal_info_reports_every_failing_field() -> None:
    result = personal_info_schema().validate({"firstName": "Jane", "phone": "5551234567"})
    assert isinstance(result, Rejected)
    assert "firstName" not in result.errors
    assert result.errors["lastName"] == "Last name is required"
    assert result.errors["phone"] == "Phone must be in format: (123) 456-7890"
    assert result.errors["email"] == "Email is required"
    assert result.errors["dateOfBirth"] == "Date of birth is required"
    assert set(result.errors) == {
        "lastName",
        "dateOfBirth",
        "ssn",
        "gender",
        "maritalStatus",
        "phone",
        "email",
        "address",
        "city",
        "state",
        "zipCode",
    }


@pytest.mark.parametrize("zip_code", ["62701", "62701-1234"])
def test_personal_info_accepts_zip_formats(personal_info_data: dict[str, Any], zip_code: str) -> None:
    result = personal_info_schema().validate({**personal_info_data, "zipCode": zip_code})
    assert isinstance(result, Accepted)


def test_validation_is_all_or_nothing(personal_info_data: dict[str, Any]) -> None:
    result = personal_info_schema().validate({**personal_info_data, "ssn": "123456789"})
    assert isinstance(result, Rejected)
    assert result.errors == {"ssn": "SSN must be in format: 123-45-6789"}


def test_non_mapping_input_is_rejected_not_raised() -> None:
    result = insurance_schema().validate(["provider", "aetna"])
    assert isinstance(result, Rejected)
    assert result.errors["provider"] == "Insurance provider is required"


def test_insurance_messages_match_fields() -> None:
    result = insurance_schema().validate({})
    assert isinstance(result, Rejected)
    assert result.errors == {
        "provider": "Insurance provider is required",
        "policyNumber": "Policy number is required",
        "groupNumber": "Group number is required",
        "subscriberName": "Subscriber name is required",
        "subscriberDOB": "Subscriber date of birth is required",
        "relationshipToSubscriber": "Relationship to subscriber is required",
    }


def test_medical_history_is_fully_optional() -> None:
    result = medical_history_schema().validate({})
    assert isinstance(result, Accepted)
    assert result.data == {
        "primaryPhysician": "",
        "allergies": "",
        "currentMedications": "",
        "medicalConditions": "",
        "surgicalHistory": "",
        "familyHistory": "",
    }


def test_primary_contact_fields_are_required() -> None:
    result = emergency_contacts_schema().validate({"primary": {}, "secondary": {}})
    assert isinstance(result, Rejected)
    assert result.errors == {
        "primary.name": "Primary contact name is required",
        "primary.relationship": "Primary contact relationship is required",
        "primary.phone": "Phone must be in format: (123) 456-7890",
    }


def test_secondary_contact_may_be_empty(emergency_contacts_data: dict[str, Any]) -> None:
    payload = {"primary": emergency_contacts_data["primary"]}
    result = emergency_contacts_schema().validate(payload)
    assert isinstance(result, Accepted)
    assert result.data["secondary"] == {"name": "", "relationship": "", "phone": "", "email": ""}


def test_secondary_phone_is_free_form_by_default(emergency_contacts_data: dict[str, Any]) -> None:
    payload = {**emergency_contacts_data, "secondary": {"name": "Ann", "phone": "555 0000"}}
    result = emergency_contacts_schema().validate(payload)
    assert isinstance(result, Accepted)
    assert result.data["secondary"]["phone"] == "555 0000"


def test_secondary_phone_strict_mode(emergency_contacts_data: dict[str, Any]) -> None:
    schema = emergency_contacts_schema(strict_secondary_phone=True)
    bad = schema.validate({**emergency_contacts_data, "secondary": {"phone": "555 0000"}})
    assert isinstance(bad, Rejected)
    assert bad.errors == {"secondary.phone": "Phone must be in format: (123) 456-7890"}
    empty = schema.validate({**emergency_contacts_data, "secondary": {"phone": ""}})
    assert isinstance(empty, Accepted)


def test_secondary_email_still_checked_when_present(emergency_contacts_data: dict[str, Any]) -> None:
    payload = {**emergency_contacts_data, "secondary": {"email": "ann@"}}
    result = emergency_contacts_schema().validate(payload)
    assert isinstance(result, Rejected)
    assert result.errors == {"secondary.email": "Invalid email address"}


def test_consent_requires_all_four(consent_data: dict[str, Any]) -> None:
    for name in consent_data:
        result = consent_schema().validate({**consent_data, name: False})
        assert isinstance(result, Rejected)
        assert list(result.errors) == [name]


def test_consent_accepts_all_true_in_any_order(consent_data: dict[str, Any]) -> None:
    reordered = dict(reversed(list(consent_data.items())))
    result = consent_schema().validate(reordered)
    assert isinstance(result, Accepted)
    assert result.data == consent_data


def test_field_descriptors_expose_requiredness() -> None:
    descriptors = {item.path: item for item in emergency_contacts_schema().descriptors()}
    assert descriptors["primary.name"].required is True
    assert descriptors["primary.email"].required is False
    assert descriptors["secondary.name"].required is False
    assert descriptors["secondary.phone"].required is False
    assert descriptors["primary.relationship"].kind == "choice"
    assert "spouse" in descriptors["primary.relationship"].choices


def test_check_field_supports_nested_paths() -> None:
    registry = build_step_registry()
    assert registry.check_field(3, "primary.phone", "(555) 123-4567") == Valid("(555) 123-4567")
    assert isinstance(registry.check_field(3, "primary.phone", "555"), Invalid)
    assert isinstance(registry.check_field(3, "tertiary.phone", "555"), Invalid)
    assert isinstance(registry.check_field(9, "firstName", "Jane"), Invalid)


def test_registry_rejects_unknown_step_index() -> None:
    result = build_step_registry().validate(12, {})
    assert isinstance(result, Rejected)
    assert FORM_ERROR_KEY in result.errors


def test_terminal_step_accepts_no_input() -> None:
    result = build_step_registry().validate(5, {"anything": "ignored"})
    assert result == Accepted({})

