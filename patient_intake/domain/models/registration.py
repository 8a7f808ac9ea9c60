from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from patient_intake.domain.constants import SectionKey

PERSONAL_INFO_FIELDS: tuple[str, ...] = (
    "firstName",
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
)
INSURANCE_FIELDS: tuple[str, ...] = (
    "provider",
    "policyNumber",
    "groupNumber",
    "subscriberName",
    "subscriberDOB",
    "relationshipToSubscriber",
)
MEDICAL_HISTORY_FIELDS: tuple[str, ...] = (
    "primaryPhysician",
    "allergies",
    "currentMedications",
    "medicalConditions",
    "surgicalHistory",
    "familyHistory",
)
EMERGENCY_CONTACT_FIELDS: tuple[str, ...] = ("name", "relationship", "phone", "email")
EMERGENCY_CONTACT_SLOTS: tuple[str, ...] = ("primary", "secondary")
CONSENT_FIELDS: tuple[str, ...] = (
    "hipaaConsent",
    "treatmentConsent",
    "financialResponsibility",
    "communicationConsent",
)

SECTION_ATTRIBUTES: dict[SectionKey, str] = {
    SectionKey.PERSONAL_INFO: "personal_info",
    SectionKey.INSURANCE: "insurance",
    SectionKey.MEDICAL_HISTORY: "medical_history",
    SectionKey.EMERGENCY_CONTACTS: "emergency_contacts",
    SectionKey.CONSENT: "consent",
}


def freeze_section(data: Mapping[str, Any]) -> Mapping[str, Any]:
    """Read-only deep copy; nested mappings are frozen as well."""
    return MappingProxyType(
        {name: freeze_section(value) if isinstance(value, Mapping) else value for name, value in data.items()}
    )


def thaw_section(data: Mapping[str, Any]) -> dict[str, Any]:
    return {name: thaw_section(value) if isinstance(value, Mapping) else value for name, value in data.items()}


def empty_personal_info() -> Mapping[str, Any]:
    return freeze_section({name: "" for name in PERSONAL_INFO_FIELDS})


def empty_insurance() -> Mapping[str, Any]:
    return freeze_section({name: "" for name in INSURANCE_FIELDS})


def empty_medical_history() -> Mapping[str, Any]:
    return freeze_section({name: "" for name in MEDICAL_HISTORY_FIELDS})


def empty_emergency_contacts() -> Mapping[str, Any]:
    return freeze_section({slot: {name: "" for name in EMERGENCY_CONTACT_FIELDS} for slot in EMERGENCY_CONTACT_SLOTS})


def empty_consent() -> Mapping[str, Any]:
    return freeze_section({name: False for name in CONSENT_FIELDS})


@dataclass(frozen=True, slots=True)
class RegistrationRecord:
    personal_info: Mapping[str, Any] = field(default_factory=empty_personal_info)
    insurance: Mapping[str, Any] = field(default_factory=empty_insurance)
    medical_history: Mapping[str, Any] = field(default_factory=empty_medical_history)
    emergency_contacts: Mapping[str, Any] = field(default_factory=empty_emergency_contacts)
    consent: Mapping[str, Any] = field(default_factory=empty_consent)

    def __post_init__(self) -> None:
        for attribute in SECTION_ATTRIBUTES.values():
            value = getattr(self, attribute)
            if not isinstance(value, MappingProxyType):
                object.__setattr__(self, attribute, freeze_section(value))

    def section(self, key: SectionKey | str) -> Mapping[str, Any]:
        return getattr(self, SECTION_ATTRIBUTES[SectionKey(key)])

    def to_payload(self) -> dict[str, Any]:
        return {key.value: thaw_section(self.section(key)) for key in SectionKey}
