from __future__ import annotations

from enum import StrEnum


class SectionKey(StrEnum):
    PERSONAL_INFO = "personalInfo"
    INSURANCE = "insurance"
    MEDICAL_HISTORY = "medicalHistory"
    EMERGENCY_CONTACTS = "emergencyContacts"
    CONSENT = "consent"


class StepId(StrEnum):
    PERSONAL = "personal"
    INSURANCE = "insurance"
    MEDICAL = "medical"
    EMERGENCY = "emergency"
    CONSENT = "consent"
    COMPLETE = "complete"


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"
    PREFER_NOT_TO_SAY = "prefer-not-to-say"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class MaritalStatus(StrEnum):
    SINGLE = "single"
    MARRIED = "married"
    DIVORCED = "divorced"
    WIDOWED = "widowed"
    SEPARATED = "separated"
    DOMESTIC_PARTNERSHIP = "domestic-partnership"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class InsuranceProvider(StrEnum):
    AETNA = "aetna"
    ANTHEM = "anthem"
    BCBS = "bcbs"
    CIGNA = "cigna"
    HUMANA = "humana"
    KAISER = "kaiser"
    MEDICARE = "medicare"
    MEDICAID = "medicaid"
    TRICARE = "tricare"
    UNITED = "united"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class SubscriberRelationship(StrEnum):
    SELF = "self"
    SPOUSE = "spouse"
    CHILD = "child"
    PARENT = "parent"
    SIBLING = "sibling"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


class ContactRelationship(StrEnum):
    SPOUSE = "spouse"
    PARENT = "parent"
    CHILD = "child"
    SIBLING = "sibling"
    FRIEND = "friend"
    PARTNER = "partner"
    OTHER_FAMILY = "other-family"
    OTHER = "other"

    @classmethod
    def values(cls) -> list[str]:
        return [item.value for item in cls]


INSURANCE_PROVIDER_LABELS: dict[str, str] = {
    InsuranceProvider.AETNA: "Aetna",
    InsuranceProvider.ANTHEM: "Anthem",
    InsuranceProvider.BCBS: "Blue Cross Blue Shield",
    InsuranceProvider.CIGNA: "Cigna",
    InsuranceProvider.HUMANA: "Humana",
    InsuranceProvider.KAISER: "Kaiser Permanente",
    InsuranceProvider.MEDICARE: "Medicare",
    InsuranceProvider.MEDICAID: "Medicaid",
    InsuranceProvider.TRICARE: "Tricare",
    InsuranceProvider.UNITED: "United Healthcare",
    InsuranceProvider.OTHER: "Other",
}

CONTACT_RELATIONSHIP_LABELS: dict[str, str] = {
    ContactRelationship.SPOUSE: "Spouse",
    ContactRelationship.PARENT: "Parent",
    ContactRelationship.CHILD: "Child",
    ContactRelationship.SIBLING: "Sibling",
    ContactRelationship.FRIEND: "Friend",
    ContactRelationship.PARTNER: "Partner",
    ContactRelationship.OTHER_FAMILY: "Other Family Member",
    ContactRelationship.OTHER: "Other",
}


def provider_label(value: str) -> str:
    return INSURANCE_PROVIDER_LABELS.get(value, value)


def relationship_label(value: str) -> str:
    return CONTACT_RELATIONSHIP_LABELS.get(value, value)


_OTHER_CHOICE_LABELS: dict[str, str] = {
    Gender.PREFER_NOT_TO_SAY: "Prefer not to say",
    MaritalStatus.DOMESTIC_PARTNERSHIP: "Domestic partnership",
    SubscriberRelationship.SELF: "Self",
}


def choice_label(value: str) -> str:
    """Display label for any option value offered in a choice field."""
    for labels in (INSURANCE_PROVIDER_LABELS, CONTACT_RELATIONSHIP_LABELS, _OTHER_CHOICE_LABELS):
        if value in labels:
            return labels[value]
    return value.replace("-", " ").capitalize()
