from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from typing import Any, Literal

from patient_intake.domain.constants import (
    ContactRelationship,
    Gender,
    InsuranceProvider,
    MaritalStatus,
    SectionKey,
    StepId,
    SubscriberRelationship,
)
from patient_intake.domain.rules.field_rules import (
    SSN_PATTERN,
    ZIP_CODE_PATTERN,
    EmailFormat,
    FieldRule,
    Invalid,
    IsoDate,
    OptionalText,
    PatternMatch,
    RuleResult,
    must_be_true,
    optional_text,
    phone,
    required_email,
    required_text,
)

FORM_ERROR_KEY = "__form__"

FieldKind = Literal["text", "multiline", "date", "phone", "email", "choice", "consent"]


@dataclass(frozen=True, slots=True)
class Accepted:
    data: dict[str, Any]

    @property
    def accepted(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    errors: dict[str, str]

    @property
    def accepted(self) -> bool:
        return False


ValidationResult = Accepted | Rejected


@dataclass(frozen=True, slots=True)
class FieldSpec:
    name: str
    label: str
    rule: FieldRule
    kind: FieldKind = "text"
    choices: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class FieldDescriptor:
    path: str
    label: str
    kind: FieldKind
    required: bool
    choices: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class SectionGroup:
    name: str
    label: str
    schema: SectionSchema


@dataclass(frozen=True, slots=True)
class SectionSchema:
    fields: tuple[FieldSpec, ...] = ()
    groups: tuple[SectionGroup, ...] = ()

    def validate(self, data: object) -> ValidationResult:
        normalized, errors = self._collect(data, prefix="")
        if errors:
            return Rejected(errors)
        return Accepted(normalized)

    def check_field(self, path: str, value: object) -> RuleResult:
        head, _, rest = path.partition(".")
        if rest:
            for group in self.groups:
                if group.name == head:
                    return group.schema.check_field(rest, value)
        else:
            for spec in self.fields:
                if spec.name == head:
                    return spec.rule.check(value)
        return Invalid(f"Unknown field: {path}")

    def descriptors(self, prefix: str = "") -> list[FieldDescriptor]:
        items = [
            FieldDescriptor(
                path=f"{prefix}{spec.name}",
                label=spec.label,
                kind=spec.kind,
                required=spec.rule.required,
                choices=spec.choices,
            )
            for spec in self.fields
        ]
        for group in self.groups:
            items.extend(group.schema.descriptors(prefix=f"{prefix}{group.name}."))
        return items

    def _collect(self, data: object, *, prefix: str) -> tuple[dict[str, Any], dict[str, str]]:
        source: Mapping[str, Any] = data if isinstance(data, Mapping) else {}
        normalized: dict[str, Any] = {}
        errors: dict[str, str] = {}
        for spec in self.fields:
            outcome = spec.rule.check(source.get(spec.name))
            if isinstance(outcome, Invalid):
                errors[f"{prefix}{spec.name}"] = outcome.message
            else:
                normalized[spec.name] = outcome.value
        for group in self.groups:
            nested, nested_errors = group.schema._collect(
                source.get(group.name),
                prefix=f"{prefix}{group.name}.",
            )
            normalized[group.name] = nested
            errors.update(nested_errors)
        return normalized, errors


@dataclass(frozen=True, slots=True)
class StepDefinition:
    step_id: StepId
    title: str
    section_key: SectionKey | None
    schema: SectionSchema
    navigable_backward: bool = True

    @property
    def is_terminal(self) -> bool:
        return self.section_key is None


@dataclass(frozen=True, slots=True)
class StepRegistry:
    steps: tuple[StepDefinition, ...]

    def __len__(self) -> int:
        return len(self.steps)

    def __iter__(self) -> Iterator[StepDefinition]:
        return iter(self.steps)

    @property
    def last_index(self) -> int:
        return len(self.steps) - 1

    def step(self, index: int) -> StepDefinition:
        if not 0 <= index < len(self.steps):
            raise IndexError(f"Step index out of range: {index}")
        return self.steps[index]

    def validate(self, step_index: int, candidate: object) -> ValidationResult:
        if not 0 <= step_index < len(self.steps):
            return Rejected({FORM_ERROR_KEY: f"Unknown step: {step_index}"})
        return self.steps[step_index].schema.validate(candidate)

    def check_field(self, step_index: int, path: str, value: object) -> RuleResult:
        if not 0 <= step_index < len(self.steps):
            return Invalid(f"Unknown step: {step_index}")
        return self.steps[step_index].schema.check_field(path, value)


def personal_info_schema() -> SectionSchema:
    return SectionSchema(
        fields=(
            FieldSpec("firstName", "First Name", required_text("First name is required")),
            FieldSpec("lastName", "Last Name", required_text("Last name is required")),
            FieldSpec(
                "dateOfBirth",
                "Date of Birth",
                IsoDate(
                    "Date of birth must be a valid date (YYYY-MM-DD)",
                    empty_message="Date of birth is required",
                ),
                kind="date",
            ),
            FieldSpec(
                "ssn",
                "Social Security Number",
                PatternMatch(SSN_PATTERN, "SSN must be in format: 123-45-6789"),
            ),
            FieldSpec(
                "gender",
                "Gender",
                required_text("Gender is required"),
                kind="choice",
                choices=tuple(Gender.values()),
            ),
            FieldSpec(
                "maritalStatus",
                "Marital Status",
                required_text("Marital status is required"),
                kind="choice",
                choices=tuple(MaritalStatus.values()),
            ),
            FieldSpec("phone", "Phone Number", phone(), kind="phone"),
            FieldSpec("email", "Email Address", required_email("Email is required"), kind="email"),
            FieldSpec("address", "Street Address", required_text("Address is required")),
            FieldSpec("city", "City", required_text("City is required")),
            FieldSpec("state", "State", required_text("State is required")),
            FieldSpec(
                "zipCode",
                "ZIP Code",
                PatternMatch(ZIP_CODE_PATTERN, "ZIP code must be in format: 12345 or 12345-6789"),
            ),
        )
    )


def insurance_schema() -> SectionSchema:
    return SectionSchema(
        fields=(
            FieldSpec(
                "provider",
                "Insurance Provider",
                required_text("Insurance provider is required"),
                kind="choice",
                choices=tuple(InsuranceProvider.values()),
            ),
            FieldSpec("policyNumber", "Policy Number", required_text("Policy number is required")),
            FieldSpec("groupNumber", "Group Number", required_text("Group number is required")),
            FieldSpec("subscriberName", "Subscriber Name", required_text("Subscriber name is required")),
            FieldSpec(
                "subscriberDOB",
                "Subscriber Date of Birth",
                IsoDate(
                    "Subscriber date of birth must be a valid date (YYYY-MM-DD)",
                    empty_message="Subscriber date of birth is required",
                ),
                kind="date",
            ),
            FieldSpec(
                "relationshipToSubscriber",
                "Relationship to Subscriber",
                required_text("Relationship to subscriber is required"),
                kind="choice",
                choices=tuple(SubscriberRelationship.values()),
            ),
        )
    )


def medical_history_schema() -> SectionSchema:
    return SectionSchema(
        fields=(
            FieldSpec("primaryPhysician", "Primary Care Physician", optional_text()),
            FieldSpec("allergies", "Allergies", optional_text(), kind="multiline"),
            FieldSpec("currentMedications", "Current Medications", optional_text(), kind="multiline"),
            FieldSpec("medicalConditions", "Medical Conditions", optional_text(), kind="multiline"),
            FieldSpec("surgicalHistory", "Surgical History", optional_text(), kind="multiline"),
            FieldSpec("familyHistory", "Family Medical History", optional_text(), kind="multiline"),
        )
    )


def contact_schema(title: str, *, required: bool, strict_phone: bool = True) -> SectionSchema:
    """One contact shape; ``required`` decides name/relationship/phone requiredness."""
    if required:
        name_rule: FieldRule = required_text(f"{title} contact name is required")
        relationship_rule: FieldRule = required_text(f"{title} contact relationship is required")
        phone_rule: FieldRule = phone()
    else:
        name_rule = OptionalText()
        relationship_rule = OptionalText()
        phone_rule = phone(optional=True) if strict_phone else OptionalText()
    return SectionSchema(
        fields=(
            FieldSpec("name", "Full Name", name_rule),
            FieldSpec(
                "relationship",
                "Relationship",
                relationship_rule,
                kind="choice",
                choices=tuple(ContactRelationship.values()),
            ),
            FieldSpec("phone", "Phone Number", phone_rule, kind="phone"),
            FieldSpec("email", "Email Address", EmailFormat(optional=True), kind="email"),
        )
    )


def emergency_contacts_schema(*, strict_secondary_phone: bool = False) -> SectionSchema:
    return SectionSchema(
        groups=(
            SectionGroup("primary", "Primary Emergency Contact", contact_schema("Primary", required=True)),
            SectionGroup(
                "secondary",
                "Secondary Emergency Contact (Optional)",
                contact_schema("Secondary", required=False, strict_phone=strict_secondary_phone),
            ),
        )
    )


def consent_schema() -> SectionSchema:
    return SectionSchema(
        fields=(
            FieldSpec(
                "hipaaConsent",
                "HIPAA Privacy Notice",
                must_be_true("HIPAA consent is required to proceed"),
                kind="consent",
            ),
            FieldSpec(
                "treatmentConsent",
                "Consent for Treatment",
                must_be_true("Treatment consent is required to proceed"),
                kind="consent",
            ),
            FieldSpec(
                "financialResponsibility",
                "Financial Responsibility",
                must_be_true("Financial responsibility acknowledgment is required"),
                kind="consent",
            ),
            FieldSpec(
                "communicationConsent",
                "Communication Preferences",
                must_be_true("Communication consent is required to proceed"),
                kind="consent",
            ),
        )
    )


def build_step_registry(*, strict_secondary_phone: bool = False) -> StepRegistry:
    return StepRegistry(
        steps=(
            StepDefinition(
                StepId.PERSONAL,
                "Personal Information",
                SectionKey.PERSONAL_INFO,
                personal_info_schema(),
                navigable_backward=False,
            ),
            StepDefinition(StepId.INSURANCE, "Insurance Details", SectionKey.INSURANCE, insurance_schema()),
            StepDefinition(
                StepId.MEDICAL,
                "Medical History",
                SectionKey.MEDICAL_HISTORY,
                medical_history_schema(),
            ),
            StepDefinition(
                StepId.EMERGENCY,
                "Emergency Contacts",
                SectionKey.EMERGENCY_CONTACTS,
                emergency_contacts_schema(strict_secondary_phone=strict_secondary_phone),
            ),
            StepDefinition(StepId.CONSENT, "Consent & Privacy", SectionKey.CONSENT, consent_schema()),
            StepDefinition(StepId.COMPLETE, "Complete", None, SectionSchema()),
        )
    )
