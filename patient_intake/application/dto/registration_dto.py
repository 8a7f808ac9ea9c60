from __future__ import annotations

from datetime import date
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from patient_intake.domain.models.registration import RegistrationRecord


class _WireModel(BaseModel):
    model_config = ConfigDict(
        str_strip_whitespace=True,
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
    )


class PersonalInfoDto(_WireModel):
    first_name: str
    last_name: str
    date_of_birth: date
    ssn: str
    gender: str
    marital_status: str
    phone: str
    email: str
    address: str
    city: str
    state: str
    zip_code: str


class InsuranceDto(_WireModel):
    provider: str
    policy_number: str
    group_number: str
    subscriber_name: str
    subscriber_dob: date = Field(alias="subscriberDOB")
    relationship_to_subscriber: str


class MedicalHistoryDto(_WireModel):
    primary_physician: str = ""
    allergies: str = ""
    current_medications: str = ""
    medical_conditions: str = ""
    surgical_history: str = ""
    family_history: str = ""


class EmergencyContactDto(_WireModel):
    name: str = ""
    relationship: str = ""
    phone: str = ""
    email: str = ""


class EmergencyContactsDto(_WireModel):
    primary: EmergencyContactDto
    secondary: EmergencyContactDto = Field(default_factory=EmergencyContactDto)


class ConsentDto(_WireModel):
    hipaa_consent: bool
    treatment_consent: bool
    financial_responsibility: bool
    communication_consent: bool

    @property
    def all_given(self) -> bool:
        return all(
            (
                self.hipaa_consent,
                self.treatment_consent,
                self.financial_responsibility,
                self.communication_consent,
            )
        )


class RegistrationRecordDto(_WireModel):
    personal_info: PersonalInfoDto
    insurance: InsuranceDto
    medical_history: MedicalHistoryDto
    emergency_contacts: EmergencyContactsDto
    consent: ConsentDto

    @classmethod
    def from_record(cls, record: RegistrationRecord) -> RegistrationRecordDto:
        return cls.model_validate(record.to_payload())

    def to_wire(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class FieldDescriptorDto(BaseModel):
    path: str
    label: str
    kind: Literal["text", "multiline", "date", "phone", "email", "choice", "consent"]
    required: bool
    choices: list[str] = Field(default_factory=list)


class StepViewDto(BaseModel):
    index: int
    step_id: str
    title: str
    section_key: str | None = None
    field_descriptors: list[FieldDescriptorDto] = Field(default_factory=list)
    values: dict[str, Any] = Field(default_factory=dict)
    can_go_back: bool
    is_terminal: bool


class StepProgressDto(BaseModel):
    index: int
    step_id: str
    title: str
    status: Literal["completed", "current", "upcoming"]


class WizardProgressDto(BaseModel):
    started: bool
    current_step_index: int
    total_steps: int
    percent: float
    steps: list[StepProgressDto] = Field(default_factory=list)


class RegistrationSummaryDto(BaseModel):
    full_name: str
    first_name: str
    date_of_birth: date
    phone: str
    email: str
    insurance_provider: str
    policy_number: str
    emergency_contact_name: str
    emergency_contact_relationship: str
    emergency_contact_phone: str
    all_consents_given: bool
