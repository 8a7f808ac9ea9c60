from __future__ import annotations

from dataclasses import dataclass, field

from patient_intake.domain.models.registration import RegistrationRecord


@dataclass(frozen=True, slots=True)
class WizardState:
    current_step_index: int = 0
    record: RegistrationRecord = field(default_factory=RegistrationRecord)
    started: bool = False
