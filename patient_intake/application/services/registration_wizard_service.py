from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any

from patient_intake.application.dto.registration_dto import (
    FieldDescriptorDto,
    RegistrationRecordDto,
    RegistrationSummaryDto,
    StepProgressDto,
    StepViewDto,
    WizardProgressDto,
)
from patient_intake.application.services.registration_handoff import RegistrationHandoff
from patient_intake.domain.constants import provider_label, relationship_label
from patient_intake.domain.errors import RegistrationIncompleteError
from patient_intake.domain.models.wizard_state import WizardState
from patient_intake.domain.rules.field_rules import RuleResult
from patient_intake.domain.rules.record_merge import changed_paths, merge_section
from patient_intake.domain.rules.step_schemas import (
    FORM_ERROR_KEY,
    Rejected,
    StepRegistry,
    ValidationResult,
    build_step_registry,
)


@dataclass(frozen=True, slots=True)
class AdvanceResult:
    state: WizardState
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def accepted(self) -> bool:
        return not self.errors


class RegistrationWizardService:
    """Step sequencer for one registration session.

    Every transition replaces the state object; a rejected ``advance`` keeps
    the previous one.
    """

    def __init__(self, registry: StepRegistry | None = None, state: WizardState | None = None) -> None:
        self.registry = registry or build_step_registry()
        self._state = state or WizardState()
        self._logger = logging.getLogger(__name__)

    @property
    def state(self) -> WizardState:
        return self._state

    @property
    def is_complete(self) -> bool:
        return self._state.started and self._state.current_step_index == self.registry.last_index

    # ── transitions ──────────────────────────────────────────────────────

    def start(self) -> WizardState:
        if not self._state.started:
            self._state = replace(self._state, started=True, current_step_index=0)
            self._logger.info("Registration started")
        return self._state

    def advance(self, step_index: int, candidate: Mapping[str, Any] | None) -> AdvanceResult:
        if not self._state.started:
            self.start()
        current = self._state.current_step_index
        if step_index != current:
            self._logger.warning("Advance rejected: step %s is not active (active: %s)", step_index, current)
            return AdvanceResult(
                state=self._state,
                errors={FORM_ERROR_KEY: f"Step {step_index!r} is not the active step (active: {current})"},
            )

        step = self.registry.step(current)
        section_key = step.section_key
        if section_key is None:
            return AdvanceResult(state=self._state)

        outcome = self.registry.validate(current, candidate)
        if isinstance(outcome, Rejected):
            self._logger.warning(
                "Step %s (%s) rejected: %s",
                current,
                step.step_id,
                ", ".join(sorted(outcome.errors)),
            )
            return AdvanceResult(state=self._state, errors=dict(outcome.errors))

        before = self._state.record.section(section_key)
        record = merge_section(self._state.record, section_key, outcome.data)
        changes = changed_paths(before, record.section(section_key))
        self._state = replace(self._state, record=record, current_step_index=current + 1)
        self._logger.info(
            "Step %s (%s) accepted, %s field(s) changed; now on step %s",
            current,
            step.step_id,
            len(changes),
            self._state.current_step_index,
        )
        return AdvanceResult(state=self._state)

    def retreat(self) -> WizardState:
        current = self._state.current_step_index
        if not self._state.started or current == 0:
            return self._state
        if not self.registry.step(current).navigable_backward:
            return self._state
        self._state = replace(self._state, current_step_index=current - 1)
        self._logger.info("Moved back to step %s", self._state.current_step_index)
        return self._state

    def reset(self) -> WizardState:
        self._state = WizardState()
        self._logger.info("Registration reset")
        return self._state

    # ── introspection ────────────────────────────────────────────────────

    def validate_step(self, step_index: int, candidate: Mapping[str, Any] | None) -> ValidationResult:
        return self.registry.validate(step_index, candidate)

    def check_field(self, step_index: int, path: str, value: object) -> RuleResult:
        return self.registry.check_field(step_index, path, value)

    def current_step(self, state: WizardState | None = None) -> StepViewDto:
        state = state or self._state
        step = self.registry.step(state.current_step_index)
        if step.section_key is None:
            values = state.record.to_payload()
        else:
            values = state.record.to_payload()[step.section_key.value]
        return StepViewDto(
            index=state.current_step_index,
            step_id=step.step_id.value,
            title=step.title,
            section_key=step.section_key.value if step.section_key else None,
            field_descriptors=[
                FieldDescriptorDto(
                    path=item.path,
                    label=item.label,
                    kind=item.kind,
                    required=item.required,
                    choices=list(item.choices),
                )
                for item in step.schema.descriptors()
            ],
            values=values,
            can_go_back=state.current_step_index > 0 and step.navigable_backward,
            is_terminal=step.is_terminal,
        )

    def progress(self, state: WizardState | None = None) -> WizardProgressDto:
        state = state or self._state
        current = state.current_step_index
        items: list[StepProgressDto] = []
        for index, step in enumerate(self.registry):
            if state.started and index < current:
                status = "completed"
            elif state.started and index == current:
                status = "current"
            else:
                status = "upcoming"
            items.append(StepProgressDto(index=index, step_id=step.step_id.value, title=step.title, status=status))
        last = self.registry.last_index
        percent = (current / last) * 100.0 if state.started and last > 0 else 0.0
        return WizardProgressDto(
            started=state.started,
            current_step_index=current,
            total_steps=len(self.registry),
            percent=percent,
            steps=items,
        )

    def assembled_record(self, state: WizardState | None = None) -> RegistrationRecordDto:
        state = state or self._state
        if not state.started or state.current_step_index != self.registry.last_index:
            raise RegistrationIncompleteError(state.current_step_index)
        return RegistrationRecordDto.from_record(state.record)

    def registration_summary(self, state: WizardState | None = None) -> RegistrationSummaryDto:
        record = self.assembled_record(state)
        personal = record.personal_info
        primary = record.emergency_contacts.primary
        return RegistrationSummaryDto(
            full_name=f"{personal.first_name} {personal.last_name}",
            first_name=personal.first_name,
            date_of_birth=personal.date_of_birth,
            phone=personal.phone,
            email=personal.email,
            insurance_provider=provider_label(record.insurance.provider),
            policy_number=record.insurance.policy_number,
            emergency_contact_name=primary.name,
            emergency_contact_relationship=relationship_label(primary.relationship),
            emergency_contact_phone=primary.phone,
            all_consents_given=record.consent.all_given,
        )

    def hand_off(self, handoff: RegistrationHandoff) -> RegistrationRecordDto:
        record = self.assembled_record()
        try:
            handoff.submit_registration(record)
        except Exception:
            self._logger.exception("Registration hand-off failed")
            raise
        self._logger.info("Registration handed off")
        return record
