from __future__ import annotations

from dataclasses import dataclass

from patient_intake.application.services.registration_handoff import LoggingHandoff, RegistrationHandoff
from patient_intake.application.services.registration_wizard_service import RegistrationWizardService
from patient_intake.config import Settings, load_settings
from patient_intake.domain.rules.step_schemas import StepRegistry, build_step_registry


@dataclass
class Container:
    settings: Settings
    step_registry: StepRegistry
    wizard_service: RegistrationWizardService
    handoff: RegistrationHandoff


def build_container(settings: Settings | None = None, handoff: RegistrationHandoff | None = None) -> Container:
    settings = settings or load_settings()
    step_registry = build_step_registry(strict_secondary_phone=settings.strict_secondary_phone)
    return Container(
        settings=settings,
        step_registry=step_registry,
        wizard_service=RegistrationWizardService(registry=step_registry),
        handoff=handoff or LoggingHandoff(),
    )
