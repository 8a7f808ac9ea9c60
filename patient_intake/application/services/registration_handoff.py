from __future__ import annotations

import logging
from typing import Protocol

from patient_intake.application.dto.registration_dto import RegistrationRecordDto


class RegistrationHandoff(Protocol):
    """Receives the finished record. Storage, scheduling and export live behind it."""

    def submit_registration(self, record: RegistrationRecordDto) -> None: ...

    def schedule_appointment(self, record: RegistrationRecordDto) -> None: ...

    def export_summary(self, record: RegistrationRecordDto) -> None: ...


class LoggingHandoff:
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.requests: list[str] = []

    def submit_registration(self, record: RegistrationRecordDto) -> None:
        self._record_request("submit_registration", record)

    def schedule_appointment(self, record: RegistrationRecordDto) -> None:
        self._record_request("schedule_appointment", record)

    def export_summary(self, record: RegistrationRecordDto) -> None:
        self._record_request("export_summary", record)

    def _record_request(self, action: str, record: RegistrationRecordDto) -> None:
        # PHI stays out of the log; only the insurance provider code is written
        self.requests.append(action)
        self._logger.info("Hand-off requested: %s (provider: %s)", action, record.insurance.provider)
