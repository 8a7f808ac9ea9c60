from __future__ import annotations

import os
from typing import Any

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(scope="session")
def qapp():
    from PySide6.QtWidgets import QApplication

    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return app


def _personal_info() -> dict[str, Any]:
    return {
        "firstName": "Jane",
        "lastName": "Doe",
        "dateOfBirth": "1990-01-01",
        "ssn": "123-45-6789",
        "gender": "female",
        "maritalStatus": "single",
        "phone": "(555) 123-4567",
        "email": "jane@example.com",
        "address": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zipCode": "62701",
    }


def _insurance() -> dict[str, Any]:
    return {
        "provider": "bcbs",
        "policyNumber": "POL-998877",
        "groupNumber": "GRP-42",
        "subscriberName": "Jane Doe",
        "subscriberDOB": "1990-01-01",
        "relationshipToSubscriber": "self",
    }


def _medical_history() -> dict[str, Any]:
    return {
        "primaryPhysician": "Dr. Smith",
        "allergies": "Penicillin",
        "currentMedications": "",
        "medicalConditions": "",
        "surgicalHistory": "",
        "familyHistory": "Diabetes",
    }


def _emergency_contacts() -> dict[str, Any]:
    return {
        "primary": {
            "name": "John Doe",
            "relationship": "spouse",
            "phone": "(555) 987-6543",
            "email": "",
        },
        "secondary": {"name": "", "relationship": "", "phone": "", "email": ""},
    }


def _consent() -> dict[str, Any]:
    return {
        "hipaaConsent": True,
        "treatmentConsent": True,
        "financialResponsibility": True,
        "communicationConsent": True,
    }


@pytest.fixture
def personal_info_data() -> dict[str, Any]:
    return _personal_info()


@pytest.fixture
def insurance_data() -> dict[str, Any]:
    return _insurance()


@pytest.fixture
def emergency_contacts_data() -> dict[str, Any]:
    return _emergency_contacts()


@pytest.fixture
def consent_data() -> dict[str, Any]:
    return _consent()


@pytest.fixture
def step_payloads() -> list[dict[str, Any]]:
    return [_personal_info(), _insurance(), _medical_history(), _emergency_contacts(), _consent()]
