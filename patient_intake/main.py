from __future__ import annotations

import logging
import sys

from PySide6.QtWidgets import QApplication

from patient_intake.bootstrap.logging_setup import setup_logging
from patient_intake.config import load_settings
from patient_intake.container import build_container
from patient_intake.ui.registration_wizard import RegistrationWizardDialog


def _install_excepthook() -> None:
    def _handle_exception(exc_type, exc, tb) -> None:  # noqa: ANN001
        logging.getLogger(__name__).error("Unhandled exception", exc_info=(exc_type, exc, tb))
        sys.__excepthook__(exc_type, exc, tb)

    sys.excepthook = _handle_exception


def main() -> int:
    settings = load_settings()
    log_path = setup_logging(settings.log_dir, settings.log_level)
    _install_excepthook()
    logging.getLogger(__name__).info("Starting patient intake, log file: %s", log_path)

    app = QApplication.instance() or QApplication(sys.argv)
    container = build_container(settings)
    dialog = RegistrationWizardDialog(container.wizard_service, container.handoff)
    dialog.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
