"""RegistrationWizardDialog: renders the active step and drives the sequencer.

Left column: step indicator. Center: intro / step form / completion summary.
Bottom: navigation.
"""
from __future__ import annotations

from typing import Any

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QCheckBox,
    QComboBox,
    QDialog,
    QFormLayout,
    QFrame,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QVBoxLayout,
    QWidget,
)

from patient_intake.application.dto.registration_dto import FieldDescriptorDto, StepViewDto
from patient_intake.application.services.registration_handoff import RegistrationHandoff
from patient_intake.application.services.registration_wizard_service import RegistrationWizardService
from patient_intake.domain.constants import choice_label
from patient_intake.domain.rules.field_rules import Invalid
from patient_intake.domain.rules.phone_format import format_phone
from patient_intake.domain.rules.step_schemas import FORM_ERROR_KEY

_PANEL_BG = "#EDE8E1"
_DONE_BG = "#27AE60"
_ACT_BG = "#8FDCCF"
_PEND_BADGE = "#D4CEC8"
_PEND_TEXT = "#7A7A78"
_ERROR_TEXT = "#C0392B"

_PAGE_INTRO = 0
_PAGE_FORM = 1
_PAGE_DONE = 2


def _unflatten(values: dict[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for path, value in values.items():
        target = out
        *parents, leaf = path.split(".")
        for name in parents:
            target = target.setdefault(name, {})
        target[leaf] = value
    return out


def _lookup(values: dict[str, Any], path: str) -> Any:
    current: Any = values
    for name in path.split("."):
        if not isinstance(current, dict):
            return None
        current = current.get(name)
    return current


class RegistrationWizardDialog(QDialog):
    def __init__(
        self,
        wizard_service: RegistrationWizardService,
        handoff: RegistrationHandoff,
        parent: QWidget | None = None,
    ) -> None:
        super().__init__(parent)
        self._service = wizard_service
        self._handoff = handoff
        self._inputs: dict[str, QWidget] = {}
        self._error_labels: dict[str, QLabel] = {}
        self._view: StepViewDto | None = None

        self.setWindowTitle("Patient Registration")
        self.setMinimumSize(900, 640)

        outer = QHBoxLayout(self)
        outer.setContentsMargins(0, 0, 0, 0)
        outer.setSpacing(0)

        step_panel = QFrame()
        step_panel.setObjectName("wizardStepPanel")
        step_panel.setFixedWidth(200)
        step_panel.setStyleSheet(f"#wizardStepPanel {{ background-color: {_PANEL_BG}; }}")
        sp_lay = QVBoxLayout(step_panel)
        sp_lay.setContentsMargins(16, 28, 16, 20)
        self._step_badges: list[QLabel] = []
        for step in self._service.registry:
            badge = QLabel(step.title)
            badge.setWordWrap(True)
            self._step_badges.append(badge)
            sp_lay.addWidget(badge)
        sp_lay.addStretch(1)
        outer.addWidget(step_panel)

        right = QVBoxLayout()
        outer.addLayout(right, 1)

        self._stack = QStackedWidget()
        self._stack.addWidget(self._build_intro_page())
        self._form_host = QWidget()
        self._form_layout = QVBoxLayout(self._form_host)
        form_scroll = QScrollArea()
        form_scroll.setWidgetResizable(True)
        form_scroll.setFrameShape(QFrame.Shape.NoFrame)
        form_scroll.setWidget(self._form_host)
        self._stack.addWidget(form_scroll)
        self._done_page = QWidget()
        self._done_layout = QVBoxLayout(self._done_page)
        self._stack.addWidget(self._done_page)
        right.addWidget(self._stack, 1)

        self._form_error = QLabel()
        self._form_error.setStyleSheet(f"color: {_ERROR_TEXT};")
        self._form_error.setVisible(False)
        right.addWidget(self._form_error)

        nav_bar = QFrame()
        nav_lay = QHBoxLayout(nav_bar)
        nav_lay.setContentsMargins(20, 8, 20, 8)
        self._btn_back = QPushButton("← Previous")
        self._btn_back.clicked.connect(self._go_back)
        self._btn_next = QPushButton("Continue →")
        self._btn_next.clicked.connect(self._go_next)
        self._btn_restart = QPushButton("Start Over")
        self._btn_restart.clicked.connect(self._restart)
        nav_lay.addWidget(self._btn_back)
        nav_lay.addStretch(1)
        nav_lay.addWidget(self._btn_restart)
        nav_lay.addWidget(self._btn_next)
        right.addWidget(nav_bar)

        self._render()

    # ── pages ────────────────────────────────────────────────────────────

    def _build_intro_page(self) -> QWidget:
        page = QWidget()
        lay = QVBoxLayout(page)
        lay.setContentsMargins(40, 40, 40, 40)
        title = QLabel("Welcome to MedCare Health System")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        lay.addWidget(title)
        intro = QLabel(
            "Let's get you set up as a new patient. Please have your insurance card, "
            "medication list and emergency contact details ready."
        )
        intro.setWordWrap(True)
        lay.addWidget(intro)
        begin = QPushButton("Begin Registration")
        begin.clicked.connect(self._begin)
        lay.addWidget(begin, 0, Qt.AlignmentFlag.AlignLeft)
        lay.addStretch(1)
        return page

    def _rebuild_form(self, view: StepViewDto) -> None:
        while self._form_layout.count():
            item = self._form_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self._inputs.clear()
        self._error_labels.clear()

        header = QLabel(view.title)
        header.setStyleSheet("font-size: 18px; font-weight: bold;")
        self._form_layout.addWidget(header)

        form_box = QWidget()
        form = QFormLayout(form_box)
        group = ""
        for descriptor in view.field_descriptors:
            prefix = descriptor.path.rpartition(".")[0]
            if prefix != group:
                group = prefix
                group_label = QLabel(f"{prefix.capitalize()} contact")
                group_label.setStyleSheet("font-weight: bold; padding-top: 8px;")
                form.addRow(group_label)
            widget = self._make_input(descriptor, _lookup(view.values, descriptor.path))
            error = QLabel()
            error.setStyleSheet(f"color: {_ERROR_TEXT}; font-size: 11px;")
            error.setVisible(False)
            cell = QWidget()
            cell_lay = QVBoxLayout(cell)
            cell_lay.setContentsMargins(0, 0, 0, 0)
            cell_lay.addWidget(widget)
            cell_lay.addWidget(error)
            label = f"{descriptor.label} *" if descriptor.required else descriptor.label
            form.addRow("" if descriptor.kind == "consent" else label, cell)
            self._inputs[descriptor.path] = widget
            self._error_labels[descriptor.path] = error
        self._form_layout.addWidget(form_box)
        self._form_layout.addStretch(1)

    def _make_input(self, descriptor: FieldDescriptorDto, value: Any) -> QWidget:
        path = descriptor.path
        if descriptor.kind == "consent":
            box = QCheckBox(descriptor.label)
            box.setChecked(value is True)
            return box
        if descriptor.kind == "choice":
            combo = QComboBox()
            combo.addItem("Select...", "")
            for choice in descriptor.choices:
                combo.addItem(choice_label(choice), choice)
            index = combo.findData(value or "")
            combo.setCurrentIndex(max(index, 0))
            return combo
        if descriptor.kind == "multiline":
            text_edit = QPlainTextEdit(str(value or ""))
            text_edit.setFixedHeight(64)
            return text_edit
        line = QLineEdit(str(value or ""))
        if descriptor.kind == "phone":
            line.setPlaceholderText("(555) 123-4567")
            line.textEdited.connect(lambda text, p=path: self._on_phone_edited(p, text))
        elif descriptor.kind == "date":
            line.setPlaceholderText("YYYY-MM-DD")
        line.editingFinished.connect(lambda p=path: self._check_field(p))
        return line

    def _render_done(self) -> None:
        while self._done_layout.count():
            item = self._done_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        summary = self._service.registration_summary()
        title = QLabel("Registration Complete!")
        title.setStyleSheet("font-size: 22px; font-weight: bold;")
        self._done_layout.addWidget(title)
        self._done_layout.addWidget(QLabel(f"Welcome to MedCare Health System, {summary.first_name}!"))
        rows = QFormLayout()
        rows.addRow("Patient:", QLabel(summary.full_name))
        rows.addRow("Date of birth:", QLabel(summary.date_of_birth.isoformat()))
        rows.addRow("Contact:", QLabel(f"{summary.phone}  {summary.email}"))
        rows.addRow("Insurance:", QLabel(f"{summary.insurance_provider} (policy {summary.policy_number})"))
        rows.addRow(
            "Emergency contact:",
            QLabel(
                f"{summary.emergency_contact_name} • {summary.emergency_contact_relationship}"
                f" • {summary.emergency_contact_phone}"
            ),
        )
        holder = QWidget()
        holder.setLayout(rows)
        self._done_layout.addWidget(holder)
        actions = QHBoxLayout()
        btn_schedule = QPushButton("Schedule Appointment")
        btn_schedule.clicked.connect(lambda: self._run_handoff(self._handoff.schedule_appointment))
        btn_export = QPushButton("Download Summary")
        btn_export.clicked.connect(lambda: self._run_handoff(self._handoff.export_summary))
        actions.addWidget(btn_schedule)
        actions.addWidget(btn_export)
        actions_holder = QWidget()
        actions_holder.setLayout(actions)
        self._done_layout.addWidget(actions_holder)
        self._done_layout.addStretch(1)

    # ── navigation ───────────────────────────────────────────────────────

    def _render(self) -> None:
        state = self._service.state
        self._form_error.setVisible(False)
        if not state.started:
            self._view = None
            self._stack.setCurrentIndex(_PAGE_INTRO)
        else:
            self._view = self._service.current_step()
            if self._view.is_terminal:
                self._render_done()
                self._stack.setCurrentIndex(_PAGE_DONE)
            else:
                self._rebuild_form(self._view)
                self._stack.setCurrentIndex(_PAGE_FORM)
        self._update_nav()
        self._update_step_indicator()

    def _update_nav(self) -> None:
        view = self._view
        in_form = view is not None and not view.is_terminal
        self._btn_back.setEnabled(view is not None and view.can_go_back)
        self._btn_back.setVisible(in_form)
        self._btn_next.setVisible(in_form)
        self._btn_restart.setVisible(view is not None)
        if view is not None and view.index == self._service.registry.last_index - 1:
            self._btn_next.setText("Complete Registration")
        else:
            self._btn_next.setText("Continue →")

    def _update_step_indicator(self) -> None:
        progress = self._service.progress()
        for badge, item in zip(self._step_badges, progress.steps, strict=False):
            if item.status == "completed":
                badge.setStyleSheet(f"color: {_DONE_BG}; font-size: 12px;")
            elif item.status == "current":
                badge.setStyleSheet(f"background-color: {_ACT_BG}; font-size: 13px; font-weight: bold;")
            else:
                badge.setStyleSheet(f"color: {_PEND_TEXT}; border-bottom: 1px solid {_PEND_BADGE};")

    def _begin(self) -> None:
        self._service.start()
        self._render()

    def _go_back(self) -> None:
        self._service.retreat()
        self._render()

    def _go_next(self) -> None:
        if self._view is None:
            return
        result = self._service.advance(self._view.index, self.collect_values())
        if not result.accepted:
            self._show_errors(result.errors)
            return
        if self._service.is_complete:
            self._submit()
        self._render()

    def _restart(self) -> None:
        self._service.reset()
        self._render()

    # ── data ─────────────────────────────────────────────────────────────

    def collect_values(self) -> dict[str, Any]:
        flat: dict[str, Any] = {}
        for path, widget in self._inputs.items():
            if isinstance(widget, QCheckBox):
                flat[path] = widget.isChecked()
            elif isinstance(widget, QComboBox):
                flat[path] = widget.currentData() or ""
            elif isinstance(widget, QPlainTextEdit):
                flat[path] = widget.toPlainText()
            else:
                flat[path] = widget.text()
        return _unflatten(flat)

    def _show_errors(self, errors: dict[str, str]) -> None:
        for path, label in self._error_labels.items():
            message = errors.get(path)
            label.setText(message or "")
            label.setVisible(bool(message))
        form_message = errors.get(FORM_ERROR_KEY)
        self._form_error.setText(form_message or "")
        self._form_error.setVisible(bool(form_message))

    def _on_phone_edited(self, path: str, text: str) -> None:
        widget = self._inputs.get(path)
        if isinstance(widget, QLineEdit):
            formatted = format_phone(text)
            if formatted != text:
                widget.setText(formatted)

    def _check_field(self, path: str) -> None:
        widget = self._inputs.get(path)
        label = self._error_labels.get(path)
        if self._view is None or not isinstance(widget, QLineEdit) or label is None:
            return
        outcome = self._service.check_field(self._view.index, path, widget.text())
        message = outcome.message if isinstance(outcome, Invalid) else ""
        label.setText(message)
        label.setVisible(bool(message))

    def _submit(self) -> None:
        try:
            self._service.hand_off(self._handoff)
        except Exception as exc:  # noqa: BLE001
            QMessageBox.critical(self, "Submission failed", str(exc))

    def _run_handoff(self, action) -> None:  # noqa: ANN001
        try:
            action(self._service.assembled_record())
        except Exception as exc:  # noqa: BLE001
            QMessageBox.critical(self, "Request failed", str(exc))
