from __future__ import annotations


class RegistrationError(ValueError):
    pass


class RegistrationIncompleteError(RegistrationError):
    def __init__(self, current_step_index: int) -> None:
        super().__init__(f"Registration is not complete (current step: {current_step_index})")
        self.current_step_index = current_step_index
