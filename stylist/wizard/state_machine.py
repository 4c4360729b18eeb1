"""Finite state machine behind the five-step outfit wizard."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Any

from stylist.api.schemas import OutfitRequest, OutfitResult

OCCASION_REQUIRED = "Please select an occasion"
SUBMISSION_FAILED = "Something went wrong. Please try again."


class WizardStep(IntEnum):
    """Ordered input steps."""

    OCCASION = 0
    STYLE = 1
    DETAILS = 2
    CONTEXT = 3
    IMAGE = 4


class WizardPhase(str, Enum):
    COLLECTING = "collecting"
    LOADING = "loading"
    RESULT = "result"


class StepOutcome(str, Enum):
    """What a navigation request did."""

    MOVED = "moved"
    BLOCKED = "blocked"
    SUBMIT = "submit"
    UNCHANGED = "unchanged"


@dataclass(slots=True)
class WizardState:
    """Everything the wizard shows; transient, never persisted."""

    form: OutfitRequest = field(default_factory=OutfitRequest)
    current_step: WizardStep = WizardStep.OCCASION
    phase: WizardPhase = WizardPhase.COLLECTING
    error: str | None = None
    result: OutfitResult | None = None
    generated_image: str | None = None
    generating_image: bool = False
    submission_id: int = 0


class WizardStateMachine:
    """Applies wizard transitions; async results are accepted only for the active submission."""

    LAST_STEP = WizardStep.IMAGE

    def __init__(self) -> None:
        self._state = WizardState()

    @property
    def state(self) -> WizardState:
        return self._state

    def update(self, **fields: Any) -> None:
        """Set form fields by their Python names (``body_type``, ``image`` ...)."""

        if self._state.phase is not WizardPhase.COLLECTING:
            return
        self._state.form = self._state.form.model_copy(update=fields)

    def select_occasion(self, label: str) -> None:
        self.update(occasion=label)

    def next_step(self) -> StepOutcome:
        state = self._state
        if state.phase is not WizardPhase.COLLECTING:
            return StepOutcome.UNCHANGED
        if state.current_step is WizardStep.OCCASION and not state.form.occasion:
            state.error = OCCASION_REQUIRED
            return StepOutcome.BLOCKED
        state.error = None
        if state.current_step < self.LAST_STEP:
            state.current_step = WizardStep(state.current_step + 1)
            return StepOutcome.MOVED
        return StepOutcome.SUBMIT

    def prev_step(self) -> StepOutcome:
        state = self._state
        state.error = None
        if state.phase is not WizardPhase.COLLECTING or state.current_step is WizardStep.OCCASION:
            return StepOutcome.UNCHANGED
        state.current_step = WizardStep(state.current_step - 1)
        return StepOutcome.MOVED

    def auto_advance(self) -> bool:
        """Move from the occasion step to the style step, once."""

        state = self._state
        if (
            state.phase is WizardPhase.COLLECTING
            and state.current_step is WizardStep.OCCASION
            and state.form.occasion
        ):
            state.error = None
            state.current_step = WizardStep.STYLE
            return True
        return False

    def begin_submission(self) -> int:
        """Enter the loading phase and return the new submission id."""

        state = self._state
        state.submission_id += 1
        state.phase = WizardPhase.LOADING
        state.error = None
        state.result = None
        state.generated_image = None
        state.generating_image = False
        return state.submission_id

    def is_current(self, submission_id: int) -> bool:
        return submission_id == self._state.submission_id

    def complete_submission(self, submission_id: int, result: OutfitResult) -> bool:
        if not self.is_current(submission_id) or self._state.phase is not WizardPhase.LOADING:
            return False
        self._state.result = result
        self._state.phase = WizardPhase.RESULT
        return True

    def fail_submission(self, submission_id: int, message: str = SUBMISSION_FAILED) -> bool:
        """Return to the step the user submitted from, with an error."""

        if not self.is_current(submission_id) or self._state.phase is not WizardPhase.LOADING:
            return False
        self._state.phase = WizardPhase.COLLECTING
        self._state.error = message
        return True

    def begin_image(self, submission_id: int) -> bool:
        if not self.is_current(submission_id) or self._state.phase is not WizardPhase.RESULT:
            return False
        self._state.generating_image = True
        return True

    def complete_image(self, submission_id: int, image_url: str) -> bool:
        if not self.is_current(submission_id) or self._state.phase is not WizardPhase.RESULT:
            return False
        self._state.generated_image = image_url
        return True

    def finish_image(self, submission_id: int) -> bool:
        if not self.is_current(submission_id):
            return False
        self._state.generating_image = False
        return True

    def reset(self) -> None:
        """Clear every field; results of in-flight calls become stale."""

        self._state = WizardState(submission_id=self._state.submission_id + 1)
