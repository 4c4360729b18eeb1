"""Async orchestration of wizard input and the two gateway calls."""

from __future__ import annotations

import asyncio
import logging

from pydantic import ValidationError

from stylist.api.schemas import OutfitResult
from stylist.wizard.client import GatewayClient, GatewayError
from stylist.wizard.state_machine import StepOutcome, WizardState, WizardStateMachine

logger = logging.getLogger(__name__)

AUTO_ADVANCE_DELAY = 0.2


class WizardController:
    """Drives a ``WizardStateMachine`` and talks to the gateway."""

    def __init__(
        self,
        client: GatewayClient,
        machine: WizardStateMachine | None = None,
        *,
        auto_advance_delay: float = AUTO_ADVANCE_DELAY,
    ) -> None:
        self._client = client
        self._machine = machine or WizardStateMachine()
        self._auto_advance_delay = auto_advance_delay
        self._pending_advance: asyncio.Task[None] | None = None
        self._image_tasks: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> WizardState:
        return self._machine.state

    @property
    def machine(self) -> WizardStateMachine:
        return self._machine

    def select_occasion(self, label: str) -> None:
        """Record the occasion and advance to the style step after a short delay.

        Must be called from a running event loop. Selecting again before the
        delay elapses restarts the timer.
        """

        self._machine.select_occasion(label)
        self._cancel_pending_advance()
        self._pending_advance = asyncio.get_running_loop().create_task(self._advance_later())

    async def _advance_later(self) -> None:
        await asyncio.sleep(self._auto_advance_delay)
        self._machine.auto_advance()

    def _cancel_pending_advance(self) -> None:
        if self._pending_advance is not None and not self._pending_advance.done():
            self._pending_advance.cancel()
        self._pending_advance = None

    async def next(self) -> StepOutcome:
        """Move forward; from the last step this submits the form."""

        self._cancel_pending_advance()
        outcome = self._machine.next_step()
        if outcome is StepOutcome.SUBMIT:
            await self.submit()
        return outcome

    def back(self) -> StepOutcome:
        self._cancel_pending_advance()
        return self._machine.prev_step()

    async def submit(self) -> None:
        """Request the outfit, then start the preview image call in the background."""

        submission = self._machine.begin_submission()
        try:
            payload = await self._client.generate_outfit(self._machine.state.form)
            result = OutfitResult.model_validate(payload)
        except (GatewayError, ValidationError) as exc:
            logger.error("Outfit generation failed: %s", exc)
            self._machine.fail_submission(submission)
            return

        if not self._machine.complete_submission(submission, result):
            logger.debug("Discarding stale outfit result for submission %d.", submission)
            return

        if self._machine.begin_image(submission):
            task = asyncio.create_task(self._generate_visual(submission, result.description))
            self._image_tasks.add(task)
            task.add_done_callback(self._image_tasks.discard)

    async def _generate_visual(self, submission: int, description: str) -> None:
        try:
            image_url = await self._client.generate_image(description)
        except GatewayError as exc:
            logger.warning("Image generation failed: %s", exc)
        else:
            if not self._machine.complete_image(submission, image_url):
                logger.debug("Discarding stale preview image for submission %d.", submission)
        finally:
            self._machine.finish_image(submission)

    async def wait_for_images(self) -> None:
        """Wait until every background image call has settled."""

        if self._image_tasks:
            await asyncio.gather(*list(self._image_tasks), return_exceptions=True)

    def reset(self) -> None:
        """Start over with an empty form. In-flight calls keep running but their results are dropped."""

        self._cancel_pending_advance()
        self._machine.reset()

    async def close(self) -> None:
        self._cancel_pending_advance()
        await self.wait_for_images()
        await self._client.close()
