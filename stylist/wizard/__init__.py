"""Client-side wizard that collects preferences and drives the gateway."""

from .client import GatewayClient, GatewayError
from .controller import WizardController
from .state_machine import StepOutcome, WizardPhase, WizardState, WizardStateMachine, WizardStep

__all__ = [
    "GatewayClient",
    "GatewayError",
    "StepOutcome",
    "WizardController",
    "WizardPhase",
    "WizardState",
    "WizardStateMachine",
    "WizardStep",
]
