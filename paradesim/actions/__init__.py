"""Action system: one stateless step handler per action type."""

from paradesim.actions.base import PoseMap, StepHandler
from paradesim.actions.move import MoveStep
from paradesim.actions.turn import TurnStep
from paradesim.actions.wheel import WheelStep
from paradesim.core.enums import ActionType

STEP_HANDLERS: dict[ActionType, type] = {
    ActionType.MOVE: MoveStep,
    ActionType.TURN: TurnStep,
    ActionType.WHEEL: WheelStep,
}

__all__ = ["MoveStep", "PoseMap", "STEP_HANDLERS", "StepHandler", "TurnStep", "WheelStep"]
