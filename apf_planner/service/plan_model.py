from dataclasses import dataclass, field
from typing import List, Optional, Tuple

WorldCoord = Tuple[float, float]

@dataclass
class PlanRequest:
    start: WorldCoord
    goal: WorldCoord

@dataclass
class PlanResult:
    ok: bool
    path: List[WorldCoord] = field(default_factory=list)
    reason: str = ""
    error: Optional[str] = None      # exception class name on failure
    iterations: int = 0
