from dataclasses import dataclass, field
from typing import List, Optional

from clearance_nav.core.grid_map import GridCoord
from clearance_nav.core.jump_search import SearchConfig, SearchOutcome
from clearance_nav.core.path_metrics import path_length


@dataclass
class PlanResult:
    ok: bool
    path: List[GridCoord]
    reason: str = ""


@dataclass
class AgentPlan:
    name: str
    config: SearchConfig
    outcome: Optional[SearchOutcome] = field(default=None, repr=False)
    path: List[GridCoord] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return bool(self.path)

    @property
    def length(self) -> float:
        return path_length(self.path)

    def to_result(self) -> PlanResult:
        if self.ok:
            return PlanResult(ok=True, path=list(self.path), reason="ok")
        if self.outcome is None:
            return PlanResult(ok=False, path=[], reason="未规划")
        return PlanResult(ok=False, path=[], reason="无可行路径")
