# clearance_nav/path_planner/path_planner_core.py
from typing import Optional

from loguru import logger

from clearance_nav.core.clearance_field import rebuild_clearance
from clearance_nav.core.distance_metric import DistanceMetric
from clearance_nav.core.grid_map import Grid
from clearance_nav.core.jump_search import SearchConfig, WeightedJumpSearch
from clearance_nav.core.neighbor_offsets import NeighborTable
from clearance_nav.core.path_reconstructor import reconstruct_path
from clearance_nav.path_planner.map_model import AgentPlan


class PathPlanningCore:
    """纯路径规划器：只关心栅格与间隙场，不关心渲染和输入。"""

    def __init__(
        self,
        max_radius: int,
        open_set_kind: str = "linear",
        neighbor_table: Optional[NeighborTable] = None,
    ) -> None:
        self._table = neighbor_table or NeighborTable.build(max_radius)
        self._search = WeightedJumpSearch(self._table, open_set_kind)

        # 统计计数器
        self._plan_count: int = 0
        self._fail_count: int = 0
        self._overflow_count: int = 0

    @property
    def neighbor_table(self) -> NeighborTable:
        return self._table

    def refresh_clearance(self, grid: Grid, metric: DistanceMetric, method: str = "splat") -> None:
        """障碍变化后重建间隙场"""
        rebuild_clearance(grid, metric, method)

    def plan(self, grid: Grid, name: str, config: SearchConfig) -> AgentPlan:
        """在给定栅格上为一个单位做一次规划（间隙场须为最新）。"""
        outcome = self._search.run(grid, config)
        path = reconstruct_path(outcome.context, config.start, config.goal)

        self._plan_count += 1
        if not path:
            self._fail_count += 1
            logger.info(f"[PathPlanningCore] {name}: 无可行路径 start={config.start}, goal={config.goal}")
        if outcome.overflowed:
            self._overflow_count += 1

        plan = AgentPlan(name=name, config=config, outcome=outcome, path=path)
        if path:
            logger.info(
                f"[PathPlanningCore] {name}: 规划成功 节点数={len(path)}, 长度={plan.length:.2f}, "
                f"score={outcome.goal_score}"
            )

        if self._plan_count % 10 == 0:
            logger.debug(
                f"[PathPlanningCore] 统计: 规划次数={self._plan_count}, 失败={self._fail_count}, "
                f"溢出={self._overflow_count}"
            )
        return plan
