#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
间隙感知寻路演示入口

加载配置 -> 随机生成障碍 -> 重建间隙场并为所有单位规划 -> 输出状态、图像和 ASCII 地图
"""

import argparse
from pathlib import Path
from typing import List, Optional

import cv2
from loguru import logger

from clearance_nav.common.exceptions import ClearanceNavError
from clearance_nav.config.loader import load_config
from clearance_nav.config.models import PlannerConfig
from clearance_nav.core.distance_metric import DistanceMetric
from clearance_nav.path_planner.path_planning_service import PathPlanningService
from clearance_nav.ui.grid_renderer import GridRenderer, render_ascii
from clearance_nav.utils.logger import SetupLogger


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="间隙感知栅格寻路演示（随机障碍 + 多单位规划）")
    parser.add_argument("--config", type=str, default=None, help="YAML 配置文件路径（缺省使用内置默认值）")
    parser.add_argument("--seed", type=int, default=None, help="随机障碍种子（覆盖配置）")
    parser.add_argument("--metric", type=str, default=None,
                        choices=[m.value for m in DistanceMetric], help="间隙场距离度量（覆盖配置）")
    parser.add_argument("--no-jumping", action="store_true", help="禁用跳跃")
    parser.add_argument("--render", type=str, default=None, help="渲染结果 PNG 输出路径")
    parser.add_argument("--show-scores", type=str, default=None, help="渲染时叠加该单位的 score 图")
    parser.add_argument("--ascii", type=str, default=None, help="打印该单位路径的 ASCII 地图")
    parser.add_argument("--log-level", type=str, default=None, help="日志级别（覆盖配置）")
    return parser


def run(args: argparse.Namespace) -> int:
    # 先按命令行级别输出加载日志，加载完成后再按配置重新设置
    SetupLogger(None, args.log_level or "INFO")
    cfg = load_config(Path(args.config)) if args.config else PlannerConfig()
    SetupLogger(cfg.logging.log_dir, args.log_level or cfg.logging.level, cfg.logging.retention)

    service = PathPlanningService(cfg)
    if args.metric:
        service.set_metric(DistanceMetric(args.metric))
    if args.no_jumping:
        service.set_jumping(False)

    service.randomize(args.seed if args.seed is not None else cfg.obstacles.seed)
    plans = service.replan()

    for line in service.status_lines():
        print(line)

    if args.render:
        score_context = None
        if args.show_scores:
            plan = plans.get(args.show_scores)
            if plan is None or plan.outcome is None:
                logger.error(f"未知单位: {args.show_scores}")
                return 2
            score_context = plan.outcome.context

        renderer = GridRenderer(cfg.render.cell_size)
        image = renderer.render(
            service.grid,
            paths={name: plan.path for name, plan in plans.items()},
            score_context=score_context,
        )
        out_path = Path(args.render)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        if not cv2.imwrite(str(out_path), image):
            logger.error(f"图像写入失败: {out_path}")
            return 1
        logger.info(f"渲染结果已保存: {out_path}")

    if args.ascii:
        plan = plans.get(args.ascii)
        if plan is None:
            logger.error(f"未知单位: {args.ascii}")
            return 2
        print(render_ascii(service.grid, plan.path, plan.config.start, plan.config.goal))

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    try:
        return run(args)
    except (ClearanceNavError, FileNotFoundError) as e:
        logger.error(f"运行失败: {e}")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())
