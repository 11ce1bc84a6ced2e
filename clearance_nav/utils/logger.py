"""
日志工具

控制台输出 + 可选的按天轮转日志文件，均基于 loguru。
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

from clearance_nav.common.exceptions import ConfigurationError

CONSOLE_FORMAT = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message}"
LOG_FILE_NAME = "clearance_nav_{time:YYYY-MM-DD}.log"


def SetupLogger(
    log_dir: Optional[str] = None,
    level: str = "INFO",
    retention: str = "7 days",
    console: bool = True,
):
    """
    重新配置 loguru 的输出

    先校验级别，校验失败时保留原有 sink 不变。

    Args:
        log_dir: 日志目录，None 时不写文件
        level: 日志级别（不区分大小写）
        retention: 日志文件保留时长
        console: 是否输出到 stderr

    Returns:
        loguru logger

    Raises:
        ConfigurationError: 未知的日志级别
    """
    level = level.upper()
    try:
        logger.level(level)
    except ValueError as e:
        raise ConfigurationError(f"未知的日志级别: {level}") from e

    logger.remove()

    if console:
        logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)

    if log_dir:
        log_path = Path(log_dir)
        log_path.mkdir(parents=True, exist_ok=True)
        logger.add(
            log_path / LOG_FILE_NAME,
            rotation="00:00",
            retention=retention,
            level=level,
            format=FILE_FORMAT,
            encoding="utf-8",
        )

    logger.debug(f"[Logger] 日志已配置: level={level}, log_dir={log_dir}, console={console}")
    return logger
