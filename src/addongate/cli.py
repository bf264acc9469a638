# -*- coding: utf-8 -*-
"""
addongate 命令行接口

对插件清单快照执行一次依赖检查，打印提示并以退出码报告结果：
0 需求满足，1 需求未满足，2 输入错误。
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from pydantic import ValidationError

from .core.activator import AddonActivator
from .exceptions import AddonGateException
from .plugins.config.base_config import GateConfig
from .plugins.dependency.registry import InMemoryPluginRegistry

EXIT_OK = 0
EXIT_UNMET = 1
EXIT_INPUT_ERROR = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="addongate",
        description="addongate - 附加组件依赖检查",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument("--inventory", "-i", required=True, help="插件清单快照 (YAML/JSON)")
    parser.add_argument("--addon", "-a", required=True, help="附加组件主文件路径")
    parser.add_argument("--config", "-c", help="YAML 配置文件路径")
    parser.add_argument("--env", help="配置环境，默认取 APP_ENV")
    parser.add_argument("--runtime-version", help="运行时版本，默认为当前解释器版本")
    parser.add_argument("--quiet", "-q", action="store_true", help="静默模式，只显示提示")
    parser.add_argument("--verbose", "-v", action="store_true", help="输出调试日志")
    return parser


def _log_level(args: argparse.Namespace) -> int:
    if args.verbose:
        return logging.DEBUG
    # 静默模式下未满足的需求只通过提示和退出码报告
    if args.quiet:
        return logging.ERROR
    return logging.WARNING


def main(argv: Optional[List[str]] = None) -> int:
    """命令行主入口"""
    args = _build_parser().parse_args(argv)

    level = _log_level(args)
    logging.basicConfig(
        level=level,
        format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
    )
    logging.getLogger("addongate").setLevel(level)

    inventory_path = Path(args.inventory)
    if not inventory_path.exists():
        print(f"插件清单文件不存在: {inventory_path}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    try:
        if args.config:
            config = GateConfig.load_from_file(Path(args.config), env=args.env)
        else:
            config = GateConfig()

        registry = InMemoryPluginRegistry()
        registry.register_from_file(inventory_path)

    except (AddonGateException, ValidationError) as e:
        print(f"输入无效: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    activator = AddonActivator(
        args.addon,
        registry,
        config=config,
        runtime_version=args.runtime_version,
    )

    if activator.requirement_met():
        if not args.quiet:
            print(f"{activator.addon_name}: OK")
        return EXIT_OK

    for notice in activator.notice_board.drain():
        print(notice.text)
    return EXIT_UNMET


if __name__ == "__main__":
    sys.exit(main())
