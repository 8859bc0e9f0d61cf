"""
Command-line entry point for the interactive noisy-histogram session.

Usage:
    dphist data/data.csv --seed 0

Type one key per line: n (noise type), i (increase noise),
d (decrease noise), s (switch field), q (quit).
"""
# 说明：交互式加噪直方图会话的命令行入口。
# 职责：
# - build_parser：统一的命令行参数解析（数据集路径、种子、日志等级、噪声调度参数）
# - run_session：读取按键 → 分派动作 → 渲染快照的主循环，输入结束等同于 quit
# - main：加载配置与数据集；LoadError 视为致命错误，退出码为 1，不进入交互循环

from __future__ import annotations

import argparse
import dataclasses
import sys
from pathlib import Path
from typing import Callable, List, Optional

from dphist.cdp.mechanisms.noise import MechanismType
from dphist.cdp.sensitivity.noise_calibrator import PrivacyCalibrator
from dphist.core.data.dataset import LoadError
from dphist.core.data.loader import load_csv
from dphist.core.utils.config import RuntimeConfig, configure, get_config
from dphist.core.utils.logging import configure_logging, get_logger
from dphist.core.utils.param_validation import ParamValidationError
from dphist.core.utils.random import create_rng
from dphist.session.controller import NoiseController, Snapshot
from dphist.session.state import Action, initial_state
from dphist.ui.dispatcher import dispatch
from dphist.ui.renderer import TextRenderer, render_snapshot_png

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_LOAD_ERROR = 1


def build_parser() -> argparse.ArgumentParser:
    """Build the ArgumentParser; unset options fall back to the runtime config."""
    parser = argparse.ArgumentParser(
        prog="dphist",
        description="Inspect a categorical field as a histogram and watch DP noise distort it.",
    )
    parser.add_argument(
        "dataset",
        nargs="?",
        default=None,
        help="CSV file with 'educ' and 'income' columns (default: DPHIST_DATASET_PATH or data/data.csv)",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed for reproducible noise")
    parser.add_argument("--log-level", type=str, default=None, help="Logging level (default: WARNING)")
    parser.add_argument(
        "--mechanism",
        type=str,
        choices=[m.value for m in MechanismType],
        default=None,
        help="Initial noise mechanism (default: laplace)",
    )
    parser.add_argument("--base-epsilon", type=float, default=None, help="Epsilon at the lowest noise level")
    parser.add_argument("--epsilon-decay", type=float, default=None, help="Factor epsilon shrinks by per level")
    parser.add_argument("--max-level", type=int, default=None, help="Highest selectable noise level")
    parser.add_argument("--delta", type=float, default=None, help="Delta for the Gaussian mechanism")
    parser.add_argument("--png", type=str, default=None, help="Also render every snapshot to this PNG file")
    return parser


def apply_overrides(config: RuntimeConfig, args: argparse.Namespace) -> RuntimeConfig:
    # 仅覆盖命令行显式给出的选项，其余保持环境变量 / 默认值
    overrides = {
        "dataset_path": args.dataset,
        "rng_seed": args.seed,
        "log_level": args.log_level,
        "default_mechanism": args.mechanism,
        "base_epsilon": args.base_epsilon,
        "epsilon_decay": args.epsilon_decay,
        "max_level": args.max_level,
        "delta": args.delta,
    }
    config.update(**{key: value for key, value in overrides.items() if value is not None})
    return config.validate()


def run_session(
    controller: NoiseController,
    render: Callable[[Snapshot], None],
    read_key: Callable[[], str],
) -> int:
    """Render, read a key, apply its action; repeat until quit or end of input.

    Returns the number of actions applied (quit included).
    """
    render(controller.refresh())
    applied = 0
    while not controller.closed:
        try:
            key = read_key()
        except EOFError:
            key = "q"
        action = dispatch(key)
        if action is None:
            continue
        snapshot = controller.apply(action)
        applied += 1
        if action is Action.QUIT:
            break
        render(snapshot)
    return applied


def _prompt() -> str:
    return input("> ")


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)

    # 在全局配置的副本上叠加环境变量与命令行选项；只有脱敏开关写回单例
    config = dataclasses.replace(get_config())
    config.load_from_env()
    try:
        apply_overrides(config, args)
    except ParamValidationError as exc:
        parser.error(str(exc))

    try:
        calibrator = PrivacyCalibrator.from_config(config)
        mechanism = MechanismType.from_str(config.default_mechanism)
    except ParamValidationError as exc:
        parser.error(str(exc))

    # PrivacyFilter 只读取全局配置
    configure(mask_sensitive_fields=config.mask_sensitive_fields)
    configure_logging(config.log_level)

    try:
        dataset = load_csv(config.dataset_path)
    except LoadError as exc:
        logger.error("dataset load failed: %s", exc)
        print(f"dphist: {exc}", file=sys.stderr)
        return EXIT_LOAD_ERROR

    controller = NoiseController(
        dataset,
        calibrator,
        create_rng(config.rng_seed),
        initial_state=initial_state(calibrator, mechanism=mechanism),
    )
    renderer = TextRenderer(clear=sys.stdout.isatty())
    png_path = Path(args.png) if args.png else None

    def render(snapshot: Snapshot) -> None:
        renderer.render(snapshot)
        if png_path is not None:
            render_snapshot_png(snapshot, png_path)

    try:
        run_session(controller, render, _prompt)
    except KeyboardInterrupt:
        logger.debug("interrupted")
    return EXIT_OK


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
