"""
Snapshot renderers: terminal bar charts and PNG comparison plots.

Responsibilities
  - Draw the key menu, the noise parameters and the sensitive vs noised
    histograms as text bar charts.
  - Render a side-by-side raw vs noisy bar chart to PNG with matplotlib.

Limitations
  - Renderers only consume snapshots; they never feed back into the session.
  - PNG rendering uses the non-interactive Agg backend.
"""
# 说明：快照渲染器，提供终端文本柱状图与 PNG 对比图两种输出。
# 职责：
# - TextRenderer：绘制按键菜单、噪声参数，以及真实计数 / 加噪计数两组水平柱状图
# - render_snapshot_png：使用 matplotlib 绘制并排柱状图并保存为 PNG
# - 展示顺序：标签全为数值时按数值排序，否则按字典序；不影响加噪顺序

from __future__ import annotations

import sys
from pathlib import Path
from typing import List, Mapping, Optional, Sequence, TextIO, Tuple, Union

from dphist.core.utils.param_validation import ParamValidationError, ensure
from dphist.session.controller import Snapshot

MENU_TITLES: Tuple[str, ...] = ("Noise Type", "Increase Noise", "Decrease Noise", "Switch Field", "Quit")


def display_order(labels: Sequence[str]) -> List[str]:
    """Order labels for display: numerically when every label is a number."""
    try:
        return sorted(labels, key=float)
    except ValueError:
        return sorted(labels)


def format_menu(titles: Sequence[str] = MENU_TITLES) -> str:
    # 每个菜单项的首字母即为对应按键
    return " | ".join(f"[{title[0]}]{title[1:]}" for title in titles)


def format_params(snapshot: Snapshot) -> str:
    parts = [
        f"Type: {snapshot.mechanism.label}",
        f"Noise: {snapshot.noise_level}",
        f"Field: {snapshot.column}",
        f"epsilon={snapshot.epsilon:.4g}",
    ]
    if snapshot.delta is not None:
        parts.append(f"delta={snapshot.delta:g}")
    parts.append(f"scale={snapshot.scale:.4g}")
    return "  ".join(parts)


class TextRenderer:
    """Write snapshots to a text stream as two horizontal bar charts."""

    def __init__(self, stream: Optional[TextIO] = None, *, width: int = 40, clear: bool = False):
        ensure(width > 0, "width must be positive")
        self.stream = stream or sys.stdout
        self.width = width
        self.clear = clear

    def render(self, snapshot: Snapshot) -> None:
        labels = display_order(list(snapshot.true_counts))
        peak = max(
            [abs(float(v)) for v in snapshot.true_counts.values()]
            + [abs(float(v)) for v in snapshot.noisy_counts.values()]
            + [1.0]
        )
        lines: List[str] = []
        if self.clear:
            lines.append("\x1b[2J\x1b[H")
        lines.append(format_menu())
        lines.append(format_params(snapshot))
        lines.append("")
        lines.append("Sensitive Values")
        lines.extend(self._bars(labels, snapshot.true_counts, peak))
        lines.append("")
        lines.append("Noised Values")
        lines.extend(self._bars(labels, snapshot.noisy_counts, peak))
        self.stream.write("\n".join(lines) + "\n")
        self.stream.flush()

    def _bars(self, labels: Sequence[str], values: Mapping[str, float], peak: float) -> List[str]:
        label_width = max([len(label) for label in labels] + [1])
        rows = []
        for label in labels:
            value = float(values[label])
            # 负值的加噪计数不画柱，只显示数值
            length = int(round(max(value, 0.0) / peak * self.width))
            rows.append(f"{label:>{label_width}} |{'#' * length:<{self.width}} {value:.2f}")
        return rows


def _load_pyplot():
    """Load matplotlib pyplot with a non-interactive backend when needed."""
    import matplotlib

    if "matplotlib.pyplot" not in sys.modules:
        matplotlib.use("Agg")
    import matplotlib.pyplot as plt

    return plt


def render_snapshot_png(
    snapshot: Snapshot,
    path: Union[str, Path],
    *,
    colors: Tuple[str, str] = ("#4C78A8", "#F58518"),
    dpi: int = 150,
    figsize: Tuple[float, float] = (10.0, 4.0),
    rotation: int = 45,
    fontsize: int = 7,
) -> Path:
    """Render true vs noisy counts of `snapshot` side by side and save to PNG."""
    labels = display_order(list(snapshot.true_counts))
    if not labels:
        raise ParamValidationError("snapshot has no buckets to render")
    raw = [float(snapshot.true_counts[label]) for label in labels]
    noisy = [float(snapshot.noisy_counts[label]) for label in labels]

    x = list(range(len(labels)))
    width = 0.4
    plt = _load_pyplot()
    fig, ax = plt.subplots(figsize=figsize)
    ax.bar([pos - width / 2 for pos in x], raw, width=width, color=colors[0], label="Sensitive")
    ax.bar([pos + width / 2 for pos in x], noisy, width=width, color=colors[1], label="Noised")
    ax.axhline(0.0, color="black", linewidth=0.5)
    ax.set_xticks(x)
    ax.set_xticklabels(labels, rotation=rotation, ha="right", fontsize=fontsize)
    ax.tick_params(axis="y", labelsize=fontsize)
    ax.set_title(f"{snapshot.column}: {format_params(snapshot)}", fontsize=fontsize + 1)
    ax.set_ylabel("count")
    ax.legend()
    fig.tight_layout()
    out_path = Path(path)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(out_path, dpi=dpi)
    plt.close(fig)
    return out_path
