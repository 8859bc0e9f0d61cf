"""
Noise session orchestrator.

Responsibilities:
    * own the session state, the dataset reference and the shared generator
    * apply transitions and recompute the noisy histogram after each one
    * emit immutable snapshots for the renderer
"""
# 说明：噪声会话编排器，持有会话状态、数据集引用与共享随机数生成器。
# 职责：
# - 通过 transition(...) 推进状态，除 quit 外每次转移都重新计算
# - 重新计算流程：HistogramBuilder → PrivacyCalibrator → 逐桶采样 → Snapshot
# - 真实直方图按字段缓存（数据集只读），字段切换时重建
# - quit 之后会话关闭，任何进一步操作都会抛出 SessionClosedError
# 约定：
# - Generator 在启动时创建一次，只能通过 reseed(...) 重置

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Mapping, Optional

import numpy as np

from dphist.cdp.analytics.histogram import HistogramBuilder
from dphist.cdp.mechanisms.noise import MechanismType, perturb
from dphist.cdp.sensitivity.noise_calibrator import PrivacyCalibrator
from dphist.core.data.dataset import Dataset, UnknownFieldError
from dphist.core.utils.logging import get_logger
from dphist.core.utils.random import create_rng, reseed_rng

from .state import Action, Field, NoiseState, transition
from .state import initial_state as default_state

DEFAULT_COLUMNS: Mapping[Field, str] = MappingProxyType(
    {
        Field.EDUCATION: "educ",
        Field.INCOME: "income",
    }
)

logger = get_logger(__name__)


class SessionError(RuntimeError):
    """Base exception for session errors."""


class SessionClosedError(SessionError):
    """Raised when the session is used after quit()."""


@dataclass(frozen=True)
class Snapshot:
    """Render payload of one recompute."""

    field: Field
    column: str
    mechanism: MechanismType
    noise_level: int
    epsilon: float
    delta: Optional[float]
    scale: float
    true_counts: Mapping[str, int]
    noisy_counts: Mapping[str, float]

    @property
    def labels(self) -> tuple:
        return tuple(self.true_counts)


class NoiseController:
    """
    Orchestrate the noisy-histogram session.

    - Configuration
      - dataset: Loaded, read-only dataset.
      - calibrator: PrivacyCalibrator supplying level bounds and scales.
      - rng: Shared generator (or seed) used for every sample.
      - initial_state: Optional starting state; defaults to the least noise.
      - columns: Field -> dataset column mapping.

    - Behavior
      - Every transition except quit recomputes and returns a Snapshot.
      - The same state recomputed from the same generator state reproduces
        the same noisy values.
    """

    def __init__(
        self,
        dataset: Dataset,
        calibrator: PrivacyCalibrator,
        rng: Optional[np.random.Generator | int] = None,
        *,
        initial_state: Optional[NoiseState] = None,
        columns: Optional[Mapping[Field, str]] = None,
        builder: Optional[HistogramBuilder] = None,
    ):
        self._dataset = dataset
        self._calibrator = calibrator
        self._rng = create_rng(rng)
        self._columns: Dict[Field, str] = {**DEFAULT_COLUMNS, **(columns or {})}
        missing = [column for column in self._columns.values() if not dataset.has_field(column)]
        if missing:
            raise UnknownFieldError(f"dataset has no column(s) {missing} for the session fields")
        self._builder = builder or HistogramBuilder()
        self._state = self._normalize(initial_state or default_state(calibrator))
        self._histogram_field: Optional[Field] = None
        self._histogram: Dict[str, int] = {}
        self._closed = False

    def _normalize(self, state: NoiseState) -> NoiseState:
        level = self._calibrator.clamp(state.noise_level)
        if level != state.noise_level:
            logger.debug("initial noise level %s clamped to %s", state.noise_level, level)
            state = NoiseState(field=state.field, mechanism=state.mechanism, noise_level=level)
        return state

    # State access --------------------------------------------------------------
    @property
    def state(self) -> NoiseState:
        self._require_open()
        return self._state

    @property
    def closed(self) -> bool:
        return self._closed

    def current_scale(self) -> float:
        self._require_open()
        return self._calibrator.scale_for(self._state.mechanism, self._state.noise_level)

    # Transitions ---------------------------------------------------------------
    def apply(self, action: Action) -> Optional[Snapshot]:
        """Apply `action`; returns the new snapshot, or None after quit."""
        self._require_open()
        if action is Action.QUIT:
            self.quit()
            return None
        previous = self._state
        self._state = transition(previous, action, self._calibrator)
        logger.debug("%s: %s -> %s", action.value, previous, self._state)
        return self.refresh()

    def switch_field(self) -> Snapshot:
        return self.apply(Action.SWITCH_FIELD)

    def switch_mechanism(self) -> Snapshot:
        return self.apply(Action.SWITCH_MECHANISM)

    def increase_noise(self) -> Snapshot:
        return self.apply(Action.INCREASE_NOISE)

    def decrease_noise(self) -> Snapshot:
        return self.apply(Action.DECREASE_NOISE)

    def quit(self) -> None:
        self._require_open()
        self._closed = True
        logger.debug("session closed")

    # Recompute -----------------------------------------------------------------
    def refresh(self) -> Snapshot:
        """Recompute the noisy histogram for the current state."""
        self._require_open()
        state = self._state
        true_counts = self._true_histogram(state.field)
        epsilon = self._calibrator.epsilon_for(state.noise_level)
        scale = self._calibrator.scale_for(state.mechanism, state.noise_level)
        noisy_counts = perturb(state.mechanism, true_counts, scale, self._rng)
        logger.debug(
            "recomputed %d buckets: mechanism=%s level=%d epsilon=%.6g scale=%.6g",
            len(noisy_counts),
            state.mechanism.value,
            state.noise_level,
            epsilon,
            scale,
            extra={"true_counts": dict(true_counts)},
        )
        return Snapshot(
            field=state.field,
            column=self._columns[state.field],
            mechanism=state.mechanism,
            noise_level=state.noise_level,
            epsilon=epsilon,
            delta=self._calibrator.delta if state.mechanism is MechanismType.GAUSSIAN else None,
            scale=scale,
            true_counts=MappingProxyType(dict(true_counts)),
            noisy_counts=MappingProxyType(noisy_counts),
        )

    def reseed(self, seed: Optional[int]) -> None:
        """Reset the shared generator in place; the only supported reset."""
        self._require_open()
        reseed_rng(self._rng, seed)

    def _true_histogram(self, field: Field) -> Dict[str, int]:
        if self._histogram_field is not field:
            self._histogram = self._builder.build(self._dataset, self._columns[field])
            self._histogram_field = field
        return self._histogram

    def _require_open(self) -> None:
        if self._closed:
            raise SessionClosedError("session has been closed; no further state access")