from __future__ import annotations

import json
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from strokekit.offset.options import (
    DEFAULT_EPSILON,
    DEFAULT_MAX_DEPTH,
    DEFAULT_MITER_LIMIT,
    ExpandOpts,
    LineCap,
    LineJoin,
    OffsetOpts,
)

CONFIG_DIR = Path.home() / ".strokekit"
CONFIG_FILE = CONFIG_DIR / "strokekit.cfg"
DEFAULT_CONFIG = {
    "_comment": "Joins: miter, round, bevel. Caps: butt, round, square. Values are case-insensitive.",
    "epsilon": DEFAULT_EPSILON,
    "join": LineJoin.MITER.value,
    "cap": LineCap.BUTT.value,
    "miter_limit": DEFAULT_MITER_LIMIT,
    "max_depth": DEFAULT_MAX_DEPTH,
}
_JOIN_ALIASES = {
    "miter": LineJoin.MITER,
    "mitre": LineJoin.MITER,
    "sharp": LineJoin.MITER,
    "round": LineJoin.ROUND,
    "rounded": LineJoin.ROUND,
    "bevel": LineJoin.BEVEL,
    "clip": LineJoin.BEVEL,
}
_CAP_ALIASES = {
    "butt": LineCap.BUTT,
    "flat": LineCap.BUTT,
    "round": LineCap.ROUND,
    "square": LineCap.SQUARE,
    "projecting": LineCap.SQUARE,
}


@dataclass(frozen=True)
class StrokeSettings:
    """Resolved stroke defaults from strokekit.cfg."""

    epsilon: float
    join: LineJoin
    cap: LineCap
    miter_limit: float
    max_depth: int

    def offset_opts(self, join: LineJoin | None = None, epsilon: float | None = None) -> OffsetOpts:
        return OffsetOpts(
            join=join if join is not None else self.join,
            epsilon=epsilon if epsilon is not None else self.epsilon,
            miter_limit=self.miter_limit,
            max_depth=self.max_depth,
        )

    def expand_opts(
        self,
        join: LineJoin | None = None,
        cap: LineCap | None = None,
        epsilon: float | None = None,
    ) -> ExpandOpts:
        return ExpandOpts(
            join=join if join is not None else self.join,
            cap=cap if cap is not None else self.cap,
            epsilon=epsilon if epsilon is not None else self.epsilon,
            miter_limit=self.miter_limit,
            max_depth=self.max_depth,
        )


def ensure_user_config() -> None:
    """Ensure ~/.strokekit/strokekit.cfg exists with sane defaults."""

    try:
        CONFIG_DIR.mkdir(parents=True, exist_ok=True)
    except OSError:
        return

    if CONFIG_FILE.exists():
        return

    try:
        CONFIG_FILE.write_text(json.dumps(DEFAULT_CONFIG, indent=2) + "\n")
    except OSError:
        return


def _load_user_config() -> Dict[str, Any]:
    ensure_user_config()
    try:
        loaded = json.loads(CONFIG_FILE.read_text())
    except (OSError, json.JSONDecodeError):
        return DEFAULT_CONFIG.copy()
    if not isinstance(loaded, dict):
        return DEFAULT_CONFIG.copy()
    return loaded


def normalize_join(value: str) -> LineJoin | None:
    return _JOIN_ALIASES.get(value.strip().lower())


def normalize_cap(value: str) -> LineCap | None:
    return _CAP_ALIASES.get(value.strip().lower())


def _float_option(value: Any, fallback: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError):
        return fallback
    if not math.isfinite(number):
        return fallback
    return number


def get_stroke_settings() -> StrokeSettings:
    """Return the configured stroke defaults, falling back per key on bad values."""

    raw_config = _load_user_config()
    join = normalize_join(str(raw_config.get("join", DEFAULT_CONFIG["join"])))
    cap = normalize_cap(str(raw_config.get("cap", DEFAULT_CONFIG["cap"])))

    epsilon = _float_option(raw_config.get("epsilon"), DEFAULT_EPSILON)
    if epsilon <= 0:
        epsilon = DEFAULT_EPSILON
    miter_limit = _float_option(raw_config.get("miter_limit"), DEFAULT_MITER_LIMIT)
    if miter_limit < 1.0:
        miter_limit = DEFAULT_MITER_LIMIT

    try:
        max_depth = int(raw_config.get("max_depth", DEFAULT_MAX_DEPTH))
    except (TypeError, ValueError):
        max_depth = DEFAULT_MAX_DEPTH
    if max_depth < 0:
        max_depth = DEFAULT_MAX_DEPTH

    return StrokeSettings(
        epsilon=epsilon,
        join=join or LineJoin.MITER,
        cap=cap or LineCap.BUTT,
        miter_limit=miter_limit,
        max_depth=max_depth,
    )
