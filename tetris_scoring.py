"""Line-clear scoring, level policy and gravity curve"""
from tetris_config import CONFIG

# NES-like line clear points, multiplied by (level + 1)
LINE_SCORES = {0: 0, 1: 40, 2: 100, 3: 300, 4: 1200}


def score_for_lines(lines: int, level: int) -> int:
    if lines not in LINE_SCORES:
        raise ValueError(f"cannot clear {lines} lines at once")
    return LINE_SCORES[lines] * (level + 1)


def level_for_lines(total_lines: int) -> int:
    return 1 + total_lines // max(1, int(CONFIG["LINES_PER_LEVEL"]))


def fall_interval_ms(level: int) -> float:
    """Milliseconds between gravity steps; shrinks linearly down to a floor."""
    base, step, floor = CONFIG["BASE_FALL_MS"], CONFIG["FALL_STEP_MS"], CONFIG["MIN_FALL_MS"]
    return float(max(floor, base - (max(level, 1) - 1) * step))
