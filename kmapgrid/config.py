"""
Constants shared by the K-map engine, the solver and the Streamlit page.

Exports:
    VARIABLE_NAMES (str): Ordered variable alphabet, row axis first.
    MIN_INPUTS / MAX_INPUTS (int): Supported variable count range.
    HIGHLIGHT_PALETTE (tuple): Group highlight colors, reused cyclically.
"""
import logging
import os
from typing import Dict, Optional, Tuple

VARIABLE_NAMES: str = "ABCDEF"
MIN_INPUTS: int = 2
MAX_INPUTS: int = len(VARIABLE_NAMES)

# emerald, sky, violet, amber, rose
HIGHLIGHT_PALETTE: Tuple[str, ...] = (
    "#34d399", "#38bdf8", "#a78bfa", "#fbbf24", "#fb7185",
)

VALUE_GLYPHS: Dict[str, str] = {"on": "1", "off": "0", "dontCare": "X"}
VALUE_COLORS: Dict[str, str] = {"on": "#1f3c88", "off": "#9aa7b7", "dontCare": "#ff8c32"}

DEFAULT_NUM_INPUTS: int = 4
DEFAULT_MINTERMS: str = "0,2,5,7,8,10,13,15"
DEFAULT_DONT_CARES: str = ""

FIGURE_SIZES: Dict[int, Tuple[float, float]] = {
    2: (3.2, 3.2),
    3: (5.2, 3.4),
    4: (5.2, 5.2),
    5: (8.4, 5.2),
    6: (8.4, 8.4),
}


def log_level_from_env(default: int = logging.INFO) -> int:
    """Read KMAPGRID_LOG_LEVEL (name or number), falling back to default."""
    raw = os.environ.get("KMAPGRID_LOG_LEVEL", "").strip()
    if not raw:
        return default
    if raw.isdigit():
        return int(raw)
    level = logging.getLevelName(raw.upper())
    return level if isinstance(level, int) else default


LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT: str = "%H:%M:%S"


def log_file_from_env() -> Optional[str]:
    """Path from KMAPGRID_LOG_FILE, or None to log to stdout only."""
    path = os.environ.get("KMAPGRID_LOG_FILE", "").strip()
    return path or None
