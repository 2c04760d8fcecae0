"""Per-generation metrics dict and tile tallies."""

from typing import Any, Dict

from .grid import GridBuffer
from .tiles import TILE_TYPES, code_to_type


def init_metrics() -> Dict[str, Any]:
    return {
        'seed': 0,
        'attempts': 0,
        'regions_found': 0,
        'regions_pruned': 0,
        'floor_cells_pruned': 0,
        'bedrock_cells': 0,
        'wall_seeds': 0,
        'walls_after_automaton': 0,
        'walls_removed_keep_away': 0,
        'cosmetic_fills': 0,
        'treasures_placed': 0,
        'enemies_placed': 0,
        'goal_reachable': False,
        'goal_reachable_digging': False,
        'runtime_ms': 0.0,
        'phase_ms': {},
    }


def tile_counts(grid: GridBuffer) -> Dict[str, int]:
    out = {f"tiles_{name}": 0 for name in TILE_TYPES}
    for code, n in grid.counts().items():
        key = f"tiles_{code_to_type(code)}"
        out[key] = out.get(key, 0) + n
    return out
