from typing import Dict


def init_metrics() -> Dict[str, int | float | bool]:
    return {
        'cells': 0,
        'accessible_cells': 0,
        'inaccessible_cells': 0,
        'walls_cleared_initial': 0,
        'components_initial': 0,
        'repair_passes': 0,
        'walls_cleared_repair': 0,
        'stall_carves': 0,
        'edges': 0,
        'goal_draws': 0,
        'runtime_ms': 0.0,
    }
