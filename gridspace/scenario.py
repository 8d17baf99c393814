"""
Scenario loading for JSON-defined grid settings.

A scenario file describes the builder input declaratively so maps can be
authored without writing Python:

```json
{
  "name": "Two corridors",
  "size": {"width": 12, "height": 8},
  "offset": {"i": 0, "j": 0},
  "entrances": [{"i": 0, "j": 0}],
  "exits": [{"i": 11, "j": 7}],
  "items": [{"i": 3, "j": 3, "item": "apple"}],
  "obstacles": [{"i": 5, "j": 1, "obstacle": "crate"}],
  "walls": [{"i": 4, "j": 0}, {"i": 4, "j": 1}],
  "costs": [{"i": 6, "j": 6, "cost": 5}]
}
```

Cost functions cannot be expressed in JSON; instead ``costs`` lists explicit
per-cell costs which become the settings' cost function (unlisted cells keep
their default cost). Walls still win over listed costs.

Usage:
    loader = ScenarioLoader()
    settings = loader.load("corridors")
    grid = build(settings)
"""

import json
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional

from .config import Config
from .environment.builder import build
from .environment.grid import Coord, GridStore
from .environment.schemas import SpatialSettings, identity_cost


class ScenarioLoader:
    """Load and validate grid scenarios from JSON files.

    Directory structure:
    - Default: ``Config.SCENARIOS_DIR`` ({PROJECT_ROOT}/examples/scenarios)
    - Override via constructor: ScenarioLoader(Path("/custom/scenarios"))
    - Scenario files: {scenario_name}.json

    Validation:
    - ``size`` is required (raises ValueError when missing)
    - Everything else is validated by the ``SpatialSettings`` schema
    """

    def __init__(self, scenarios_dir: Optional[Path] = None):
        self.scenarios_dir = Path(scenarios_dir) if scenarios_dir else Config.SCENARIOS_DIR

    def load(self, scenario_name: str) -> SpatialSettings:
        """Load a scenario by name (without the ``.json`` extension)."""
        path = self.scenarios_dir / f"{scenario_name}.json"
        if not path.exists():
            raise FileNotFoundError(f"Scenario not found: {path}")

        with open(path, "r", encoding="utf-8") as handle:
            data = json.load(handle)

        return self.parse(data)

    def load_grid(self, scenario_name: str) -> GridStore:
        """Load a scenario and build its grid."""
        return build(self.load(scenario_name))

    def parse(self, data: Dict[str, Any]) -> SpatialSettings:
        """Convert a scenario dict into ``SpatialSettings``."""
        self._validate(data)

        payload = {
            key: data[key]
            for key in ("offset", "size", "entrances", "exits", "items", "obstacles", "walls")
            if key in data
        }
        settings = SpatialSettings.model_validate(payload)
        if data.get("costs"):
            settings.cost_function = _cost_table(data["costs"])
        return settings

    def list_scenarios(self) -> List[str]:
        if not self.scenarios_dir.exists():
            return []
        return sorted(path.stem for path in self.scenarios_dir.glob("*.json"))

    def _validate(self, data: Dict[str, Any]) -> None:
        if not isinstance(data, dict):
            raise ValueError("Scenario must be a JSON object")
        if "size" not in data:
            raise ValueError("Scenario missing required field: size")
        for entry in data.get("costs", []):
            missing = {"i", "j", "cost"} - set(entry)
            if missing:
                raise ValueError(f"Cost entry {entry} missing fields: {sorted(missing)}")


def _cost_table(entries: List[Dict[str, Any]]) -> Callable[[Any, Coord], Any]:
    table = {Coord(int(entry["i"]), int(entry["j"])): entry["cost"] for entry in entries}

    def cost_function(value: Any, coord: Coord) -> Any:
        if coord in table:
            return table[coord]
        return identity_cost(value, coord)

    return cost_function


def load_scenario(scenario_name: str, scenarios_dir: Optional[Path] = None) -> SpatialSettings:
    """Convenience wrapper around ``ScenarioLoader().load``."""
    return ScenarioLoader(scenarios_dir).load(scenario_name)
