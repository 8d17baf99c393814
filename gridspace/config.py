"""
Gridspace Configuration

Loads configuration from environment variables with sensible defaults.
"""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load .env file if it exists
load_dotenv()


class Config:
    """Package configuration loaded from environment variables."""

    # Persistence
    DATABASE_URL: str = os.getenv("DATABASE_URL", "postgresql://localhost/gridspace")
    # Collection (table partition / JSON file stem) used when none is given explicitly
    GRID_COLLECTION: str = os.getenv("GRID_COLLECTION", "grid")
    JSON_STORE_DIR: str = os.getenv("GRIDSPACE_JSON_STORE", "grid_store")

    # Search
    # Print wave/frontier traces for every route request
    VERBOSE: bool = os.getenv("GRIDSPACE_VERBOSE", "").lower() in ("1", "true", "yes")
    # Lee backtrace gives up after LEE_STEP_FACTOR * labelled cells steps
    LEE_STEP_FACTOR: int = int(os.getenv("GRIDSPACE_LEE_STEP_FACTOR", "4"))

    # Project Paths
    PROJECT_ROOT: Path = Path(__file__).parent.parent
    SCENARIOS_DIR: Path = Path(
        os.getenv("GRIDSPACE_SCENARIOS_DIR", str(PROJECT_ROOT / "examples" / "scenarios"))
    )

    @classmethod
    def validate(cls) -> None:
        """Validate configuration and raise errors if values are unusable."""
        if cls.LEE_STEP_FACTOR < 1:
            raise ValueError(
                "GRIDSPACE_LEE_STEP_FACTOR must be a positive integer "
                f"(got {cls.LEE_STEP_FACTOR})"
            )

        if not cls.GRID_COLLECTION:
            raise ValueError("GRID_COLLECTION must not be empty")

    @classmethod
    def display(cls) -> str:
        """Return a formatted string showing current configuration."""
        lines = [
            "Gridspace Configuration:",
            f"  Database: {cls.DATABASE_URL}",
            f"  Collection: {cls.GRID_COLLECTION}",
            f"  JSON store: {cls.JSON_STORE_DIR}",
            f"  Scenarios: {cls.SCENARIOS_DIR}",
            f"  Verbose search: {cls.VERBOSE}",
            f"  Lee step factor: {cls.LEE_STEP_FACTOR}",
        ]
        return "\n".join(lines)
