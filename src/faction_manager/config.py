from pathlib import Path

# Base project directory
PROJECT_ROOT = Path(__file__).parent.parent.parent

# Settings file (JSON), optional
SETTINGS_FILE = PROJECT_ROOT / "data" / "faction_settings.json"

# Below this many workers the faction only grows
GROWTH_THRESHOLD = 12

# Territory engagement is enabled when clash win chance is strictly above this
TERRITORY_ENGAGEMENT_THRESHOLD = 0.65

# Delay between two ticks of the control loop
TICK_INTERVAL_MS = 20

# Task every worker performs while the faction contests territory
TERRITORY_WARFARE_TASK = "Territory Warfare"

# Recruits are named "<prefix>-<n>"
RECRUIT_NAME_PREFIX = "Recruit"
