"""Domain constants for the Ligue 1 stats site."""

# Simultaneous fixtures in one round of a 20-team league.
MATCHDAY_SIZE = 9

POINTS_PER_WIN = 3
POINTS_PER_DRAW = 1

# Display label for a team id that does not resolve in its season file.
UNKNOWN_TEAM_NAME = "Equipe inconnue"

# Result codes from a team's perspective (Victoire / Nul / Defaite).
RESULT_WIN = "V"
RESULT_DRAW = "N"
RESULT_LOSS = "D"
RESULT_CODES = (RESULT_WIN, RESULT_DRAW, RESULT_LOSS)

# Over/Under total-goals lines reported on team pages.
GOAL_LINES = (0.5, 1.5, 2.5, 3.5)

# Stakes below this are raised to it.
MIN_STAKE = 1.0
STAKE_PRESETS = (5, 10, 20, 50)

# Simulation chart viewport (SVG units).
CHART_WIDTH = 760
CHART_HEIGHT = 240

# Relative location of season files under the data root.
SEASONS_SUBDIR = ("france", "ligue1", "seasons")
SEASON_INDEX_FILE = "db.json"
