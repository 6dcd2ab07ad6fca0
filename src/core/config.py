"""
Settings used across layers.

Everything here is a plain module constant. The few values that point at external resources
can be overridden through environment variables (and again by the command line options).
"""

import os

DEFAULT_BOARD_SIZE = 10
# The TrebleCross variant is always played on a single row
DEFAULT_BOARD_ROWS = 1

DEFAULT_PLAYER_IDS = ("player_1", "player_2")
# Seat 1 is restored as a bot whenever it carries this id (or no id at all)
BOT_ID = "bot_0"

SAVE_FILE = os.environ.get("TREBLECROSS_SAVE_FILE", "data.json")

DATABASE_URL = os.environ.get("TREBLECROSS_DATABASE_URL", "sqlite:///treblecross.db")
# The SQL repository overwrites a single record, like the file repository does
DEFAULT_SLOT = "s1"
