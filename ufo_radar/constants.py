"""
Hard-coded colours, layout fractions & paths so every module can import
them without circular dependencies.  Nothing here touches the display.
"""
from pathlib import Path

# -------- colours --------
GREEN, DIM, BLACK, GREY = (0, 255, 0), (0, 90, 0), (0, 0, 0), (180, 180, 180)
RING  = (0, 255, 150, 100)          # radar face outline
BEAM  = (0, 255, 0, 180)            # sweep line
DOT   = (0, 255, 100)               # sighting marker, alpha = fade
PANEL = (255, 255, 255, 240)        # hover detail box

# -------- sweep / fade --------
FADE_MAX = 255
DOT_SIZE = 6

# -------- hover panel --------
PANEL_W, PANEL_PAD, PANEL_LINE_H = 220, 10, 16

# -------- layout --------
BOTTOM_PAD = 60                     # HUD strip under the radar
TITLE = "UFO Sightings Map"

# -------- dirs --------
ROOT         = Path(__file__).resolve().parent.parent
CFG_PATH     = ROOT / "radar_config.json"
DATASET_PATH = ROOT / "ufo_sightings_scrubbed.csv"
