"""Fixed settings for tile acquisition and fire-spread dynamics."""

# ============================================================================
# TILE SOURCE
# ============================================================================

TILE_SERVER_URL: str = "https://tile.openstreetmap.org"
TILE_URL_TEMPLATE: str = "{server}/{z}/{x}/{y}.png"
TILE_ZOOM: int = 16                                 # zoom used for classification
TILE_SAMPLE_RADIUS: int = 3                         # 7x7 sampling window
REQUEST_TIMEOUT: int = 30                           # seconds
MAX_FETCH_WORKERS: int = 8
USER_AGENT: str = "wildfire-sim/0.1"                 # sent with every tile request

# ============================================================================
# GEOGRAPHY
# ============================================================================

KM_PER_DEGREE: float = 111.0
EARTH_RADIUS_KM: float = 6371.0

# ============================================================================
# FIRE DYNAMICS
# ============================================================================

BASE_SPREAD_RATE: float = 0.1                       # max ignition chance per neighbour per tick
INTENSITY_DECAY: float = 0.05                       # intensity lost per burning tick
BURNOUT_INTENSITY: float = 0.1                      # burning cells at or below this burn out
BURNOUT_BASE_TICKS: int = 10
BURNOUT_FLAMMABILITY_TICKS: int = 20
MIN_SPREAD_INTENSITY: float = 0.5                   # range of a new fire's intensity
MAX_SPREAD_INTENSITY: float = 1.0
MANUAL_IGNITION_INTENSITY: float = 1.0
