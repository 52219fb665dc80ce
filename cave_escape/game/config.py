# cave_escape/game/config.py
# --- Display ---
WIDTH = 800
HEIGHT = 600
FPS = 60
SIM_DT = 1.0 / 120.0        # fixed simulation step (sec)
MAX_FRAME_DT = 0.25         # clamp long stalls before splitting into ticks

# --- Rocket ---
ROCKET_X = 160              # rocket's fixed x (world scrolls left)
ROCKET_W = 30
ROCKET_H = 16
GRAVITY = 1080.0            # px/s^2, pulls down
THRUST = 1800.0             # px/s^2, pushes up while held
MAX_VY = 480.0              # clamp vertical velocity

# --- Cave generation ---
SEGMENT_W = 20              # horizontal spacing between boundary points
TOP_MARGIN = 40             # keep multiples of BLOCK_STEP
BOTTOM_MARGIN = 40
BLOCK_STEP = 10             # vertical quantization ("blockiness")
SAFE_DIST_PX = 600          # flat, centred corridor at the start of a stage

WAVE_AMP_1 = 60.0
WAVE_AMP_2 = 30.0
WAVE_FREQ_RATIO = 1.37      # second wave frequency relative to the first
WAVE_PHASE_SCALE = 1.7      # decorrelates the second wave's phase

SPIKE_CELL_W = 120          # travel width of one spike cell
SPIKE_MAX_H = 60            # multiple of BLOCK_STEP
SPIKE_BEVEL_SCALE = 0.5

# --- Stages ---
TARGET_DISTANCE_PX = 2000.0
PX_PER_KM = 100.0

# --- Colors (RGB) ---
COLOR_BG = (10, 10, 10)
COLOR_FG = (220, 232, 255)
COLOR_ACCENT = (78, 205, 196)
COLOR_DANGER = (255, 107, 107)
COLOR_EDGE = (26, 26, 26)
COLOR_PANEL = (10, 20, 35, 170)
