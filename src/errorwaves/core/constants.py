"""Tunings and defaults shared by the error-rate sketches."""

# Variant names
VARIANT_RECTANGLES = "rectangles"
VARIANT_GRID = "grid"
VARIANT_STRIPS = "strips"
DEFAULT_VARIANT = VARIANT_GRID

# Normalisation ceilings (error rate that maps to n = 1.0)
RECT_CEILING = 0.16
GRID_CEILING = 0.17
STRIPS_CEILING = 0.273

# Fallbacks used when the reading is absent or not loaded yet
RECT_FALLBACK_ERROR = 0.16
GRID_FALLBACK_ERROR = 0.17
STRIPS_FALLBACK_ROLLING = 0.273
STRIPS_FALLBACK_DAILY = 0.233

# Rectangles: base + rate * ((R - e) / R)
RECT_BASE_DISTORTION = 0.7
RECT_BASE_MAX_AMPLITUDE = 300.0
RECT_BASE_WIDTH = 10.0
RECT_BASE_HEIGHT = 120.0
RECT_DISTORTION_RATE = 0.15
RECT_AMPLITUDE_RATE = 250.0
RECT_WIDTH_RATE = 50.0
RECT_HEIGHT_RATE = 300.0

# Rectangles: per-column 1D wave
RECT_FREQ_NOISE_SCALE = 0.002
RECT_AMP_NOISE_SCALE = 0.003
RECT_AMP_NOISE_OFFSET = 1000.0
RECT_BASE_FREQUENCY = 0.005
RECT_FREQUENCY_RANGE = 0.02
RECT_MIN_AMPLITUDE = 20.0

# Grid: base + rate * (e / R)
GRID_BASE_AMPLITUDE = 20.0
GRID_AMPLITUDE_RATE = 80.0
GRID_BASE_FREQUENCY = 0.02
GRID_FREQUENCY_RATE = 0.05
GRID_CHAOS_RATE = 1.5

# Strips: amplitude/frequency from the 30 day rate, chaos from the daily rate
STRIPS_BASE_AMPLITUDE = 12.0
STRIPS_AMPLITUDE_RATE = 48.0
STRIPS_BASE_FREQUENCY = 0.015
STRIPS_FREQUENCY_RATE = 0.035
STRIPS_CHAOS_RATE = 1.5

# Wave field
PHASE_K = 0.003
NOISE_POSITION_SCALE = 0.01
NOISE_TIME_SCALE = 0.5
NOISE_AXIS_OFFSET = 100.0

# Layout / animation defaults
GRID_SPACING = 75
GRID_BUFFER = 6
GRID_ORIGIN_CELLS = 3
TIME_SPEED = 0.01
WAVE_SPEED = 0.2
RECT_SPACING = 8
MIN_RECT_PITCH = 1.0
STRIP_SAMPLE_STEP = 15
STRIP_LINE_SPACING = 25

# Window
DEFAULT_WIDTH = 1280
DEFAULT_HEIGHT = 720
DEFAULT_FPS = 60
WINDOW_TITLE = "Sales Forecasting Error"

# Noise
NOISE_TYPE = "perlin"
NOISE_SEED = 0

# Colours
WHITE = (255, 255, 255)
BLACK = (0, 0, 0)
STRIP_GRAY = (0xE8, 0xE8, 0xE8)
LINE_BLUE = (0x20, 0x8A, 0xAE)
LINE_DARK = (0x1B, 0x2F, 0x33)
BAND_RGBA = (255, 100, 100, 60)
LABEL_RGBA = (180, 0, 0, 200)
BAND_LABEL_RGBA = (180, 0, 0, 180)
LABEL_BOX_RGBA = (255, 255, 255, 238)
LABEL_BORDER_RGBA = (0, 0, 0, 40)
LINE_WIDTH = 2

# Label
LABEL_TEXT_SIZE = 32
LABEL_PAD = 20
LABEL_INNER_PAD = 16
LABEL_BOX_HEIGHT = 50
LABEL_BOX_RADIUS = 8

DEFAULT_INPUT = "error_rate.json"
ENCODING = "utf-8"
