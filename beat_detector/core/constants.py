"""Global constants for Beat Detector."""

# Audio framing defaults
DEFAULT_FRAME_SIZE = 1024
S16_SCALE = 32768.0
S32_SCALE = 2147483648.0

# Detection defaults
DEFAULT_SENSITIVITY = 0.5
DEFAULT_MIN_BPM = 60.0
DEFAULT_MAX_BPM = 200.0
DEFAULT_MIN_BEAT_INTERVAL = 0.3  # seconds

# Method selection
ONSET_MIN_SAMPLE_RATE = 44100

# Feature extraction
SPECTRAL_BANDS = 32
ONSET_HIGHPASS_HZ = 200.0
ONSET_THRESHOLD_SCALE = 0.3
ONSET_CONFIDENCE = 0.8

# Adaptive threshold multipliers (threshold = mean + k * sensitivity * std)
ENERGY_THRESHOLD_K = 2.0
SPECTRAL_THRESHOLD_K = 1.5

# Tempo estimation
OUTLIER_TOLERANCE = 0.3  # fraction of the median interval
BEAT_COUNT_SATURATION = 20
STABILITY_WEIGHT = 0.7
BEAT_COUNT_WEIGHT = 0.3
STRENGTH_TO_CONFIDENCE = 3.0

EPSILON = 1e-10
