# cardwizard/config.py

MODEL_UNIT = "mm"

# Physical page sizes in MODEL_UNIT, portrait orientation
PAPER_PROFILES = {
    "letter": (215.9, 279.4),
    "a4":     (210.0, 297.0),
}
DEFAULT_PAPER = "letter"

# Layout solver search constants
IDEAL_MARGIN = 10.0
MIN_MARGIN = 5.0
IDEAL_SPACING = 2.0
MIN_SPACING = 0.0
TARGET_CARDS_PER_PAGE = 9  # 3x3 poker-size reference grid

DEFAULT_FRONT_STYLE = "default-front"
DEFAULT_BACK_STYLE = "default-back"

FALLBACK_BORDER_GRAY = 200  # light gray placeholder stroke
CUT_GUIDE_GRAY = 150        # slightly darker, dashed
FALLBACK_BORDER_WIDTH_PT = 1.0
CUT_GUIDE_WIDTH_PT = 0.5

PNG_DATA_URL_PREFIX = "data:image/png;base64,"

DEFAULT_PRINT_DPI = 300
