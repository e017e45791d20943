"""
Shared configuration and constants.
"""

import dataclasses


A4_WIDTH_PT = 595.28
A4_HEIGHT_PT = 841.89
MARGIN_PT = 18.0
COLUMNS = 2
ROWS = 2
LABELS_PER_SHEET = COLUMNS * ROWS

WHITE_THRESHOLD = 235
DEFAULT_PADDING_PX = 24
RENDER_SCALE = 2.0
REGION_FRACTION = 0.75
PROGRESS_BAR_WIDTH = 20
OUTPUT_MESSAGE = "Generating output PDF..."

MODE_AUTO = "auto"
MODE_PORTRAIT = "portrait"
MODE_LANDSCAPE = "landscape"
MODES = (MODE_AUTO, MODE_PORTRAIT, MODE_LANDSCAPE)
# carrier names used on the original upload form
MODE_ALIASES = {
	"mpl": MODE_PORTRAIT,
	"gls": MODE_LANDSCAPE,
}


@dataclasses.dataclass(frozen=True)
class ConversionOptions:
	mode: str = MODE_AUTO
	render_scale: float = RENDER_SCALE
	region_fraction: float = REGION_FRACTION
	white_threshold: int = WHITE_THRESHOLD
	padding_px: int = DEFAULT_PADDING_PX


@dataclasses.dataclass(frozen=True)
class Region:
	x: int
	y: int
	width: int
	height: int


@dataclasses.dataclass(frozen=True)
class SlotRect:
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass(frozen=True)
class FitRect:
	width: float
	height: float
	offset_x: float
	offset_y: float


@dataclasses.dataclass
class Placement:
	label_index: int
	sheet_index: int
	slot_index: int
	x: float
	y: float
	width: float
	height: float
	image_width: int
	image_height: int


@dataclasses.dataclass(frozen=True)
class ProgressEvent:
	current: int
	total: int
	message: str


@dataclasses.dataclass
class ConversionResult:
	pdf_bytes: bytes
	sheets: int
	total_labels: int
	total_pages: int
	placements: list[Placement]


#============================================
def parse_mode(value: str) -> str:
	"""
	Normalize an orientation mode name.

	Args:
		value: Mode name or carrier alias.

	Returns:
		One of MODES.
	"""
	normalized = str(value).strip().lower()
	normalized = MODE_ALIASES.get(normalized, normalized)
	if normalized not in MODES:
		raise ValueError(f"Unknown orientation mode: {value!r}")
	return normalized


#============================================
def validate_options(options: ConversionOptions) -> ConversionOptions:
	"""
	Check option ranges and normalize the mode.

	Args:
		options: Options to check.

	Returns:
		Options with a canonical mode name.
	"""
	mode = parse_mode(options.mode)
	if options.render_scale <= 0.0:
		raise ValueError(f"render_scale must be positive, got {options.render_scale}")
	if not 0.0 < options.region_fraction <= 1.0:
		raise ValueError(f"region_fraction must be in (0, 1], got {options.region_fraction}")
	if not 0 <= options.white_threshold <= 255:
		raise ValueError(f"white_threshold must be in 0..255, got {options.white_threshold}")
	if options.padding_px < 0:
		raise ValueError(f"padding_px must not be negative, got {options.padding_px}")
	if mode == options.mode:
		return options
	return dataclasses.replace(options, mode=mode)
