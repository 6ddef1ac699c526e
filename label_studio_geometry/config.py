"""
Shared configuration, constants and settings records.
"""

# Standard Library
import dataclasses
import json
import pathlib


MM_PER_INCH = 25.4
POINTS_PER_INCH = 72.0
SCREEN_DPI = 96.0
PRINT_DPI = 300.0

ZOOM_LEVELS = (0.25, 0.5, 0.75, 1.0, 1.25, 1.5, 2.0, 3.0, 4.0)
ZOOM_EPSILON = 0.001
MAX_FIT_ZOOM = 2.0
MAX_LAYOUT_SCALE = 1.0
MIN_FIT_ZOOM = 0.01
DEFAULT_FIT_PADDING = 20.0

DEFAULT_SNAP_THRESHOLD = 2.0
DEFAULT_GRID_SIZE = 5.0
DISTRIBUTION_TOLERANCE = 0.5
MIN_ELEMENT_SIZE = 5.0

MAX_COPIES_PER_ITEM = 999

PAPER_SIZES = {
	"A4": (210.0, 297.0),
	"LETTER": (215.9, 279.4),
}
PAPER_SIZE_NAMES = ("A4", "LETTER", "CUSTOM")
ORIENTATIONS = ("portrait", "landscape")

# label presets in mm
LABEL_SIZES = {
	"SMALL": (30.0, 20.0),
	"MEDIUM": (50.0, 30.0),
	"LARGE": (100.0, 50.0),
	"SQUARE": (50.0, 50.0),
	"JEWELRY": (30.0, 15.0),
}

DEFAULT_LABELS_PER_ROW = 2
DEFAULT_MARGIN = 10.0
DEFAULT_SPACING = 5.0

DEFAULT_FONT_REGULAR = "Helvetica"
CALIBRATION_RULER_MM = 10.0
CALIBRATION_CROSS_MM = 2.0


@dataclasses.dataclass
class Dimensions:
	width: float
	height: float


@dataclasses.dataclass
class Margins:
	top: float = DEFAULT_MARGIN
	right: float = DEFAULT_MARGIN
	bottom: float = DEFAULT_MARGIN
	left: float = DEFAULT_MARGIN


@dataclasses.dataclass
class LabelSpacing:
	horizontal: float = DEFAULT_SPACING
	vertical: float = DEFAULT_SPACING


@dataclasses.dataclass
class PageSettings:
	paper_size: str = "A4"
	orientation: str = "portrait"
	labels_per_row: int = DEFAULT_LABELS_PER_ROW
	margins: Margins = dataclasses.field(default_factory=Margins)
	label_spacing: LabelSpacing = dataclasses.field(default_factory=LabelSpacing)
	custom_dimensions: Dimensions | None = None


@dataclasses.dataclass
class SnapConfig:
	enabled: bool = True
	threshold: float = DEFAULT_SNAP_THRESHOLD
	snap_to_canvas: bool = True
	snap_to_elements: bool = True
	snap_to_center: bool = True
	snap_to_grid: bool = True
	grid_size: float = DEFAULT_GRID_SIZE


#============================================
def _pick(data: dict, *keys: str, default=None):
	"""
	Return the first present key from a DTO dict.

	Args:
		data: Source dict.
		keys: Candidate keys, camelCase and snake_case spellings.
		default: Value when no key is present.

	Returns:
		Found value or default.
	"""
	for key in keys:
		if key in data and data[key] is not None:
			return data[key]
	return default


#============================================
def preset_label_dimensions(name: str) -> Dimensions:
	"""
	Look up a preset label size.

	Args:
		name: Preset name like "MEDIUM".

	Returns:
		Dimensions in mm.
	"""
	key = name.strip().upper()
	if key not in LABEL_SIZES:
		raise ValueError(f"Unknown label size preset: {name}")
	width, height = LABEL_SIZES[key]
	return Dimensions(width=width, height=height)


#============================================
def page_settings_from_dict(data: dict) -> PageSettings:
	"""
	Build PageSettings from a persisted DTO.

	Accepts the camelCase keys used by the print queue storage
	(labelsPerRow, labelSpacing, customDimensions) as well as snake_case.
	Missing keys fall back to the defaults.

	Args:
		data: DTO dict.

	Returns:
		PageSettings.
	"""
	paper_size = str(_pick(data, "paperSize", "paper_size", default="A4")).upper()
	if paper_size not in PAPER_SIZE_NAMES:
		raise ValueError(f"Unknown paper size: {paper_size}")
	orientation = str(_pick(data, "orientation", default="portrait")).lower()
	if orientation not in ORIENTATIONS:
		raise ValueError(f"Unknown orientation: {orientation}")

	margins_data = _pick(data, "margins", default={})
	margins = Margins(
		top=float(margins_data.get("top", DEFAULT_MARGIN)),
		right=float(margins_data.get("right", DEFAULT_MARGIN)),
		bottom=float(margins_data.get("bottom", DEFAULT_MARGIN)),
		left=float(margins_data.get("left", DEFAULT_MARGIN)),
	)
	spacing_data = _pick(data, "labelSpacing", "label_spacing", default={})
	spacing = LabelSpacing(
		horizontal=float(spacing_data.get("horizontal", DEFAULT_SPACING)),
		vertical=float(spacing_data.get("vertical", DEFAULT_SPACING)),
	)

	custom_dimensions = None
	custom_data = _pick(data, "customDimensions", "custom_dimensions")
	if custom_data is not None:
		custom_dimensions = Dimensions(
			width=float(custom_data["width"]),
			height=float(custom_data["height"]),
		)

	return PageSettings(
		paper_size=paper_size,
		orientation=orientation,
		labels_per_row=int(_pick(data, "labelsPerRow", "labels_per_row", default=DEFAULT_LABELS_PER_ROW)),
		margins=margins,
		label_spacing=spacing,
		custom_dimensions=custom_dimensions,
	)


#============================================
def page_settings_to_dict(settings: PageSettings) -> dict:
	"""
	Convert PageSettings back to the camelCase DTO shape.

	Args:
		settings: Page settings.

	Returns:
		DTO dict.
	"""
	data = {
		"paperSize": settings.paper_size,
		"orientation": settings.orientation,
		"labelsPerRow": settings.labels_per_row,
		"margins": dataclasses.asdict(settings.margins),
		"labelSpacing": dataclasses.asdict(settings.label_spacing),
	}
	if settings.custom_dimensions is not None:
		data["customDimensions"] = dataclasses.asdict(settings.custom_dimensions)
	return data


#============================================
def snap_config_from_dict(data: dict) -> SnapConfig:
	"""
	Build SnapConfig from a DTO, keeping defaults for missing keys.

	Args:
		data: DTO dict.

	Returns:
		SnapConfig.
	"""
	defaults = SnapConfig()
	return SnapConfig(
		enabled=bool(_pick(data, "enabled", default=defaults.enabled)),
		threshold=float(_pick(data, "threshold", default=defaults.threshold)),
		snap_to_canvas=bool(_pick(data, "snapToCanvas", "snap_to_canvas", default=defaults.snap_to_canvas)),
		snap_to_elements=bool(_pick(data, "snapToElements", "snap_to_elements", default=defaults.snap_to_elements)),
		snap_to_center=bool(_pick(data, "snapToCenter", "snap_to_center", default=defaults.snap_to_center)),
		snap_to_grid=bool(_pick(data, "snapToGrid", "snap_to_grid", default=defaults.snap_to_grid)),
		grid_size=float(_pick(data, "gridSize", "grid_size", default=defaults.grid_size)),
	)


#============================================
def load_page_settings(path: pathlib.Path) -> PageSettings:
	"""
	Load page settings from a JSON file.

	Args:
		path: JSON path.

	Returns:
		PageSettings.
	"""
	text = pathlib.Path(path).read_text(encoding="utf-8")
	return page_settings_from_dict(json.loads(text))


#============================================
def mm_to_points(value: float) -> float:
	"""
	Convert millimeters to PDF points.

	Args:
		value: Millimeter value.

	Returns:
		Points value.
	"""
	return value / MM_PER_INCH * POINTS_PER_INCH
