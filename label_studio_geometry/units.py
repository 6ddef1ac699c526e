"""
Millimeter and pixel conversion plus zoom stepping.

Millimeters are the stored unit. Screen pixels use the fixed 96 px/inch
reference scaled by zoom; print pixels use their own DPI and never the
screen constant.
"""

# local repo modules
import label_studio_geometry as lsg
import label_studio_geometry.config


MM_PER_INCH = lsg.config.MM_PER_INCH
SCREEN_DPI = lsg.config.SCREEN_DPI
PRINT_DPI = lsg.config.PRINT_DPI
ZOOM_LEVELS = lsg.config.ZOOM_LEVELS
ZOOM_EPSILON = lsg.config.ZOOM_EPSILON
MAX_FIT_ZOOM = lsg.config.MAX_FIT_ZOOM
MIN_FIT_ZOOM = lsg.config.MIN_FIT_ZOOM
DEFAULT_FIT_PADDING = lsg.config.DEFAULT_FIT_PADDING

PX_PER_MM = SCREEN_DPI / MM_PER_INCH

mm_to_points = lsg.config.mm_to_points


#============================================
def mm_to_px(mm: float, zoom: float = 1.0) -> float:
	"""
	Convert millimeters to screen pixels.

	Args:
		mm: Millimeter value.
		zoom: Display zoom factor.

	Returns:
		Pixel value.
	"""
	return mm * PX_PER_MM * zoom


#============================================
def px_to_mm(px: float, zoom: float = 1.0) -> float:
	"""
	Convert screen pixels to millimeters.

	Args:
		px: Pixel value.
		zoom: Display zoom factor, must be positive.

	Returns:
		Millimeter value.
	"""
	if zoom <= 0:
		zoom = MIN_FIT_ZOOM
	return px / (PX_PER_MM * zoom)


#============================================
def mm_to_print_px(mm: float, dpi: float = PRINT_DPI) -> float:
	"""
	Convert millimeters to print pixels at an export DPI.
	"""
	return mm / MM_PER_INCH * dpi


#============================================
def print_px_to_mm(px: float, dpi: float = PRINT_DPI) -> float:
	"""
	Convert print pixels at an export DPI back to millimeters.
	"""
	if dpi <= 0:
		dpi = PRINT_DPI
	return px / dpi * MM_PER_INCH


#============================================
def get_next_zoom_level(current: float, direction: str, levels: tuple[float, ...] = ZOOM_LEVELS) -> float:
	"""
	Step to the next zoom level.

	Args:
		current: Current zoom factor, not necessarily on the list.
		direction: "in" or "out".
		levels: Ascending zoom levels.

	Returns:
		Next level strictly above or below current, clamped to the list ends.
	"""
	if direction == "in":
		for level in levels:
			if level > current + ZOOM_EPSILON:
				return level
		return levels[-1]
	if direction == "out":
		for level in reversed(levels):
			if level < current - ZOOM_EPSILON:
				return level
		return levels[0]
	raise ValueError(f"Unknown zoom direction: {direction}")


#============================================
def fit_scale(
	content_width: float,
	content_height: float,
	container_width: float,
	container_height: float,
	padding: float,
	cap: float,
) -> float:
	"""
	Compute the largest scale that fits content into a padded container.

	An axis with no content extent does not constrain the scale.

	Args:
		content_width: Content width.
		content_height: Content height.
		container_width: Container width, same unit as content.
		container_height: Container height, same unit as content.
		padding: Padding on each side of the container.
		cap: Upper bound for the scale.

	Returns:
		Scale factor in [0, cap], zero when nothing fits.
	"""
	available_width = max(0.0, container_width - 2.0 * padding)
	available_height = max(0.0, container_height - 2.0 * padding)
	scale = cap
	if content_width > 0:
		scale = min(scale, available_width / content_width)
	if content_height > 0:
		scale = min(scale, available_height / content_height)
	return scale


#============================================
def calculate_fit_zoom(
	content_width_mm: float,
	content_height_mm: float,
	container_width_px: float,
	container_height_px: float,
	padding: float = DEFAULT_FIT_PADDING,
) -> float:
	"""
	Compute the zoom that fits content inside a container, capped at 2x.

	Args:
		content_width_mm: Content width in mm.
		content_height_mm: Content height in mm.
		container_width_px: Container width in px.
		container_height_px: Container height in px.
		padding: Padding in px on each side.

	Returns:
		Zoom factor.
	"""
	return fit_scale(
		mm_to_px(content_width_mm),
		mm_to_px(content_height_mm),
		container_width_px,
		container_height_px,
		padding,
		MAX_FIT_ZOOM,
	)


#============================================
def zoom_to_percent(zoom: float) -> int:
	"""
	Format a zoom factor as a whole percentage.
	"""
	return int(round(zoom * 100.0))
