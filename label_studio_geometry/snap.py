"""
Snap and alignment logic for dragging and resizing label elements.

All values are millimeters. Every function is pure: inputs are never
mutated and results are new records.
"""

# Standard Library
import dataclasses
import math

# local repo modules
import label_studio_geometry as lsg
import label_studio_geometry.config


SnapConfig = lsg.config.SnapConfig

DISTRIBUTION_TOLERANCE = lsg.config.DISTRIBUTION_TOLERANCE
MIN_ELEMENT_SIZE = lsg.config.MIN_ELEMENT_SIZE

SOURCE_CANVAS = "canvas"
SOURCE_ELEMENT = "element"
SOURCE_CENTER = "center"
AXIS_VERTICAL = "vertical"
AXIS_HORIZONTAL = "horizontal"

# grid multiples are compared against the canvas size with this slack
GRID_EPSILON = 1e-9


@dataclasses.dataclass
class Rect:
	x: float
	y: float
	width: float
	height: float


@dataclasses.dataclass
class LabelElement:
	id: str
	x: float
	y: float
	width: float
	height: float
	rotation: float = 0.0
	opacity: float = 1.0
	z_index: int = 0
	locked: bool = False
	visible: bool = True


@dataclasses.dataclass
class SnapGuide:
	axis: str
	position: float
	source: str


@dataclasses.dataclass
class SnapTarget:
	value: float
	source: str


@dataclasses.dataclass
class SnapMatch:
	value: float
	distance: float
	source: str


@dataclasses.dataclass
class SnapResult:
	x: float
	y: float
	width: float
	height: float
	guides: list[SnapGuide] = dataclasses.field(default_factory=list)


@dataclasses.dataclass
class AnchorEdges:
	west: bool
	east: bool
	north: bool
	south: bool


#============================================
def parse_anchor(anchor: str) -> AnchorEdges:
	"""
	Decode a compass resize anchor like "se" into edge flags.

	Args:
		anchor: Anchor string made of n, e, s, w letters.

	Returns:
		AnchorEdges.
	"""
	normalized = anchor.strip().lower()
	return AnchorEdges(
		west="w" in normalized,
		east="e" in normalized,
		north="n" in normalized,
		south="s" in normalized,
	)


#============================================
def grid_lines(extent: float, grid_size: float) -> list[float]:
	"""
	List every multiple of grid_size from 0 up to extent.

	Args:
		extent: Canvas dimension.
		grid_size: Grid pitch, must be positive.

	Returns:
		Grid positions.
	"""
	if grid_size <= 0 or extent < 0:
		return []
	count = int(math.floor(extent / grid_size + GRID_EPSILON))
	return [index * grid_size for index in range(count + 1)]


#============================================
def build_snap_targets(
	siblings: list[LabelElement],
	canvas_width: float,
	canvas_height: float,
	config: SnapConfig,
	exclude_ids: tuple[str, ...] | list[str] = (),
	for_resize: bool = False,
) -> tuple[list[SnapTarget], list[SnapTarget]]:
	"""
	Collect snap references for both axes in tie-break order.

	Order per axis is canvas edges, canvas center, sibling edges and
	centers, then grid lines.

	Args:
		siblings: Other elements on the canvas.
		canvas_width: Canvas width.
		canvas_height: Canvas height.
		config: Snap configuration.
		exclude_ids: Element ids to skip, usually the moving selection.
		for_resize: Leave out sibling centers and grid lines, which resize
			edges never snap to.

	Returns:
		Tuple of (vertical_targets, horizontal_targets). Vertical targets are
		x positions, horizontal targets are y positions.
	"""
	vertical: list[SnapTarget] = []
	horizontal: list[SnapTarget] = []
	excluded = set(exclude_ids)

	if config.snap_to_canvas:
		vertical.append(SnapTarget(0.0, SOURCE_CANVAS))
		vertical.append(SnapTarget(canvas_width, SOURCE_CANVAS))
		horizontal.append(SnapTarget(0.0, SOURCE_CANVAS))
		horizontal.append(SnapTarget(canvas_height, SOURCE_CANVAS))
		if config.snap_to_center:
			vertical.append(SnapTarget(canvas_width / 2.0, SOURCE_CENTER))
			horizontal.append(SnapTarget(canvas_height / 2.0, SOURCE_CENTER))

	if config.snap_to_elements:
		for element in siblings:
			if element.id in excluded or not element.visible:
				continue
			vertical.append(SnapTarget(element.x, SOURCE_ELEMENT))
			vertical.append(SnapTarget(element.x + element.width, SOURCE_ELEMENT))
			horizontal.append(SnapTarget(element.y, SOURCE_ELEMENT))
			horizontal.append(SnapTarget(element.y + element.height, SOURCE_ELEMENT))
			if config.snap_to_center and not for_resize:
				vertical.append(SnapTarget(element.x + element.width / 2.0, SOURCE_ELEMENT))
				horizontal.append(SnapTarget(element.y + element.height / 2.0, SOURCE_ELEMENT))

	if config.snap_to_grid and config.grid_size > 0 and not for_resize:
		for value in grid_lines(canvas_width, config.grid_size):
			vertical.append(SnapTarget(value, SOURCE_CANVAS))
		for value in grid_lines(canvas_height, config.grid_size):
			horizontal.append(SnapTarget(value, SOURCE_CANVAS))

	return (vertical, horizontal)


#============================================
def find_best_snap(value: float, targets: list[SnapTarget], threshold: float) -> SnapMatch | None:
	"""
	Find the closest target within the threshold.

	Scans in list order and keeps the first target at the minimal distance.

	Args:
		value: Coordinate being snapped.
		targets: Candidate references.
		threshold: Maximum snap distance.

	Returns:
		SnapMatch or None.
	"""
	best: SnapMatch | None = None
	for target in targets:
		distance = abs(value - target.value)
		if distance > threshold:
			continue
		if best is None or distance < best.distance:
			best = SnapMatch(value=target.value, distance=distance, source=target.source)
	return best


#============================================
def _snap_axis(
	start: float,
	size: float,
	targets: list[SnapTarget],
	threshold: float,
) -> tuple[float, SnapMatch | None]:
	"""
	Snap one axis of a moving rect using its min edge, center and max edge.

	Args:
		start: Min-edge coordinate.
		size: Extent along the axis.
		targets: Candidate references.
		threshold: Maximum snap distance.

	Returns:
		Tuple of (new_start, best_match).
	"""
	snapped = start
	best: SnapMatch | None = None
	for offset in (0.0, size / 2.0, size):
		match = find_best_snap(start + offset, targets, threshold)
		if match is None:
			continue
		if best is None or match.distance < best.distance:
			best = match
			snapped = match.value - offset
	return (snapped, best)


#============================================
def calculate_snap(
	rect: Rect,
	siblings: list[LabelElement],
	canvas_width: float,
	canvas_height: float,
	config: SnapConfig,
	exclude_ids: tuple[str, ...] | list[str] = (),
) -> SnapResult:
	"""
	Snap a dragged rect to canvas, element, center and grid references.

	Each axis is resolved on its own and yields at most one guide.

	Args:
		rect: Proposed rect for the dragged element.
		siblings: Elements on the canvas.
		canvas_width: Canvas width.
		canvas_height: Canvas height.
		config: Snap configuration.
		exclude_ids: Element ids that never act as references.

	Returns:
		SnapResult with the corrected position and guides.
	"""
	if not config.enabled:
		return SnapResult(rect.x, rect.y, rect.width, rect.height, [])

	vertical, horizontal = build_snap_targets(
		siblings,
		canvas_width,
		canvas_height,
		config,
		exclude_ids,
	)
	snapped_x, x_match = _snap_axis(rect.x, rect.width, vertical, config.threshold)
	snapped_y, y_match = _snap_axis(rect.y, rect.height, horizontal, config.threshold)

	guides: list[SnapGuide] = []
	if x_match is not None:
		guides.append(SnapGuide(AXIS_VERTICAL, x_match.value, x_match.source))
	if y_match is not None:
		guides.append(SnapGuide(AXIS_HORIZONTAL, y_match.value, y_match.source))
	return SnapResult(snapped_x, snapped_y, rect.width, rect.height, guides)


#============================================
def calculate_resize_snap(
	rect: Rect,
	anchor: str,
	siblings: list[LabelElement],
	canvas_width: float,
	canvas_height: float,
	config: SnapConfig,
	exclude_ids: tuple[str, ...] | list[str] = (),
	origin: Rect | None = None,
) -> SnapResult:
	"""
	Snap the edges being dragged during a resize.

	The edge opposite a snapped edge stays where the origin snapshot had
	it, so a burst of resize events cannot accumulate drift.

	Args:
		rect: Live rect after applying the pointer delta.
		anchor: Compass anchor like "se" naming the dragged edges.
		siblings: Elements on the canvas.
		canvas_width: Canvas width.
		canvas_height: Canvas height.
		config: Snap configuration.
		exclude_ids: Element ids that never act as references.
		origin: Rect captured when the resize started. Defaults to rect.

	Returns:
		SnapResult with the corrected position, size and guides.
	"""
	if not config.enabled:
		return SnapResult(rect.x, rect.y, rect.width, rect.height, [])
	if origin is None:
		origin = rect

	edges = parse_anchor(anchor)
	vertical, horizontal = build_snap_targets(
		siblings,
		canvas_width,
		canvas_height,
		config,
		exclude_ids,
		for_resize=True,
	)
	x = rect.x
	y = rect.y
	width = rect.width
	height = rect.height
	guides: list[SnapGuide] = []

	if edges.west:
		match = find_best_snap(rect.x, vertical, config.threshold)
		fixed_right = origin.x + origin.width
		if match is not None and fixed_right - match.value > 0:
			x = match.value
			width = fixed_right - match.value
			guides.append(SnapGuide(AXIS_VERTICAL, match.value, match.source))
	if edges.east:
		match = find_best_snap(rect.x + rect.width, vertical, config.threshold)
		fixed_left = x if edges.west else origin.x
		if match is not None and match.value - fixed_left > 0:
			x = fixed_left
			width = match.value - fixed_left
			guides.append(SnapGuide(AXIS_VERTICAL, match.value, match.source))

	if edges.north:
		match = find_best_snap(rect.y, horizontal, config.threshold)
		fixed_bottom = origin.y + origin.height
		if match is not None and fixed_bottom - match.value > 0:
			y = match.value
			height = fixed_bottom - match.value
			guides.append(SnapGuide(AXIS_HORIZONTAL, match.value, match.source))
	if edges.south:
		match = find_best_snap(rect.y + rect.height, horizontal, config.threshold)
		fixed_top = y if edges.north else origin.y
		if match is not None and match.value - fixed_top > 0:
			y = fixed_top
			height = match.value - fixed_top
			guides.append(SnapGuide(AXIS_HORIZONTAL, match.value, match.source))

	return SnapResult(x, y, width, height, guides)


#============================================
def calculate_distribution_guides(
	elements: list[LabelElement],
	direction: str,
	tolerance: float = DISTRIBUTION_TOLERANCE,
) -> list[SnapGuide]:
	"""
	Emit guides when three or more elements are evenly spaced.

	Args:
		elements: Elements to inspect.
		direction: "horizontal" or "vertical" distribution direction.
		tolerance: Allowed deviation of each gap from the mean gap.

	Returns:
		One guide per gap at its midpoint, or an empty list.
	"""
	if len(elements) < 3:
		return []

	horizontal = direction == AXIS_HORIZONTAL
	if horizontal:
		spans = sorted(((item.x, item.x + item.width) for item in elements), key=lambda span: span[0])
	else:
		spans = sorted(((item.y, item.y + item.height) for item in elements), key=lambda span: span[0])

	gaps = [spans[index][0] - spans[index - 1][1] for index in range(1, len(spans))]
	average_gap = sum(gaps) / len(gaps)
	if any(abs(gap - average_gap) >= tolerance for gap in gaps):
		return []

	axis = AXIS_VERTICAL if horizontal else AXIS_HORIZONTAL
	guides = []
	for index, gap in enumerate(gaps, start=1):
		position = spans[index - 1][1] + gap / 2.0
		guides.append(SnapGuide(axis, position, SOURCE_ELEMENT))
	return guides


#============================================
def apply_drag_delta(start: Rect, delta_x: float, delta_y: float) -> Rect:
	"""
	Translate the drag-start rect by a pointer delta in mm.
	"""
	return Rect(start.x + delta_x, start.y + delta_y, start.width, start.height)


#============================================
def apply_resize_delta(
	start: Rect,
	anchor: str,
	delta_x: float,
	delta_y: float,
	min_size: float = MIN_ELEMENT_SIZE,
) -> Rect:
	"""
	Resize the resize-start rect by a pointer delta in mm.

	Only anchored edges move; the result never shrinks below min_size and
	the opposite edge stays put.

	Args:
		start: Rect captured when the resize started.
		anchor: Compass anchor like "nw".
		delta_x: Pointer delta along x.
		delta_y: Pointer delta along y.
		min_size: Minimum width and height.

	Returns:
		Resized rect.
	"""
	edges = parse_anchor(anchor)
	x = start.x
	y = start.y
	width = start.width
	height = start.height

	if edges.east:
		width = max(min_size, start.width + delta_x)
	if edges.west:
		shift = min(delta_x, start.width - min_size)
		width = start.width - shift
		x = start.x + shift
	if edges.south:
		height = max(min_size, start.height + delta_y)
	if edges.north:
		shift = min(delta_y, start.height - min_size)
		height = start.height - shift
		y = start.y + shift
	return Rect(x, y, width, height)


#============================================
def clamp_to_canvas(rect: Rect, canvas_width: float, canvas_height: float) -> Rect:
	"""
	Keep a dragged rect inside the canvas without changing its size.

	Args:
		rect: Rect to clamp.
		canvas_width: Canvas width.
		canvas_height: Canvas height.

	Returns:
		Clamped rect. Oversized rects are pinned to the origin.
	"""
	x = max(0.0, min(canvas_width - rect.width, rect.x))
	y = max(0.0, min(canvas_height - rect.height, rect.y))
	return Rect(x, y, rect.width, rect.height)


#============================================
def clamp_resize_to_canvas(rect: Rect, canvas_width: float, canvas_height: float) -> Rect:
	"""
	Keep a resized rect inside the canvas by trimming its size.

	Args:
		rect: Rect to clamp.
		canvas_width: Canvas width.
		canvas_height: Canvas height.

	Returns:
		Clamped rect.
	"""
	x = max(0.0, rect.x)
	y = max(0.0, rect.y)
	width = max(0.0, min(canvas_width - x, rect.width))
	height = max(0.0, min(canvas_height - y, rect.height))
	return Rect(x, y, width, height)
