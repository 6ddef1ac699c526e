"""
Page layout logic for placing label instances onto paper sheets.

Positions are millimeters from the top-left corner of the page. The slot
for a global label index depends only on the index and the grid, never on
how many labels are in the job.
"""

# Standard Library
import dataclasses
import math
import typing

# local repo modules
import label_studio_geometry as lsg
import label_studio_geometry.config
import label_studio_geometry.units


Dimensions = lsg.config.Dimensions
Margins = lsg.config.Margins
LabelSpacing = lsg.config.LabelSpacing
PageSettings = lsg.config.PageSettings

PAPER_SIZES = lsg.config.PAPER_SIZES
MAX_COPIES_PER_ITEM = lsg.config.MAX_COPIES_PER_ITEM
MAX_LAYOUT_SCALE = lsg.config.MAX_LAYOUT_SCALE
DEFAULT_FIT_PADDING = lsg.config.DEFAULT_FIT_PADDING


@dataclasses.dataclass
class GridCapacity:
	rows: int
	columns: int
	total: int


@dataclasses.dataclass
class LabelPosition:
	index: int
	x: float
	y: float
	width: float
	height: float
	page: int
	row: int
	column: int


@dataclasses.dataclass
class PlacedLabel:
	position: LabelPosition
	data: typing.Any


@dataclasses.dataclass
class PageLayout:
	page_index: int
	labels: list[PlacedLabel]


@dataclasses.dataclass
class CalculatedLayout:
	total_pages: int
	total_labels: int
	labels_per_page: int
	pages: list[PageLayout]
	paper_dimensions: Dimensions
	label_dimensions: Dimensions
	rows: int
	columns: int


@dataclasses.dataclass
class LayoutInfo:
	paper_dimensions: Dimensions
	label_dimensions: Dimensions
	labels_per_page: int
	columns: int
	rows: int
	positions: list[LabelPosition]


#============================================
def get_paper_dimensions(settings: PageSettings) -> Dimensions:
	"""
	Resolve the paper size in mm.

	Custom dimensions are used exactly as given; only presets are swapped
	for landscape.

	Args:
		settings: Page settings.

	Returns:
		Paper Dimensions.
	"""
	if settings.paper_size == "CUSTOM" and settings.custom_dimensions is not None:
		custom = settings.custom_dimensions
		return Dimensions(width=custom.width, height=custom.height)

	width, height = PAPER_SIZES.get(settings.paper_size, PAPER_SIZES["A4"])
	if settings.orientation == "landscape":
		return Dimensions(width=height, height=width)
	return Dimensions(width=width, height=height)


#============================================
def get_usable_area(paper: Dimensions, margins: Margins) -> Dimensions:
	"""
	Subtract margins from the paper size.
	"""
	return Dimensions(
		width=paper.width - margins.left - margins.right,
		height=paper.height - margins.top - margins.bottom,
	)


#============================================
def _fit_count(available: float, size: float, spacing: float) -> int:
	"""
	Count how many cells of size plus spacing fit, without a trailing gap.

	Args:
		available: Available extent.
		size: Cell size.
		spacing: Gap between cells.

	Returns:
		Cell count, at least 1.
	"""
	pitch = size + spacing
	if pitch <= 0:
		return 1
	return max(1, math.floor((available + spacing) / pitch))


#============================================
def calculate_labels_per_page(
	usable: Dimensions,
	label: Dimensions,
	spacing: LabelSpacing,
	labels_per_row: int,
) -> GridCapacity:
	"""
	Work out the label grid for one page.

	The requested column count wins when it fits the usable width,
	otherwise the largest count that fits is used. Rows always fill the
	usable height. Both clamp to one so an oversized label still gets a
	single cell.

	Args:
		usable: Usable page area.
		label: Label dimensions.
		spacing: Spacing between labels.
		labels_per_row: Requested columns.

	Returns:
		GridCapacity.
	"""
	columns = max(1, int(labels_per_row))
	required_width = columns * (label.width + spacing.horizontal) - spacing.horizontal
	if required_width > usable.width:
		columns = _fit_count(usable.width, label.width, spacing.horizontal)
	rows = _fit_count(usable.height, label.height, spacing.vertical)
	return GridCapacity(rows=rows, columns=columns, total=rows * columns)


#============================================
def calculate_label_position(
	index: int,
	columns: int,
	label: Dimensions,
	margins: Margins,
	spacing: LabelSpacing,
	labels_per_page: int,
) -> LabelPosition:
	"""
	Place the label with a global index on its page.

	Args:
		index: Zero-based index across all pages.
		columns: Columns per page.
		label: Label dimensions.
		margins: Page margins.
		spacing: Spacing between labels.
		labels_per_page: Grid capacity.

	Returns:
		LabelPosition.
	"""
	columns = max(1, columns)
	labels_per_page = max(1, labels_per_page)
	page, local_index = divmod(index, labels_per_page)
	row, column = divmod(local_index, columns)
	return LabelPosition(
		index=index,
		x=margins.left + column * (label.width + spacing.horizontal),
		y=margins.top + row * (label.height + spacing.vertical),
		width=label.width,
		height=label.height,
		page=page,
		row=row,
		column=column,
	)


#============================================
def count_pages(total_labels: int, labels_per_page: int) -> int:
	"""
	Number of pages needed for a label count, zero for an empty job.
	"""
	if total_labels <= 0:
		return 0
	labels_per_page = max(1, labels_per_page)
	return (total_labels + labels_per_page - 1) // labels_per_page


#============================================
def _resolve_grid(label: Dimensions, settings: PageSettings) -> tuple[Dimensions, GridCapacity]:
	"""
	Resolve paper size and grid capacity for a label size.

	Args:
		label: Label dimensions.
		settings: Page settings.

	Returns:
		Tuple of (paper_dimensions, capacity).
	"""
	paper = get_paper_dimensions(settings)
	usable = get_usable_area(paper, settings.margins)
	capacity = calculate_labels_per_page(
		usable,
		label,
		settings.label_spacing,
		settings.labels_per_row,
	)
	return (paper, capacity)


#============================================
def calculate_layout(
	labels: list,
	label_dimensions: Dimensions,
	settings: PageSettings,
) -> CalculatedLayout:
	"""
	Lay out an ordered list of label instances across pages.

	Copies must already be expanded, one list entry per printed label.

	Args:
		labels: Label data instances in print order.
		label_dimensions: Template label size.
		settings: Page settings.

	Returns:
		CalculatedLayout.
	"""
	paper, capacity = _resolve_grid(label_dimensions, settings)
	labels_per_page = capacity.total
	total_labels = len(labels)
	total_pages = count_pages(total_labels, labels_per_page)

	pages: list[PageLayout] = []
	for page_index in range(total_pages):
		start_index = page_index * labels_per_page
		end_index = min(start_index + labels_per_page, total_labels)
		placed = []
		for index in range(start_index, end_index):
			position = calculate_label_position(
				index,
				capacity.columns,
				label_dimensions,
				settings.margins,
				settings.label_spacing,
				labels_per_page,
			)
			placed.append(PlacedLabel(position=position, data=labels[index]))
		pages.append(PageLayout(page_index=page_index, labels=placed))

	return CalculatedLayout(
		total_pages=total_pages,
		total_labels=total_labels,
		labels_per_page=labels_per_page,
		pages=pages,
		paper_dimensions=paper,
		label_dimensions=Dimensions(width=label_dimensions.width, height=label_dimensions.height),
		rows=capacity.rows,
		columns=capacity.columns,
	)


#============================================
def calculate_layout_info(label_dimensions: Dimensions, settings: PageSettings) -> LayoutInfo:
	"""
	Compute the empty slot grid for one page, for previews without data.

	Args:
		label_dimensions: Template label size.
		settings: Page settings.

	Returns:
		LayoutInfo.
	"""
	paper, capacity = _resolve_grid(label_dimensions, settings)
	positions = [
		calculate_label_position(
			index,
			capacity.columns,
			label_dimensions,
			settings.margins,
			settings.label_spacing,
			capacity.total,
		)
		for index in range(capacity.total)
	]
	return LayoutInfo(
		paper_dimensions=paper,
		label_dimensions=Dimensions(width=label_dimensions.width, height=label_dimensions.height),
		labels_per_page=capacity.total,
		columns=capacity.columns,
		rows=capacity.rows,
		positions=positions,
	)


#============================================
def scale_layout_to_fit(
	paper: Dimensions,
	container: Dimensions,
	padding: float = DEFAULT_FIT_PADDING,
) -> float:
	"""
	Scale factor for a full-sheet thumbnail, never above true size.

	Args:
		paper: Paper dimensions.
		container: Container dimensions in the same unit.
		padding: Padding on each side of the container.

	Returns:
		Scale factor capped at 1.0.
	"""
	return lsg.units.fit_scale(
		paper.width,
		paper.height,
		container.width,
		container.height,
		padding,
		MAX_LAYOUT_SCALE,
	)


#============================================
def expand_copies(entries: list[tuple[typing.Any, int]]) -> list:
	"""
	Expand queue entries into one instance per printed copy.

	Args:
		entries: (data, copies) pairs in queue order.

	Returns:
		Flat list with each data repeated copies times. Zero copies skip
		the entry and the count is capped at the queue limit.
	"""
	instances = []
	for data, copies in entries:
		count = min(MAX_COPIES_PER_ITEM, max(0, int(copies)))
		instances.extend([data] * count)
	return instances
