"""
Calibration sheets, outline overlays and layout manifests.

These only draw slot geometry for checking printer alignment; label
content is drawn by the export backend.
"""

# Standard Library
import io
import json
import pathlib

# PIP3 modules
import pypdf
import reportlab.pdfgen.canvas

# local repo modules
import label_studio_geometry as lsg
import label_studio_geometry.config
import label_studio_geometry.layout


LayoutInfo = lsg.layout.LayoutInfo
CalculatedLayout = lsg.layout.CalculatedLayout
LabelPosition = lsg.layout.LabelPosition

DEFAULT_FONT_REGULAR = lsg.config.DEFAULT_FONT_REGULAR
CALIBRATION_RULER_MM = lsg.config.CALIBRATION_RULER_MM
CALIBRATION_CROSS_MM = lsg.config.CALIBRATION_CROSS_MM

mm_to_points = lsg.config.mm_to_points


#============================================
def page_size_points(info: LayoutInfo) -> tuple[float, float]:
	"""
	Paper size in points.
	"""
	return (
		mm_to_points(info.paper_dimensions.width),
		mm_to_points(info.paper_dimensions.height),
	)


#============================================
def slot_box_points(position: LabelPosition, page_height: float) -> tuple[float, float, float, float]:
	"""
	Convert a slot to a PDF rect with a bottom-left origin.

	Args:
		position: Slot position in mm from the top-left corner.
		page_height: Page height in points.

	Returns:
		Tuple of (x, y, width, height) in points.
	"""
	x = mm_to_points(position.x)
	width = mm_to_points(position.width)
	height = mm_to_points(position.height)
	y = page_height - mm_to_points(position.y) - height
	return (x, y, width, height)


#============================================
def draw_layout_outlines(pdf: reportlab.pdfgen.canvas.Canvas, info: LayoutInfo) -> None:
	"""
	Draw every slot outline of one page.

	Args:
		pdf: ReportLab canvas.
		info: Page grid.
	"""
	_page_width, page_height = page_size_points(info)
	pdf.setLineWidth(0.3)
	pdf.setStrokeColorRGB(0.6, 0.6, 0.6)
	for position in info.positions:
		x, y, width, height = slot_box_points(position, page_height)
		pdf.rect(x, y, width, height, stroke=1, fill=0)


#============================================
def draw_calibration_page(pdf: reportlab.pdfgen.canvas.Canvas, info: LayoutInfo) -> None:
	"""
	Draw slot outlines, corner crosshairs and a 10 mm ruler mark.

	Args:
		pdf: ReportLab canvas.
		info: Page grid.
	"""
	_page_width, page_height = page_size_points(info)
	draw_layout_outlines(pdf, info)

	pdf.setLineWidth(0.6)
	pdf.setStrokeColorRGB(0.0, 0.0, 0.0)
	corner_slots = {
		(0, 0),
		(0, info.columns - 1),
		(info.rows - 1, 0),
		(info.rows - 1, info.columns - 1),
	}
	size = mm_to_points(CALIBRATION_CROSS_MM)
	for position in info.positions:
		if (position.row, position.column) not in corner_slots:
			continue
		x, y, width, height = slot_box_points(position, page_height)
		center_x = x + width / 2.0
		center_y = y + height / 2.0
		pdf.line(center_x - size, center_y, center_x + size, center_y)
		pdf.line(center_x, center_y - size, center_x, center_y + size)

	if not info.positions:
		return
	first = info.positions[0]
	ruler_x = mm_to_points(first.x)
	ruler_y = page_height - mm_to_points(first.y) + 4.0
	pdf.line(ruler_x, ruler_y, ruler_x + mm_to_points(CALIBRATION_RULER_MM), ruler_y)
	pdf.setFont(DEFAULT_FONT_REGULAR, 6)
	pdf.drawString(ruler_x, ruler_y + 2.0, f"{CALIBRATION_RULER_MM:g} mm")


#============================================
def render_calibration_pdf(info: LayoutInfo, output_path: pathlib.Path, pages: int = 1) -> int:
	"""
	Write a calibration sheet PDF.

	Args:
		info: Page grid.
		output_path: Output PDF path.
		pages: Number of identical sheets, at least one.

	Returns:
		Pages written.
	"""
	pages = max(1, pages)
	pdf = reportlab.pdfgen.canvas.Canvas(str(output_path), pagesize=page_size_points(info))
	for _index in range(pages):
		draw_calibration_page(pdf, info)
		pdf.showPage()
	pdf.save()
	return pages


#============================================
def build_outline_overlay(info: LayoutInfo) -> pypdf.PageObject:
	"""
	Build a PDF overlay page with slot outlines.

	Args:
		info: Page grid.

	Returns:
		PDF page object.
	"""
	buffer = io.BytesIO()
	pdf = reportlab.pdfgen.canvas.Canvas(buffer, pagesize=page_size_points(info))
	draw_layout_outlines(pdf, info)
	pdf.save()
	buffer.seek(0)
	reader = pypdf.PdfReader(buffer)
	return reader.pages[0]


#============================================
def overlay_outlines(input_path: pathlib.Path, output_path: pathlib.Path, info: LayoutInfo) -> int:
	"""
	Stamp slot outlines onto every page of a rendered label sheet PDF.

	Args:
		input_path: Sheet PDF produced by the export backend.
		output_path: Output PDF path.
		info: Page grid the sheet was rendered with.

	Returns:
		Pages written.
	"""
	reader = pypdf.PdfReader(str(input_path))
	writer = pypdf.PdfWriter()
	outline_page = build_outline_overlay(info)
	for page in reader.pages:
		page.merge_page(outline_page)
		writer.add_page(page)
	writer.write(str(output_path))
	return len(reader.pages)


#============================================
def build_manifest(layout: CalculatedLayout) -> dict:
	"""
	Summarize a calculated layout as JSON-ready data.

	Label data is left out; positions reference labels by global index.

	Args:
		layout: Calculated layout.

	Returns:
		Manifest dict.
	"""
	pages = []
	for page in layout.pages:
		positions = []
		for placed in page.labels:
			position = placed.position
			positions.append({
				"index": position.index,
				"row": position.row,
				"column": position.column,
				"x": position.x,
				"y": position.y,
			})
		pages.append({"page": page.page_index, "labels": positions})

	return {
		"total_labels": layout.total_labels,
		"total_pages": layout.total_pages,
		"labels_per_page": layout.labels_per_page,
		"grid": {
			"rows": layout.rows,
			"columns": layout.columns,
		},
		"paper": {
			"width": layout.paper_dimensions.width,
			"height": layout.paper_dimensions.height,
		},
		"label": {
			"width": layout.label_dimensions.width,
			"height": layout.label_dimensions.height,
		},
		"pages": pages,
	}


#============================================
def write_manifest(manifest_path: pathlib.Path, layout: CalculatedLayout) -> None:
	"""
	Write a layout manifest JSON file.

	Args:
		manifest_path: Output path.
		layout: Calculated layout.
	"""
	data = build_manifest(layout)
	with pathlib.Path(manifest_path).open("w", encoding="utf-8") as handle:
		json.dump(data, handle, indent=2, sort_keys=True)
