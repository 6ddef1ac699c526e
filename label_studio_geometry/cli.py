"""
CLI entry points for label sheet layout.
"""

# Standard Library
import argparse
import pathlib
import time

# local repo modules
import label_studio_geometry as lsg
import label_studio_geometry.calibration
import label_studio_geometry.config
import label_studio_geometry.layout


PageSettings = lsg.config.PageSettings
Dimensions = lsg.config.Dimensions
Margins = lsg.config.Margins
LabelSpacing = lsg.config.LabelSpacing

PAPER_SIZE_NAMES = lsg.config.PAPER_SIZE_NAMES
ORIENTATIONS = lsg.config.ORIENTATIONS
LABEL_SIZES = lsg.config.LABEL_SIZES


#============================================
def build_page_settings(args: argparse.Namespace) -> PageSettings:
	"""
	Build page settings from a JSON file or CLI args.

	Explicit CLI options override values read from the settings file.

	Args:
		args: Parsed argparse namespace.

	Returns:
		PageSettings.
	"""
	if args.settings_path:
		settings = lsg.config.load_page_settings(pathlib.Path(args.settings_path))
	else:
		settings = PageSettings()

	if args.paper_size is not None:
		settings.paper_size = args.paper_size
	if args.orientation is not None:
		settings.orientation = args.orientation
	if args.labels_per_row is not None:
		settings.labels_per_row = args.labels_per_row
	if args.margin is not None:
		settings.margins = Margins(args.margin, args.margin, args.margin, args.margin)
	if args.spacing is not None:
		settings.label_spacing = LabelSpacing(args.spacing, args.spacing)
	if args.custom_width is not None and args.custom_height is not None:
		settings.custom_dimensions = Dimensions(args.custom_width, args.custom_height)
	return settings


#============================================
def build_label_dimensions(args: argparse.Namespace) -> Dimensions:
	"""
	Resolve the label size from a preset or explicit width and height.

	Args:
		args: Parsed argparse namespace.

	Returns:
		Label Dimensions.
	"""
	dimensions = lsg.config.preset_label_dimensions(args.label_preset)
	if args.label_width is not None:
		dimensions.width = args.label_width
	if args.label_height is not None:
		dimensions.height = args.label_height
	return dimensions


#============================================
def parse_args() -> argparse.Namespace:
	"""
	Parse command line arguments.

	Returns:
		Parsed argparse namespace.
	"""
	parser = argparse.ArgumentParser(description="Compute label sheet layouts and calibration sheets.")

	page_group = parser.add_argument_group("Page")
	page_group.add_argument("-s", "--settings", dest="settings_path", default=None, help="Page settings JSON path.")
	page_group.add_argument("-p", "--paper", dest="paper_size", choices=PAPER_SIZE_NAMES, default=None, help="Paper size.")
	page_group.add_argument("-r", "--orientation", dest="orientation", choices=ORIENTATIONS, default=None, help="Paper orientation.")
	page_group.add_argument("-c", "--columns", dest="labels_per_row", type=int, default=None, help="Requested labels per row.")
	page_group.add_argument("--margin", dest="margin", type=float, default=None, help="Margin on every side in mm.")
	page_group.add_argument("--spacing", dest="spacing", type=float, default=None, help="Label spacing on both axes in mm.")
	page_group.add_argument("--custom-width", dest="custom_width", type=float, default=None, help="Custom paper width in mm.")
	page_group.add_argument("--custom-height", dest="custom_height", type=float, default=None, help="Custom paper height in mm.")

	label_group = parser.add_argument_group("Label")
	label_group.add_argument(
		"-t", "--label-preset", dest="label_preset", choices=sorted(LABEL_SIZES), default="MEDIUM",
		help="Label size preset.",
	)
	label_group.add_argument("-W", "--label-width", dest="label_width", type=float, default=None, help="Label width in mm.")
	label_group.add_argument("-H", "--label-height", dest="label_height", type=float, default=None, help="Label height in mm.")
	label_group.add_argument("-n", "--count", dest="count", type=int, default=0, help="Number of label instances.")

	output_group = parser.add_argument_group("Output")
	output_group.add_argument("-m", "--manifest", dest="manifest_path", default=None, help="Output manifest JSON path.")
	output_group.add_argument("-o", "--calibration", dest="calibration_path", default=None, help="Output calibration PDF path.")
	output_group.add_argument("-O", "--overlay-input", dest="overlay_input", default=None, help="Rendered sheet PDF to stamp with outlines.")
	output_group.add_argument("-v", "--verbose", dest="verbose", action="store_true", help="Print every label position.")
	output_group.add_argument("-q", "--quiet", dest="verbose", action="store_false", help="Print the summary only.")

	parser.set_defaults(verbose=False)

	args = parser.parse_args()
	return args


#============================================
def print_layout_summary(layout: lsg.layout.CalculatedLayout, verbose: bool) -> None:
	"""
	Print a layout summary.

	Args:
		layout: Calculated layout.
		verbose: Also print every label position.
	"""
	paper = layout.paper_dimensions
	label = layout.label_dimensions
	print(f"Paper: {paper.width:g} x {paper.height:g} mm")
	print(f"Label: {label.width:g} x {label.height:g} mm")
	print(f"Grid: {layout.rows} rows x {layout.columns} columns")
	print(f"Labels per page: {layout.labels_per_page}")
	print(f"Labels: {layout.total_labels}")
	print(f"Pages: {layout.total_pages}")
	if not verbose:
		return
	for page in layout.pages:
		for placed in page.labels:
			position = placed.position
			print(
				f"  #{position.index} page {position.page} row {position.row} "
				f"col {position.column} at ({position.x:.2f}, {position.y:.2f})"
			)


#============================================
def run_pipeline(args: argparse.Namespace) -> None:
	"""
	Compute the layout and write the requested outputs.

	Args:
		args: Parsed argparse namespace.
	"""
	print("Label sheet layout")
	start_time = time.perf_counter()

	settings = build_page_settings(args)
	label_dimensions = build_label_dimensions(args)
	instances = list(range(max(0, args.count)))
	layout = lsg.layout.calculate_layout(instances, label_dimensions, settings)
	print_layout_summary(layout, args.verbose)

	if args.manifest_path:
		lsg.calibration.write_manifest(pathlib.Path(args.manifest_path), layout)
		print(f"Manifest written: {args.manifest_path}")

	if args.calibration_path:
		info = lsg.layout.calculate_layout_info(label_dimensions, settings)
		output_path = pathlib.Path(args.calibration_path)
		if args.overlay_input:
			pages = lsg.calibration.overlay_outlines(pathlib.Path(args.overlay_input), output_path, info)
		else:
			pages = lsg.calibration.render_calibration_pdf(info, output_path)
		print(f"Calibration pages written: {pages} -> {output_path}")

	total_time = time.perf_counter() - start_time
	print(f"Timing: total={total_time:.3f}s")


#============================================
def main() -> None:
	"""
	Main entry point.
	"""
	args = parse_args()
	run_pipeline(args)
