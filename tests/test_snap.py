import dataclasses

import pytest

import label_studio_geometry.config as config
import label_studio_geometry.snap as snap


CANVAS_WIDTH = 60.0
CANVAS_HEIGHT = 40.0


#============================================
def _vertical(result: snap.SnapResult) -> list[snap.SnapGuide]:
	"""
	Guides on the x axis.
	"""
	return [guide for guide in result.guides if guide.axis == "vertical"]


#============================================
def test_scenario_left_edge_snaps_to_element(edges_only_config, element_a) -> None:
	"""
	Dragging B's left edge near A's right edge lands it on x=20.
	"""
	rect = snap.Rect(19.3, 20.0, 15.0, 8.0)
	result = snap.calculate_snap(rect, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config)
	assert result.x == 20.0
	assert result.y == 20.0
	assert result.guides == [snap.SnapGuide("vertical", 20.0, "element")]


#============================================
def test_disabled_config_is_noop(element_a) -> None:
	"""
	A disabled config returns the input rect and no guides.
	"""
	disabled = config.SnapConfig(enabled=False)
	rect = snap.Rect(19.3, 0.4, 15.0, 8.0)
	result = snap.calculate_snap(rect, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, disabled)
	assert (result.x, result.y, result.width, result.height) == (19.3, 0.4, 15.0, 8.0)
	assert result.guides == []

	resized = snap.calculate_resize_snap(rect, "se", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, disabled)
	assert (resized.x, resized.y, resized.width, resized.height) == (19.3, 0.4, 15.0, 8.0)
	assert resized.guides == []


#============================================
def test_snap_is_idempotent(element_a) -> None:
	"""
	Snapping an already snapped rect does not move it again.
	"""
	snap_config = config.SnapConfig()
	rects = [
		snap.Rect(19.3, 20.0, 15.0, 8.0),
		snap.Rect(3.7, 11.2, 7.0, 4.5),
		snap.Rect(41.0, 28.9, 12.0, 9.0),
	]
	for rect in rects:
		first = snap.calculate_snap(rect, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config)
		moved = snap.Rect(first.x, first.y, rect.width, rect.height)
		second = snap.calculate_snap(moved, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config)
		assert (second.x, second.y) == (first.x, first.y)


#============================================
def test_element_beats_grid_at_same_distance() -> None:
	"""
	Element references are scanned before grid lines and win ties.
	"""
	snap_config = config.SnapConfig(snap_to_canvas=False, snap_to_center=False, grid_size=5.0)
	sibling = snap.LabelElement(id="s", x=20.0, y=0.0, width=10.0, height=10.0)
	rect = snap.Rect(19.0, 42.5, 4.0, 5.0)
	result = snap.calculate_snap(rect, [sibling], 100.0, 100.0, snap_config)
	assert result.x == 20.0
	assert _vertical(result) == [snap.SnapGuide("vertical", 20.0, "element")]


#============================================
def test_canvas_edge_beats_grid_at_same_value() -> None:
	"""
	The canvas edge at 0 is listed before the grid line at 0.
	"""
	snap_config = config.SnapConfig(snap_to_center=False, snap_to_elements=False, grid_size=10.0)
	rect = snap.Rect(0.5, 20.0, 3.0, 5.0)
	result = snap.calculate_snap(rect, [], 100.0, 100.0, snap_config)
	assert result.x == 0.0
	assert _vertical(result) == [snap.SnapGuide("vertical", 0.0, "canvas")]


#============================================
def test_earlier_representative_point_wins_tie() -> None:
	"""
	When the min edge and max edge are equally close, the min edge wins.
	"""
	snap_config = config.SnapConfig(snap_to_center=False, snap_to_grid=False, snap_to_elements=False)
	rect = snap.Rect(1.0, 20.0, 48.0, 5.0)
	result = snap.calculate_snap(rect, [], 50.0, 100.0, snap_config)
	assert result.x == 0.0
	assert _vertical(result)[0].position == 0.0


#============================================
def test_closer_max_edge_wins() -> None:
	"""
	A strictly closer max edge overrides the min edge match.
	"""
	snap_config = config.SnapConfig(snap_to_center=False, snap_to_grid=False, snap_to_elements=False)
	rect = snap.Rect(1.5, 20.0, 48.0, 5.0)
	result = snap.calculate_snap(rect, [], 50.0, 100.0, snap_config)
	assert result.x == 2.0
	assert _vertical(result)[0].position == 50.0


#============================================
def test_center_snaps_to_canvas_center() -> None:
	"""
	The rect center aligns to the canvas center with a center guide.
	"""
	snap_config = config.SnapConfig(snap_to_grid=False, snap_to_elements=False)
	rect = snap.Rect(24.5, 3.0, 10.0, 5.0)
	result = snap.calculate_snap(rect, [], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config)
	assert result.x == 25.0
	assert _vertical(result) == [snap.SnapGuide("vertical", 30.0, "center")]


#============================================
def test_hidden_and_excluded_siblings_ignored(edges_only_config) -> None:
	"""
	Invisible and excluded elements never act as references.
	"""
	hidden = snap.LabelElement(id="hidden", x=0.0, y=0.0, width=20.0, height=10.0, visible=False)
	moving = snap.LabelElement(id="moving", x=0.0, y=0.0, width=20.0, height=10.0)
	rect = snap.Rect(19.0, 20.0, 5.0, 8.0)
	result = snap.calculate_snap(
		rect,
		[hidden, moving],
		CANVAS_WIDTH,
		CANVAS_HEIGHT,
		edges_only_config,
		exclude_ids=["moving"],
	)
	assert result.x == 19.0
	assert result.guides == []


#============================================
def test_axes_resolve_independently(edges_only_config, element_a) -> None:
	"""
	An x match and a y match each produce their own guide.
	"""
	rect = snap.Rect(21.0, 11.5, 5.0, 5.0)
	result = snap.calculate_snap(rect, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config)
	assert (result.x, result.y) == (20.0, 10.0)
	assert result.guides == [
		snap.SnapGuide("vertical", 20.0, "element"),
		snap.SnapGuide("horizontal", 10.0, "element"),
	]


#============================================
def test_grid_lines_use_multiples() -> None:
	"""
	Grid lines run from 0 to the canvas size inclusive.
	"""
	assert snap.grid_lines(20.0, 5.0) == [0.0, 5.0, 10.0, 15.0, 20.0]
	assert snap.grid_lines(0.3, 0.1) == pytest.approx([0.0, 0.1, 0.2, 0.3])
	assert snap.grid_lines(20.0, 0.0) == []


#============================================
def test_targets_keep_insertion_order() -> None:
	"""
	Targets list canvas edges, canvas center, elements, then grid.
	"""
	sibling = snap.LabelElement(id="s", x=10.0, y=5.0, width=4.0, height=2.0)
	vertical, horizontal = snap.build_snap_targets([sibling], 20.0, 10.0, config.SnapConfig(grid_size=10.0))
	assert [(target.value, target.source) for target in vertical] == [
		(0.0, "canvas"),
		(20.0, "canvas"),
		(10.0, "center"),
		(10.0, "element"),
		(14.0, "element"),
		(12.0, "element"),
		(0.0, "canvas"),
		(10.0, "canvas"),
		(20.0, "canvas"),
	]
	assert [target.value for target in horizontal] == [0.0, 10.0, 5.0, 5.0, 7.0, 6.0, 0.0, 10.0]


#============================================
def test_resize_east_edge_snaps_to_canvas(edges_only_config, element_a) -> None:
	"""
	Dragging the south-east handle snaps the right edge to the canvas edge.
	"""
	origin = snap.Rect(30.0, 15.0, 10.0, 10.0)
	live = snap.Rect(30.0, 15.0, 29.0, 14.0)
	result = snap.calculate_resize_snap(
		live, "se", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config, origin=origin,
	)
	assert (result.x, result.y, result.width, result.height) == (30.0, 15.0, 30.0, 14.0)
	assert result.guides == [snap.SnapGuide("vertical", 60.0, "canvas")]


#============================================
def test_resize_west_holds_snapshot_right_edge(edges_only_config, element_a) -> None:
	"""
	The opposite edge comes from the origin snapshot, not the live rect.
	"""
	origin = snap.Rect(30.0, 15.0, 10.0, 10.0)
	# live width has drifted from the snapshot right edge of 40
	live = snap.Rect(21.0, 15.0, 18.7, 10.0)
	result = snap.calculate_resize_snap(
		live, "w", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config, origin=origin,
	)
	assert result.x == 20.0
	assert result.width == 20.0
	assert result.guides == [snap.SnapGuide("vertical", 20.0, "element")]


#============================================
def test_resize_north_edge(edges_only_config, element_a) -> None:
	"""
	The top edge snaps and the bottom edge stays at the snapshot.
	"""
	origin = snap.Rect(30.0, 15.0, 10.0, 10.0)
	live = snap.Rect(30.0, 11.0, 10.0, 14.0)
	result = snap.calculate_resize_snap(
		live, "n", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config, origin=origin,
	)
	assert (result.y, result.height) == (10.0, 15.0)
	assert result.guides == [snap.SnapGuide("horizontal", 10.0, "element")]


#============================================
def test_resize_guides_order_west_then_north(edges_only_config, element_a) -> None:
	"""
	A corner resize emits the x guide before the y guide.
	"""
	origin = snap.Rect(30.0, 15.0, 10.0, 10.0)
	live = snap.Rect(21.0, 11.0, 19.0, 14.0)
	result = snap.calculate_resize_snap(
		live, "nw", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config, origin=origin,
	)
	assert [guide.axis for guide in result.guides] == ["vertical", "horizontal"]
	assert (result.x, result.y, result.width, result.height) == (20.0, 10.0, 20.0, 15.0)


#============================================
def test_resize_ignores_center(element_a) -> None:
	"""
	Only edges named by the anchor snap; the center is never used.
	"""
	snap_config = config.SnapConfig(snap_to_grid=False)
	origin = snap.Rect(20.0, 15.0, 10.0, 10.0)
	# center 30.0 sits on the canvas center, right edge 40 has no reference
	live = snap.Rect(20.0, 15.0, 20.0, 10.0)
	result = snap.calculate_resize_snap(
		live, "e", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config, origin=origin,
	)
	assert result.width == 20.0
	assert result.guides == []


#============================================
def test_resize_skips_sibling_centers(element_a) -> None:
	"""
	A west edge near a sibling center stays where the pointer put it.
	"""
	snap_config = config.SnapConfig(snap_to_canvas=False, snap_to_center=True, snap_to_grid=False)
	origin = snap.Rect(12.0, 20.0, 10.0, 10.0)
	# element_a center is x=10, its edges 0 and 20 are out of range
	live = snap.Rect(9.0, 20.0, 13.0, 10.0)
	result = snap.calculate_resize_snap(
		live, "w", [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config, origin=origin,
	)
	assert (result.x, result.width) == (9.0, 13.0)
	assert result.guides == []

	# a drag still uses the same center
	dragged = snap.calculate_snap(live, [element_a], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config)
	assert dragged.guides == [snap.SnapGuide("vertical", 10.0, "element")]


#============================================
def test_resize_skips_grid_lines() -> None:
	"""
	Grid lines guide drags but not resize edges.
	"""
	snap_config = config.SnapConfig(snap_to_canvas=False, snap_to_elements=False, snap_to_grid=True, grid_size=5.0)
	origin = snap.Rect(30.0, 20.0, 5.0, 5.0)
	live = snap.Rect(30.0, 20.0, 9.2, 5.0)
	result = snap.calculate_resize_snap(
		live, "e", [], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config, origin=origin,
	)
	assert result.width == 9.2
	assert result.guides == []

	vertical, _ = snap.build_snap_targets([], CANVAS_WIDTH, CANVAS_HEIGHT, snap_config, for_resize=True)
	assert vertical == []


#============================================
def test_resize_rejects_collapsing_match(edges_only_config) -> None:
	"""
	A match past the fixed opposite edge is ignored.
	"""
	sibling = snap.LabelElement(id="s", x=41.0, y=0.0, width=5.0, height=5.0)
	origin = snap.Rect(30.0, 15.0, 10.0, 10.0)
	live = snap.Rect(39.5, 15.0, 0.5, 10.0)
	result = snap.calculate_resize_snap(
		live, "w", [sibling], CANVAS_WIDTH, CANVAS_HEIGHT, edges_only_config, origin=origin,
	)
	assert (result.x, result.width) == (39.5, 0.5)
	assert result.guides == []


#============================================
def test_distribution_even_gaps() -> None:
	"""
	Evenly spaced elements get one guide per gap midpoint.
	"""
	elements = [
		snap.LabelElement(id="c", x=30.0, y=0.0, width=10.0, height=5.0),
		snap.LabelElement(id="a", x=0.0, y=0.0, width=10.0, height=5.0),
		snap.LabelElement(id="b", x=15.0, y=0.0, width=10.0, height=5.0),
	]
	guides = snap.calculate_distribution_guides(elements, "horizontal")
	assert guides == [
		snap.SnapGuide("vertical", 12.5, "element"),
		snap.SnapGuide("vertical", 27.5, "element"),
	]


#============================================
def test_distribution_within_tolerance() -> None:
	"""
	Gaps within 0.5 mm of the mean still count as even.
	"""
	elements = [
		snap.LabelElement(id="a", x=0.0, y=0.0, width=5.0, height=10.0),
		snap.LabelElement(id="b", x=0.0, y=15.0, width=5.0, height=10.0),
		snap.LabelElement(id="c", x=0.0, y=30.4, width=5.0, height=10.0),
	]
	guides = snap.calculate_distribution_guides(elements, "vertical")
	assert [guide.axis for guide in guides] == ["horizontal", "horizontal"]
	assert guides[0].position == pytest.approx(12.5)
	assert guides[1].position == pytest.approx(27.7)


#============================================
def test_distribution_uneven_or_too_few() -> None:
	"""
	Uneven gaps or fewer than three elements produce no guides.
	"""
	elements = [
		snap.LabelElement(id="a", x=0.0, y=0.0, width=10.0, height=5.0),
		snap.LabelElement(id="b", x=15.0, y=0.0, width=10.0, height=5.0),
		snap.LabelElement(id="c", x=32.0, y=0.0, width=10.0, height=5.0),
	]
	assert snap.calculate_distribution_guides(elements, "horizontal") == []
	assert snap.calculate_distribution_guides(elements[:2], "horizontal") == []
	# a looser tolerance accepts the same layout
	assert len(snap.calculate_distribution_guides(elements, "horizontal", tolerance=1.5)) == 2


#============================================
def test_apply_resize_delta_keeps_min_size() -> None:
	"""
	Resize deltas never shrink below the minimum and keep the opposite edge.
	"""
	start = snap.Rect(10.0, 10.0, 20.0, 20.0)
	west = snap.apply_resize_delta(start, "w", 30.0, 0.0)
	assert (west.x, west.width) == (25.0, 5.0)
	assert west.x + west.width == 30.0
	south_east = snap.apply_resize_delta(start, "se", -100.0, 4.0)
	assert (south_east.width, south_east.height) == (5.0, 24.0)
	north = snap.apply_resize_delta(start, "n", 0.0, -3.0)
	assert (north.y, north.height) == (7.0, 23.0)


#============================================
def test_drag_and_clamp_helpers() -> None:
	"""
	Drag deltas translate the start rect and clamping keeps it on canvas.
	"""
	start = snap.Rect(50.0, 2.0, 10.0, 10.0)
	moved = snap.apply_drag_delta(start, 5.0, -5.0)
	assert dataclasses.astuple(moved) == (55.0, -3.0, 10.0, 10.0)
	clamped = snap.clamp_to_canvas(moved, CANVAS_WIDTH, CANVAS_HEIGHT)
	assert dataclasses.astuple(clamped) == (50.0, 0.0, 10.0, 10.0)
	trimmed = snap.clamp_resize_to_canvas(snap.Rect(-2.0, 5.0, 70.0, 10.0), CANVAS_WIDTH, CANVAS_HEIGHT)
	assert dataclasses.astuple(trimmed) == (0.0, 5.0, 60.0, 10.0)


#============================================
def test_parse_anchor() -> None:
	"""
	Compass anchors map to edge flags.
	"""
	edges = snap.parse_anchor("se")
	assert (edges.west, edges.east, edges.north, edges.south) == (False, True, False, True)
	edges = snap.parse_anchor("NW")
	assert (edges.west, edges.east, edges.north, edges.south) == (True, False, True, False)
