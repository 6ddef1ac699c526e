"""
Pytest configuration and shared fixtures.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest


#============================================
def _ensure_repo_on_path() -> None:
	"""
	Ensure the repository root is on sys.path.
	"""
	repo_root = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
	if repo_root not in sys.path:
		sys.path.insert(0, repo_root)


_ensure_repo_on_path()


#============================================
@pytest.fixture
def edges_only_config():
	"""
	Snap config with canvas and element edges only, no center or grid.
	"""
	import label_studio_geometry.config as config
	return config.SnapConfig(
		enabled=True,
		threshold=2.0,
		snap_to_canvas=True,
		snap_to_elements=True,
		snap_to_center=False,
		snap_to_grid=False,
		grid_size=5.0,
	)


#============================================
@pytest.fixture
def a4_settings():
	"""
	A4 portrait, 10 mm margins, 2 mm spacing, 3 labels per row.
	"""
	import label_studio_geometry.config as config
	return config.PageSettings(
		paper_size="A4",
		orientation="portrait",
		labels_per_row=3,
		margins=config.Margins(10.0, 10.0, 10.0, 10.0),
		label_spacing=config.LabelSpacing(2.0, 2.0),
	)


#============================================
@pytest.fixture
def element_a():
	"""
	Element at the canvas origin, 20 x 10 mm.
	"""
	import label_studio_geometry.snap as snap
	return snap.LabelElement(id="a", x=0.0, y=0.0, width=20.0, height=10.0)
