#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Compute label sheet layouts from the command line.
"""

# local repo modules
import label_studio_geometry.cli


if __name__ == "__main__":
	label_studio_geometry.cli.main()
