"""Headless feed pipeline: normalize, load, view and render lab content."""
