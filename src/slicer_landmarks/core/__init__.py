"""Core processing for the Slicer landmark pipeline.

This package contains the building blocks that read markup documents from
scene bundles or loose files, normalize their coordinates to RAS, aggregate
them per sample and write the CSV reports.
"""
