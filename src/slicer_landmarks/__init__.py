"""
Extract 3D Slicer markup landmarks, normalize them to RAS and pivot them into
CSV reports for statistical analysis.
"""

__version__ = "0.1.0"
