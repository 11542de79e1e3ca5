"""Pipeline steps for the Slicer landmark workflow."""
