"""Steps that turn aggregated landmarks into reports."""
