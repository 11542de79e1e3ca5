"""Steps that discover and read the markup sources."""
