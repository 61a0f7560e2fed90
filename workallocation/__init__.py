"""Work order and work allocation record management."""
