"""Generation engine — dependency resolution, phase scheduling, rendering."""
