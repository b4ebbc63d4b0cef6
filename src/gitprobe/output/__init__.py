"""Renderers for status snapshots, change-set reports and error records."""
