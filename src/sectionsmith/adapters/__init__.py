"""Adapters connecting sectionsmith to external tools."""
