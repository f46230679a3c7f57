"""User-facing interfaces for sectionsmith."""
