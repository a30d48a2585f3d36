"""Leap second tables, one row per ``year month day delta_at`` effective date."""
