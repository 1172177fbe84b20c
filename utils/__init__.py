"""Support utilities (logging sink)."""
