"""Recycle Catch - timed catch game for the kiosk flow."""
