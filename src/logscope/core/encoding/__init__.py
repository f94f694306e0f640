"""Encoders for records and dashboard views."""
