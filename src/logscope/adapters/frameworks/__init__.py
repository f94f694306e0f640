"""HTTP framework adapters exposing dashboard views."""
