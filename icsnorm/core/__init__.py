"""Core utilities for icsnorm: timezones, configuration, logging and errors."""
