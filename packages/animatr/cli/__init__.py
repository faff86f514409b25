"""Command-line interface for animatr."""
