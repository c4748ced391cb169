"""Reset Alexa Smart Properties units to a known configuration."""
