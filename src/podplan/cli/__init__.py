"""podplan command-line interface."""
