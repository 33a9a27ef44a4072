"""namesync command-line interface."""
