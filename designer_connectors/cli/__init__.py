"""Designer connectors command line interface."""
