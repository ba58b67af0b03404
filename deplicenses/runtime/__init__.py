"""Runtime helpers used by the command line interface."""
