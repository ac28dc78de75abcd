"""Headless paginated dataflow: an observable load state driven by commands."""
