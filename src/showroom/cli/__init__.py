"""Command line interface for the showroom tools."""
