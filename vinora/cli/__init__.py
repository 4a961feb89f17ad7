"""Command line tools for Vinora."""
