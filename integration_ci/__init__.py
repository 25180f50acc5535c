"""Integration test CI entry point."""
