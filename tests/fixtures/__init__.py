"""Test fixtures for the GitHub REST client."""
