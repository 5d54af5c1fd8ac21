"""Merge policy and the port it implements."""
