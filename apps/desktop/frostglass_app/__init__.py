"""Frostglass desktop app and command line tools."""
