"""Endpoint modules. Internal to launchcore."""
