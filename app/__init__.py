"""ARSANA letter registry application."""
