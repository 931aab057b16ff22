"""Renderers for aligned indicator series."""
