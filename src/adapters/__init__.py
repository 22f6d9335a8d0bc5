"""Adapters: concrete stream wrappers and exporters."""
