"""Headless status-bar core: configuration, widget data providers and polling."""

__version__ = "0.1.0"