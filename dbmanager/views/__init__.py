"""Tabs, popups and the Textual screens that draw them."""
