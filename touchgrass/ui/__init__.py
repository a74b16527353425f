"""Textual front end: the chapter reader and its command palette screen."""
