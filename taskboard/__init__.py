"""Collaborative task tracking backend with notification fan-out."""
