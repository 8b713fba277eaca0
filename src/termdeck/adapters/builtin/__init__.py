"""Engines that ship with termdeck."""
