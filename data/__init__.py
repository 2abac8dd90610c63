"""Data layer for the analytics engine.

Holds the value types exchanged with the surrounding application; the
engine itself does not read or write storage.
"""
