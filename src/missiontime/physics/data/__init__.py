"""Data files packaged with :mod:`missiontime`."""
