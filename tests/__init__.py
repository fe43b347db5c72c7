"""Test package for :mod:`optrack`."""
