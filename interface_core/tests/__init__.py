"""Tests for :mod:`interface_core`."""
