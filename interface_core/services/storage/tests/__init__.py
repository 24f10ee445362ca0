"""Tests for :mod:`interface_core.services.storage`."""
