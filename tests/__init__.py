"""Test suite for toolup."""
