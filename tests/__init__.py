"""Tests for the wildfire spread simulation."""
