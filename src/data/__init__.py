"""Data layer for the lending yield tracker."""
