"""Presenters turning controller results into UI output."""
