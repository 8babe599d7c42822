"""Reconcilers and the project sync pipeline."""
