"""Headless processing stages of slashport."""
