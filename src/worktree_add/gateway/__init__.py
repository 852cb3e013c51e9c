"""Gateways: narrow, injectable interfaces around every external effect."""
