"""Interrupt handler gateway (SIGINT)."""
