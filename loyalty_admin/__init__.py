"""Loyalty program administration backend."""
