"""Merchant digital twin: sensor model, state transitions and failure prediction."""
