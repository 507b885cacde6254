"""Shared helpers for the OfferBoard API."""
