"""HTTP surface for the trade journal analytics service."""
