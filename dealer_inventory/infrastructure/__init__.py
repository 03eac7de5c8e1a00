"""Infrastructure: persistence, cache tiers, security, export."""
