"""LeadDesk global search service."""
