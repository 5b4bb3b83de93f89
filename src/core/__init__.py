"""Core of the remdit client: domain, contracts, configuration and services."""
