"""Driver orders list: paginated, filterable orders backed by the Fazaa API."""
