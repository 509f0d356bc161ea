"""Smart Transit: upcoming departures for the nearest stop."""
