"""Word of the day service: resolves one vocabulary word per calendar date."""
