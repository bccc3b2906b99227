"""iCalendar normalization pipeline stages."""
