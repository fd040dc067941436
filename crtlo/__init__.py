"""Chicago RTLO compliance API."""
