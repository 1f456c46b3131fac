"""Client for the remote money manager API."""
