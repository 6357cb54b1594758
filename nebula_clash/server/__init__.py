"""HTTP API for playing Nebula Clash against the computer opponent."""
