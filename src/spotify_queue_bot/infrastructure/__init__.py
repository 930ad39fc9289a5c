"""
Infrastructure Layer

Concrete adapters for the Spotify Web API and the Discord gateway.
"""
