"""Discord gateway client and chat transport."""
