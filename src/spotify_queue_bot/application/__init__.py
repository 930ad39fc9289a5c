"""
Application Layer

Orchestrates the domain to serve chat commands.

Structure:
- commands/: command parsing, dispatch and the per-command handlers
- queries/: read-only views of the queue
- services/: the queue synchronizer, skip votes, option prompts and routing
- interfaces/: port interfaces for the playback service and chat transport
"""
