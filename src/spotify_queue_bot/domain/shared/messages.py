"""Centralized message constants for error messages, log templates, and chat replies."""

from __future__ import annotations


class ErrorMessages:
    """Error messages for exceptions and validation failures."""

    # Configuration
    DISCORD_TOKEN_REQUIRED = "DISCORD__TOKEN environment variable is required"
    SPOTIFY_CREDENTIALS_REQUIRED = (
        "SPOTIFY__CLIENT_ID and SPOTIFY__CLIENT_SECRET environment variables are required"
    )
    INVALID_LOG_LEVEL = "Invalid log level: {level}. Must be one of {valid_levels}"
    EMPTY_EMOJI_ALPHABET = "Option emoji alphabet cannot be empty"
    DUPLICATE_EMOJI = "Option emoji alphabet contains duplicates"
    TRACK_LIMIT_EXCEEDS_MAX = "default_track_limit cannot exceed max_track_limit"
    VOLUME_DELTA_EXCEEDS_MAX = "default_volume_delta cannot exceed max_volume_delta"

    # Container
    CLIENT_NOT_INITIALIZED = "Discord client not initialized. Call set_client() first."


class LogTemplates:
    """Logging templates (%-style) used across the application."""

    # Bot lifecycle
    BOT_STARTING = "Starting spotify queue bot (environment=%s)"
    BOT_STOPPED = "Bot stopped"
    BOT_KEYBOARD_INTERRUPT = "Interrupted by user"
    BOT_FATAL_ERROR = "Fatal error: %s"
    BOT_CONNECTED = "Connected to chat as %s"
    BOT_SHUTDOWN_SIGNAL = "Received signal %s, shutting down"
    BOT_SHUTDOWN_COMPLETE = "Shutdown complete"
    CONTAINER_INITIALIZED = "Container initialized"
    CONTAINER_SHUTDOWN = "Container shut down"
    AUTO_SELECT_DEVICE = "Auto-selected playback device %s"
    AUTO_SELECT_DEVICE_NONE = "No playback device available to auto-select"
    AUTO_SELECT_DEVICE_FAILED = "Failed to auto-select playback device: %s"

    # Queue
    QUEUE_ADDED = "Queued %d track(s) from %s %s (group=%d, creator=%s)"
    QUEUE_PLAYING = "Now playing %s (queue_id=%d)"
    QUEUE_PLAY_FAILED = "Failed to play %s (queue_id=%d), entry dropped"
    QUEUE_DRAINED = "Queue drained"
    QUEUE_PAUSED = "Paused %s at %sms"
    QUEUE_RESUMED = "Resumed %s at %sms"
    QUEUE_REMOVED = "Removed queue ids %s"
    QUEUE_STOP_FAILED = "Failed to stop playback after queue drained: %s"
    QUEUE_CHECK_STALE = "Stale playback check for queue_id=%d ignored"
    QUEUE_CHECK_RESCHEDULE = "Track %s has %dms left, checking again in %dms"
    QUEUE_CHECK_FAILED = "Playback check for queue_id=%d failed, retrying in %dms: %s"
    QUEUE_CHECK_ADVANCE_FAILED = "Playback check for queue_id=%d could not start the next track: %s"

    # Votes
    VOTE_CAST = "User %s voted to skip queue_id=%d (%d/%d)"
    VOTE_PASSED = "Skip vote passed for queue_id=%d"

    # Options
    OPTION_REGISTERED = "Option binding %d registered with %d choice(s)"
    OPTION_IGNORED = "Ignoring reaction %s on binding %d"
    OPTION_EXPIRED = "Option binding %d expired"
    OPTION_COMPLETED = "Option binding %d completed"

    # Scheduler
    SCHEDULED_TASK_FAILED = "Scheduled task %s failed: %s"

    # Router
    COMMAND_RECEIVED = "Command %s from %s"
    COMMAND_FAILED = "Command %s failed: %s"
    SEND_FAILED = "Failed to send message to %s: %s"
    REACT_FAILED = "Failed to react to message %s: %s"
    OPTION_REACTIONS_FAILED = "Failed to add option reactions to message %s: %s"
    BROADCAST_DISABLED = "No broadcast channel configured, dropping broadcast"

    # Adapters
    SPOTIFY_CALL_FAILED = "Spotify call %s failed: %s"
    DISCORD_DM_RECEIVED = "DM from %s: %s"


class ReplyMessages:
    """User-facing chat replies."""

    # Generic
    INVALID_COMMAND = "Invalid command: {command}"
    COMMAND_ERROR = "Error handling command"
    NO_RESOURCE_GIVEN = "No resource given"
    LIMIT_NOT_A_NUMBER = "Limit is not a number"
    INVALID_DIRECTION = "Invalid direction given"
    AMOUNT_NOT_A_NUMBER = "Amount is not a number"
    INVALID_PARAMETER = "Invalid parameter given"
    NO_SEARCH_QUERY = "No search query given"

    # Add
    INVALID_RESOURCE = "Invalid resource"
    NO_PLAYABLE_TRACK = "No playable track found"
    ADDED_TRACK = "{creator} added {name} to the queue"
    ADDED_GROUP = "{creator} added {count} tracks from {type} {name} to the queue"
    ADD_FAILED = "Error adding resource"

    # Play / pause
    ALREADY_PLAYING = "Queue already playing"
    QUEUE_EMPTY = "Queue empty"
    NOW_PLAYING = "{user} hit play, now playing {name}"
    PLAY_FAILED = "Error playing track"
    PLAYER_ERROR = "{prefix}: `{error}`"
    NOT_PLAYING_STOPPED = "Queue not playing, stopped Spotify anyway"
    PAUSED = "{user} hit pause"
    PAUSE_FAILED = "Error pausing spotify"
    STOP_FAILED = "Error stopping spotify"

    # Volume
    VOLUME_AT_MAX = "Already at max volume"
    VOLUME_AT_MIN = "Already at min volume"
    VOLUME_SET = "{user} set volume to {volume}%"
    VOLUME_FAILED = "Error changing volume"

    # Skip
    NO_ACTIVE_TRACK = "No active track"
    ALREADY_VOTED = "Already voted to skip this {scope}"
    VOTED_TRACK = "{user} voted to skip {name}"
    VOTED_GROUP = "{user} voted to skip {count} track(s) from {name}"
    NOW_SKIPPING_TRACK = ". Now skipping"
    NOW_SKIPPING_GROUP = ". Now skipping {count} track(s)"

    # Devices
    DEVICES_HEADER = "Available devices:"
    DEVICES_FOOTER = "React to select device"
    NO_DEVICES = "No available devices"
    DEVICE_SET = "{creator} set device to {name}"
    DEVICE_SET_FAILED = "Error setting device to {name}"
    DEVICES_FAILED = "Error getting devices"

    # Search
    SEARCH_HEADER = "Results for '{query}':"
    SEARCH_TRACKS = "Tracks:"
    SEARCH_ALBUMS = "Albums:"
    SEARCH_FOOTER = "React to queue"
    NO_SEARCH_RESULTS = "No results for '{query}'"
    SEARCH_NOT_PLAYABLE = "{type} {name} is not playable"
    SEARCH_QUEUE_FAILED = "Error when queueing"
    SEARCH_FAILED = "Error when searching"

    # Status
    STATUS_PLAYING = "*Now Playing:*"
    STATUS_PAUSED = "*Paused:*"
    STATUS_NOTHING = "Nothing"
    STATUS_QUEUE = "*Queue:*"
    STATUS_MORE = "+{count} more"

    HELP = (
        "Commands:\n"
        "`add <spotify link> [limit]` queue a track, album or playlist\n"
        "`play` start or resume the queue\n"
        "`pause` pause the queue\n"
        "`volume up|down [amount%]` change the volume\n"
        "`skip [group]` vote to skip the current track or its album/playlist\n"
        "`status` show what is playing and queued\n"
        "`devices` choose the playback device\n"
        "`search <query>` search tracks and albums"
    )

    # Reactions
    REACTION_SUCCESS = "✅"
    REACTION_FAILURE = "❌"
